"""Pure decision logic that turns configuration into a document model."""

from .assembler import assemble_page
from .features import resolve_features
from .footer import resolve_footer
from .models import (
    Charset,
    CommentsWidget,
    ConditionalScript,
    DocumentModel,
    FeatureSet,
    FooterEntry,
    HeadFragment,
    LayoutWrapper,
    LinkTag,
    MetaTag,
    NavigationEntry,
    Stylesheet,
)
from .navigation import resolve_navigation

__all__ = [
    "Charset",
    "CommentsWidget",
    "ConditionalScript",
    "DocumentModel",
    "FeatureSet",
    "FooterEntry",
    "HeadFragment",
    "LayoutWrapper",
    "LinkTag",
    "MetaTag",
    "NavigationEntry",
    "Stylesheet",
    "assemble_page",
    "resolve_features",
    "resolve_footer",
    "resolve_navigation",
]
