"""Render page bodies and serialize assembled documents into HTML."""

from .document import DocumentRenderer
from .link_rewriter import RootLinkExtension
from .renderer import HtmlContentRenderer

__all__ = [
    "DocumentRenderer",
    "HtmlContentRenderer",
    "RootLinkExtension",
]
