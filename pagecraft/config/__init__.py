"""Load and validate site configuration and page front matter for pagecraft.

This subpackage parses the project's ``site.yaml`` file and the YAML front
matter of each Markdown source, applies defaults, and produces immutable
dataclasses (:class:`SiteConfig`, :class:`PageContext`, :class:`PageRegistry`,
etc.) that the composer consumes. The primary entry points are
:func:`load_site_config` and :func:`load_source_page`.

Examples
--------
>>> from pathlib import Path
>>> from pagecraft.config import load_site_config
>>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> [ref.page_name for ref in site.navigation]  # doctest: +SKIP
['about', 'blog']
"""

from .loader import (
    build_page_context,
    build_site_config,
    load_site_config,
    load_source_page,
    split_front_matter,
)
from .models import (
    CommentsConfig,
    CommentsProvider,
    ConfigurationError,
    ExternalLink,
    NavRef,
    PageContext,
    PageRecord,
    PageRegistry,
    SiteConfig,
    SiteConfigError,
    SourcePage,
    UnresolvedReferenceError,
)

__all__ = [
    "CommentsConfig",
    "CommentsProvider",
    "ConfigurationError",
    "ExternalLink",
    "NavRef",
    "PageContext",
    "PageRecord",
    "PageRegistry",
    "SiteConfig",
    "SiteConfigError",
    "SourcePage",
    "UnresolvedReferenceError",
    "build_page_context",
    "build_site_config",
    "load_site_config",
    "load_source_page",
    "split_front_matter",
]
