"""Decide which optional fragments a page includes.

Each rule reads only the site configuration and the page front matter, so
:func:`resolve_features` is a pure function: equal inputs always produce equal
:class:`FeatureSet` values.

Examples
--------
>>> from pagecraft.config import PageContext, SiteConfig
>>> features = resolve_features(SiteConfig(title="x", math_enabled=True),
...                             PageContext(url="/", math_enabled=False))
>>> features.math
True
>>> features.layout.value
'default'
"""

from __future__ import annotations

import typing as typ

from pagecraft._constants import (
    DEFAULT_FEED_PATH,
    DISQUS_EMBED_TEMPLATE,
    ISSO_EMBED_PATH,
    POST_LAYOUT,
)
from pagecraft.config import CommentsProvider, ConfigurationError

from .models import CommentsWidget, FeatureSet, LayoutWrapper

if typ.TYPE_CHECKING:
    from pagecraft.config import CommentsConfig, PageContext, SiteConfig


def resolve_features(site: SiteConfig, page: PageContext) -> FeatureSet:
    """Resolve the feature set for ``page`` under ``site``.

    Parameters
    ----------
    site : SiteConfig
        Site-wide flags (frame, sidebar, feed, math, comments).
    page : PageContext
        Front matter of the page being composed.

    Returns
    -------
    FeatureSet
        Layout wrapper choice and the inclusion decision for every optional
        fragment.

    Raises
    ------
    ConfigurationError
        If a comments provider is selected without its required identifier.
    """
    return FeatureSet(
        layout=LayoutWrapper.FRAMED if site.show_frame else LayoutWrapper.DEFAULT,
        feed_path=_feed_path(site),
        math=bool(page.math_enabled) or site.math_enabled,
        diagrams=page.diagrams_enabled is True,
        comments=_comments_widget(site.comments, page),
        sidebar=site.show_sidebar,
    )


def _feed_path(site: SiteConfig) -> str | None:
    if not site.feed_enabled:
        return None
    return site.feed_path or DEFAULT_FEED_PATH


def _comments_widget(
    comments: CommentsConfig, page: PageContext
) -> CommentsWidget | None:
    """Return the widget for ``page``; validate the provider on every page."""
    match comments.provider:
        case CommentsProvider.NONE:
            return None
        case CommentsProvider.DISQUS:
            shortname = comments.disqus_shortname.strip()
            if not shortname:
                raise ConfigurationError(comments.provider.value, "disqus_shortname")
            widget = CommentsWidget(
                provider=comments.provider,
                script_src=DISQUS_EMBED_TEMPLATE.format(shortname=shortname),
                attributes=(),
                identifier=shortname,
            )
        case CommentsProvider.ISSO:
            domain = comments.isso_domain.strip().rstrip("/")
            if not domain:
                raise ConfigurationError(comments.provider.value, "isso_domain")
            widget = CommentsWidget(
                provider=comments.provider,
                script_src=f"{domain}{ISSO_EMBED_PATH}",
                attributes=(("data-isso", f"{domain}/"),),
                identifier=domain,
            )
    if page.layout != POST_LAYOUT:
        return None
    return widget


__all__ = ["resolve_features"]
