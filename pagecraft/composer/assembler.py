"""Assemble a :class:`DocumentModel` for a single page.

:func:`assemble_page` runs the feature, navigation, and footer resolvers and
lays the head fragments out in their canonical order:

1. character set
2. icons
3. stylesheets (fonts, icon set, site stylesheets)
4. description, author, and OpenGraph meta tags
5. canonical URL
6. feed link, math script, diagram script, comments script

Assembly is all-or-nothing. A :class:`~pagecraft.config.ConfigurationError`
or :class:`~pagecraft.config.UnresolvedReferenceError` propagates before any
document exists, and none of the inputs are mutated.

Example
-------
>>> from pagecraft.config import PageContext, PageRegistry, SiteConfig
>>> doc = assemble_page(
...     SiteConfig(title="Site"), PageContext(url="/"), PageRegistry(), "<p>hi</p>"
... )
>>> doc.body
'<p>hi</p>'
>>> doc.head[0].kind
'charset'
"""

from __future__ import annotations

import logging
import typing as typ

from pagecraft._constants import MATHJAX_SRC, MERMAID_SRC, POST_LAYOUT
from pagecraft.urls import UrlResolver

from .features import resolve_features
from .footer import resolve_footer
from .models import (
    Charset,
    ConditionalScript,
    DocumentModel,
    LinkTag,
    MetaTag,
    Stylesheet,
)
from .navigation import resolve_navigation

if typ.TYPE_CHECKING:
    from pagecraft.config import PageContext, PageRegistry, SiteConfig

    from .models import FeatureSet, HeadFragment

logger = logging.getLogger(__name__)


def assemble_page(
    site: SiteConfig,
    page: PageContext,
    registry: PageRegistry,
    rendered_body: str,
    *,
    urls: UrlResolver | None = None,
) -> DocumentModel:
    """Compose the document model for ``page``.

    Parameters
    ----------
    site : SiteConfig
        Site-wide configuration shared by every page.
    page : PageContext
        Front matter of the page being assembled.
    registry : PageRegistry
        Every known page, used to resolve navigation references by name.
    rendered_body : str
        Content markup produced by the content renderer; embedded verbatim.
    urls : UrlResolver, optional
        Resolver applied to asset, feed, and canonical URLs. Defaults to one
        built from ``site.url`` and ``site.baseurl``.

    Returns
    -------
    DocumentModel
        The assembled page.

    Raises
    ------
    ConfigurationError
        If the comments provider lacks its identifier.
    UnresolvedReferenceError
        If a navigation reference names an unknown page.
    """
    resolver = urls or UrlResolver.for_site(site)
    features = resolve_features(site, page)
    navigation = resolve_navigation(site.navigation, registry)
    footer = resolve_footer(site.external_links, page.url)
    head = _build_head(site, page, features, resolver)
    logger.debug(
        "assembled %s with %d head fragments (layout=%s)",
        page.url,
        len(head),
        features.layout.value,
    )
    return DocumentModel(
        lang=page.lang or site.lang,
        title=_document_title(site, page),
        head=head,
        layout=features.layout,
        sidebar=features.sidebar,
        navigation=navigation,
        footer=footer,
        comments=features.comments,
        body=rendered_body,
        site_title=site.title,
        site_description=site.description,
    )


def _document_title(site: SiteConfig, page: PageContext) -> str:
    if page.title and page.title != site.title:
        return f"{page.title} | {site.title}"
    return site.title


def _build_head(
    site: SiteConfig,
    page: PageContext,
    features: FeatureSet,
    urls: UrlResolver,
) -> tuple[HeadFragment, ...]:
    """Return head fragments in canonical order."""
    fragments: list[HeadFragment] = [Charset(site.encoding)]
    fragments.extend(_icon_links(site, urls))
    fragments.extend(_stylesheets(site, urls))
    fragments.extend(_meta_tags(site, page, urls))
    fragments.append(LinkTag(rel="canonical", href=urls.absolute_url(page.url)))
    if features.feed_path is not None:
        fragments.append(
            LinkTag(
                rel="alternate",
                href=urls.relative_url(features.feed_path),
                type="application/atom+xml",
                title=site.title,
            )
        )
    if features.math:
        fragments.append(
            ConditionalScript(
                feature="math",
                src=MATHJAX_SRC,
                attributes=(("id", "MathJax-script"),),
                is_async=True,
            )
        )
    if features.diagrams:
        fragments.append(
            ConditionalScript(feature="diagrams", src=MERMAID_SRC, defer=True)
        )
    if features.comments is not None:
        fragments.append(
            ConditionalScript(
                feature="comments",
                src=features.comments.script_src,
                attributes=features.comments.attributes,
                is_async=True,
            )
        )
    return tuple(fragments)


def _icon_links(site: SiteConfig, urls: UrlResolver) -> list[LinkTag]:
    links: list[LinkTag] = []
    if site.favicon:
        links.append(LinkTag(rel="icon", href=urls.relative_url(site.favicon)))
    if site.touch_icon:
        links.append(
            LinkTag(rel="apple-touch-icon", href=urls.relative_url(site.touch_icon))
        )
    return links


def _stylesheets(site: SiteConfig, urls: UrlResolver) -> list[Stylesheet]:
    hrefs = [href for href in (site.fonts_url, site.icons_url) if href]
    hrefs.extend(site.stylesheets)
    return [Stylesheet(urls.relative_url(href)) for href in hrefs]


def _meta_tags(site: SiteConfig, page: PageContext, urls: UrlResolver) -> list[MetaTag]:
    description = page.description or site.description
    tags: list[MetaTag] = []
    if description:
        tags.append(MetaTag(name="description", content=description))
    if site.author:
        tags.append(MetaTag(name="author", content=site.author))
    tags.append(MetaTag(property="og:title", content=page.title or site.title))
    if description:
        tags.append(MetaTag(property="og:description", content=description))
    og_type = "article" if page.layout == POST_LAYOUT else "website"
    tags.append(MetaTag(property="og:type", content=og_type))
    tags.append(MetaTag(property="og:url", content=urls.absolute_url(page.url)))
    tags.append(MetaTag(property="og:site_name", content=site.title))
    return tags


__all__ = ["assemble_page"]
