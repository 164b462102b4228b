"""Prefix root-relative Markdown links and images with the site base path."""

from __future__ import annotations

import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from pagecraft.urls import UrlResolver
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    UrlResolver = typ.Any

_ATTRIBUTES = {"a": "href", "img": "src"}


def _build_link_rewriter(urls: UrlResolver) -> Extension | None:
    """Return a RootLinkExtension when the site is served below a base path."""
    if not urls.baseurl.strip("/"):
        return None
    return RootLinkExtension(urls)


class RootLinkExtension(Extension):
    """Rewrite root-relative links so they survive a non-root deployment.

    Authors write ``/about.html`` and ``/img/logo.png``; when the site is
    published under ``/blog`` those targets must become ``/blog/about.html``
    and ``/blog/img/logo.png``. Relative, fragment, and external targets are
    left untouched.
    """

    def __init__(self, urls: UrlResolver) -> None:
        self.urls = urls
        super().__init__()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the root-link treeprocessor on the Markdown instance."""
        processor = RootLinkTreeprocessor(md, self.urls)
        md.treeprocessors.register(processor, "pagecraft_root_links", 15)


class RootLinkTreeprocessor(Treeprocessor):
    """Apply the site URL resolver to root-relative anchors and images."""

    def __init__(self, md: Markdown, urls: UrlResolver) -> None:
        super().__init__(md)
        self.urls = urls

    def run(self, root: Element) -> Element:
        """Rewrite root-relative targets in the parsed markdown tree."""
        for element in root.iter():
            attribute = _ATTRIBUTES.get(element.tag)
            if attribute is None:
                continue
            rewritten = self._rewrite(element.get(attribute))
            if rewritten:
                element.set(attribute, rewritten)
        return root

    def _rewrite(self, target: str | None) -> str | None:
        """Return the resolved target, or None when it should stay as written."""
        if not target or not target.startswith("/") or target.startswith("//"):
            return None
        return self.urls.relative_url(target)


__all__ = [
    "RootLinkExtension",
    "RootLinkTreeprocessor",
    "_build_link_rewriter",
]
