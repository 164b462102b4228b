"""Pure string transforms that turn site paths into published URLs.

The composer treats URL rewriting as an external collaborator: it only needs a
``resolve_url(path) -> str`` callable. :class:`UrlResolver` is the default
implementation, prefixing root-relative paths with the configured ``baseurl``
and, for canonical links, the site origin.

Examples
--------
>>> resolver = UrlResolver(origin="https://example.com", baseurl="/blog")
>>> resolver.relative_url("/feed.xml")
'/blog/feed.xml'
>>> resolver.absolute_url("/about.html")
'https://example.com/blog/about.html'
>>> resolver.relative_url("https://cdn.example/x.js")
'https://cdn.example/x.js'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from urllib.parse import urlsplit

if typ.TYPE_CHECKING:
    from pagecraft.config import SiteConfig


def _is_external(path: str) -> bool:
    parsed = urlsplit(path)
    return bool(parsed.scheme or parsed.netloc) or path.startswith(("#", "mailto:"))


@dc.dataclass(frozen=True, slots=True)
class UrlResolver:
    """Resolve site-relative paths against an origin and base path."""

    origin: str = ""
    baseurl: str = ""

    @classmethod
    def for_site(cls, site: SiteConfig) -> UrlResolver:
        """Return a resolver configured from ``site.url`` and ``site.baseurl``."""
        return cls(origin=site.url, baseurl=site.baseurl)

    def relative_url(self, path: str) -> str:
        """Prefix ``path`` with the base path unless it is already external."""
        if not path or _is_external(path):
            return path
        base = self.baseurl.rstrip("/")
        if base and not base.startswith("/"):
            base = f"/{base}"
        normalized = path if path.startswith("/") else f"/{path}"
        return f"{base}{normalized}"

    def absolute_url(self, path: str) -> str:
        """Return ``path`` as a fully qualified URL when an origin is configured."""
        if _is_external(path):
            return path
        return f"{self.origin.rstrip('/')}{self.relative_url(path or '/')}"

    __call__ = relative_url


__all__ = ["UrlResolver"]
