"""Typed dataclasses describing pagecraft site and page configuration."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import enum
import typing as typ
from pathlib import Path  # noqa: TC003 - used for runtime type metadata

from pagecraft._constants import (
    DEFAULT_ENCODING,
    DEFAULT_FEED_PATH,
    DEFAULT_LANG,
    DEFAULT_LAYOUT,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class ConfigurationError(SiteConfigError):
    """Raised when a comments provider is selected without its identifier."""

    def __init__(self, provider: str, field: str) -> None:
        self.provider = provider
        self.field = field
        msg = f"Comments provider '{provider}' requires a non-empty '{field}'."
        super().__init__(msg)


class UnresolvedReferenceError(SiteConfigError):
    """Raised when a navigation entry names a page absent from the registry."""

    def __init__(self, page_name: str, known: cabc.Iterable[str] = ()) -> None:
        self.page_name = page_name
        available = ", ".join(sorted(known)) or "<none>"
        msg = (
            f"Navigation references unknown page '{page_name}'. "
            f"Known pages: {available}"
        )
        super().__init__(msg)


class CommentsProvider(enum.StrEnum):
    """Supported third-party comment widgets."""

    NONE = "none"
    DISQUS = "disqus"
    ISSO = "isso"


@dc.dataclass(frozen=True, slots=True)
class CommentsConfig:
    """Comment widget selection and provider-specific identifiers."""

    provider: CommentsProvider = CommentsProvider.NONE
    disqus_shortname: str = ""
    isso_domain: str = ""

    def __post_init__(self) -> None:
        try:
            provider = CommentsProvider(self.provider)
        except ValueError as exc:
            msg = f"Unsupported comments provider: {self.provider!r}"
            raise SiteConfigError(msg) from exc
        object.__setattr__(self, "provider", provider)


@dc.dataclass(frozen=True, slots=True)
class ExternalLink:
    """Outbound footer link rendered with an icon."""

    url: str
    icon: str


@dc.dataclass(frozen=True, slots=True)
class NavRef:
    """Navigation pointer to a registry page, optionally overridden."""

    page_name: str
    url_override: str | None = None
    title_override: str | None = None


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site-wide settings shared by every page of a build."""

    title: str
    description: str = ""
    encoding: str = DEFAULT_ENCODING
    author: str = ""
    lang: str = DEFAULT_LANG
    url: str = ""
    baseurl: str = ""
    external_links: tuple[ExternalLink, ...] = ()
    navigation: tuple[NavRef, ...] = ()
    show_sidebar: bool = False
    show_frame: bool = False
    feed_enabled: bool = False
    feed_path: str = DEFAULT_FEED_PATH
    math_enabled: bool = False
    comments: CommentsConfig = dc.field(default_factory=CommentsConfig)
    stylesheets: tuple[str, ...] = ()
    favicon: str | None = None
    touch_icon: str | None = None
    fonts_url: str | None = None
    icons_url: str | None = None


@dc.dataclass(frozen=True, slots=True)
class PageContext:
    """Per-page front matter consumed by the composer."""

    url: str
    title: str | None = None
    lang: str | None = None
    layout: str = DEFAULT_LAYOUT
    math_enabled: bool | None = None
    diagrams_enabled: bool | None = None
    sitemap_eligible: bool = True
    description: str | None = None
    date: dt.date | None = None


@dc.dataclass(frozen=True, slots=True)
class PageRecord:
    """Registry entry describing one known page."""

    name: str
    url: str
    title: str
    sitemap_eligible: bool = True


@dc.dataclass(frozen=True, slots=True)
class SourcePage:
    """A discovered content file split into front matter and Markdown body."""

    name: str
    source_path: Path
    context: PageContext
    markdown: str

    @property
    def record(self) -> PageRecord:
        """Return the registry entry describing this page."""
        return PageRecord(
            name=self.name,
            url=self.context.url,
            title=self.context.title or self.name,
            sitemap_eligible=self.context.sitemap_eligible,
        )


class PageRegistry:
    """Immutable ordered set of known pages, unique by name."""

    __slots__ = ("_index", "_records")

    def __init__(self, records: cabc.Iterable[PageRecord] = ()) -> None:
        ordered = tuple(records)
        index: dict[str, PageRecord] = {}
        for record in ordered:
            if record.name in index:
                msg = f"Duplicate page name '{record.name}' in page registry."
                raise SiteConfigError(msg)
            index[record.name] = record
        self._records = ordered
        self._index = index

    def __iter__(self) -> cabc.Iterator[PageRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PageRegistry):
            return NotImplemented
        return self._records == other._records

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        names = ", ".join(record.name for record in self._records)
        return f"PageRegistry([{names}])"

    @property
    def names(self) -> tuple[str, ...]:
        """Return page names in registry order."""
        return tuple(record.name for record in self._records)

    def get(self, name: str) -> PageRecord | None:
        """Return the record registered under ``name`` or ``None``."""
        return self._index.get(name)

    def sitemap_pages(self) -> tuple[PageRecord, ...]:
        """Return the records that should be listed in the sitemap."""
        return tuple(record for record in self._records if record.sitemap_eligible)


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
]
