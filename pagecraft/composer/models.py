"""Value objects produced by the composer and consumed by the renderer.

Every type here is a frozen, slotted dataclass whose collections are tuples,
so two compositions of identical input compare equal and hash identically.

Head fragments are a small tagged union: each variant carries a ``kind``
class attribute that templates dispatch on.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from pagecraft.config import CommentsProvider  # noqa: TC001 - dataclass field type


class LayoutWrapper(enum.StrEnum):
    """Top-level page chrome a document body is embedded into."""

    DEFAULT = "default"
    FRAMED = "framed"


@dc.dataclass(frozen=True, slots=True)
class CommentsWidget:
    """Embed parameters for the selected comments provider.

    Attributes
    ----------
    provider : CommentsProvider
        Provider that owns the embed script.
    script_src : str
        URL of the provider's embed script.
    attributes : tuple[tuple[str, str], ...]
        Extra attributes emitted on the script tag, in order.
    identifier : str
        Shortname (Disqus) or domain (Isso) the widget was configured with.
    """

    provider: CommentsProvider
    script_src: str
    attributes: tuple[tuple[str, str], ...]
    identifier: str


@dc.dataclass(frozen=True, slots=True)
class FeatureSet:
    """Decisions about which optional fragments a page includes."""

    layout: LayoutWrapper
    feed_path: str | None
    math: bool
    diagrams: bool
    comments: CommentsWidget | None
    sidebar: bool

    @property
    def feed(self) -> bool:
        """Return True when a feed link should be emitted."""
        return self.feed_path is not None


@dc.dataclass(frozen=True, slots=True)
class NavigationEntry:
    """Resolved navigation link."""

    url: str
    title: str


@dc.dataclass(frozen=True, slots=True)
class FooterEntry:
    """Resolved footer link with its selected state."""

    url: str
    icon: str
    selected: bool


@dc.dataclass(frozen=True, slots=True)
class Charset:
    """``<meta charset>`` declaration."""

    kind: typ.ClassVar[str] = "charset"

    encoding: str


@dc.dataclass(frozen=True, slots=True)
class LinkTag:
    """Generic ``<link>`` element (icons, canonical URL, feed)."""

    kind: typ.ClassVar[str] = "link"

    rel: str
    href: str
    type: str | None = None
    title: str | None = None


@dc.dataclass(frozen=True, slots=True)
class Stylesheet:
    """Stylesheet ``<link>`` element."""

    kind: typ.ClassVar[str] = "stylesheet"

    href: str


@dc.dataclass(frozen=True, slots=True)
class MetaTag:
    """``<meta>`` element keyed by ``name`` or OpenGraph ``property``."""

    kind: typ.ClassVar[str] = "meta"

    content: str
    name: str | None = None
    property: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ConditionalScript:
    """External script included only when its feature is enabled."""

    kind: typ.ClassVar[str] = "script"

    feature: str
    src: str
    attributes: tuple[tuple[str, str], ...] = ()
    is_async: bool = False
    defer: bool = False


HeadFragment = Charset | LinkTag | Stylesheet | MetaTag | ConditionalScript


@dc.dataclass(frozen=True, slots=True)
class DocumentModel:
    """Fully assembled page handed to the document renderer.

    Attributes
    ----------
    lang : str
        Value for the ``<html lang>`` attribute.
    title : str
        Document ``<title>`` text.
    head : tuple[HeadFragment, ...]
        Head fragments in canonical order; renderers emit them verbatim.
    layout : LayoutWrapper
        Chosen body wrapper.
    sidebar : bool
        Whether the sidebar region is rendered.
    navigation : tuple[NavigationEntry, ...]
        Resolved navigation in declared order.
    footer : tuple[FooterEntry, ...]
        Resolved footer links in declared order.
    comments : CommentsWidget | None
        Comments widget whose container follows the content, if enabled.
    body : str
        Pre-rendered content markup, embedded without escaping.
    site_title : str
        Site name shown in the page chrome.
    site_description : str
        Site tagline shown in the sidebar.
    """

    lang: str
    title: str
    head: tuple[HeadFragment, ...]
    layout: LayoutWrapper
    sidebar: bool
    navigation: tuple[NavigationEntry, ...]
    footer: tuple[FooterEntry, ...]
    comments: CommentsWidget | None
    body: str
    site_title: str
    site_description: str

    def scripts(self, feature: str) -> tuple[ConditionalScript, ...]:
        """Return head scripts that belong to ``feature``."""
        return tuple(
            fragment
            for fragment in self.head
            if isinstance(fragment, ConditionalScript) and fragment.feature == feature
        )

    def links(self, rel: str) -> tuple[LinkTag, ...]:
        """Return head ``<link>`` fragments with the given ``rel``."""
        return tuple(
            fragment
            for fragment in self.head
            if isinstance(fragment, LinkTag) and fragment.rel == rel
        )


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
]
