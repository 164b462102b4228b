"""Join configured navigation references against the page registry."""

from __future__ import annotations

import typing as typ

from pagecraft.config import UnresolvedReferenceError

from .models import NavigationEntry

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagecraft.config import NavRef, PageRegistry


def resolve_navigation(
    nav_items: cabc.Iterable[NavRef], registry: PageRegistry
) -> tuple[NavigationEntry, ...]:
    """Return resolved navigation entries in their declared order.

    A reference with a URL override never fails: its title comes from the
    override, then the registered page, then the page name. Every other
    reference is looked up by exact name, and a title override replaces the
    registered title.

    Raises
    ------
    UnresolvedReferenceError
        If a reference without a URL override names a page that is not
        registered. Nothing is returned for the references that did resolve.
    """
    entries: list[NavigationEntry] = []
    for ref in nav_items:
        record = registry.get(ref.page_name)
        if ref.url_override is not None:
            fallback = record.title if record is not None else ref.page_name
            title = ref.title_override if ref.title_override is not None else fallback
            entries.append(NavigationEntry(ref.url_override, title))
            continue
        if record is None:
            raise UnresolvedReferenceError(ref.page_name, registry.names)
        entries.append(
            NavigationEntry(
                url=record.url,
                title=(
                    ref.title_override
                    if ref.title_override is not None
                    else record.title
                ),
            )
        )
    return tuple(entries)


__all__ = ["resolve_navigation"]
