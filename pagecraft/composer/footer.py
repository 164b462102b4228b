"""Mark footer links that point at the page being rendered."""

from __future__ import annotations

import typing as typ

from .models import FooterEntry

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagecraft.config import ExternalLink


def resolve_footer(
    links: cabc.Iterable[ExternalLink], current_url: str
) -> tuple[FooterEntry, ...]:
    """Map each link to a footer entry, selected on exact URL equality.

    Every entry is compared independently, so duplicate URLs are all selected.
    URLs are passed through verbatim.
    """
    return tuple(
        FooterEntry(url=link.url, icon=link.icon, selected=link.url == current_url)
        for link in links
    )


__all__ = ["resolve_footer"]
