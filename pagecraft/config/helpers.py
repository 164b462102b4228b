"""Utility helpers shared by the pagecraft configuration loader."""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import PurePosixPath

from .models import (
    CommentsConfig,
    CommentsProvider,
    ExternalLink,
    NavRef,
    SiteConfigError,
)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_bool(value: object, *, default: bool, key: str) -> bool:
    """Return ``value`` as a bool, rejecting anything YAML did not parse as one."""
    match value:
        case None:
            return default
        case bool():
            return value
        case _:
            msg = f"Expected a boolean for '{key}', got {value!r}."
            raise SiteConfigError(msg)


def _optional_bool(value: object, *, key: str) -> bool | None:
    """Return ``value`` as a bool, or None when the key was not provided."""
    if value is None:
        return None
    return _coerce_bool(value, default=False, key=key)


def _string_tuple(value: object, *, key: str) -> tuple[str, ...]:
    """Normalize a list of strings into a tuple of non-empty entries."""
    match value:
        case None:
            return ()
        case str() as text:
            return (text,) if text.strip() else ()
        case list() as items:
            return tuple(text for item in items if (text := str(item).strip()))
        case _:
            msg = f"Expected a list of strings for '{key}'."
            raise SiteConfigError(msg)


def _build_nav_refs(entries: object) -> tuple[NavRef, ...]:
    """Build navigation references in their declared order."""
    match entries:
        case None:
            return ()
        case list() as items:
            pass
        case _:
            msg = "Site 'navigation' must be a list."
            raise SiteConfigError(msg)
    refs: list[NavRef] = []
    for entry in items:
        match entry:
            case str() as name if name.strip():
                refs.append(NavRef(page_name=name.strip()))
            case {"page": page, **rest} if _optional_str(page):
                refs.append(
                    NavRef(
                        page_name=str(page).strip(),
                        url_override=_optional_str(rest.get("url")),
                        title_override=_optional_str(rest.get("title")),
                    )
                )
            case _:
                msg = f"Navigation entries require a 'page' name, got {entry!r}."
                raise SiteConfigError(msg)
    return tuple(refs)


def _build_external_links(entries: object) -> tuple[ExternalLink, ...]:
    """Build footer link descriptors in their declared order."""
    match entries:
        case None:
            return ()
        case list() as items:
            pass
        case _:
            msg = "Site 'external_links' must be a list."
            raise SiteConfigError(msg)
    links: list[ExternalLink] = []
    for entry in items:
        match entry:
            case {"url": url, "icon": icon}:
                pass
            case _:
                msg = f"External links require 'url' and 'icon', got {entry!r}."
                raise SiteConfigError(msg)
        links.append(ExternalLink(url=str(url), icon=str(icon)))
    return tuple(links)


def _build_comments_config(payload: object) -> CommentsConfig:
    """Build the comments selection from the ``comments`` mapping."""
    match payload:
        case None:
            return CommentsConfig()
        case dict() as data:
            pass
        case _:
            msg = "Site 'comments' must be a mapping."
            raise SiteConfigError(msg)
    raw_provider = _optional_str(data.get("provider")) or CommentsProvider.NONE.value
    try:
        provider = CommentsProvider(raw_provider.lower())
    except ValueError as exc:
        known = ", ".join(member.value for member in CommentsProvider)
        msg = f"Unknown comments provider '{raw_provider}'. Expected one of: {known}"
        raise SiteConfigError(msg) from exc
    return CommentsConfig(
        provider=provider,
        disqus_shortname=_optional_str(data.get("disqus_shortname")) or "",
        isso_domain=_optional_str(data.get("isso_domain")) or "",
    )


def _default_permalink(relative: PurePosixPath) -> str:
    """Return the permalink for a content file path relative to the root."""
    stem = relative.with_suffix("")
    if stem.name == "index":
        parent = stem.parent.as_posix()
        return "/" if parent == "." else f"/{parent}/"
    return f"/{stem.as_posix()}.html"


def _parse_date(value: object) -> dt.date | None:
    """Return a date parsed from front matter, or None when absent or invalid."""
    match value:
        case dt.datetime():
            return value.date()
        case dt.date():
            return value
        case str() as text if text.strip():
            try:
                return dt.date.fromisoformat(text.strip()[:10])
            except ValueError:
                return None
        case _:
            return None


def _require_mapping(value: object, *, source: str) -> dict[str, typ.Any]:
    """Return ``value`` as a dict or raise for non-mapping YAML documents."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"Top-level YAML structure in {source} must be a mapping."
        raise TypeError(msg)
    return dict(value)


__all__ = [
    "_build_comments_config",
    "_build_external_links",
    "_build_nav_refs",
    "_coerce_bool",
    "_default_permalink",
    "_optional_bool",
    "_optional_str",
    "_parse_date",
    "_require_mapping",
    "_string_tuple",
]
