"""Load site configuration and page front matter into typed dataclasses."""

from __future__ import annotations

import io
import typing as typ
from pathlib import Path, PurePosixPath

from ruamel.yaml import YAML

from pagecraft._constants import (
    DEFAULT_ENCODING,
    DEFAULT_FEED_PATH,
    DEFAULT_LANG,
    DEFAULT_LAYOUT,
    FRONT_MATTER_DELIMITER,
)

from .helpers import (
    _build_comments_config,
    _build_external_links,
    _build_nav_refs,
    _coerce_bool,
    _default_permalink,
    _optional_bool,
    _optional_str,
    _parse_date,
    _require_mapping,
    _string_tuple,
)
from .models import PageContext, SiteConfig, SiteConfigError, SourcePage


def _yaml_loader() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML file describing site-wide settings.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site configuration (for example,
        ``site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied for every omitted key.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a required field is missing or a value has the wrong shape (for
        example, a navigation entry without a ``page`` name).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from pagecraft.config import load_site_config
    >>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
    >>> site.feed_path  # doctest: +SKIP
    '/feed.xml'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    with path.open("r", encoding="utf-8") as handle:
        loaded = _yaml_loader().load(handle)
    return build_site_config(_require_mapping(loaded, source=str(path)))


def build_site_config(raw: typ.Mapping[str, typ.Any]) -> SiteConfig:
    """Build a :class:`SiteConfig` from an already deserialized mapping."""
    title = _optional_str(raw.get("title"))
    if not title:
        msg = "Site configuration requires a 'title'."
        raise SiteConfigError(msg)

    feed = raw.get("feed") or {}
    if not isinstance(feed, dict):
        msg = "Site 'feed' must be a mapping."
        raise SiteConfigError(msg)

    return SiteConfig(
        title=title,
        description=_optional_str(raw.get("description")) or "",
        encoding=_optional_str(raw.get("encoding")) or DEFAULT_ENCODING,
        author=_optional_str(raw.get("author")) or "",
        lang=_optional_str(raw.get("lang")) or DEFAULT_LANG,
        url=(_optional_str(raw.get("url")) or "").rstrip("/"),
        baseurl=(_optional_str(raw.get("baseurl")) or "").rstrip("/"),
        external_links=_build_external_links(raw.get("external_links")),
        navigation=_build_nav_refs(raw.get("navigation")),
        show_sidebar=_coerce_bool(
            raw.get("show_sidebar"), default=False, key="show_sidebar"
        ),
        show_frame=_coerce_bool(raw.get("show_frame"), default=False, key="show_frame"),
        feed_enabled=_coerce_bool(
            feed.get("enabled"), default=False, key="feed.enabled"
        ),
        feed_path=_optional_str(feed.get("path")) or DEFAULT_FEED_PATH,
        math_enabled=_coerce_bool(raw.get("math"), default=False, key="math"),
        comments=_build_comments_config(raw.get("comments")),
        stylesheets=_string_tuple(raw.get("stylesheets"), key="stylesheets"),
        favicon=_optional_str(raw.get("favicon")),
        touch_icon=_optional_str(raw.get("touch_icon")),
        fonts_url=_optional_str(raw.get("fonts_url")),
        icons_url=_optional_str(raw.get("icons_url")),
    )


def split_front_matter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Split ``text`` into its YAML front matter mapping and remaining body.

    Documents without a leading ``---`` line are returned unchanged with an
    empty mapping. An opening delimiter without a closing one is an error.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return {}, text
    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            loaded = _yaml_loader().load(io.StringIO(header))
            return _require_mapping(loaded, source="front matter"), body
    msg = "Front matter is missing its closing '---' delimiter."
    raise SiteConfigError(msg)


def build_page_context(
    meta: typ.Mapping[str, typ.Any], *, default_url: str
) -> PageContext:
    """Build a :class:`PageContext` from front matter, applying defaults."""
    return PageContext(
        url=_optional_str(meta.get("permalink")) or default_url,
        title=_optional_str(meta.get("title")),
        lang=_optional_str(meta.get("lang")),
        layout=_optional_str(meta.get("layout")) or DEFAULT_LAYOUT,
        math_enabled=_optional_bool(meta.get("math"), key="math"),
        diagrams_enabled=_optional_bool(meta.get("diagrams"), key="diagrams"),
        sitemap_eligible=_coerce_bool(meta.get("sitemap"), default=True, key="sitemap"),
        description=_optional_str(meta.get("description")),
        date=_parse_date(meta.get("date")),
    )


def load_source_page(path: Path, content_root: Path) -> SourcePage:
    """Read a Markdown source file and derive its registry name and context."""
    relative = PurePosixPath(path.relative_to(content_root).as_posix())
    text = path.read_text(encoding="utf-8")
    try:
        meta, body = split_front_matter(text)
    except (SiteConfigError, TypeError) as exc:
        msg = f"Invalid front matter in '{relative}': {exc}"
        raise SiteConfigError(msg) from exc
    name = _optional_str(meta.get("name")) or relative.with_suffix("").as_posix()
    context = build_page_context(meta, default_url=_default_permalink(relative))
    return SourcePage(name=name, source_path=path, context=context, markdown=body)


__all__ = [
    "build_page_context",
    "build_site_config",
    "load_site_config",
    "load_source_page",
    "split_front_matter",
]
