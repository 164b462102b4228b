"""Unit tests for the site configuration and front matter loaders.

Usage
-----
Run ``pytest tests/test_config_loader.py -v``. Tests write YAML fixtures into
pytest's ``tmp_path``.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from textwrap import dedent

import pytest

from pagecraft.config import (
    CommentsProvider,
    ExternalLink,
    NavRef,
    SiteConfigError,
    load_site_config,
    load_source_page,
    split_front_matter,
)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(text).lstrip(), encoding="utf-8")
    return path


def test_full_site_config(tmp_path: Path) -> None:
    """Every recognised key is parsed into the site configuration."""
    config_path = _write(
        tmp_path / "site.yaml",
        """
        title: Example
        description: A site
        author: Jo
        lang: de
        url: https://example.com/
        baseurl: /blog/
        show_sidebar: true
        show_frame: true
        feed:
          enabled: true
          path: /atom.xml
        math: true
        comments:
          provider: Disqus
          disqus_shortname: example
        navigation:
          - page: about
          - about-me
          - page: blog
            url: /blog/
            title: Blog
        external_links:
          - url: https://github.com/example
            icon: github
        stylesheets:
          - /css/main.css
        favicon: /favicon.ico
        """,
    )
    site = load_site_config(config_path)
    assert site.title == "Example"
    assert site.lang == "de"
    assert site.url == "https://example.com", "Expected trailing slash trimmed"
    assert site.baseurl == "/blog"
    assert site.show_sidebar and site.show_frame and site.math_enabled
    assert site.feed_enabled and site.feed_path == "/atom.xml"
    assert site.comments.provider is CommentsProvider.DISQUS
    assert site.comments.disqus_shortname == "example"
    assert site.navigation == (
        NavRef("about"),
        NavRef("about-me"),
        NavRef("blog", url_override="/blog/", title_override="Blog"),
    )
    assert site.external_links == (ExternalLink("https://github.com/example", "github"),)
    assert site.stylesheets == ("/css/main.css",)
    assert site.favicon == "/favicon.ico"


def test_defaults_apply(tmp_path: Path) -> None:
    """Omitted keys take their documented defaults."""
    site = load_site_config(_write(tmp_path / "site.yaml", "title: Minimal\n"))
    assert site.encoding == "utf-8"
    assert site.lang == "en"
    assert not (site.show_frame or site.show_sidebar or site.feed_enabled)
    assert site.feed_path == "/feed.xml"
    assert not site.math_enabled
    assert site.comments.provider is CommentsProvider.NONE
    assert site.navigation == () and site.external_links == ()


def test_missing_file(tmp_path: Path) -> None:
    """A missing configuration file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_site_config(tmp_path / "absent.yaml")


def test_missing_title(tmp_path: Path) -> None:
    """The site title is required."""
    with pytest.raises(SiteConfigError, match="title"):
        load_site_config(_write(tmp_path / "site.yaml", "lang: en\n"))


def test_non_mapping_top_level(tmp_path: Path) -> None:
    """A YAML list at the top level is rejected."""
    with pytest.raises(TypeError):
        load_site_config(_write(tmp_path / "site.yaml", "- a\n- b\n"))


@pytest.mark.parametrize(
    ("snippet", "message"),
    [
        ("navigation:\n  - title: Orphan\n", "page"),
        ("external_links:\n  - url: /x\n", "icon"),
        ("comments:\n  provider: facebook\n", "Unknown comments provider"),
        ("show_frame: maybe\n", "show_frame"),
        ("navigation: about\n", "navigation"),
    ],
)
def test_malformed_entries(tmp_path: Path, snippet: str, message: str) -> None:
    """Malformed configuration entries raise SiteConfigError."""
    path = _write(tmp_path / "site.yaml", "title: Example\n" + snippet)
    with pytest.raises(SiteConfigError, match=message):
        load_site_config(path)


def test_split_front_matter() -> None:
    """Front matter is parsed and the body is returned verbatim."""
    meta, body = split_front_matter("---\ntitle: Hi\nmath: true\n---\n# Body\n")
    assert meta == {"title": "Hi", "math": True}
    assert body == "# Body\n"


def test_split_front_matter_absent() -> None:
    """Documents without front matter are returned unchanged."""
    meta, body = split_front_matter("# Just text\n")
    assert meta == {}
    assert body == "# Just text\n"


def test_split_front_matter_unclosed() -> None:
    """An opening delimiter without a closing one is an error."""
    with pytest.raises(SiteConfigError, match="closing"):
        split_front_matter("---\ntitle: Hi\n")


@pytest.mark.parametrize(
    ("relative", "expected_name", "expected_url"),
    [
        ("index.md", "index", "/"),
        ("about.md", "about", "/about.html"),
        ("posts/hello.md", "posts/hello", "/posts/hello.html"),
        ("docs/index.md", "docs/index", "/docs/"),
    ],
)
def test_source_page_defaults(
    tmp_path: Path, relative: str, expected_name: str, expected_url: str
) -> None:
    """Names and permalinks are derived from the source path."""
    path = _write(tmp_path / relative, "Body\n")
    source = load_source_page(path, tmp_path)
    assert source.name == expected_name
    assert source.context.url == expected_url
    assert source.context.layout == "page"
    assert source.context.sitemap_eligible is True
    assert source.context.math_enabled is None
    assert source.markdown == "Body\n"


def test_source_page_front_matter(tmp_path: Path) -> None:
    """Front matter keys populate the page context and registry record."""
    path = _write(
        tmp_path / "posts" / "hello.md",
        """
        ---
        name: hello
        permalink: /2024/hello/
        title: Hello
        layout: post
        lang: fr
        math: false
        diagrams: true
        sitemap: false
        date: 2024-03-01
        ---
        Body
        """,
    )
    source = load_source_page(path, tmp_path)
    context = source.context
    assert source.name == "hello"
    assert context.url == "/2024/hello/"
    assert context.layout == "post"
    assert context.lang == "fr"
    assert context.math_enabled is False
    assert context.diagrams_enabled is True
    assert context.sitemap_eligible is False
    assert context.date == dt.date(2024, 3, 1)
    record = source.record
    assert (record.name, record.url, record.title) == ("hello", "/2024/hello/", "Hello")
    assert record.sitemap_eligible is False


def test_source_page_invalid_front_matter(tmp_path: Path) -> None:
    """Invalid front matter names the offending file."""
    path = _write(tmp_path / "bad.md", "---\n- a list\n---\nBody\n")
    with pytest.raises(SiteConfigError, match="bad.md"):
        load_source_page(path, tmp_path)
