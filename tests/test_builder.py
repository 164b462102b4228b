"""Integration tests for :class:`pagecraft.builder.SiteBuilder`.

Each test lays out a small content tree under ``tmp_path``, builds it, and
inspects the written HTML with BeautifulSoup.
"""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest
from bs4 import BeautifulSoup

from pagecraft.builder import SiteBuilder
from pagecraft.config import (
    ConfigurationError,
    NavRef,
    SiteConfig,
    SiteConfigError,
    UnresolvedReferenceError,
    build_site_config,
)


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(text).lstrip(), encoding="utf-8")


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create a content tree with an index, an about page, and one post."""
    root = tmp_path / "content"
    _write(root / "index.md", "---\ntitle: Home\n---\nWelcome.\n")
    _write(root / "about.md", "---\ntitle: About\n---\nAbout [home](/).\n")
    _write(
        root / "posts" / "hello.md",
        """
        ---
        name: hello
        title: Hello
        layout: post
        math: true
        diagrams: true
        date: 2024-05-06
        ---
        $$e = mc^2$$

        ```mermaid
        graph TD
          A-->B
        ```
        """,
    )
    _write(root / "drafts" / "hidden.md", "---\nsitemap: false\n---\nSecret.\n")
    return root


@pytest.fixture
def site() -> SiteConfig:
    """Return a site with navigation, feed, and Disqus comments."""
    return build_site_config(
        {
            "title": "Example",
            "url": "https://example.com",
            "feed": {"enabled": True},
            "navigation": [{"page": "about"}, {"page": "hello"}],
            "external_links": [{"url": "/about.html", "icon": "info"}],
            "comments": {"provider": "disqus", "disqus_shortname": "ex"},
        }
    )


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_run_writes_pages_stylesheet_and_sitemap(
    tmp_path: Path, content_dir: Path, site: SiteConfig
) -> None:
    """Every page is written at its permalink, followed by support files."""
    output = tmp_path / "public"
    written = SiteBuilder(site, content_dir, output).run()
    relative = [path.relative_to(output).as_posix() for path in written]
    assert relative == [
        "about.html",
        "drafts/hidden.html",
        "index.html",
        "posts/hello.html",
        "assets/css/syntax.css",
        "sitemap.xml",
    ], f"Unexpected written files: {relative!r}"
    assert all(path.exists() for path in written)


def test_post_includes_features(
    tmp_path: Path, content_dir: Path, site: SiteConfig
) -> None:
    """The post carries math, diagram, comments, and feed fragments."""
    output = tmp_path / "public"
    SiteBuilder(site, content_dir, output).run()
    soup = _soup(output / "posts" / "hello.html")
    features = [s.get("data-feature") for s in soup.head.find_all("script")]
    assert features == ["math", "diagrams", "comments"]
    assert soup.head.find("link", rel="alternate")["href"] == "/feed.xml"
    assert soup.select_one("div.mermaid") is not None
    assert soup.select_one("#disqus_thread") is not None
    stylesheets = [link["href"] for link in soup.head.find_all("link", rel="stylesheet")]
    assert stylesheets == ["/assets/css/syntax.css"]


def test_plain_page_has_no_comments(
    tmp_path: Path, content_dir: Path, site: SiteConfig
) -> None:
    """Non-post pages skip comments and page-only features."""
    output = tmp_path / "public"
    SiteBuilder(site, content_dir, output).run()
    soup = _soup(output / "about.html")
    assert soup.head.find("script") is None
    assert soup.select_one("section.comments") is None
    nav = [a.get_text() for a in soup.select("a.site-nav__link")]
    assert nav == ["About", "Hello"]
    footer = soup.select_one("a.site-footer__link")
    assert footer.get("aria-current") == "page"


def test_sitemap_lists_eligible_pages(
    tmp_path: Path, content_dir: Path, site: SiteConfig
) -> None:
    """The sitemap lists eligible pages by absolute URL with dates."""
    output = tmp_path / "public"
    SiteBuilder(site, content_dir, output).run()
    soup = BeautifulSoup((output / "sitemap.xml").read_text(encoding="utf-8"), "html.parser")
    locs = [loc.get_text() for loc in soup.find_all("loc")]
    assert locs == [
        "https://example.com/about.html",
        "https://example.com/",
        "https://example.com/posts/hello.html",
    ]
    assert [m.get_text() for m in soup.find_all("lastmod")] == ["2024-05-06"]


def test_unresolved_navigation_writes_nothing(
    tmp_path: Path, content_dir: Path, site: SiteConfig
) -> None:
    """A dangling navigation entry aborts the build before any write."""
    broken = SiteConfig(title=site.title, navigation=(NavRef("missing"),))
    output = tmp_path / "public"
    with pytest.raises(UnresolvedReferenceError, match="missing"):
        SiteBuilder(broken, content_dir, output).run()
    assert not output.exists(), "Expected no output for a failed build"


def test_misconfigured_comments_abort(tmp_path: Path, content_dir: Path) -> None:
    """A comments provider without its identifier aborts the build."""
    site = build_site_config({"title": "x", "comments": {"provider": "isso"}})
    with pytest.raises(ConfigurationError, match="isso"):
        SiteBuilder(site, content_dir, tmp_path / "public").assemble()


def test_duplicate_names_rejected(tmp_path: Path, site: SiteConfig) -> None:
    """Two sources claiming the same name cannot share a registry."""
    root = tmp_path / "content"
    _write(root / "a.md", "---\nname: same\n---\nA\n")
    _write(root / "b.md", "---\nname: same\n---\nB\n")
    with pytest.raises(SiteConfigError, match="same"):
        SiteBuilder(SiteConfig(title="x"), root, tmp_path / "out").assemble()


def test_shared_permalink_rejected(tmp_path: Path) -> None:
    """Two pages writing the same file abort the build before any write."""
    root = tmp_path / "content"
    _write(root / "a.md", "---\npermalink: /same.html\n---\nA\n")
    _write(root / "b.md", "---\npermalink: /same.html\n---\nB\n")
    output = tmp_path / "out"
    with pytest.raises(SiteConfigError, match="'a'.*'b'"):
        SiteBuilder(SiteConfig(title="x"), root, output).run()
    assert not output.exists(), "Expected nothing to be written"


def test_directory_permalink_aliases_rejected(tmp_path: Path) -> None:
    """``/docs/`` and ``/docs/index.html`` land on the same file."""
    root = tmp_path / "content"
    _write(root / "docs.md", "---\npermalink: /docs/\n---\nA\n")
    _write(root / "guide.md", "---\npermalink: /docs/index.html\n---\nB\n")
    with pytest.raises(SiteConfigError, match="both write"):
        SiteBuilder(SiteConfig(title="x"), root, tmp_path / "out").assemble()


def test_escaping_permalink_rejected(tmp_path: Path) -> None:
    """A permalink may not climb out of the output directory."""
    root = tmp_path / "content"
    _write(root / "evil.md", "---\npermalink: /../../escaped.html\n---\nX\n")
    output = tmp_path / "site" / "out"
    with pytest.raises(SiteConfigError, match="outside"):
        SiteBuilder(SiteConfig(title="x"), root, output).run()
    assert not (tmp_path / "escaped.html").exists()


def test_missing_content_dir(tmp_path: Path, site: SiteConfig) -> None:
    """A missing content directory is reported."""
    with pytest.raises(FileNotFoundError):
        SiteBuilder(site, tmp_path / "nope", tmp_path / "out").discover()


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("/", "index.html"),
        ("/about.html", "about.html"),
        ("/docs/", "docs/index.html"),
        ("/2024/hello/", "2024/hello/index.html"),
    ],
)
def test_output_path(tmp_path: Path, url: str, expected: str) -> None:
    """Permalinks map onto files under the output directory."""
    builder = SiteBuilder(SiteConfig(title="x"), tmp_path, tmp_path / "out")
    assert builder.output_path(url) == tmp_path / "out" / expected


def test_base_path_rewrites_body_links(tmp_path: Path, content_dir: Path) -> None:
    """Sites below a base path prefix root-relative body links."""
    site = build_site_config({"title": "x", "baseurl": "/sub"})
    output = tmp_path / "public"
    SiteBuilder(site, content_dir, output).run()
    soup = _soup(output / "about.html")
    assert soup.select_one("main.content a")["href"] == "/sub/"
