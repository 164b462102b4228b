"""Build a static site from a content directory and a site configuration.

:class:`SiteBuilder` is the thin I/O shell around the pure composer. It
discovers Markdown sources, builds the :class:`~pagecraft.config.PageRegistry`
once, renders every body with :class:`HtmlContentRenderer`, assembles each
page with :func:`~pagecraft.composer.assemble_page`, and writes the HTML files
plus a syntax stylesheet and ``sitemap.xml`` under the output directory.

Example
-------
>>> from pathlib import Path
>>> from pagecraft.builder import SiteBuilder
>>> from pagecraft.config import load_site_config
>>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> builder = SiteBuilder(site, Path("content"), Path("public"))  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
[PosixPath('public/index.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path
from xml.sax.saxutils import escape as xml_escape

from pagecraft._constants import SITEMAP_FILENAME, SYNTAX_STYLESHEET
from pagecraft.composer import assemble_page
from pagecraft.config import PageRegistry, SiteConfigError, load_source_page
from pagecraft.generator.document import DocumentRenderer
from pagecraft.generator.link_rewriter import _build_link_rewriter
from pagecraft.generator.renderer import HtmlContentRenderer
from pagecraft.urls import UrlResolver

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagecraft.composer import DocumentModel
    from pagecraft.config import SiteConfig, SourcePage

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".md", ".markdown")


@dc.dataclass(frozen=True, slots=True)
class AssembledPage:
    """A source page paired with its document model and rendered HTML."""

    source: SourcePage
    document: DocumentModel
    html: str


@dc.dataclass(frozen=True, slots=True)
class AssembledSite:
    """Every assembled page together with the registry they were resolved against."""

    registry: PageRegistry
    pages: tuple[AssembledPage, ...]


class SiteBuilder:
    """Discover, assemble, and write every page of a site."""

    def __init__(
        self,
        site: SiteConfig,
        content_dir: Path,
        output_dir: Path,
        *,
        pygments_style: str = "default",
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder with configuration and filesystem roots.

        Parameters
        ----------
        site : SiteConfig
            Parsed site configuration shared by every page.
        content_dir : Path
            Directory searched recursively for Markdown sources.
        output_dir : Path
            Directory that receives the generated files.
        pygments_style : str, optional
            Pygments style used for code blocks and the syntax stylesheet.
        templates_dir : Path, optional
            Override for the Jinja template directory.
        """
        self.site = dc.replace(
            site, stylesheets=(SYNTAX_STYLESHEET, *site.stylesheets)
        )
        self.content_dir = content_dir
        self.output_dir = output_dir
        self.urls = UrlResolver.for_site(site)
        self.renderer = HtmlContentRenderer(
            pygments_style, link_extension=_build_link_rewriter(self.urls)
        )
        self.document_renderer = DocumentRenderer(
            urls=self.urls, templates_dir=templates_dir
        )

    def discover(self) -> list[SourcePage]:
        """Return every Markdown source under the content directory, sorted."""
        if not self.content_dir.is_dir():
            msg = f"Content directory '{self.content_dir}' not found."
            raise FileNotFoundError(msg)
        paths = sorted(
            path
            for path in self.content_dir.rglob("*")
            if path.is_file() and path.suffix.lower() in SOURCE_SUFFIXES
        )
        return [load_source_page(path, self.content_dir) for path in paths]

    def assemble(self) -> AssembledSite:
        """Assemble and render every page without writing anything.

        Raises
        ------
        ConfigurationError
            If the comments provider is misconfigured.
        UnresolvedReferenceError
            If navigation names a page that was not discovered.
        SiteConfigError
            If two sources share a page name or output file, a permalink
            escapes the output directory, or front matter is invalid.
        """
        sources = self.discover()
        registry = PageRegistry(source.record for source in sources)
        self._check_output_paths(sources)
        assembled: list[AssembledPage] = []
        for source in sources:
            body = self.renderer.markdown(
                source.markdown, diagrams=source.context.diagrams_enabled is True
            )
            document = assemble_page(
                self.site, source.context, registry, body, urls=self.urls
            )
            html = self.document_renderer.render(document)
            assembled.append(AssembledPage(source=source, document=document, html=html))
        return AssembledSite(registry=registry, pages=tuple(assembled))

    def run(self) -> list[Path]:
        """Assemble every page and write the site to the output directory.

        Returns
        -------
        list[Path]
            Written files: pages in source order, then the syntax stylesheet
            and the sitemap.

        Notes
        -----
        Nothing is written when any page fails to assemble.
        """
        assembled = self.assemble()
        written: list[Path] = []
        for page in assembled.pages:
            path = self.output_path(page.source.context.url)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(page.html, encoding=self.site.encoding)
            written.append(path)
        written.append(self._write_syntax_stylesheet())
        written.append(self._write_sitemap(assembled))
        logger.info("wrote %d files to %s", len(written), self.output_dir)
        return written

    def output_path(self, url: str) -> Path:
        """Map a page permalink to its file under the output directory.

        Raises
        ------
        SiteConfigError
            If the permalink resolves outside the output directory.
        """
        relative = url.strip("/")
        if not relative or url.endswith("/"):
            path = self.output_dir / relative / "index.html"
        else:
            path = self.output_dir / relative
        if not path.resolve().is_relative_to(self.output_dir.resolve()):
            msg = f"Permalink '{url}' resolves outside '{self.output_dir}'."
            raise SiteConfigError(msg)
        return path

    def _check_output_paths(self, sources: cabc.Iterable[SourcePage]) -> None:
        """Raise when a page escapes the output directory or shares a file."""
        owners: dict[Path, SourcePage] = {}
        for source in sources:
            target = self.output_path(source.context.url).resolve()
            if (first := owners.get(target)) is not None:
                msg = (
                    f"Pages '{first.name}' ({first.source_path}) and "
                    f"'{source.name}' ({source.source_path}) both write "
                    f"'{target}'."
                )
                raise SiteConfigError(msg)
            owners[target] = source

    def _write_syntax_stylesheet(self) -> Path:
        path = self.output_dir / SYNTAX_STYLESHEET.lstrip("/")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.renderer.stylesheet + "\n", encoding="utf-8")
        return path

    def _write_sitemap(self, assembled: AssembledSite) -> Path:
        """Write ``sitemap.xml`` listing sitemap-eligible pages by absolute URL."""
        dates = {
            page.source.name: page.source.context.date for page in assembled.pages
        }
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
        ]
        for record in assembled.registry.sitemap_pages():
            loc = xml_escape(self.urls.absolute_url(record.url))
            lines.append("  <url>")
            lines.append(f"    <loc>{loc}</loc>")
            if (date := dates.get(record.name)) is not None:
                lines.append(f"    <lastmod>{date.isoformat()}</lastmod>")
            lines.append("  </url>")
        lines.append("</urlset>")
        path = self.output_dir / SITEMAP_FILENAME
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path


__all__ = ["AssembledPage", "AssembledSite", "SiteBuilder"]
