"""Cyclopts CLI entrypoint for composing static pages.

The ``pagecraft`` console script defined here builds a site from a directory
of Markdown sources and a ``site.yaml`` configuration, or checks that every
page assembles (navigation resolves, comments are configured) without writing
anything. Typical usage involves running ``pagecraft check`` in CI and
``pagecraft build`` to publish.

Examples
--------
Build the site with the default paths:

>>> from pagecraft.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory:

>>> from pagecraft.cli import app
>>> app(["build", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import SiteBuilder
from .config import load_site_config

DEFAULT_CONFIG = Path("site.yaml")
DEFAULT_CONTENT_DIR = Path("content")
DEFAULT_OUTPUT_DIR = Path("public")

app = App(name="pagecraft", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Assemble every page and write the static site.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    content_dir: typ.Annotated[
        Path,
        Parameter(help="Directory of Markdown sources", env_var="INPUT_CONTENT_DIR"),
    ] = DEFAULT_CONTENT_DIR,
    output_dir: typ.Annotated[
        Path, Parameter(help="Output folder", env_var="INPUT_OUTPUT_DIR")
    ] = DEFAULT_OUTPUT_DIR,
    pygments_style: typ.Annotated[
        str, Parameter(help="Pygments style for code blocks")
    ] = "default",
) -> None:
    """Build the site described by ``config`` from ``content_dir``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    content_dir : Path, optional
        Directory searched recursively for ``.md`` sources.
    output_dir : Path, optional
        Directory receiving the generated HTML, stylesheet, and sitemap.
    pygments_style : str, optional
        Pygments style name used for highlighted code.

    Raises
    ------
    ConfigurationError
        If the comments provider lacks its identifier.
    UnresolvedReferenceError
        If navigation names a page that does not exist.
    """
    site_config = load_site_config(config)
    builder = SiteBuilder(
        site_config, content_dir, output_dir, pygments_style=pygments_style
    )
    for path in builder.run():
        print(f"wrote {_format_path(path)}")


@app.command(help="Assemble every page without writing, reporting defects.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    content_dir: typ.Annotated[
        Path,
        Parameter(help="Directory of Markdown sources", env_var="INPUT_CONTENT_DIR"),
    ] = DEFAULT_CONTENT_DIR,
) -> None:
    """Assemble every page in memory and print one ``ok`` line per page."""
    site_config = load_site_config(config)
    builder = SiteBuilder(site_config, content_dir, DEFAULT_OUTPUT_DIR)
    for page in builder.assemble().pages:
        print(f"ok {page.source.name} -> {page.source.context.url}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``pagecraft`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
