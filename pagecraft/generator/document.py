"""Serialize a :class:`~pagecraft.composer.DocumentModel` into HTML.

The renderer owns only textual emission: every inclusion and ordering decision
has already been made by the composer, and the templates walk the model's
tuples in order without filtering or sorting them.

Example
-------
>>> from pagecraft.config import PageContext, PageRegistry, SiteConfig
>>> from pagecraft.composer import assemble_page
>>> doc = assemble_page(
...     SiteConfig(title="Site"), PageContext(url="/"), PageRegistry(), "<p>x</p>"
... )
>>> html = DocumentRenderer().render(doc)
>>> html.startswith("<!DOCTYPE html>")
True
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

if typ.TYPE_CHECKING:
    from pagecraft.composer import DocumentModel
    from pagecraft.urls import UrlResolver


class DocumentRenderer:
    """Render document models with the packaged Jinja templates."""

    def __init__(
        self,
        *,
        urls: UrlResolver | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the Jinja environment and load the page template.

        Parameters
        ----------
        urls : UrlResolver, optional
            Resolver exposed to templates as the ``relative_url`` filter for
            navigation targets. Without one, URLs are emitted unchanged.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        """
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["relative_url"] = (
            urls.relative_url if urls is not None else _identity
        )
        self.template = self.env.get_template("page.jinja")

    def render(self, document: DocumentModel) -> str:
        """Return the HTML text for ``document``, ending with a newline."""
        html = self.template.render(doc=document)
        if not html.endswith("\n"):
            html += "\n"
        return html


def _identity(value: str) -> str:
    return value


__all__ = ["DocumentRenderer"]
