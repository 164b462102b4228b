"""Compose static HTML pages from site configuration and front matter.

This package resolves optional page features (feed link, math and diagram
scripts, comment widgets, sidebar, framed layout), joins navigation against the
page registry, marks selected footer links, and renders the resulting document
model with Jinja templates.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``assemble_page``: Pure composition of one page's document model.

Examples
--------
>>> from pagecraft import assemble_page
>>> from pagecraft.config import PageContext, PageRegistry, SiteConfig
>>> doc = assemble_page(SiteConfig(title="Site"), PageContext(url="/"),
...                     PageRegistry(), "")
>>> doc.title
'Site'
"""

from __future__ import annotations

from .cli import app, main
from .composer import assemble_page

__all__ = ["app", "assemble_page", "main"]
