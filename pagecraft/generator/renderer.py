"""Render Markdown page bodies into HTML fragments.

Fenced blocks are handled in a single pass before Markdown sees the source.
On pages with diagrams enabled, ``mermaid`` fences become raw
``<div class="mermaid">`` containers for the diagram script. Every other
fence is normalised (leading indent and trailing fence options dropped) and
its language recorded, so the highlighted output can be tagged with
``data-language`` afterwards.

Examples
--------
>>> prepared = prepare_fences("```python,linenums\\nx = 1\\n```\\n")
>>> prepared.languages
('python',)
>>> prepared.text
'```python\\nx = 1\\n```\\n'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCE_PATTERN = re.compile(
    r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})(?P<lang>[A-Za-z0-9_+#.-]+)?[^\n]*\n"
    r"(?P<body>.*?)"
    r"^[ ]{0,3}(?P=fence)[ \t]*$",
    re.DOTALL | re.MULTILINE,
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
DIAGRAM_LANGUAGE = "mermaid"
CSS_CLASS = "codehilite"


@dc.dataclass(frozen=True, slots=True)
class PreparedBody:
    """Markdown ready for conversion plus the languages of its code fences."""

    text: str
    languages: tuple[str, ...]


def prepare_fences(text: str, *, diagrams: bool = False) -> PreparedBody:
    """Normalise code fences and optionally swap diagram fences for containers.

    Parameters
    ----------
    text : str
        Markdown source of a page body.
    diagrams : bool, optional
        Turn ``mermaid`` fences into diagram containers. When ``False`` they
        are highlighted like any other code block.

    Returns
    -------
    PreparedBody
        The rewritten source and, in document order, the language of each
        fence left for the highlighter (``"text"`` when unlabelled).
    """
    languages: list[str] = []

    def _replace(match: re.Match[str]) -> str:
        fence, language, body = match.group("fence", "lang", "body")
        if diagrams and language and language.lower() == DIAGRAM_LANGUAGE:
            source = escape(body.strip("\n"), quote=False)
            # Blank line first so Markdown treats the container as a raw block.
            return f'\n<div class="mermaid">\n{source}\n</div>\n'
        languages.append(language or "text")
        return f"{fence}{language or ''}\n{body}{fence}"

    return PreparedBody(FENCE_PATTERN.sub(_replace, text), tuple(languages))


class HtmlContentRenderer:
    """Convert page bodies to HTML with Pygments-highlighted code blocks."""

    def __init__(
        self, pygments_style: str = "default", link_extension: Extension | None = None
    ) -> None:
        """Configure the Markdown pipeline once for every body it converts.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style for highlighted blocks and :attr:`stylesheet`.
        link_extension : Extension, optional
            Extra Markdown extension, typically the root link rewriter. ``None``
            leaves links exactly as written.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass=CSS_CLASS)
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
        ]
        if link_extension is not None:
            extensions.append(link_extension)
        self._md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": CSS_CLASS,
                    "pygments_style": pygments_style,
                }
            },
        )

    @property
    def stylesheet(self) -> str:
        """CSS rules for the configured Pygments style."""
        return self._formatter.get_style_defs(f".{CSS_CLASS}")

    def markdown(self, text: str, *, diagrams: bool = False) -> str:
        """Return the HTML body for ``text``; blank sources give ``""``.

        ``mermaid`` fences become diagram containers only when ``diagrams`` is
        set, matching the pages that load the diagram script.
        """
        if not text.strip():
            return ""
        prepared = prepare_fences(text, diagrams=diagrams)
        html = self._md.reset().convert(prepared.text)
        return _tag_languages(html, prepared.languages)


def _tag_languages(html: str, languages: tuple[str, ...]) -> str:
    if not languages:
        return html
    remaining = iter(languages)

    def _repl(_match: re.Match[str]) -> str:
        language = escape(next(remaining, "text"), quote=True)
        return f'<div class="{CSS_CLASS}" data-language="{language}">'

    return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


__all__ = ["HtmlContentRenderer", "PreparedBody", "prepare_fences"]
