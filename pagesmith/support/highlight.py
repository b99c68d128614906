"""Syntax highlighting for code samples embedded in templates.

Blocks carry the ``codehilite`` class styled by the ``highlight_css`` common
data value, and record the requested language in a ``data-language``
attribute for theme scripts.
"""

from __future__ import annotations

from markupsafe import escape
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

HIGHLIGHT_CSS_CLASS = "codehilite"
PLAIN_LANGUAGE = "text"


class CodeHighlighter:
    """Render code snippets into Pygments-highlighted HTML blocks.

    Examples
    --------
    >>> block = CodeHighlighter().highlight("x = 1", "python")
    >>> block.startswith('<div class="codehilite" data-language="python">')
    True
    """

    def __init__(self, pygments_style: str = "default") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, nowrap=True)

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for ``.codehilite`` blocks in the chosen style."""
        return self._formatter.get_style_defs(f".{HIGHLIGHT_CSS_CLASS}")

    def highlight(self, code: str, language: str | None = None) -> str:
        """Return ``code`` as a ``codehilite`` block.

        Unknown or missing languages fall back to plain text; the block still
        records the language that was asked for.
        """
        language = language or PLAIN_LANGUAGE
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            lexer = TextLexer()
        body = highlight(code, lexer, self._formatter)
        return (
            f'<div class="{HIGHLIGHT_CSS_CLASS}" data-language="{escape(language)}">'
            f"<pre><code>{body}</code></pre></div>\n"
        )


__all__ = ["HIGHLIGHT_CSS_CLASS", "CodeHighlighter"]
