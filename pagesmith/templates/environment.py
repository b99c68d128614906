"""Jinja2 environment wired for documentation output.

Every value a template prints passes through a ``finalize`` hook. Values with
a registered formatter are written through an :class:`EncodedTextWriter` bound
to the output format's encoder and come back as ready-made markup; objects
exposing ``__html__`` are trusted as they are; anything else is encoded for
the output format. Autoescaping is off because the output format, not Jinja2,
decides what encoding means (HTML entities for HTML, backslash escapes for
Markdown).
"""

from __future__ import annotations

import io
import typing as typ

from jinja2 import DictLoader, Environment
from markupsafe import Markup

from .formatters import FormatterProvider
from .helpers import TemplateHelpers
from .writers import EncodedTextWriter

if typ.TYPE_CHECKING:
    from pagesmith.context import DocumentationContext
    from pagesmith.support.highlight import CodeHighlighter


class ValueFinalizer:
    """Render template output values in the context's output format."""

    def __init__(self, context: DocumentationContext) -> None:
        self.context = context
        self.formatters = FormatterProvider(context)

    def __call__(self, value: object) -> object:
        if value is None:
            return ""
        if hasattr(value, "__html__"):
            return value
        formatter = self.formatters.try_create_formatter(type(value))
        if formatter is not None:
            buffer = io.StringIO()
            writer = EncodedTextWriter(buffer, self.context.content_formatter.encode)
            formatter.format(value, writer)
            return Markup(buffer.getvalue())  # noqa: S704 - encoded by the writer
        return self.context.content_formatter.encode(str(value))


def create_environment(
    context: DocumentationContext,
    highlighter: CodeHighlighter | None = None,
) -> Environment:
    """Return a Jinja2 environment rendering values for ``context``.

    Parameters
    ----------
    context : DocumentationContext
        Supplies URLs and the output format used to encode values.
    highlighter : CodeHighlighter, optional
        Highlighter backing the ``highlight`` filter for HTML output.

    Returns
    -------
    Environment
        Environment with an empty in-memory loader; templates are registered
        through :class:`~pagesmith.templates.renderer.TemplateRenderer`.
    """
    env = Environment(
        loader=DictLoader({}),
        autoescape=False,  # noqa: S701 - values are encoded by ValueFinalizer
        finalize=ValueFinalizer(context),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    helpers = TemplateHelpers(context, highlighter)
    env.filters.update(helpers.filters)
    env.globals.update(helpers.globals)
    return env


__all__ = ["ValueFinalizer", "create_environment"]
