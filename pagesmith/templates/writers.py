"""Encoded output writers used while rendering template values.

The template environment encodes every value it writes. Formatters that emit
ready-made markup (links, rendered comments, topic bodies) must switch that
encoding off for the duration of their write and switch it back on afterwards,
including when they fail. :func:`suppressed_wrapper` is the scope guard doing
that; :func:`markup_wrapper` adds format-specific link and code helpers on top.
"""

from __future__ import annotations

import contextlib
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagesmith.context import DocumentationContext
    from pagesmith.formats import MarkupWriter


class TextSink(typ.Protocol):
    """Anything accepting text through ``write`` (``io.StringIO``, files...)."""

    def write(self, text: str, /) -> typ.Any: ...  # noqa: ANN401


class EncodedTextWriter:
    """Write text through an encoder unless encoding is suppressed.

    Examples
    --------
    >>> import io
    >>> from markupsafe import escape
    >>> buffer = io.StringIO()
    >>> writer = EncodedTextWriter(buffer, lambda text: str(escape(text)))
    >>> writer.write("<b>")
    >>> with suppressed_wrapper(writer) as raw:
    ...     raw.write("<b>")
    >>> buffer.getvalue()
    '&lt;b&gt;<b>'
    """

    def __init__(self, sink: TextSink, encoder: cabc.Callable[[str], str]) -> None:
        self.sink = sink
        self.encoder = encoder
        self.suppress_encoding = False

    def write(self, text: str) -> None:
        if not text:
            return
        self.sink.write(text if self.suppress_encoding else self.encoder(text))

    def write_raw(self, text: str) -> None:
        if text:
            self.sink.write(text)

    def create_wrapper(self) -> _WriterWrapper:
        """Return a plain text sink writing through this writer."""
        return _WriterWrapper(self)


class _WriterWrapper:
    """Text sink forwarding to an :class:`EncodedTextWriter`."""

    __slots__ = ("_writer",)

    def __init__(self, writer: EncodedTextWriter) -> None:
        self._writer = writer

    def write(self, text: str) -> int:
        self._writer.write(text)
        return len(text)


@contextlib.contextmanager
def suppressed_wrapper(writer: EncodedTextWriter) -> cabc.Iterator[TextSink]:
    """Suppress encoding on ``writer`` for the duration of the block.

    Raises
    ------
    RuntimeError
        If ``writer`` is already suppressing encoding.
    """
    if writer.suppress_encoding:
        msg = "The writer is already suppressing encoding."
        raise RuntimeError(msg)
    writer.suppress_encoding = True
    try:
        yield writer.create_wrapper()
    finally:
        writer.suppress_encoding = False


def create_suppressed_wrapper(
    writer: EncodedTextWriter,
) -> contextlib.AbstractContextManager[TextSink]:
    """Return a raw-writing scope, reusing an enclosing suppression if active."""
    if writer.suppress_encoding:
        return contextlib.nullcontext(writer.create_wrapper())
    return suppressed_wrapper(writer)


@contextlib.contextmanager
def markup_wrapper(
    writer: EncodedTextWriter, context: DocumentationContext
) -> cabc.Iterator[MarkupWriter]:
    """Yield a markup writer for the context's output format with encoding off."""
    if context is None:
        msg = "context must not be None."
        raise TypeError(msg)
    with create_suppressed_wrapper(writer) as inner:
        yield context.content_formatter.create_markup_writer(inner)


__all__ = [
    "EncodedTextWriter",
    "TextSink",
    "create_suppressed_wrapper",
    "markup_wrapper",
    "suppressed_wrapper",
]
