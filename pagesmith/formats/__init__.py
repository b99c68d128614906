"""Output formats pagesmith can render documentation into."""

from .base import MarkupWriter, OutputFormat
from .html import HtmlFormat, HtmlMarkupWriter
from .markdown import MarkdownFormat, MarkdownMarkupWriter

OUTPUT_FORMATS: dict[str, type[OutputFormat]] = {
    HtmlFormat.name: HtmlFormat,
    MarkdownFormat.name: MarkdownFormat,
}

__all__ = [
    "OUTPUT_FORMATS",
    "HtmlFormat",
    "HtmlMarkupWriter",
    "MarkdownFormat",
    "MarkdownMarkupWriter",
    "MarkupWriter",
    "OutputFormat",
]
