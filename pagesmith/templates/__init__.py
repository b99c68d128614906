"""Template rendering: value formatting, encoding, and page dispatch."""

from .data import TemplateData
from .environment import create_environment
from .errors import (
    TemplateCompilationError,
    TemplateError,
    TemplateExecutionError,
    TemplateNotFoundError,
)
from .formatters import FormatterProvider
from .names import API_PAGE_CONTENT, TEMPLATE_NAMES, PageCategory, template_name_for
from .renderer import TemplateRenderer, current_renderer, using_renderer
from .writers import (
    EncodedTextWriter,
    create_suppressed_wrapper,
    markup_wrapper,
    suppressed_wrapper,
)

__all__ = [
    "API_PAGE_CONTENT",
    "TEMPLATE_NAMES",
    "EncodedTextWriter",
    "FormatterProvider",
    "PageCategory",
    "TemplateCompilationError",
    "TemplateData",
    "TemplateError",
    "TemplateExecutionError",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "create_environment",
    "create_suppressed_wrapper",
    "current_renderer",
    "markup_wrapper",
    "suppressed_wrapper",
    "template_name_for",
    "using_renderer",
]
