"""Exceptions raised while compiling or rendering templates."""

from __future__ import annotations


class TemplateError(Exception):
    """Base class for template registry and rendering failures."""


class TemplateCompilationError(TemplateError):
    """Raised when template source cannot be compiled."""

    def __init__(self, origin: str, diagnostic: str) -> None:
        self.origin = origin
        self.diagnostic = diagnostic
        super().__init__(f"Failed to compile template '{origin}': {diagnostic}")


class TemplateNotFoundError(TemplateError, KeyError):
    """Raised when rendering a template name that was never registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template '{name}' does not exist.")

    def __str__(self) -> str:
        return str(self.args[0])


class TemplateExecutionError(TemplateError):
    """Raised when a compiled template fails while rendering."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Failed to render template '{name}'.")


__all__ = [
    "TemplateCompilationError",
    "TemplateError",
    "TemplateExecutionError",
    "TemplateNotFoundError",
]
