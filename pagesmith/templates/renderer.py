"""Template registry and page rendering."""

from __future__ import annotations

import contextlib
import contextvars
import typing as typ
from pathlib import Path

from jinja2 import ChoiceLoader, DictLoader, TemplateSyntaxError

from pagesmith._constants import PRIMARY_DATA_KEY

from .data import TemplateData
from .errors import (
    TemplateCompilationError,
    TemplateExecutionError,
    TemplateNotFoundError,
)
from .names import template_name_for

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Environment, Template

    from pagesmith.reporting import ActivityReporter

    from .names import PageCategory
    from .writers import TextSink

_active_renderer: contextvars.ContextVar[TemplateRenderer | None] = (
    contextvars.ContextVar("pagesmith_active_renderer", default=None)
)


class TemplateRenderer:
    """Compile named templates and render documentation pages with them.

    Every registered template is also available to the others by name, so
    themes can ``{% include "footer_partial" %}`` or ``{% import %}`` macros
    from a sibling template.

    Parameters
    ----------
    reporter : ActivityReporter
        Receives one step per rendered page.
    environment : jinja2.Environment
        Environment the templates compile in, typically from
        :func:`~pagesmith.templates.environment.create_environment`.

    Attributes
    ----------
    common_data : dict[str, object]
        Values shared by every page render, owned by the build driver. It must
        not be modified while a render is in progress.
    """

    def __init__(self, reporter: ActivityReporter, environment: Environment) -> None:
        self.reporter = reporter
        self.environment = environment
        self.common_data: dict[str, object] = {}
        self._templates: dict[str, Template] = {}
        self._sources = DictLoader({})
        if environment.loader is None:
            environment.loader = self._sources
        else:
            environment.loader = ChoiceLoader([self._sources, environment.loader])

    def has_template(self, name: str) -> bool:
        return name in self._templates

    @property
    def template_names(self) -> list[str]:
        return sorted(self._templates)

    def add_template(self, name: str, source_path: str | Path) -> None:
        """Compile the template stored at ``source_path`` under ``name``.

        Raises
        ------
        ValueError
            If ``name`` or ``source_path`` is empty.
        FileNotFoundError
            If ``source_path`` does not exist.
        TemplateCompilationError
            If the source is not a valid template.
        """
        if not name:
            msg = "Template name must not be empty."
            raise ValueError(msg)
        if not source_path:
            msg = "Template source path must not be empty."
            raise ValueError(msg)
        path = Path(source_path)
        if not path.is_file():
            msg = f"Template file not found: {path}"
            raise FileNotFoundError(msg)
        self._compile(name, path.read_text(encoding="utf-8"), str(path))

    def add_inline_template(self, name: str, source: str) -> None:
        """Compile ``source`` under ``name`` without touching the filesystem.

        Raises
        ------
        ValueError
            If ``name`` is empty.
        TemplateCompilationError
            If the source is not a valid template.
        """
        if not name:
            msg = "Template name must not be empty."
            raise ValueError(msg)
        if source is None:
            msg = "Template source must not be None."
            raise TypeError(msg)
        self._compile(name, source, name)

    def _compile(self, name: str, source: str, origin: str) -> None:
        previous = self._sources.mapping.get(name)
        self._sources.mapping[name] = source
        try:
            template = self.environment.get_template(name)
        except TemplateSyntaxError as error:
            if previous is None:
                del self._sources.mapping[name]
            else:
                self._sources.mapping[name] = previous
            diagnostic = f"{error.message} (line {error.lineno})"
            raise TemplateCompilationError(origin, diagnostic) from error
        self._templates[name] = template

    def render_template(
        self, writer: TextSink, name: str, data: cabc.Mapping[str, object]
    ) -> None:
        """Render the template registered as ``name`` into ``writer``.

        Raises
        ------
        TemplateNotFoundError
            If no template is registered under ``name``.
        TemplateExecutionError
            If the template fails while rendering; the original error is
            chained as ``__cause__``.
        """
        template = self._templates.get(name)
        if template is None:
            raise TemplateNotFoundError(name)
        try:
            with using_renderer(self):
                for chunk in template.generate(data):
                    writer.write(chunk)
        except Exception as error:  # noqa: BLE001 - attribute any failure to the template
            raise TemplateExecutionError(name) from error

    def render(self, writer: TextSink, category: PageCategory, model: object) -> None:
        """Render the page of ``category`` for ``model``.

        The model is exposed to the template as ``model``, on top of
        :attr:`common_data`.

        Raises
        ------
        TypeError
            If ``model`` is ``None``.
        ValueError
            If ``category`` is not a page category.
        """
        if model is None:
            msg = "model must not be None."
            raise TypeError(msg)
        name = template_name_for(category)
        data = TemplateData(self.common_data, model, PRIMARY_DATA_KEY)
        with self.reporter.begin_step(_describe(model)):
            self.render_template(writer, name, data)


def _describe(model: object) -> str:
    name = getattr(model, "name", None) or type(model).__name__
    kind = getattr(model, "model_type", None) or type(model).__name__
    return f"{name} {kind}"


def current_renderer() -> TemplateRenderer | None:
    """Return the renderer of the page currently being rendered, if any."""
    return _active_renderer.get()


@contextlib.contextmanager
def using_renderer(renderer: TemplateRenderer) -> cabc.Iterator[TemplateRenderer]:
    """Make ``renderer`` the active renderer for the duration of the block."""
    token = _active_renderer.set(renderer)
    try:
        yield renderer
    finally:
        _active_renderer.reset(token)


__all__ = ["TemplateRenderer", "current_renderer", "using_renderer"]
