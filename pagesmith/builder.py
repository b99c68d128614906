"""Assemble a template renderer from a theme and its settings."""

from __future__ import annotations

import typing as typ

from markupsafe import Markup

from ._constants import GENERATOR_NAME, PARTIAL_TEMPLATE, TEMPLATE_SUFFIX, VERSION
from .formats import HtmlFormat
from .support.highlight import CodeHighlighter
from .templates.environment import create_environment
from .templates.errors import TemplateCompilationError
from .templates.renderer import TemplateRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import SiteConfig
    from .context import DocumentationContext
    from .reporting import ActivityReporter
    from .topics import TopicCollection


class RendererBuilder:
    """Build the :class:`TemplateRenderer` used for one documentation run.

    The builder compiles every ``*.jinja`` file of the theme directory under
    its stem (``topic_page.jinja`` becomes ``topic_page``) and fills the
    renderer's common data with build facts and theme settings. Settings
    listed as markdown are rendered into the output format and also registered
    as ``<name>_partial`` templates, so expressions such as
    ``{{ project_name }}`` inside them are evaluated on every page.
    """

    def __init__(self, reporter: ActivityReporter) -> None:
        if reporter is None:
            msg = "reporter must not be None."
            raise TypeError(msg)
        self.reporter = reporter

    def build(
        self,
        context: DocumentationContext,
        config: SiteConfig,
        topics: TopicCollection,
    ) -> TemplateRenderer:
        """Return a renderer loaded with the theme templates of ``config``.

        Raises
        ------
        FileNotFoundError
            If the theme directory does not exist.
        TemplateCompilationError
            If a theme template cannot be compiled.
        """
        highlighter = CodeHighlighter(config.pygments_style)
        renderer = TemplateRenderer(
            self.reporter, create_environment(context, highlighter)
        )
        self._load_templates(renderer, config.theme_dir)
        self._add_common_data(renderer, context, config, topics)
        if context.content_formatter.name == HtmlFormat.name:
            renderer.common_data["highlight_css"] = highlighter.stylesheet
        self._add_settings(
            renderer, context, config.settings, set(config.markdown_settings)
        )
        return renderer

    def _load_templates(self, renderer: TemplateRenderer, theme_dir: Path) -> None:
        if not theme_dir.is_dir():
            msg = f"Theme directory '{theme_dir}' not found."
            raise FileNotFoundError(msg)
        with self.reporter.begin_activity("Loading theme templates"):
            for path in sorted(theme_dir.glob(f"*{TEMPLATE_SUFFIX}")):
                with self.reporter.begin_step(path.name):
                    renderer.add_template(path.stem, path)

    @staticmethod
    def _add_common_data(
        renderer: TemplateRenderer,
        context: DocumentationContext,
        config: SiteConfig,
        topics: TopicCollection,
    ) -> None:
        data = renderer.common_data
        data["generator"] = f"{GENERATOR_NAME} {VERSION}"
        data["absolute_urls"] = config.absolute_urls
        data["output_format"] = context.content_formatter.name
        data["topics"] = list(topics)
        if topics.home is not None:
            data["home_page_title"] = topics.home.title
        if topics.api is not None:
            data["api_page_title"] = topics.api.title

    def _add_settings(
        self,
        renderer: TemplateRenderer,
        context: DocumentationContext,
        settings: cabc.Mapping[str, object],
        markdown_settings: cabc.Set[str],
    ) -> None:
        for name, value in settings.items():
            if value is None:
                continue
            if name not in markdown_settings:
                renderer.common_data[name] = value
                continue
            transformed = context.content_formatter.transform_markdown(
                str(value), context.url_transformer
            )
            renderer.common_data[name] = Markup(transformed)  # noqa: S704
            try:
                renderer.add_inline_template(
                    PARTIAL_TEMPLATE.format(name=name), transformed
                )
            except TemplateCompilationError as error:
                self.reporter.warning(
                    "Invalid value for theme setting '%s'. %s", name, error
                )


__all__ = ["RendererBuilder"]
