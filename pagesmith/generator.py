"""Render the topic pages of a documentation site.

:class:`DocumentationGenerator` is the page-build driver: it discovers the
topics, assigns each an output page, builds the renderer from the theme, and
renders every topic through the ``topic_page`` template.

Examples
--------
>>> from pathlib import Path
>>> from pagesmith.config import load_site_config
>>> from pagesmith.generator import DocumentationGenerator
>>> config = load_site_config(Path("pagesmith.yaml"))  # doctest: +SKIP
>>> DocumentationGenerator(config).run()  # doctest: +SKIP
[PosixPath('public/index.html'), PosixPath('public/guides/setup.html')]
"""

from __future__ import annotations

import io
import typing as typ

from ._constants import API_TOPIC_ID, HOME_TOPIC_ID, TEMPLATE_SUFFIX
from .builder import RendererBuilder
from .context import StaticDocumentationContext
from .formats import OUTPUT_FORMATS
from .reporting import ActivityReporter
from .support.url_transformer import TopicUrlTransformer
from .templates.names import API_PAGE_CONTENT, PageCategory
from .topics import MarkdownFileTopic, TemplatedTopic, collect_topics

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig
    from .model import TopicModel
    from .topics import TopicCollection

HOME_PAGE_STEM = "index"
API_PAGE_STEM = "api"


class DocumentationGenerator:
    """Render every topic of a site configuration into the output directory."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        reporter: ActivityReporter | None = None,
        output_dir: Path | None = None,
    ) -> None:
        self.config = config
        self.reporter = reporter or ActivityReporter()
        self.output_dir = output_dir or config.output_dir
        self.output_format = OUTPUT_FORMATS[config.output_format]()

    def page_path(self, topic: TopicModel) -> str:
        """Return the output path of ``topic`` relative to the output directory."""
        if topic.id == HOME_TOPIC_ID:
            stem = HOME_PAGE_STEM
        elif topic.id == API_TOPIC_ID:
            stem = API_PAGE_STEM
        else:
            stem = topic.id
        return f"{stem}{self.output_format.file_extension}"

    def run(self) -> list[Path]:
        """Render all topics and return the written page paths.

        Raises
        ------
        FileNotFoundError
            If the theme directory is missing.
        TemplateError
            If a theme template fails to compile or a page fails to render.
        """
        topics = collect_topics(
            self.config.topics_dir, self.config.topic_order, self.reporter
        )
        self._add_generated_topics(topics)

        pages = [(topic, self.page_path(topic)) for topic in topics]
        root = self.config.base_url.rstrip("/")
        site_transformer = TopicUrlTransformer(
            {
                topic.file_path: page
                for topic, page in pages
                if isinstance(topic, MarkdownFileTopic)
            },
            root_url=self.config.base_url,
        )
        for topic in topics.file_topics:
            topic.url_transformer = site_transformer.scoped(topic.directory)

        context = StaticDocumentationContext(
            self.output_format,
            root_url=self.config.base_url,
            topic_urls={topic.id: f"{root}/{page}" for topic, page in pages},
            url_transformer=site_transformer,
        )
        renderer = RendererBuilder(self.reporter).build(context, self.config, topics)

        written: list[Path] = []
        with self.reporter.begin_activity("Rendering topics"):
            for topic, page in pages:
                buffer = io.StringIO()
                renderer.render(buffer, PageCategory.TOPIC, topic)
                path = self.output_dir / page
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(buffer.getvalue(), encoding="utf-8")
                written.append(path)
        return written

    def _add_generated_topics(self, topics: TopicCollection) -> None:
        has_api_template = (
            self.config.theme_dir / f"{API_PAGE_CONTENT}{TEMPLATE_SUFFIX}"
        ).is_file()
        if topics.api is None and has_api_template:
            self.reporter.logger.debug(
                "Using the '%s' template as the API page.", API_PAGE_CONTENT
            )
            topics.api = TemplatedTopic(API_TOPIC_ID, "API", API_PAGE_CONTENT)
        if topics.home is None:
            self.reporter.warning(
                "No home page found. Consider providing a topic file named "
                "'%s.md' or 'README.md' to serve as the home page.",
                HOME_TOPIC_ID,
            )


__all__ = ["DocumentationGenerator"]
