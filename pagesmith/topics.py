"""Topics: free-form documentation pages rendered alongside the API pages.

Markdown files under the configured topics directory become
:class:`MarkdownFileTopic` instances. Two topic ids are special: ``WELCOME``
is the home page (a root ``README.md`` stands in when there is no
``WELCOME.md``) and ``API`` is the landing page of the API reference. When a
special topic has no source file, a :class:`TemplatedTopic` can render a theme
template in its place.
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import re
import typing as typ
from pathlib import Path

from ._constants import (
    API_TOPIC_ID,
    HOME_TOPIC_ID,
    PRIMARY_DATA_KEY,
    README_TOPIC_ID,
)
from .model import FileTopic, TopicModel
from .support.topic_sorter import sort_topics
from .templates.data import TemplateData
from .templates.renderer import current_renderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .context import DocumentationContext
    from .reporting import ActivityReporter
    from .support.url_transformer import UrlTransformer
    from .templates.writers import TextSink

MARKDOWN_SUFFIX = ".md"
HEADING_PATTERN = re.compile(r"^#\s+(?P<title>.+?)\s*#*\s*$", re.MULTILINE)


def _title_from_markdown(text: str, fallback: str) -> str:
    match = HEADING_PATTERN.search(text)
    if match:
        return match.group("title")
    return fallback.replace("-", " ").replace("_", " ").strip().title() or fallback


@dc.dataclass(eq=False)
class MarkdownFileTopic(FileTopic, TopicModel):
    """A topic whose content is a markdown file.

    Attributes
    ----------
    title : str
        Title of the first level-one heading, or one derived from the file name.
    file_path : str
        Path of the source relative to the topics directory, ``/``-separated.
    id : str
        Identifier of the topic, the relative path without its extension.
    source : Path
        Location of the markdown file on disk.
    url_transformer : UrlTransformer, optional
        Link rewriter scoped to the topic's directory; falls back to the
        context's transformer when unset.
    """

    id: str
    source: Path
    url_transformer: UrlTransformer | None = None

    @classmethod
    def from_path(
        cls, source: Path, topics_dir: Path, topic_id: str | None = None
    ) -> MarkdownFileTopic:
        """Create a topic for ``source``, read once to find its title."""
        relative = source.relative_to(topics_dir).as_posix()
        stem = posixpath.splitext(relative)[0]
        title = _title_from_markdown(source.read_text(encoding="utf-8"), source.stem)
        return cls(title, relative, topic_id or stem, source)

    @property
    def directory(self) -> str:
        return posixpath.dirname(self.file_path)

    def render(self, writer: TextSink, context: DocumentationContext) -> None:
        markdown = self.source.read_text(encoding="utf-8")
        transformer = self.url_transformer or context.url_transformer
        writer.write(context.content_formatter.transform_markdown(markdown, transformer))


class TemplatedTopic(TopicModel):
    """A topic whose content is produced by a named theme template.

    The template is rendered by the renderer driving the current page, with
    the documentation context available as ``model``.
    """

    def __init__(self, topic_id: str, title: str, template_name: str) -> None:
        if not template_name or not template_name.strip():
            msg = "template_name must be a non-empty string."
            raise ValueError(msg)
        self.id = topic_id
        self.title = title
        self.template_name = template_name

    def __repr__(self) -> str:
        return f"TemplatedTopic(id={self.id!r}, template_name={self.template_name!r})"

    def render(self, writer: TextSink, context: DocumentationContext) -> None:
        renderer = current_renderer()
        if renderer is None:
            msg = (
                f"No template renderer is available for rendering topic '{self.id}' "
                f"with template '{self.template_name}'."
            )
            raise RuntimeError(msg)
        data = TemplateData(renderer.common_data, context, PRIMARY_DATA_KEY)
        renderer.render_template(writer, self.template_name, data)


@dc.dataclass(slots=True)
class TopicCollection:
    """Topics of a build: the special pages plus the ordered regular topics."""

    home: TopicModel | None = None
    api: TopicModel | None = None
    topics: list[MarkdownFileTopic] = dc.field(default_factory=list)

    def __iter__(self) -> cabc.Iterator[TopicModel]:
        if self.home is not None:
            yield self.home
        if self.api is not None:
            yield self.api
        yield from self.topics

    def get(self, topic_id: str) -> TopicModel | None:
        """Return the topic with ``topic_id``, ignoring case."""
        folded = topic_id.casefold()
        return next((topic for topic in self if topic.id.casefold() == folded), None)

    @property
    def file_topics(self) -> list[MarkdownFileTopic]:
        """Return every topic backed by a markdown file."""
        return [topic for topic in self if isinstance(topic, MarkdownFileTopic)]


def is_special_topic(topic_id: str) -> bool:
    return topic_id.upper() in {HOME_TOPIC_ID, API_TOPIC_ID}


def collect_topics(
    topics_dir: Path,
    topic_order: cabc.Sequence[str],
    reporter: ActivityReporter | None = None,
) -> TopicCollection:
    """Discover markdown topics under ``topics_dir`` and order them.

    ``WELCOME.md`` and ``API.md`` become the special topics; a ``README.md``
    serves as the home page when there is no ``WELCOME.md``. The remaining
    topics are ordered by ``topic_order`` and then by title.
    """
    collection = TopicCollection()
    if not topics_dir.is_dir():
        if reporter is not None:
            reporter.warning("Topics directory '%s' not found.", topics_dir)
        return collection

    readme: MarkdownFileTopic | None = None
    topics: list[MarkdownFileTopic] = []
    for source in sorted(topics_dir.rglob(f"*{MARKDOWN_SUFFIX}")):
        topic = MarkdownFileTopic.from_path(source, topics_dir)
        topic_id = topic.id.upper()
        if topic_id == HOME_TOPIC_ID:
            topic.id = HOME_TOPIC_ID
            collection.home = topic
        elif topic_id == API_TOPIC_ID:
            topic.id = API_TOPIC_ID
            collection.api = topic
        elif topic_id == README_TOPIC_ID:
            topic.id = HOME_TOPIC_ID
            readme = topic
        else:
            topics.append(topic)

    if collection.home is None:
        collection.home = readme
    collection.topics = sort_topics(topics, topic_order)
    return collection


__all__ = [
    "MarkdownFileTopic",
    "TemplatedTopic",
    "TopicCollection",
    "collect_topics",
    "is_special_topic",
]
