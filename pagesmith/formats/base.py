"""Abstract output format shared by the HTML and Markdown renderers."""

from __future__ import annotations

import abc
import re
import typing as typ

from pagesmith.model import (
    CustomAttribute,
    Member,
    MemberModel,
    NameQualifier,
    NamespaceModel,
    TopicModel,
)

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from pagesmith.context import DocumentationContext
    from pagesmith.support.url_transformer import UrlTransformer
    from pagesmith.templates.writers import TextSink

WHITESPACE_PATTERN = re.compile(r"\s+")
BLANK_LINES_PATTERN = re.compile(r"\n{3,}")
ATTRIBUTE_SUFFIX = "Attribute"


def cref_display_name(cref: str) -> str:
    """Return the short display name of a ``X:Full.Name(args)`` code reference."""
    target = cref.split(":", 1)[-1]
    target = target.split("(", 1)[0]
    return target.rsplit(".", 1)[-1]


class MarkupWriter(abc.ABC):
    """Write format-specific markup to a sink whose encoding is suppressed."""

    def __init__(self, writer: TextSink, output_format: OutputFormat) -> None:
        self.writer = writer
        self.output_format = output_format

    def write_text(self, text: str) -> None:
        """Write ``text`` encoded for the output format."""
        self.writer.write(self.output_format.encode(text))

    def write_raw(self, markup: str) -> None:
        self.writer.write(markup)

    @abc.abstractmethod
    def write_link(self, url: str, text: str) -> None:
        """Write a hyperlink with encoded ``text``."""

    @abc.abstractmethod
    def write_code(self, text: str) -> None:
        """Write ``text`` as inline code."""

    def write_doc_link(
        self,
        target: object,
        context: DocumentationContext,
        qualifier: NameQualifier = NameQualifier.DECLARING_TYPE,
    ) -> None:
        """Write a link to the documentation page of ``target``.

        ``target`` may be a member, member model, namespace model, topic, or
        custom attribute. When the context has no page for the target the
        display name is written as plain encoded text.

        Raises
        ------
        ValueError
            If ``target`` is not a linkable documentation entity.
        """
        url, text = _resolve_doc_link(target, context, qualifier)
        if url:
            self.write_link(url, text)
        else:
            self.write_text(text)


def _resolve_doc_link(
    target: object, context: DocumentationContext, qualifier: NameQualifier
) -> tuple[str | None, str]:
    match target:
        case MemberModel(metadata=metadata):
            return (
                context.try_get_member_url(metadata),
                context.format_name(metadata, qualifier),
            )
        case NamespaceModel(name=name):
            return context.try_get_namespace_url(name), name
        case CustomAttribute(type=attribute_type):
            text = context.format_name(attribute_type, qualifier)
            if text.endswith(ATTRIBUTE_SUFFIX) and text != ATTRIBUTE_SUFFIX:
                text = text[: -len(ATTRIBUTE_SUFFIX)]
            return context.try_get_member_url(attribute_type), text
        case Member():
            return context.try_get_member_url(target), context.format_name(
                target, qualifier
            )
        case TopicModel():
            return context.try_get_topic_url(target), target.title
        case _:
            msg = f"Cannot link to a value of type '{type(target).__name__}'."
            raise ValueError(msg)


class OutputFormat(abc.ABC):
    """Encode text and render comment trees for one output format."""

    name: typ.ClassVar[str]
    file_extension: typ.ClassVar[str]

    @abc.abstractmethod
    def encode(self, text: str) -> str:
        """Escape ``text`` so it displays literally in this format."""

    @abc.abstractmethod
    def create_markup_writer(self, writer: TextSink) -> MarkupWriter:
        """Return a markup writer emitting this format's syntax into ``writer``."""

    @abc.abstractmethod
    def transform_markdown(
        self, markdown: str, url_transformer: UrlTransformer | None = None
    ) -> str:
        """Convert markdown source into this format."""

    @abc.abstractmethod
    def _write_element(
        self,
        element: Element,
        parts: list[str],
        context: DocumentationContext | None,
    ) -> None:
        """Append the rendering of a single comment element to ``parts``."""

    def transform(
        self,
        writer: TextSink,
        element: Element,
        context: DocumentationContext | None = None,
    ) -> None:
        """Write the content of a comment element to ``writer``.

        The element's own tag (``<summary>``, ``<remarks>``...) is not rendered,
        only its mixed text and child content.
        """
        writer.write(self.render_comment(element, context))

    def render_comment(
        self, element: Element, context: DocumentationContext | None = None
    ) -> str:
        parts: list[str] = []
        self._write_content(element, parts, context)
        return BLANK_LINES_PATTERN.sub("\n\n", "".join(parts)).strip()

    def _write_content(
        self,
        element: Element,
        parts: list[str],
        context: DocumentationContext | None,
    ) -> None:
        if element.text:
            parts.append(self._text(element.text))
        for child in element:
            self._write_element(child, parts, context)
            if child.tail:
                parts.append(self._text(child.tail))

    def _inner(self, element: Element, context: DocumentationContext | None) -> str:
        parts: list[str] = []
        self._write_content(element, parts, context)
        return "".join(parts).strip()

    def _text(self, text: str) -> str:
        return self.encode(WHITESPACE_PATTERN.sub(" ", text))

    @staticmethod
    def _cref_target(
        element: Element, context: DocumentationContext | None
    ) -> tuple[str | None, str]:
        cref = element.get("cref", "")
        url = context.try_get_cref_url(cref) if context and cref else None
        label = (element.text or "").strip() or cref_display_name(cref)
        return url, label


__all__ = ["MarkupWriter", "OutputFormat", "cref_display_name"]
