"""Inline formatters for documentation entities embedded in templates.

When a template writes a value such as ``{{ model.summary }}`` or
``{{ member.declaring_type }}``, the environment asks a
:class:`FormatterProvider` for a formatter matching the value's type. Matching
is structural and ordered: the first capability the type satisfies wins, with
comment content checked first and plain member metadata last.
"""

from __future__ import annotations

import abc
import collections.abc as cabc
import enum
import typing as typ
from xml.etree import ElementTree as ET  # noqa: N817

from pagesmith.model import (
    Comment,
    CustomAttribute,
    Member,
    MemberModel,
    NameQualifier,
    NamespaceModel,
    TopicModel,
)

from .writers import create_suppressed_wrapper, markup_wrapper

if typ.TYPE_CHECKING:
    from pagesmith.context import DocumentationContext
    from pagesmith.formats import MarkupWriter

    from .writers import EncodedTextWriter


def _invalid_value(value: object) -> ValueError:
    return ValueError(f"Invalid value type '{type(value).__name__}'.")


class Formatter(abc.ABC):
    """Write one kind of documentation value inline."""

    @abc.abstractmethod
    def format(self, value: object, writer: EncodedTextWriter) -> None:
        """Write ``value`` to ``writer``.

        Raises
        ------
        ValueError
            If ``value`` is not of the kind this formatter handles.
        """


class CommentFormatter(Formatter):
    """Render a comment body through the context's content formatter."""

    def __init__(self, context: DocumentationContext) -> None:
        self.context = context

    def format(self, value: object, writer: EncodedTextWriter) -> None:
        match value:
            case ET.Element():
                element = value
            case Comment(content=content):
                element = content
            case _:
                raise _invalid_value(value)

        with create_suppressed_wrapper(writer) as inner:
            self.context.content_formatter.transform(inner, element, self.context)


class MemberModelFormatter(Formatter):
    """Link to a member's page using the member model's own context."""

    def format(self, value: object, writer: EncodedTextWriter) -> None:
        if not isinstance(value, MemberModel):
            raise _invalid_value(value)
        with markup_wrapper(writer, value.context) as markup:
            markup.write_doc_link(value, value.context)


class NamespaceModelFormatter(Formatter):
    """Link to a namespace page."""

    def format(self, value: object, writer: EncodedTextWriter) -> None:
        if not isinstance(value, NamespaceModel):
            raise _invalid_value(value)
        with markup_wrapper(writer, value.context) as markup:
            markup.write_doc_link(value, value.context)


class TopicModelFormatter(Formatter):
    """Let a topic write its own content."""

    def __init__(self, context: DocumentationContext) -> None:
        self.context = context

    def format(self, value: object, writer: EncodedTextWriter) -> None:
        if not isinstance(value, TopicModel):
            raise _invalid_value(value)
        with create_suppressed_wrapper(writer) as inner:
            value.render(inner, self.context)


class MemberMetadataFormatter(Formatter):
    """Link to a member, qualified by its declaring type."""

    def __init__(self, context: DocumentationContext) -> None:
        self.context = context

    def format(self, value: object, writer: EncodedTextWriter) -> None:
        if not isinstance(value, Member):
            raise _invalid_value(value)
        with markup_wrapper(writer, self.context) as markup:
            markup.write_doc_link(value, self.context, NameQualifier.DECLARING_TYPE)


class AttributeFormatter(Formatter):
    """Link to an attribute's type, followed by the arguments it carries.

    ``[Obsolete]`` renders as a bare link; ``[Obsolete("Use Render", IsError =
    true)]`` appends the arguments in parentheses, linking any argument that is
    itself a documented member.
    """

    def __init__(self, context: DocumentationContext) -> None:
        self.context = context

    def format(self, value: object, writer: EncodedTextWriter) -> None:
        if not isinstance(value, CustomAttribute):
            raise _invalid_value(value)

        with markup_wrapper(writer, self.context) as markup:
            markup.write_doc_link(value, self.context, NameQualifier.DECLARING_TYPE)
            if not value.constructor_arguments and not value.named_arguments:
                return
            markup.write_raw("(")
            separator = ""
            for argument in value.constructor_arguments:
                markup.write_raw(separator)
                self._write_argument(markup, argument)
                separator = ", "
            for name, argument in value.named_arguments.items():
                markup.write_raw(separator)
                markup.write_text(f"{name} = ")
                self._write_argument(markup, argument)
                separator = ", "
            markup.write_raw(")")

    def _write_argument(self, markup: MarkupWriter, argument: object) -> None:
        match argument:
            case Member() | MemberModel():
                markup.write_doc_link(argument, self.context, NameQualifier.NONE)
            case None:
                markup.write_text("null")
            case bool():
                markup.write_text("true" if argument else "false")
            case str():
                markup.write_text(f'"{argument}"')
            case enum.Enum():
                markup.write_text(f"{type(argument).__name__}.{argument.name}")
            case list() | tuple():
                markup.write_raw("[")
                for index, item in enumerate(argument):
                    if index:
                        markup.write_raw(", ")
                    self._write_argument(markup, item)
                markup.write_raw("]")
            case _:
                markup.write_text(str(argument))


def is_comment_content(value_kind: type) -> bool:
    return issubclass(value_kind, (ET.Element, Comment))


def is_member_model(value_kind: type) -> bool:
    return issubclass(value_kind, MemberModel)


def is_namespace_model(value_kind: type) -> bool:
    return issubclass(value_kind, NamespaceModel)


def is_topic_model(value_kind: type) -> bool:
    return issubclass(value_kind, TopicModel)


def is_custom_attribute(value_kind: type) -> bool:
    return issubclass(value_kind, CustomAttribute)


def is_member_metadata(value_kind: type) -> bool:
    return issubclass(value_kind, Member)


class FormatterProvider:
    """Resolve the formatter for a value type by ordered capability checks."""

    def __init__(self, context: DocumentationContext) -> None:
        if context is None:
            msg = "context must not be None."
            raise TypeError(msg)
        self.context = context
        self.capabilities: tuple[tuple[cabc.Callable[[type], bool], Formatter], ...] = (
            (is_comment_content, CommentFormatter(context)),
            (is_member_model, MemberModelFormatter()),
            (is_namespace_model, NamespaceModelFormatter()),
            (is_topic_model, TopicModelFormatter(context)),
            (is_custom_attribute, AttributeFormatter(context)),
            (is_member_metadata, MemberMetadataFormatter(context)),
        )

    def try_create_formatter(self, value_kind: type) -> Formatter | None:
        """Return the formatter for ``value_kind``, or ``None`` when unsupported."""
        for predicate, formatter in self.capabilities:
            if predicate(value_kind):
                return formatter
        return None

    def format(self, value: object, writer: EncodedTextWriter) -> None:
        """Format ``value`` with its matching formatter.

        Raises
        ------
        ValueError
            If no formatter supports the type of ``value``.
        """
        formatter = self.try_create_formatter(type(value))
        if formatter is None:
            msg = f"Unsupported value type '{type(value).__name__}'."
            raise ValueError(msg)
        formatter.format(value, writer)


__all__ = [
    "AttributeFormatter",
    "CommentFormatter",
    "Formatter",
    "FormatterProvider",
    "MemberMetadataFormatter",
    "MemberModelFormatter",
    "NamespaceModelFormatter",
    "TopicModelFormatter",
    "is_comment_content",
    "is_custom_attribute",
    "is_member_metadata",
    "is_member_model",
    "is_namespace_model",
    "is_topic_model",
]
