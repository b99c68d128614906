"""Tests for type-driven formatting of documentation values."""

from __future__ import annotations

import typing as typ
from xml.etree import ElementTree as ET  # noqa: N817

import pytest
from bs4 import BeautifulSoup

from pagesmith.model import (
    Comment,
    CustomAttribute,
    Member,
    MemberModel,
    NamespaceModel,
    TopicModel,
)
from pagesmith.templates.formatters import (
    AttributeFormatter,
    CommentFormatter,
    FormatterProvider,
    MemberMetadataFormatter,
    MemberModelFormatter,
    NamespaceModelFormatter,
    TopicModelFormatter,
)

if typ.TYPE_CHECKING:
    import io

    from pagesmith.context import StaticDocumentationContext
    from pagesmith.templates.writers import EncodedTextWriter, TextSink

WIDGET_URL = "https://example.com/demo.widget"
TEST_ATTRIBUTE_URL = "https://example.com/demo.testattribute"


class StaticTopic(TopicModel):
    """Topic writing fixed HTML."""

    def __init__(self, body: str) -> None:
        self.id = "static"
        self.title = "Static"
        self.body = body

    def render(self, writer: TextSink, context: object) -> None:
        writer.write(self.body)


class MemberTopic(Member, TopicModel):
    """A type satisfying both the member and the topic capability."""

    def render(self, writer: TextSink, context: object) -> None:
        writer.write("topic")


def test_comment_renders_inline_code_as_markdown(
    markdown_context: StaticDocumentationContext,
    markdown_writer: EncodedTextWriter,
    buffer: io.StringIO,
) -> None:
    """Inline code inside a summary becomes a backtick span."""
    comment = Comment.parse("<summary>The <c>code</c> summary</summary>")
    FormatterProvider(markdown_context).format(comment, markdown_writer)
    assert buffer.getvalue() == "The `code` summary", (
        f"unexpected markdown: {buffer.getvalue()!r}"
    )


def test_comment_renders_references_as_html(
    html_context: StaticDocumentationContext,
    html_writer: EncodedTextWriter,
    buffer: io.StringIO,
) -> None:
    """Code references become links and text is encoded once."""
    element = ET.fromstring(
        '<summary>Draws a <see cref="T:Demo.Widget"/> &amp; its '
        '<paramref name="parts"/>.<para>Second <b>paragraph</b>.</para></summary>'
    )
    FormatterProvider(html_context).format(element, html_writer)
    soup = BeautifulSoup(buffer.getvalue(), "html.parser")
    link = soup.find("a")
    assert link is not None, "expected a link to the widget page"
    assert link.get("href") == WIDGET_URL, f"unexpected href: {link.get('href')!r}"
    assert link.get_text() == "Widget", "link text should be the short name"
    assert "&amp; its" in buffer.getvalue(), "text must be encoded exactly once"
    assert soup.find("strong") is not None, "bold text should become strong"
    assert soup.find("p") is not None, "para should become a paragraph"


def test_attribute_links_to_type_without_suffix(
    markdown_context: StaticDocumentationContext,
    markdown_writer: EncodedTextWriter,
    buffer: io.StringIO,
) -> None:
    """Attributes drop their ``Attribute`` suffix and link to their type."""
    attribute = CustomAttribute(Member("TestAttribute", "Class", "Demo"))
    FormatterProvider(markdown_context).format(attribute, markdown_writer)
    assert buffer.getvalue() == f"[Test]({TEST_ATTRIBUTE_URL})", (
        f"unexpected attribute markdown: {buffer.getvalue()!r}"
    )


def test_attribute_arguments_follow_in_parentheses(
    markdown_context: StaticDocumentationContext,
    markdown_writer: EncodedTextWriter,
    buffer: io.StringIO,
) -> None:
    """Constructor and named arguments render as literals."""
    attribute = CustomAttribute(
        Member("ObsoleteAttribute", "Class", "System"),
        constructor_arguments=["Use Render", True],
        named_arguments={"DiagnosticId": None, "Level": 2},
    )
    AttributeFormatter(markdown_context).format(attribute, markdown_writer)
    assert buffer.getvalue() == (
        'Obsolete("Use Render", true, DiagnosticId = null, Level = 2)'
    ), f"unexpected attribute markdown: {buffer.getvalue()!r}"


def test_attribute_member_arguments_are_links(
    markdown_context: StaticDocumentationContext,
    markdown_writer: EncodedTextWriter,
    buffer: io.StringIO,
    widget: Member,
) -> None:
    """An argument that is itself a member links to its page."""
    attribute = CustomAttribute(
        Member("TestAttribute", "Class", "Demo"), constructor_arguments=[widget]
    )
    AttributeFormatter(markdown_context).format(attribute, markdown_writer)
    assert buffer.getvalue() == (
        f"[Test]({TEST_ATTRIBUTE_URL})([Widget]({WIDGET_URL}))"
    ), f"unexpected attribute markdown: {buffer.getvalue()!r}"


def test_member_model_links_through_its_own_context(
    html_context: StaticDocumentationContext,
    markdown_context: StaticDocumentationContext,
    html_writer: EncodedTextWriter,
    buffer: io.StringIO,
) -> None:
    """Member models use the context they were documented in."""
    render = Member(
        "Render", "Method", "Demo", declaring_type=Member("Widget", "Class", "Demo")
    )
    model = MemberModel(render, html_context)
    FormatterProvider(markdown_context).format(model, html_writer)
    assert buffer.getvalue() == (
        '<a href="/api/demo.widget.render.html">Widget.Render</a>'
    ), f"unexpected member link: {buffer.getvalue()!r}"


def test_unlinked_namespace_is_encoded_text(
    html_context: StaticDocumentationContext,
    html_writer: EncodedTextWriter,
    buffer: io.StringIO,
) -> None:
    """Without a page the namespace name is written as encoded text."""
    NamespaceModelFormatter().format(
        NamespaceModel("Demo<T>", html_context), html_writer
    )
    assert buffer.getvalue() == "Demo&lt;T&gt;", (
        f"unexpected namespace text: {buffer.getvalue()!r}"
    )


def test_member_metadata_links_with_declaring_type(
    html_context: StaticDocumentationContext,
    html_writer: EncodedTextWriter,
    buffer: io.StringIO,
    widget: Member,
) -> None:
    """Plain member metadata links through the formatter's context."""
    MemberMetadataFormatter(html_context).format(widget, html_writer)
    assert buffer.getvalue() == f'<a href="{WIDGET_URL}">Widget</a>', (
        f"unexpected member link: {buffer.getvalue()!r}"
    )


def test_topic_writes_its_own_markup(
    html_context: StaticDocumentationContext,
    html_writer: EncodedTextWriter,
    buffer: io.StringIO,
) -> None:
    """Topic content is written without encoding and encoding is restored."""
    TopicModelFormatter(html_context).format(StaticTopic("<p>Hi</p>"), html_writer)
    assert buffer.getvalue() == "<p>Hi</p>", "topic markup must not be encoded"
    assert not html_writer.suppress_encoding, "encoding must be restored"


@pytest.mark.parametrize(
    ("value_kind", "expected"),
    [
        (ET.Element, CommentFormatter),
        (Comment, CommentFormatter),
        (MemberModel, MemberModelFormatter),
        (NamespaceModel, NamespaceModelFormatter),
        (StaticTopic, TopicModelFormatter),
        (CustomAttribute, AttributeFormatter),
        (Member, MemberMetadataFormatter),
        (MemberTopic, TopicModelFormatter),
    ],
)
def test_provider_selects_first_matching_capability(
    html_context: StaticDocumentationContext,
    value_kind: type,
    expected: type,
) -> None:
    """Capabilities are checked in order, member metadata last."""
    formatter = FormatterProvider(html_context).try_create_formatter(value_kind)
    assert isinstance(formatter, expected), (
        f"{value_kind.__name__} resolved to {type(formatter).__name__}"
    )


@pytest.mark.parametrize("value_kind", [int, str, dict, object])
def test_provider_has_no_formatter_for_plain_values(
    html_context: StaticDocumentationContext, value_kind: type
) -> None:
    """Values without a documentation capability are not formatted."""
    provider = FormatterProvider(html_context)
    assert provider.try_create_formatter(value_kind) is None, (
        f"{value_kind.__name__} should have no formatter"
    )


def test_provider_rejects_unsupported_values(
    html_context: StaticDocumentationContext, html_writer: EncodedTextWriter
) -> None:
    """Formatting a plain value through the provider fails."""
    with pytest.raises(ValueError, match="Unsupported value type 'int'"):
        FormatterProvider(html_context).format(42, html_writer)


@pytest.mark.parametrize(
    "formatter_factory",
    [
        CommentFormatter,
        TopicModelFormatter,
        AttributeFormatter,
        MemberMetadataFormatter,
        lambda _context: MemberModelFormatter(),
        lambda _context: NamespaceModelFormatter(),
    ],
)
def test_formatters_reject_wrong_value_type(
    html_context: StaticDocumentationContext,
    html_writer: EncodedTextWriter,
    formatter_factory: typ.Callable[[object], object],
) -> None:
    """Each formatter only accepts its own kind of value."""
    formatter = formatter_factory(html_context)
    with pytest.raises(ValueError, match="Invalid value type"):
        formatter.format("text", html_writer)  # type: ignore[attr-defined]
    assert not html_writer.suppress_encoding, "encoding must stay enabled"
