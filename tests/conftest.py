"""Shared fixtures for the pagesmith test-suite."""

from __future__ import annotations

import io

import pytest

from pagesmith.context import StaticDocumentationContext
from pagesmith.formats import HtmlFormat, MarkdownFormat
from pagesmith.model import Member
from pagesmith.templates.writers import EncodedTextWriter

WIDGET_URL = "https://example.com/demo.widget"
TEST_ATTRIBUTE_URL = "https://example.com/demo.testattribute"


@pytest.fixture
def widget() -> Member:
    """Return metadata for a documented class."""
    return Member("Widget", "Class", "Demo")


@pytest.fixture
def html_context() -> StaticDocumentationContext:
    """Return an HTML documentation context with a few known pages."""
    return StaticDocumentationContext(
        HtmlFormat(),
        member_urls={
            "T:Demo.Widget": WIDGET_URL,
            "T:Demo.TestAttribute": TEST_ATTRIBUTE_URL,
            "M:Demo.Widget.Render": "/api/demo.widget.render.html",
        },
        namespace_urls={"Demo": "/api/demo.html"},
    )


@pytest.fixture
def markdown_context() -> StaticDocumentationContext:
    """Return a Markdown documentation context with a few known pages."""
    return StaticDocumentationContext(
        MarkdownFormat(),
        member_urls={
            "T:Demo.Widget": WIDGET_URL,
            "T:Demo.TestAttribute": TEST_ATTRIBUTE_URL,
        },
    )


@pytest.fixture
def buffer() -> io.StringIO:
    """Return an in-memory text sink."""
    return io.StringIO()


@pytest.fixture
def html_writer(buffer: io.StringIO) -> EncodedTextWriter:
    """Return a writer encoding text as HTML into ``buffer``."""
    return EncodedTextWriter(buffer, HtmlFormat().encode)


@pytest.fixture
def markdown_writer(buffer: io.StringIO) -> EncodedTextWriter:
    """Return a writer escaping Markdown syntax into ``buffer``."""
    return EncodedTextWriter(buffer, MarkdownFormat().encode)
