"""Documentation context consumed by formatters, helpers, and topics.

The rendering pipeline never discovers entities or assigns URLs itself. It
asks a :class:`DocumentationContext` for URLs and for the output format that
knows how to encode text and turn comment trees into markup.
:class:`StaticDocumentationContext` is a dictionary-backed implementation used
by the bundled build driver and the tests.

Examples
--------
>>> from pagesmith.context import StaticDocumentationContext
>>> from pagesmith.formats import MarkdownFormat
>>> from pagesmith.model import Member
>>> ctx = StaticDocumentationContext(MarkdownFormat())
>>> ctx.member_urls["T:Demo.Widget"] = "https://example.com/demo.widget"
>>> ctx.try_get_member_url(Member("Widget", "Class", "Demo"))
'https://example.com/demo.widget'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .model import Member, NameQualifier

if typ.TYPE_CHECKING:
    from .formats import OutputFormat
    from .model import TopicModel
    from .support.url_transformer import UrlTransformer


class DocumentationContext(typ.Protocol):
    """Narrow interface onto the external documentation model."""

    content_formatter: OutputFormat
    url_transformer: UrlTransformer | None
    root_url: str

    def try_get_member_url(self, member: Member) -> str | None: ...

    def try_get_namespace_url(self, name: str) -> str | None: ...

    def try_get_topic_url(self, topic: TopicModel) -> str | None: ...

    def try_get_cref_url(self, cref: str) -> str | None: ...

    def format_name(self, member: Member, qualifier: NameQualifier) -> str: ...


@dc.dataclass(slots=True)
class StaticDocumentationContext:
    """Resolve URLs from plain dictionaries populated by the caller.

    Attributes
    ----------
    content_formatter : OutputFormat
        Output format used for encoding and comment transformation.
    root_url : str
        URL of the documentation root, ``"/"`` for site-absolute links.
    member_urls : dict[str, str]
        Member page URLs keyed by code reference (``"T:Demo.Widget"``).
    namespace_urls : dict[str, str]
        Namespace page URLs keyed by namespace name.
    topic_urls : dict[str, str]
        Topic page URLs keyed by topic id.
    url_transformer : UrlTransformer, optional
        Rewriter applied to links found in markdown content.
    """

    content_formatter: OutputFormat
    root_url: str = "/"
    member_urls: dict[str, str] = dc.field(default_factory=dict)
    namespace_urls: dict[str, str] = dc.field(default_factory=dict)
    topic_urls: dict[str, str] = dc.field(default_factory=dict)
    url_transformer: UrlTransformer | None = None

    def try_get_member_url(self, member: Member) -> str | None:
        return self.member_urls.get(member.code_reference)

    def try_get_namespace_url(self, name: str) -> str | None:
        return self.namespace_urls.get(name)

    def try_get_topic_url(self, topic: TopicModel) -> str | None:
        return self.topic_urls.get(topic.id)

    def try_get_cref_url(self, cref: str) -> str | None:
        """Resolve a ``X:Full.Name`` code reference to a page URL."""
        if cref.startswith("N:"):
            return self.namespace_urls.get(cref[2:])
        return self.member_urls.get(cref)

    def format_name(self, member: Member, qualifier: NameQualifier) -> str:
        match qualifier:
            case NameQualifier.DECLARING_TYPE:
                return member.qualified_name
            case NameQualifier.FULL:
                return member.full_name
            case _:
                return member.name


__all__ = ["DocumentationContext", "StaticDocumentationContext"]
