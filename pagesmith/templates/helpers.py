"""Filters and globals available to page templates.

Helpers that need the documentation context are bound methods of
:class:`TemplateHelpers`; context-free helpers are plain functions so they can
be reused and tested on their own. Helpers producing markup return
:class:`markupsafe.Markup` so the environment writes them without encoding.
"""

from __future__ import annotations

import datetime as dt
import io
import re
import typing as typ

from markupsafe import Markup

from pagesmith.formats import HtmlFormat
from pagesmith.formats.base import cref_display_name
from pagesmith.model import Member, MemberModel, NameQualifier, NamespaceModel
from pagesmith.support.highlight import CodeHighlighter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagesmith.context import DocumentationContext
    from pagesmith.model import TopicModel

NAMESPACE_KIND = "Namespace"
MEMBER_CATEGORIES = frozenset(
    {
        NAMESPACE_KIND,
        "Class",
        "Struct",
        "Interface",
        "Enum",
        "Delegate",
        "Constructor",
        "Method",
        "Property",
        "Event",
        "Field",
        "Operator",
        "Type",
    }
)
CREF_KINDS: dict[str, str] = {
    "T": "Type",
    "M": "Method",
    "P": "Property",
    "F": "Field",
    "E": "Event",
}
TAG_PATTERN = re.compile(r"<[^>]*>")
WORD_PATTERN = re.compile(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])|\d+")


def member_from_cref(cref: str) -> Member:
    """Build member metadata from a ``X:Full.Name`` code reference.

    Raises
    ------
    ValueError
        If ``cref`` is not a namespace or member code reference.
    """
    prefix, _, target = cref.partition(":")
    if not target:
        msg = f"'{cref}' is not a valid code reference."
        raise ValueError(msg)
    if prefix == "N":
        return Member(target, NAMESPACE_KIND)
    if prefix not in CREF_KINDS:
        msg = f"'{cref}' is not a valid code reference."
        raise ValueError(msg)
    head, paren, arguments = target.partition("(")
    namespace, _, name = head.rpartition(".")
    return Member(name + paren + arguments, CREF_KINDS[prefix], namespace)


def to_member(value: object) -> Member:
    """Coerce a template argument into member metadata.

    Accepts members, member models, namespace models and code reference
    strings such as ``"T:Demo.Widget"``.
    """
    match value:
        case Member():
            return value
        case MemberModel(metadata=metadata):
            return metadata
        case NamespaceModel(name=name):
            return Member(name, NAMESPACE_KIND)
        case str():
            return member_from_cref(value)
        case _:
            msg = (
                "Expected a code element or a code reference string, "
                f"got '{type(value).__name__}'."
            )
            raise ValueError(msg)


def member_category(value: object) -> str:
    """Return the category label (``Class``, ``Method``...) of a code element."""
    kind = to_member(value).kind
    return kind if kind in MEMBER_CATEGORIES else "Member"


def fragment(href: object) -> str | None:
    """Return the fragment of ``href`` without the leading ``#``."""
    text = "" if href is None else str(href)
    _, hash_mark, tail = text.partition("#")
    return tail if hash_mark else None


def _words(text: str) -> list[str]:
    return WORD_PATTERN.findall(text)


def kebab_case(text: object) -> str:
    """Convert ``text`` to ``kebab-case``.

    Examples
    --------
    >>> kebab_case("TemplateRenderer")
    'template-renderer'
    """
    if text is None or not str(text).strip():
        return ""
    return "-".join(_words(str(text))).lower()


def snake_case(text: object) -> str:
    """Convert ``text`` to ``snake_case``."""
    if text is None or not str(text).strip():
        return ""
    return "_".join(_words(str(text))).lower()


def first_non_blank(*values: object) -> str | None:
    """Return the first argument whose text is not blank."""
    for value in values:
        if value is not None and str(value).strip():
            return str(value)
    return None


def select(selector: object, *choices: object) -> object:
    """Pick one of ``choices`` using ``selector``.

    With two choices the selector acts as a condition (first when truthy);
    with more it is an index into the choices. A single list argument is
    treated as the list of choices.
    """
    if not choices:
        msg = "select requires at least one choice."
        raise TypeError(msg)
    options = (
        list(choices[0])
        if len(choices) == 1 and isinstance(choices[0], list | tuple)
        else list(choices)
    )
    match len(options):
        case 0:
            return None
        case 1:
            return options[0]
        case 2:
            return options[0] if selector else options[1]
    try:
        index = int(selector)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None
    return options[index] if 0 <= index < len(options) else None


def now(date_format: str | None = None) -> str:
    """Return the current local time, ISO formatted unless a format is given."""
    current = dt.datetime.now().astimezone()
    return current.strftime(date_format) if date_format else current.isoformat()


def format_value(value: object, format_spec: str = "") -> str:
    """Format ``value`` with a Python format specification (``",.2f"``)."""
    if value is None:
        return ""
    return format(value, format_spec)


def strip_tags(html: object) -> Markup:
    """Remove markup tags from ``html``, keeping entities as they are."""
    if html is None:
        return Markup("")
    return Markup(TAG_PATTERN.sub("", str(html)).strip())  # noqa: S704 - tags removed


class TemplateHelpers:
    """Helpers bound to one documentation context."""

    def __init__(
        self,
        context: DocumentationContext,
        highlighter: CodeHighlighter | None = None,
    ) -> None:
        self.context = context
        self.highlighter = highlighter

    @property
    def filters(self) -> dict[str, cabc.Callable[..., object]]:
        return {
            "member_name": self.member_name,
            "member_url": self.member_url,
            "member_category": member_category,
            "topic_url": self.topic_url,
            "root_relative_url": self.root_relative_url,
            "fragment": fragment,
            "kebab_case": kebab_case,
            "snake_case": snake_case,
            "format_value": format_value,
            "strip_tags": strip_tags,
            "markdown": self.markdown,
            "highlight": self.highlight,
            "cref": self.cref,
        }

    @property
    def globals(self) -> dict[str, object]:
        return {
            "root_url": self.root_url,
            "first_non_blank": first_non_blank,
            "select": select,
            "now": now,
        }

    def member_name(self, value: object) -> str:
        """Return the member name qualified by its declaring type."""
        member = to_member(value)
        if member.kind == NAMESPACE_KIND:
            return member.name
        return self.context.format_name(member, NameQualifier.DECLARING_TYPE)

    def member_url(self, value: object) -> str | None:
        member = to_member(value)
        if member.kind == NAMESPACE_KIND:
            return self.context.try_get_namespace_url(member.name)
        return self.context.try_get_member_url(member)

    def topic_url(self, topic: TopicModel) -> str | None:
        return self.context.try_get_topic_url(topic)

    def root_url(self) -> str:
        return self.context.root_url

    def root_relative_url(self, href: object) -> object:
        """Rewrite ``href`` through the context's URL transformer if it applies."""
        if href is None or not str(href).strip():
            return None
        transformer = self.context.url_transformer
        if transformer is not None and transformer.may_transform_urls:
            rewritten = transformer.try_transform_url(str(href).strip())
            if rewritten is not None:
                return rewritten
        return href

    def markdown(self, text: object) -> Markup:
        """Render markdown ``text`` into the context's output format."""
        if text is None or not str(text).strip():
            return Markup("")
        transformed = self.context.content_formatter.transform_markdown(
            str(text), self.context.url_transformer
        )
        return Markup(transformed)  # noqa: S704 - rendered by the output format

    def highlight(self, code: object, language: str | None = None) -> Markup:
        """Render a highlighted code block for the active output format."""
        source = "" if code is None else str(code)
        if self.context.content_formatter.name == HtmlFormat.name:
            if self.highlighter is None:
                self.highlighter = CodeHighlighter()
            return Markup(self.highlighter.highlight(source, language))  # noqa: S704
        fence = f"```{language or ''}\n{source.rstrip()}\n```"
        return Markup(fence)  # noqa: S704 - markdown output is not escaped

    def cref(self, cref: object) -> Markup:
        """Render a link to the page documenting a code reference."""
        if not isinstance(cref, str):
            msg = "cref requires a code reference string."
            raise TypeError(msg)
        buffer = io.StringIO()
        markup = self.context.content_formatter.create_markup_writer(buffer)
        url = self.context.try_get_cref_url(cref)
        label = cref_display_name(cref)
        if url:
            markup.write_link(url, label)
        else:
            markup.write_text(label)
        return Markup(buffer.getvalue())  # noqa: S704 - written by the markup writer


__all__ = [
    "TemplateHelpers",
    "first_non_blank",
    "format_value",
    "fragment",
    "kebab_case",
    "member_category",
    "member_from_cref",
    "now",
    "select",
    "snake_case",
    "strip_tags",
    "to_member",
]
