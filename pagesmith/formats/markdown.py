"""Markdown output format."""

from __future__ import annotations

import re
import textwrap
import typing as typ

from pagesmith.support.markdown_transformer import rewrite_markdown_links

from .base import MarkupWriter, OutputFormat

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from pagesmith.context import DocumentationContext
    from pagesmith.support.url_transformer import UrlTransformer
    from pagesmith.templates.writers import TextSink

MARKDOWN_SPECIAL_PATTERN = re.compile(r"([\\`*_\[\]<>|])")
URL_UNSAFE_PATTERN = re.compile(r"[\s()]")


def _link_target(url: str) -> str:
    return f"<{url}>" if URL_UNSAFE_PATTERN.search(url) else url


class MarkdownMarkupWriter(MarkupWriter):
    """Emit Markdown links and code spans."""

    def write_link(self, url: str, text: str) -> None:
        self.writer.write(f"[{self.output_format.encode(text)}]({_link_target(url)})")

    def write_code(self, text: str) -> None:
        self.writer.write(f"`{text}`")


class MarkdownFormat(OutputFormat):
    """Render documentation content as Markdown text."""

    name = "markdown"
    file_extension = ".md"

    def encode(self, text: str) -> str:
        return MARKDOWN_SPECIAL_PATTERN.sub(r"\\\1", text)

    def create_markup_writer(self, writer: TextSink) -> MarkupWriter:
        return MarkdownMarkupWriter(writer, self)

    def transform_markdown(
        self, markdown: str, url_transformer: UrlTransformer | None = None
    ) -> str:
        # Already in the target format; only link targets change.
        return rewrite_markdown_links(markdown, url_transformer)

    def _write_element(  # noqa: C901, PLR0912 - one branch per comment tag
        self,
        element: Element,
        parts: list[str],
        context: DocumentationContext | None,
    ) -> None:
        tag = element.tag
        if tag == "c":
            code = " ".join("".join(element.itertext()).split())
            parts.append(f"`{code}`")
        elif tag == "code":
            code = textwrap.dedent("".join(element.itertext())).strip("\n")
            language = element.get("language") or element.get("lang") or ""
            parts.append(f"\n\n```{language}\n{code}\n```\n\n")
        elif tag == "para":
            parts.append(f"\n\n{self._inner(element, context)}\n\n")
        elif tag in {"b", "strong"}:
            parts.append(f"**{self._inner(element, context)}**")
        elif tag in {"i", "em"}:
            parts.append(f"*{self._inner(element, context)}*")
        elif tag == "br":
            parts.append("  \n")
        elif tag in {"see", "seealso"}:
            parts.append(self._reference(element, context))
        elif tag in {"paramref", "typeparamref"}:
            parts.append(f"`{element.get('name', '')}`")
        elif tag == "list":
            parts.append(self._list(element, context))
        elif tag == "a":
            href = element.get("href", "")
            parts.append(f"[{self._inner(element, context)}]({_link_target(href)})")
        else:
            parts.append(self._inner(element, context))

    def _reference(self, element: Element, context: DocumentationContext | None) -> str:
        if langword := element.get("langword"):
            return f"`{langword}`"
        if href := element.get("href"):
            label = self._inner(element, context) or self.encode(href)
            return f"[{label}]({_link_target(href)})"
        url, label = self._cref_target(element, context)
        if url:
            return f"[`{label}`]({_link_target(url)})"
        return f"`{label}`"

    def _list(self, element: Element, context: DocumentationContext | None) -> str:
        numbered = element.get("type") == "number"
        lines: list[str] = []
        for index, item in enumerate(element.iter("item"), start=1):
            term = item.find("term")
            description = item.find("description")
            if term is not None and description is not None:
                body = (
                    f"**{self._inner(term, context)}** - "
                    f"{self._inner(description, context)}"
                )
            elif description is not None:
                body = self._inner(description, context)
            else:
                body = self._inner(item, context)
            marker = f"{index}." if numbered else "-"
            lines.append(f"{marker} {body}")
        return "\n\n" + "\n".join(lines) + "\n\n"


__all__ = ["MarkdownFormat", "MarkdownMarkupWriter"]
