"""HTML output format."""

from __future__ import annotations

import textwrap
import typing as typ

from markupsafe import escape

from pagesmith.support.markdown_transformer import MarkdownToHtmlTransformer

from .base import MarkupWriter, OutputFormat

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from pagesmith.context import DocumentationContext
    from pagesmith.support.url_transformer import UrlTransformer
    from pagesmith.templates.writers import TextSink

_INLINE_TAGS: dict[str, str] = {
    "b": "strong",
    "strong": "strong",
    "i": "em",
    "em": "em",
    "sub": "sub",
    "sup": "sup",
}


class HtmlMarkupWriter(MarkupWriter):
    """Emit HTML anchors and code spans."""

    def write_link(self, url: str, text: str) -> None:
        self.writer.write(f'<a href="{escape(url)}">{escape(text)}</a>')

    def write_code(self, text: str) -> None:
        self.writer.write(f"<code>{escape(text)}</code>")


class HtmlFormat(OutputFormat):
    """Render documentation content as HTML fragments."""

    name = "html"
    file_extension = ".html"

    def __init__(self, transformer: MarkdownToHtmlTransformer | None = None) -> None:
        self._transformer = transformer or MarkdownToHtmlTransformer()

    def encode(self, text: str) -> str:
        return str(escape(text))

    def create_markup_writer(self, writer: TextSink) -> MarkupWriter:
        return HtmlMarkupWriter(writer, self)

    def transform_markdown(
        self, markdown: str, url_transformer: UrlTransformer | None = None
    ) -> str:
        return self._transformer.transform(markdown, url_transformer)

    def _write_element(  # noqa: C901, PLR0912 - one branch per comment tag
        self,
        element: Element,
        parts: list[str],
        context: DocumentationContext | None,
    ) -> None:
        tag = element.tag
        if tag == "c":
            parts.append(f"<code>{self._text(''.join(element.itertext()))}</code>")
        elif tag == "code":
            code = textwrap.dedent("".join(element.itertext())).strip("\n")
            language = element.get("language") or element.get("lang")
            css = f' class="language-{escape(language)}"' if language else ""
            parts.append(f"<pre><code{css}>{escape(code)}</code></pre>")
        elif tag == "para":
            parts.append(f"<p>{self._inner(element, context)}</p>")
        elif tag in _INLINE_TAGS:
            html_tag = _INLINE_TAGS[tag]
            parts.append(f"<{html_tag}>{self._inner(element, context)}</{html_tag}>")
        elif tag == "br":
            parts.append("<br />")
        elif tag in {"see", "seealso"}:
            parts.append(self._reference(element, context))
        elif tag in {"paramref", "typeparamref"}:
            parts.append(f"<code>{escape(element.get('name', ''))}</code>")
        elif tag == "list":
            parts.append(self._list(element, context))
        elif tag == "a":
            href = element.get("href", "")
            parts.append(
                f'<a href="{escape(href)}">{self._inner(element, context)}</a>'
            )
        else:
            parts.append(self._inner(element, context))

    def _reference(self, element: Element, context: DocumentationContext | None) -> str:
        if langword := element.get("langword"):
            return f"<code>{escape(langword)}</code>"
        if href := element.get("href"):
            label = self._inner(element, context) or str(escape(href))
            return f'<a href="{escape(href)}">{label}</a>'
        url, label = self._cref_target(element, context)
        if url:
            return f'<a href="{escape(url)}"><code>{escape(label)}</code></a>'
        return f"<code>{escape(label)}</code>"

    def _list(self, element: Element, context: DocumentationContext | None) -> str:
        list_tag = "ol" if element.get("type") == "number" else "ul"
        items: list[str] = []
        for item in element.iter("item"):
            term = item.find("term")
            description = item.find("description")
            if term is not None and description is not None:
                body = (
                    f"<strong>{self._inner(term, context)}</strong> - "
                    f"{self._inner(description, context)}"
                )
            elif description is not None:
                body = self._inner(description, context)
            else:
                body = self._inner(item, context)
            items.append(f"<li>{body}</li>")
        return f"<{list_tag}>{''.join(items)}</{list_tag}>"


__all__ = ["HtmlFormat", "HtmlMarkupWriter"]
