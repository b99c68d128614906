r"""Convert markdown into HTML without disturbing embedded template syntax.

Markdown topics and markdown theme settings may contain live Jinja2
expressions (``{{ model.name }}``) that must reach the template engine
untouched. Before conversion every run of two or more braces is swapped for an
opaque placeholder; after conversion the placeholders are swapped back.

Example
-------
>>> from pagesmith.support.markdown_transformer import MarkdownToHtmlTransformer
>>> MarkdownToHtmlTransformer().transform("**{{ project_name }}**")
'<p><strong>{{ project_name }}</strong></p>'
"""

from __future__ import annotations

import re
import secrets
import typing as typ

from markdown import Markdown
from markdown.extensions import Extension
from markdown.extensions.toc import slugify as toc_slugify
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from pagesmith.support.url_transformer import UrlTransformer
    from pagesmith.templates.writers import TextSink

TEMPLATE_EXPRESSION_PATTERN = re.compile(r"\{{2,}+[^}]++\}{2,}")
PLACEHOLDER_TEMPLATE = "%%{run_id}!TPL{index}%%"
DEFAULT_EXTENSIONS: tuple[str, ...] = ("extra", "sane_lists", "toc")
URL_ATTRIBUTES: dict[str, str] = {"a": "href", "img": "src"}
MARKDOWN_CODE_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,}).*?^(?P=fence)[ \t]*$|`[^`\n]++`", re.MULTILINE | re.DOTALL
)
MARKDOWN_LINK_PATTERN = re.compile(
    r"(?P<prefix>!?\[[^\]\n]*+\]\()(?P<url><[^>\n]*+>|[^)\s<]++)"
    r"(?P<suffix>(?:[ \t]++\"[^\"\n]*+\")?\))"
)


class _PlaceholderMap:
    """Swap template expressions for placeholders and back again."""

    def __init__(self) -> None:
        self.run_id = secrets.token_hex(4)
        self.originals: dict[str, str] = {}

    def protect(self, text: str) -> str:
        def _replace(match: re.Match[str]) -> str:
            placeholder = PLACEHOLDER_TEMPLATE.format(
                run_id=self.run_id, index=len(self.originals)
            )
            self.originals[placeholder] = match.group(0)
            return placeholder

        return TEMPLATE_EXPRESSION_PATTERN.sub(_replace, text)

    def restore(self, text: str) -> str:
        for placeholder, original in self.originals.items():
            text = text.replace(placeholder, original)
        return text

    def slugify(self, value: str, separator: str) -> str:
        """Build heading ids from the restored text, not the placeholders."""
        return toc_slugify(self.restore(value), separator)


class UrlReplacementExtension(Extension):
    """Pass every link, autolink and image target through a URL transformer."""

    def __init__(self, url_transformer: UrlTransformer) -> None:
        super().__init__()
        self.url_transformer = url_transformer

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the URL replacement treeprocessor on the Markdown instance."""
        processor = UrlReplacementTreeprocessor(md, self.url_transformer)
        md.treeprocessors.register(processor, "pagesmith_url_replacement", 15)


class UrlReplacementTreeprocessor(Treeprocessor):
    """Rewrite ``href``/``src`` attributes once inline links have been parsed."""

    def __init__(self, md: Markdown, url_transformer: UrlTransformer) -> None:
        super().__init__(md)
        self.url_transformer = url_transformer

    def run(self, root: Element) -> Element:
        for element in root.iter():
            attribute = URL_ATTRIBUTES.get(element.tag)
            if attribute is None:
                continue
            url = element.get(attribute)
            if url is None:
                continue
            replacement = self.url_transformer.try_transform_url(url)
            if replacement is not None:
                element.set(attribute, replacement)
        return root


def rewrite_markdown_links(
    markdown: str, url_transformer: UrlTransformer | None = None
) -> str:
    """Rewrite inline link and image targets of Markdown source.

    Targets inside code spans and fenced blocks are left alone, as are targets
    holding template expressions. The source is otherwise returned unchanged.

    Example
    -------
    >>> from pagesmith.support.url_transformer import TopicUrlTransformer
    >>> pages = TopicUrlTransformer({"README.md": "index.md"})
    >>> rewrite_markdown_links("[home](README.md) `[x](README.md)`", pages)
    '[home](/index.md) `[x](README.md)`'
    """
    if not markdown or url_transformer is None:
        return markdown
    if not url_transformer.may_transform_urls:
        return markdown

    def _replace(match: re.Match[str]) -> str:
        url = match.group("url")
        bracketed = url.startswith("<")
        target = url[1:-1] if bracketed else url
        if TEMPLATE_EXPRESSION_PATTERN.search(target):
            return match.group(0)
        replacement = url_transformer.try_transform_url(target)
        if replacement is None:
            return match.group(0)
        if bracketed:
            replacement = f"<{replacement}>"
        return f"{match.group('prefix')}{replacement}{match.group('suffix')}"

    parts: list[str] = []
    position = 0
    for code in MARKDOWN_CODE_PATTERN.finditer(markdown):
        prose = markdown[position : code.start()]
        parts.append(MARKDOWN_LINK_PATTERN.sub(_replace, prose))
        parts.append(code.group(0))
        position = code.end()
    parts.append(MARKDOWN_LINK_PATTERN.sub(_replace, markdown[position:]))
    return "".join(parts)


class MarkdownToHtmlTransformer:
    """Render markdown into HTML, rewriting link targets on request."""

    def __init__(self, extensions: cabc.Sequence[str | Extension] | None = None) -> None:
        self.extensions: list[str | Extension] = list(
            DEFAULT_EXTENSIONS if extensions is None else extensions
        )

    def transform(
        self, markdown: str, url_transformer: UrlTransformer | None = None
    ) -> str:
        """Convert ``markdown`` into HTML.

        Parameters
        ----------
        markdown : str
            Markdown source, possibly containing template expressions.
        url_transformer : UrlTransformer, optional
            Policy applied to link and image targets; skipped entirely when
            ``None`` or when it reports it never rewrites URLs.

        Returns
        -------
        str
            The HTML fragment, with every template expression restored
            byte-for-byte. Blank input yields an empty string.
        """
        if not markdown or not markdown.strip():
            return ""

        placeholders = _PlaceholderMap()
        protected = placeholders.protect(markdown)
        html = self._convert(protected, url_transformer, placeholders)
        return placeholders.restore(html) if placeholders.originals else html

    def transform_stream(
        self,
        reader: typ.TextIO,
        writer: TextSink,
        url_transformer: UrlTransformer | None = None,
    ) -> None:
        """Read all of ``reader``, transform it, and write the HTML to ``writer``."""
        if reader is None or writer is None:
            msg = "reader and writer are required."
            raise TypeError(msg)
        writer.write(self.transform(reader.read(), url_transformer))

    def _convert(
        self,
        text: str,
        url_transformer: UrlTransformer | None,
        placeholders: _PlaceholderMap,
    ) -> str:
        extensions = list(self.extensions)
        if url_transformer is not None and url_transformer.may_transform_urls:
            extensions.append(UrlReplacementExtension(url_transformer))
        md = Markdown(
            extensions=extensions,
            extension_configs={"toc": {"slugify": placeholders.slugify}},
            output_format="html",
        )
        return md.convert(text)


__all__ = [
    "TEMPLATE_EXPRESSION_PATTERN",
    "MarkdownToHtmlTransformer",
    "UrlReplacementExtension",
    "UrlReplacementTreeprocessor",
    "rewrite_markdown_links",
]
