"""URL rewriting policies applied to links found in markdown content."""

from __future__ import annotations

import collections.abc as cabc
import posixpath
import typing as typ
from urllib.parse import urlsplit

MARKDOWN_SUFFIX = ".md"
EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")


class UrlTransformer(typ.Protocol):
    """Pluggable policy that may rewrite link targets.

    ``try_transform_url`` returns the rewritten URL, or ``None`` to keep the
    original unchanged.
    """

    @property
    def may_transform_urls(self) -> bool: ...

    def try_transform_url(self, url: str) -> str | None: ...


class TopicUrlTransformer:
    """Rewrite relative links between topic sources into page URLs.

    Links such as ``./install.md#linux`` or ``../guides/setup`` written inside a
    topic at ``docs/intro.md`` are resolved against that topic's directory and,
    when they name a known topic source, replaced with the topic's page URL.
    External, protocol-relative and fragment-only links are left alone.

    Examples
    --------
    >>> transformer = TopicUrlTransformer({"guides/setup.md": "guides/setup.html"})
    >>> transformer.try_transform_url("guides/setup.md#linux")
    '/guides/setup.html#linux'
    >>> transformer.try_transform_url("https://example.com") is None
    True
    """

    def __init__(
        self,
        pages: cabc.Mapping[str, str],
        base_dir: str = "",
        root_url: str = "/",
    ) -> None:
        self.pages = pages
        self.base_dir = base_dir
        self.root_url = root_url

    @property
    def may_transform_urls(self) -> bool:
        return bool(self.pages)

    def scoped(self, base_dir: str) -> TopicUrlTransformer:
        """Return a transformer resolving links relative to ``base_dir``."""
        return TopicUrlTransformer(self.pages, base_dir, self.root_url)

    def try_transform_url(self, url: str) -> str | None:
        """Rewrite ``url`` into a topic page URL when it targets a known topic."""
        if not url:
            return None

        lower = url.lower()
        if lower.startswith(EXTERNAL_PREFIXES) or url.startswith(("#", "//")):
            return None
        if "://" in url:
            return None

        parsed = urlsplit(url)
        if parsed.scheme or parsed.netloc or not parsed.path:
            return None

        if parsed.path.startswith("/"):
            joined = posixpath.normpath(parsed.path.lstrip("/"))
        else:
            joined = posixpath.normpath(posixpath.join(self.base_dir, parsed.path))
        page = self._lookup(joined)
        if page is None:
            return None

        result = f"{self.root_url.rstrip('/')}/{page}" if self.root_url else page
        if parsed.query:
            result = f"{result}?{parsed.query}"
        if parsed.fragment:
            result = f"{result}#{parsed.fragment}"
        return result

    def _lookup(self, path: str) -> str | None:
        if path.startswith("../") or path in {".", ""}:
            return None
        page = self.pages.get(path)
        if page is None and not posixpath.splitext(path)[1]:
            page = self.pages.get(f"{path}{MARKDOWN_SUFFIX}")
        return page


__all__ = ["TopicUrlTransformer", "UrlTransformer"]
