"""Tests for rewriting links between topic sources into page URLs."""

from __future__ import annotations

import pytest

from pagesmith.support.url_transformer import TopicUrlTransformer

PAGES = {
    "README.md": "index.html",
    "guides/setup.md": "guides/setup.html",
    "guides/advanced/tuning.md": "guides/advanced/tuning.html",
}


@pytest.fixture
def site() -> TopicUrlTransformer:
    """Return a transformer for a small site published at the root."""
    return TopicUrlTransformer(PAGES)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("guides/setup.md", "/guides/setup.html"),
        ("guides/setup", "/guides/setup.html"),
        ("./guides/setup.md#linux", "/guides/setup.html#linux"),
        ("guides/setup.md?tab=2#top", "/guides/setup.html?tab=2#top"),
        ("/README.md", "/index.html"),
    ],
)
def test_known_topics_are_rewritten(
    site: TopicUrlTransformer, url: str, expected: str
) -> None:
    """Links to topic sources become page URLs, keeping query and fragment."""
    assert site.try_transform_url(url) == expected, f"{url!r} was not rewritten"


@pytest.mark.parametrize(
    "url",
    [
        "",
        "#section",
        "https://example.com/guides/setup.md",
        "//cdn.example.com/setup.md",
        "mailto:docs@example.com",
        "missing.md",
        "../outside.md",
    ],
)
def test_other_links_are_left_alone(site: TopicUrlTransformer, url: str) -> None:
    """External, fragment-only and unknown links are not rewritten."""
    assert site.try_transform_url(url) is None, f"{url!r} should not be rewritten"


def test_scoped_transformer_resolves_relative_paths(site: TopicUrlTransformer) -> None:
    """Links resolve against the directory of the linking topic."""
    scoped = site.scoped("guides/advanced")
    assert scoped.try_transform_url("../setup.md") == "/guides/setup.html", (
        "parent-relative link was not resolved"
    )
    assert scoped.try_transform_url("tuning.md") == "/guides/advanced/tuning.html", (
        "sibling link was not resolved"
    )
    assert scoped.try_transform_url("../../README.md") == "/index.html", (
        "link to the root topic was not resolved"
    )


def test_root_url_prefixes_pages() -> None:
    """Pages are published under the configured root URL."""
    transformer = TopicUrlTransformer(PAGES, root_url="https://docs.example.com/v2/")
    assert (
        transformer.try_transform_url("guides/setup.md")
        == "https://docs.example.com/v2/guides/setup.html"
    ), "root URL should prefix rewritten pages"


def test_may_transform_urls_reflects_known_pages() -> None:
    """A transformer without pages never rewrites."""
    assert TopicUrlTransformer(PAGES).may_transform_urls, "pages enable rewriting"
    assert not TopicUrlTransformer({}).may_transform_urls, "no pages, no rewriting"
