"""Tests for loading the pagesmith site configuration."""

from __future__ import annotations

import typing as typ

import pytest

from pagesmith.config import SiteConfigError, load_site_config

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "pagesmith.yaml"
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_full_configuration(tmp_path: Path) -> None:
    """Every documented key is read, with directories resolved."""
    path = _write(
        tmp_path,
        """
theme_dir: theme
topics_dir: content/docs
output_dir: /srv/site
output_format: Markdown
base_url: https://docs.example.com/
pygments_style: friendly
topic_order:
  - README.md
  - guides/getting-started
settings:
  project_name: Demo
  footer: "Built for **{{ project_name }}**"
  empty: null
markdown_settings: [footer]
        """,
    )
    config = load_site_config(path)
    assert config.theme_dir == tmp_path / "theme", "theme_dir should be resolved"
    assert config.topics_dir == tmp_path / "content" / "docs", "topics_dir resolved"
    assert str(config.output_dir) == "/srv/site", "absolute paths are kept"
    assert config.output_format == "markdown", "output format is case-insensitive"
    assert config.absolute_urls, "scheme-qualified base URL expected"
    assert config.pygments_style == "friendly", "pygments style not read"
    assert config.topic_order == ["README.md", "guides/getting-started"], (
        f"unexpected topic order: {config.topic_order!r}"
    )
    assert config.settings == {
        "project_name": "Demo",
        "footer": "Built for **{{ project_name }}**",
    }, f"unexpected settings: {config.settings!r}"
    assert config.markdown_settings == ["footer"], "markdown settings not read"


def test_defaults(tmp_path: Path) -> None:
    """An empty file yields the default layout."""
    config = load_site_config(_write(tmp_path, "{}"))
    assert config.theme_dir == tmp_path / "theme", "default theme dir expected"
    assert config.topics_dir == tmp_path / "docs", "default topics dir expected"
    assert config.output_dir == tmp_path / "public", "default output dir expected"
    assert config.output_format == "html", "HTML is the default format"
    assert config.base_url == "/", "site-absolute root expected"
    assert not config.absolute_urls, "root-relative URLs expected"
    assert config.topic_order == [], "no explicit order expected"


def test_missing_file(tmp_path: Path) -> None:
    """A missing configuration file is reported."""
    with pytest.raises(FileNotFoundError, match="not found"):
        load_site_config(tmp_path / "absent.yaml")


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    """Lists at the top level are rejected."""
    with pytest.raises(TypeError, match="mapping"):
        load_site_config(_write(tmp_path, "- theme"))


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("output_format: pdf", "Unknown output format"),
        ("topic_order: README.md", "topic_order"),
        ("settings: [a, b]", "settings"),
        ("markdown_settings: [footer]", "Markdown setting 'footer'"),
        ("settings: {footer: 3}\nmarkdown_settings: [footer]", "text value"),
    ],
)
def test_invalid_values(tmp_path: Path, text: str, message: str) -> None:
    """Invalid values raise a configuration error naming the problem."""
    with pytest.raises(SiteConfigError, match=message):
        load_site_config(_write(tmp_path, text))
