"""Typed dataclasses describing a pagesmith site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """Locations and options for one documentation build.

    Attributes
    ----------
    theme_dir : Path
        Directory holding the ``*.jinja`` page templates.
    topics_dir : Path
        Directory scanned recursively for markdown topics.
    output_dir : Path
        Directory receiving the rendered pages.
    output_format : str
        Name of the output format, ``"html"`` or ``"markdown"``.
    base_url : str
        Root URL the pages are published under.
    pygments_style : str
        Pygments style used by the ``highlight`` filter.
    topic_order : list[str]
        Topic paths or file names listed in the order they should appear.
    settings : dict[str, object]
        Theme settings exposed to every template.
    markdown_settings : list[str]
        Names of settings whose values are markdown to be rendered into the
        output format and registered as ``<name>_partial`` templates.
    """

    theme_dir: Path
    topics_dir: Path
    output_dir: Path
    output_format: str = "html"
    base_url: str = "/"
    pygments_style: str = "monokai"
    topic_order: list[str] = dc.field(default_factory=list)
    settings: dict[str, object] = dc.field(default_factory=dict)
    markdown_settings: list[str] = dc.field(default_factory=list)

    @property
    def absolute_urls(self) -> bool:
        """Return ``True`` when pages link with scheme-qualified URLs."""
        return "://" in self.base_url


__all__ = ["SiteConfig", "SiteConfigError"]
