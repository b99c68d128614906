"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from pagesmith.formats import OUTPUT_FORMATS

from .helpers import _optional_str, _resolve_path, _settings_mapping, _string_list
from .models import SiteConfig, SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path

DEFAULT_THEME_DIR = "theme"
DEFAULT_TOPICS_DIR = "docs"
DEFAULT_OUTPUT_DIR = "public"


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing a documentation build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``pagesmith.yaml``). Relative directories in the file resolve against
        the directory containing it.

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a value is invalid, such as an unknown output format or a markdown
        setting that is not defined under ``settings``.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from pagesmith.config import load_site_config
    >>> config = load_site_config(Path("pagesmith.yaml"))  # doctest: +SKIP
    >>> config.output_format  # doctest: +SKIP
    'html'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.parent

    output_format = (_optional_str(raw.get("output_format")) or "html").lower()
    if output_format not in OUTPUT_FORMATS:
        known = ", ".join(sorted(OUTPUT_FORMATS))
        msg = f"Unknown output format '{output_format}'; expected one of: {known}."
        raise SiteConfigError(msg)

    settings = _settings_mapping(raw.get("settings"))
    markdown_settings = _string_list(
        raw.get("markdown_settings"), field="markdown_settings"
    )
    for name in markdown_settings:
        if not isinstance(settings.get(name), str):
            msg = f"Markdown setting '{name}' must name a text value under 'settings'."
            raise SiteConfigError(msg)

    return SiteConfig(
        theme_dir=_resolve_path(base_dir, raw.get("theme_dir"), DEFAULT_THEME_DIR),
        topics_dir=_resolve_path(base_dir, raw.get("topics_dir"), DEFAULT_TOPICS_DIR),
        output_dir=_resolve_path(base_dir, raw.get("output_dir"), DEFAULT_OUTPUT_DIR),
        output_format=output_format,
        base_url=_optional_str(raw.get("base_url")) or "/",
        pygments_style=_optional_str(raw.get("pygments_style")) or "monokai",
        topic_order=_string_list(raw.get("topic_order"), field="topic_order"),
        settings=settings,
        markdown_settings=markdown_settings,
    )


__all__ = ["load_site_config"]
