"""Utility helpers shared by the pagesmith configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(value: object | None, *, field: str) -> list[str]:
    """Normalize a YAML sequence into a list of non-empty strings."""
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"'{field}' must be a list of strings."
        raise SiteConfigError(msg)
    return [text for item in value if (text := _optional_str(item))]


def _settings_mapping(value: object | None) -> dict[str, typ.Any]:
    """Return theme settings as a plain dictionary keyed by setting name."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = "'settings' must be a mapping of setting names to values."
        raise SiteConfigError(msg)
    return {str(key): item for key, item in value.items() if item is not None}


def _resolve_path(base_dir: Path, value: object | None, default: str) -> Path:
    """Resolve a configured directory relative to the configuration file."""
    path = Path(_optional_str(value) or default).expanduser()
    return path if path.is_absolute() else base_dir / path
