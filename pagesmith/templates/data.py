"""Data context handed to page templates."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ


class TemplateData(cabc.Mapping[str, object]):
    """Read-only view overlaying one primary entry on shared common data.

    The primary entry is always first when iterating and always wins lookups
    of the primary key (compared case-insensitively). The view is live:
    keys added to the common mapping later become visible.

    Examples
    --------
    >>> common = {"project_name": "Demo"}
    >>> data = TemplateData(common, "widget", "model")
    >>> list(data)
    ['model', 'project_name']
    >>> data["MODEL"]
    'widget'
    """

    __slots__ = ("_common", "primary", "primary_key")

    def __init__(
        self,
        common_data: cabc.Mapping[str, object],
        primary_data: object,
        primary_key: str,
    ) -> None:
        if common_data is None:
            msg = "common_data must not be None."
            raise TypeError(msg)
        if primary_data is None:
            msg = "primary_data must not be None."
            raise TypeError(msg)
        if not primary_key:
            msg = "primary_key must be a non-empty string."
            raise ValueError(msg)
        folded = primary_key.casefold()
        if any(key.casefold() == folded for key in common_data):
            msg = (
                "The common data mapping must not contain the primary key "
                f"'{primary_key}'."
            )
            raise ValueError(msg)

        self._common = common_data
        self.primary = primary_data
        self.primary_key = primary_key

    def _is_primary_key(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() == self.primary_key.casefold()

    def __getitem__(self, key: str) -> object:
        if self._is_primary_key(key):
            return self.primary
        return self._common[key]

    def __contains__(self, key: object) -> bool:
        return self._is_primary_key(key) or key in self._common

    def __iter__(self) -> typ.Iterator[str]:
        yield self.primary_key
        yield from (key for key in self._common if not self._is_primary_key(key))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"TemplateData(primary_key={self.primary_key!r}, keys={list(self)!r})"


__all__ = ["TemplateData"]
