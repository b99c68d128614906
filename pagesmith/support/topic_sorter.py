"""Order file-backed topics by an explicit list, then alphabetically.

Example
-------
>>> from pagesmith.model import FileTopic
>>> from pagesmith.support.topic_sorter import sort_topics
>>> topics = [FileTopic("Zebra", "docs/zebra.md"), FileTopic("Apple", "docs/apple.md")]
>>> [topic.title for topic in sort_topics(topics, ["zebra"])]
['Zebra', 'Apple']
"""

from __future__ import annotations

import posixpath
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagesmith.model import FileTopic

_T = typ.TypeVar("_T", bound="FileTopic")


def _title_key(topic: FileTopic) -> str:
    # Ordinal case-insensitive comparison upper-cases both sides.
    return topic.title.upper()


def _normalize(path: str) -> str:
    return path.replace("\\", "/")


def _is_subpath(path: str, candidate: str) -> bool:
    """Return True when ``candidate`` names ``path`` or a trailing part of it."""
    path = path.lower()
    candidate = candidate.strip().lstrip("/").lower()
    if candidate.startswith("./"):
        candidate = candidate[2:]
    if not candidate:
        return False
    return path == candidate or path.endswith(f"/{candidate}")


def _is_match(topic: FileTopic, relative_path: str) -> bool:
    source_path = _normalize(topic.file_path)
    if _is_subpath(source_path, relative_path):
        return True
    stem, extension = posixpath.splitext(source_path)
    return bool(extension) and _is_subpath(stem, relative_path)


def sort_topics(
    topics: cabc.Iterable[_T] | None, explicit_order: cabc.Sequence[str] | None
) -> list[_T]:
    """Sort topics by an explicit order list, then by title.

    Parameters
    ----------
    topics : Iterable[FileTopic]
        Topics to order.
    explicit_order : Sequence[str]
        File names or relative paths, with or without extension and with
        either separator style. Blank entries and entries matching no topic
        are skipped; each topic is consumed by the first entry matching it.

    Returns
    -------
    list[FileTopic]
        Explicitly ordered topics in list order, followed by the remaining
        topics stable-sorted by title, ignoring case.

    Raises
    ------
    ValueError
        If ``topics`` or ``explicit_order`` is ``None``.
    """
    if topics is None:
        msg = "topics must not be None."
        raise ValueError(msg)
    if explicit_order is None:
        msg = "explicit_order must not be None."
        raise ValueError(msg)

    remaining = list(topics)
    if not explicit_order:
        return sorted(remaining, key=_title_key)

    explicitly_ordered: list[_T] = []
    for order_item in explicit_order:
        if not order_item or not order_item.strip():
            continue
        relative_path = _normalize(order_item)
        match = next((topic for topic in remaining if _is_match(topic, relative_path)), None)
        if match is None:
            continue
        explicitly_ordered.append(match)
        remaining.remove(match)

    remaining.sort(key=_title_key)
    return explicitly_ordered + remaining


__all__ = ["sort_topics"]
