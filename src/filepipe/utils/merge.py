"""Object merging in the spirit of ``jQuery.extend``."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .types import is_plain_object

__all__ = ["extend"]


def extend(target: Optional[Dict[str, Any]], *sources: Optional[Mapping[str, Any]], deep: bool = False) -> Dict[str, Any]:
    """Copy the keys of ``sources`` onto ``target`` and return it.

    ``None`` sources are skipped and ``None`` values are never copied. With
    ``deep=True`` nested dictionaries and lists are merged recursively into
    fresh containers so the sources are never aliased by the target.
    """

    if target is None:
        target = {}

    for source in sources:
        if source is None:
            continue
        for key, value in source.items():
            if value is target:
                continue
            if value is None:
                continue
            if deep and (is_plain_object(value) or isinstance(value, list)):
                current = target.get(key)
                target[key] = _merge_value(current, value)
            else:
                target[key] = value

    return target


def _merge_value(current: Any, value: Any) -> Any:
    if isinstance(value, list):
        base: List[Any] = list(current) if isinstance(current, list) else []
        for index, item in enumerate(value):
            if item is None:
                continue
            existing = base[index] if index < len(base) else None
            merged = _merge_value(existing, item) if _is_container(item) else item
            if index < len(base):
                base[index] = merged
            else:
                base.append(merged)
        return base

    clone = dict(current) if is_plain_object(current) else {}
    return extend(clone, value, deep=True)


def _is_container(value: Any) -> bool:
    return is_plain_object(value) or isinstance(value, list)
