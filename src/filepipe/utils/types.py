"""Runtime type inspection used at pipeline boundaries."""
from __future__ import annotations

import inspect
import math
from typing import Any

__all__ = [
    "is_awaitable",
    "is_bytes",
    "is_function",
    "is_plain_object",
    "is_string",
    "type_of",
]

_NAMES = {
    type(None): "none",
    bool: "boolean",
    int: "number",
    float: "number",
    str: "string",
    bytes: "bytes",
    bytearray: "bytes",
    list: "list",
    tuple: "tuple",
    dict: "dict",
    set: "set",
    frozenset: "set",
}


def type_of(value: Any) -> str:
    """Return a lowercase name describing ``value``.

    Floats that are NaN or infinite are reported as ``"nan"`` and
    ``"infinity"`` rather than ``"number"``. Objects without a dedicated name
    fall back to their lowercased class name.
    """

    kind = type(value)
    name = _NAMES.get(kind)
    if name == "number" and kind is float:
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "infinity"
    if name is not None:
        return name
    if inspect.isawaitable(value):
        return "awaitable"
    if callable(value) and not inspect.isclass(value):
        return "function"
    return kind.__name__.lower()


def is_function(value: Any) -> bool:
    return callable(value) and not inspect.isclass(value)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_bytes(value: Any) -> bool:
    return type(value) is bytes


def is_awaitable(value: Any) -> bool:
    return inspect.isawaitable(value)


def is_plain_object(value: Any) -> bool:
    """Return ``True`` for plain dictionaries, including ``dict`` subclasses."""

    return isinstance(value, dict)
