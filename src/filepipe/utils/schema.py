"""Option validation backed by pydantic models."""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..errors import OptionsValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

__all__ = ["OptionsValidationError", "validate_options"]


def _dotted(location: Any) -> str:
    return ".".join(str(part) for part in location)


def _describe(error: Mapping[str, Any]) -> str:
    path = _dotted(error.get("loc", ()))
    kind = error.get("type")
    if kind == "missing":
        return f"Missing options: {path}"
    if kind == "extra_forbidden":
        return f"Unknown options: {path}"
    return f"Invalid options: {path} {error.get('msg', '')}".rstrip()


def validate_options(model: Type[ModelT], options: Optional[Mapping[str, Any]], name: str = "") -> ModelT:
    """Validate ``options`` against ``model`` and return the parsed instance.

    Defaults declared on the model are filled in. Every problem is collected
    into a single :class:`OptionsValidationError` whose message lists one line
    per offending option, headed by ``name``.
    """

    try:
        return model.model_validate(dict(options or {}))
    except PydanticValidationError as exc:
        lines: List[str] = [_describe(error) for error in exc.errors()]
        raise OptionsValidationError(lines, name) from exc
