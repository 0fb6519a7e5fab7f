"""Transport configuration."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.merge import extend
from ..utils.schema import validate_options

__all__ = ["TransportOptions", "load_options"]


class TransportOptions(BaseModel):
    """Options shared by the transport and handed to every hook."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    cache: bool = True
    root: Optional[Path] = None
    fallback: str = "other"
    context: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("fallback")
    @classmethod
    def _lowercase_fallback(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("fallback name must not be empty")
        return value

    @field_validator("root")
    @classmethod
    def _absolute_root(cls, value: Optional[Path]) -> Optional[Path]:
        return Path(os.path.abspath(value)) if value is not None else None


def load_options(*sources: Optional[Mapping[str, Any]], name: str = "transport") -> TransportOptions:
    """Deep-merge ``sources`` left to right and validate the result.

    Later sources win. ``None`` values never override earlier ones.
    """

    merged = extend({}, *sources, deep=True)
    return validate_options(TransportOptions, merged, name)
