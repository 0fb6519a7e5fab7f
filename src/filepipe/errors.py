"""Exception hierarchy for the plugin pipeline."""
from __future__ import annotations

from typing import Optional, Sequence

__all__ = [
    "ContractViolationError",
    "HookError",
    "OptionsValidationError",
    "OutOfBoundsError",
    "PipelineError",
    "PluginError",
]


class PipelineError(RuntimeError):
    """Base class for every error raised by this package."""


class PluginError(PipelineError):
    """Raised when plugin registration or lookup is misused."""


class HookError(PipelineError):
    """A hook raised, or the awaitable it returned failed.

    The original exception is chained as ``__cause__`` and kept on
    :attr:`error`.
    """

    def __init__(self, hook_name: str, index: int, error: BaseException, category: Optional[str] = None) -> None:
        self.hook_name = hook_name
        self.index = index
        self.category = category
        self.error = error
        where = f"plugin {category}'s hook" if category else "hook"
        super().__init__(f"{where} {hook_name} [{index}] failed: {error}")


class ContractViolationError(PipelineError):
    """A hook settled with a value of the wrong type."""

    def __init__(self, hook_name: str, index: int, category: Optional[str], received: str) -> None:
        self.hook_name = hook_name
        self.index = index
        self.category = category
        self.received = received
        super().__init__(
            f"plugin {category or 'anonymous'}'s hook {hook_name} [{index}]: "
            f"must resolve to bytes, got {received}"
        )


class OutOfBoundsError(PipelineError, ValueError):
    """A file lies outside the configured root directory."""

    def __init__(self, path: str, root: str) -> None:
        self.path = path
        self.root = root
        super().__init__(f"file {path} is out of bound of root {root}")


class OptionsValidationError(PipelineError, ValueError):
    """Configuration did not match its schema."""

    def __init__(self, errors: Sequence[str], name: str = "") -> None:
        self.errors = list(errors)
        self.name = name
        message = f"{name}\n\n" if name else ""
        message += "\n".join(self.errors)
        super().__init__(message)
