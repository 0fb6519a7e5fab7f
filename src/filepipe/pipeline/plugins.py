"""Per-extension plugin registry for the transform pipeline."""

from __future__ import annotations

import enum
import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from ..utils.types import is_function
from ..errors import PluginError

if TYPE_CHECKING:
    from .engine import Pipeline
    from .records import FileRecord

LOGGER = logging.getLogger(__name__)

Hook = Callable[..., Any]


class Placeholder(enum.Enum):
    """Markers that may appear in a hook list instead of a hook."""

    FALLBACK = "fallback"


FALLBACK = Placeholder.FALLBACK

HookSpec = Union[Hook, Placeholder, Sequence[Union[Hook, Placeholder]], None]

DEFAULT_FALLBACK_NAME = "other"


class PluginEntry:
    """Ordered hooks registered for one file category."""

    def __init__(self, name: str, hooks: Sequence[Hook]) -> None:
        if not name:
            raise PluginError("Plugin entry must define a name")
        self.name = name
        self.hooks: Tuple[Hook, ...] = tuple(hooks)

    def __repr__(self) -> str:
        return f"PluginEntry({self.name!r}, hooks={len(self.hooks)})"

    async def process(self, record: "FileRecord", options: Any = None, pipeline: Optional["Pipeline"] = None) -> "FileRecord":
        """Run this entry's hooks over ``record``."""

        if pipeline is None:
            from .engine import Pipeline

            pipeline = Pipeline()
        return await pipeline.run(record, self.hooks, options, category=self.name)


class PluginRegistry(Mapping[str, PluginEntry]):
    """Read-only mapping of lowercase category name to :class:`PluginEntry`."""

    def __init__(self, entries: Optional[Mapping[str, PluginEntry]] = None, *, fallback: str = DEFAULT_FALLBACK_NAME) -> None:
        self._entries: Dict[str, PluginEntry] = {}
        for name, entry in (entries or {}).items():
            key = name.lower()
            if key in self._entries:
                raise PluginError(f"Plugin '{key}' already registered")
            self._entries[key] = entry
        self.fallback = fallback.lower()

    def __getitem__(self, name: str) -> PluginEntry:
        if not isinstance(name, str):
            raise KeyError(name)
        return self._entries[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def has(self, name: str) -> bool:
        return name in self

    def get(self, name: str, default: Optional[PluginEntry] = None) -> Optional[PluginEntry]:  # type: ignore[override]
        if not isinstance(name, str):
            return default
        return self._entries.get(name.lower(), default)

    def resolve(self, extension: str, fallback: Optional[str] = None) -> Optional[PluginEntry]:
        """Return the entry for ``extension``, else the fallback entry, else ``None``."""

        entry = self._entries.get(extension.lower().lstrip("."))
        if entry is None:
            entry = self._entries.get((fallback or self.fallback).lower())
        return entry


def normalize_hooks(spec: HookSpec, default: Optional[Hook] = None) -> List[Hook]:
    """Flatten ``spec`` into an ordered list of callables.

    The first :data:`FALLBACK` marker is replaced by ``default``; later markers
    are dropped. Entries that are neither callables nor markers are ignored.
    When no marker was consumed, ``default`` is appended at the end.
    """

    if spec is None:
        items: Sequence[Any] = ()
    elif isinstance(spec, (list, tuple)):
        items = spec
    else:
        items = (spec,)

    hooks: List[Hook] = []
    fallback_used = False
    for item in items:
        if item is FALLBACK:
            if default is not None and not fallback_used:
                hooks.append(default)
                fallback_used = True
        elif is_function(item):
            hooks.append(item)
        else:
            LOGGER.debug("Ignoring non-callable hook %r", item)

    if not fallback_used and default is not None:
        hooks.append(default)
    return hooks


def register_plugins(
    plugins: Optional[Mapping[str, HookSpec]],
    defaults: Optional[Mapping[str, Hook]] = None,
    *,
    fallback: str = DEFAULT_FALLBACK_NAME,
) -> PluginRegistry:
    """Build a :class:`PluginRegistry` from user hooks and built-in defaults.

    ``plugins`` maps a category name to a hook, a list of hooks, or
    :data:`FALLBACK`. ``defaults`` maps a category name to the single built-in
    hook for that category. Names are compared case-insensitively and
    categories whose hook list ends up empty are left out.
    """

    lowered_defaults: Dict[str, Hook] = {}
    for name, hook in (defaults or {}).items():
        if not is_function(hook):
            raise PluginError(f"Default hook for '{name}' must be callable")
        lowered_defaults[name.lower()] = hook

    entries: Dict[str, PluginEntry] = {}
    for name, spec in (plugins or {}).items():
        key = name.lower()
        hooks = normalize_hooks(spec, lowered_defaults.get(key))
        if hooks:
            entries[key] = PluginEntry(key, hooks)
        else:
            entries.pop(key, None)

    for key, hook in lowered_defaults.items():
        if key not in entries:
            entries[key] = PluginEntry(key, [hook])

    LOGGER.debug("Registered plugins: %s", ", ".join(sorted(entries)) or "<none>")
    return PluginRegistry(entries, fallback=fallback)


__all__ = [
    "DEFAULT_FALLBACK_NAME",
    "FALLBACK",
    "Hook",
    "HookSpec",
    "Placeholder",
    "PluginEntry",
    "PluginRegistry",
    "normalize_hooks",
    "register_plugins",
]
