"""Hook execution and the cached transport built on top of it."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Iterable, List, Optional, Sequence, Union

from ..core.config import TransportOptions
from ..core.paths import is_out_of_bounds, path_from_cwd
from ..errors import ContractViolationError, HookError, OutOfBoundsError
from ..utils.series import series
from ..utils.types import is_awaitable, is_bytes, type_of
from .cache import ContentCache
from .plugins import Hook, PluginRegistry
from .records import FileRecord

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unchanged:
    """The hook left the record as it was."""


@dataclass(frozen=True)
class Replaced:
    record: FileRecord


@dataclass(frozen=True)
class Deferred:
    awaitable: Awaitable[Any]


HookResult = Union[Unchanged, Replaced, Deferred]

UNCHANGED = Unchanged()


def classify(value: Any) -> HookResult:
    """Map whatever a hook returned onto :data:`HookResult`."""

    if isinstance(value, (Unchanged, Replaced, Deferred)):
        return value
    if isinstance(value, FileRecord):
        return Replaced(value)
    if is_awaitable(value):
        return Deferred(value)
    return UNCHANGED


def hook_name(hook: Hook) -> str:
    name = getattr(hook, "name", None) or getattr(hook, "__name__", None)
    if not isinstance(name, str) or not name or name == "<lambda>":
        return "anonymous"
    return name


async def _settle(value: Any) -> Any:
    while is_awaitable(value):
        value = await value
    return value


class Pipeline:
    """Run hooks over a record strictly one after another."""

    async def run(
        self,
        record: FileRecord,
        hooks: Optional[Sequence[Hook]],
        options: Any = None,
        *,
        category: Optional[str] = None,
    ) -> FileRecord:
        """Pass ``record`` through ``hooks`` and return the final record.

        Each hook is called as ``hook(record, options)`` with the record
        produced so far. Returning a :class:`FileRecord` replaces it, returning
        an awaitable suspends the run until it settles, and returning anything
        else keeps the current record. The first failure stops the run and is
        raised as :class:`HookError`.
        """

        if not hooks:
            return record

        current = record

        async def step(hook: Hook, index: int) -> None:
            nonlocal current
            name = hook_name(hook)
            LOGGER.debug("Running hook %s [%d] for %s", name, index, current.path)
            try:
                outcome = classify(hook(current, options))
                while isinstance(outcome, Deferred):
                    outcome = classify(await outcome.awaitable)
            except Exception as exc:
                LOGGER.debug("Hook %s [%d] failed: %s", name, index, exc)
                raise HookError(name, index, exc, category) from exc

            if isinstance(outcome, Replaced):
                current = outcome.record.ensure_metadata()

        await series(hooks, step)
        return current

    async def run_contents(
        self,
        record: FileRecord,
        hooks: Optional[Sequence[Hook]],
        options: Any = None,
        *,
        category: Optional[str] = None,
    ) -> FileRecord:
        """Byte-oriented variant of :meth:`run`.

        Hooks are called as ``hook(content, options)`` and must settle to
        ``bytes``; any other value raises :class:`ContractViolationError`.
        """

        if not hooks:
            return record

        content = record.content

        async def step(hook: Hook, index: int) -> None:
            nonlocal content
            name = hook_name(hook)
            LOGGER.debug("Running content hook %s [%d] for %s", name, index, record.path)
            try:
                settled = await _settle(hook(content, options))
            except Exception as exc:
                raise HookError(name, index, exc, category) from exc

            if not is_bytes(settled):
                raise ContractViolationError(name, index, category, type_of(settled))
            content = settled

        await series(hooks, step)
        return record.with_content(content)


class Transport:
    """Check bounds, consult the cache, and run the matching plugin.

    A failed run leaves any previous cache entry for the path untouched.
    Concurrent runs for the same path are not coalesced.
    """

    def __init__(
        self,
        registry: PluginRegistry,
        options: Optional[TransportOptions] = None,
        *,
        cache: Optional[ContentCache] = None,
        pipeline: Optional[Pipeline] = None,
    ) -> None:
        self.registry = registry
        self.options = options or TransportOptions()
        if cache is None and self.options.cache:
            cache = ContentCache()
        self.cache = cache
        self.pipeline = pipeline or Pipeline()

    def check_bounds(self, record: FileRecord) -> None:
        root = self.options.root
        if root is None:
            return
        # Both sides are compared with symlinks resolved.
        if is_out_of_bounds(os.path.realpath(record.path), os.path.realpath(root)):
            raise OutOfBoundsError(record.path, str(root))

    async def process(self, record: FileRecord) -> FileRecord:
        self.check_bounds(record)

        use_cache = self.cache is not None and self.options.cache
        if use_cache:
            cached = self.cache.lookup(record)
            if cached is not None:
                LOGGER.debug("read file: %s from cache", path_from_cwd(record.path))
                return cached

        entry = self.registry.resolve(record.extension, self.options.fallback)
        if entry is None:
            LOGGER.debug("No plugin for %s, passing through", path_from_cwd(record.path))
            result = record
        else:
            LOGGER.debug("load plugin: %s", entry.name)
            LOGGER.debug("read file: %s", path_from_cwd(record.path))
            result = await entry.process(record, self.options, self.pipeline)

        if use_cache:
            self.cache.set(record.path, result, fingerprint=record.fingerprint)
        return result

    async def process_path(self, path: Union[str, Path]) -> FileRecord:
        record = await asyncio.to_thread(FileRecord.from_path, path)
        return await self.process(record)

    async def process_many(self, records: Iterable[FileRecord]) -> List[FileRecord]:
        """Process several records concurrently, preserving input order."""

        return list(await asyncio.gather(*(self.process(record) for record in records)))


__all__ = [
    "Deferred",
    "HookResult",
    "Pipeline",
    "Replaced",
    "Transport",
    "UNCHANGED",
    "Unchanged",
    "classify",
    "hook_name",
]
