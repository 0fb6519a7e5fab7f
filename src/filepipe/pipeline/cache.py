"""In-memory content cache validated by stat fingerprints."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from threading import Lock
from typing import Dict, Iterator, Optional

from .records import FileRecord

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    fingerprint: str
    record: FileRecord


class ContentCache:
    """Keep the last pipeline output for each path.

    An entry is only returned while the fingerprint it was stored with matches
    the fingerprint the caller computed from the file's current stat. Entries
    never expire on their own; a stale lookup is a miss and the next
    :meth:`set` overwrites the entry. Concurrent writers for the same path are
    not coordinated, so the last :meth:`set` wins.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = Lock()

    @staticmethod
    def _key(path: str) -> str:
        return os.path.abspath(path)

    def get(self, path: str, fingerprint: str) -> Optional[FileRecord]:
        """Return the cached record for ``path`` if ``fingerprint`` still matches."""

        with self._lock:
            entry = self._entries.get(self._key(path))
        if entry is None:
            return None
        if entry.fingerprint != fingerprint:
            LOGGER.debug("Stale cache entry for %s (%s != %s)", path, entry.fingerprint, fingerprint)
            return None
        return entry.record

    def lookup(self, record: FileRecord) -> Optional[FileRecord]:
        return self.get(record.path, record.fingerprint)

    def set(self, path: str, record: FileRecord, fingerprint: Optional[str] = None) -> None:
        """Store ``record`` for ``path``, replacing any existing entry."""

        if fingerprint is None:
            fingerprint = record.fingerprint
        entry = CacheEntry(fingerprint=fingerprint, record=record)
        with self._lock:
            self._entries[self._key(path)] = entry

    def clear(self, path: Optional[str] = None) -> None:
        """Remove the entry for ``path``, or every entry when no path is given."""

        with self._lock:
            if path is None:
                self._entries.clear()
            else:
                self._entries.pop(self._key(path), None)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        with self._lock:
            return self._key(path) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._entries))


__all__ = ["CacheEntry", "ContentCache"]
