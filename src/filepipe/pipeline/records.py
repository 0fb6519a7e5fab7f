"""The file record that flows through plugin hooks."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

__all__ = ["FileRecord", "FileStat", "fingerprint"]


@dataclass(frozen=True)
class FileStat:
    """The two stat attributes the cache cares about."""

    size: int
    mtime: int  # milliseconds since the epoch

    @classmethod
    def from_stat_result(cls, stat: os.stat_result) -> "FileStat":
        return cls(size=stat.st_size, mtime=stat.st_mtime_ns // 1_000_000)


def fingerprint(stat: FileStat) -> str:
    """Return the ``size-mtime`` staleness token for ``stat``.

    Both numbers are rendered in hexadecimal. This is not a content hash: an
    overwrite that keeps the same size within one mtime tick is not detected.
    """

    return f"{stat.size:x}-{stat.mtime:x}"


@dataclass(frozen=True)
class FileRecord:
    """A file path, its stat, its bytes and a metadata bag for plugins.

    Records are immutable. Hooks produce new records through
    :meth:`with_content` or :meth:`with_metadata` rather than mutating the one
    they were given.
    """

    path: str
    stat: FileStat
    content: bytes = b""
    metadata: Optional[Dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FileRecord":
        file_path = Path(path).resolve()
        if not file_path.is_file():
            raise FileNotFoundError(file_path)
        stat = FileStat.from_stat_result(file_path.stat())
        return cls(path=str(file_path), stat=stat, content=file_path.read_bytes())

    @property
    def fingerprint(self) -> str:
        return fingerprint(self.stat)

    @property
    def extension(self) -> str:
        """Lowercased text after the last ``.`` of the file name."""

        name = os.path.basename(self.path)
        if "." not in name:
            return ""
        return name.rsplit(".", 1)[1].lower()

    def with_content(self, content: bytes) -> "FileRecord":
        return replace(self, content=content, metadata=dict(self.metadata or {}))

    def with_metadata(self, **entries: Any) -> "FileRecord":
        metadata = dict(self.metadata or {})
        metadata.update(entries)
        return replace(self, metadata=metadata)

    def blank(self) -> "FileRecord":
        """Return a copy of this record with empty content."""

        return self.with_content(b"")

    def ensure_metadata(self) -> "FileRecord":
        if self.metadata is None:
            return replace(self, metadata={})
        return self
