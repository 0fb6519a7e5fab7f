"""Pipeline primitives exposed as a convenience import."""

from .cache import CacheEntry, ContentCache
from .engine import Deferred, Pipeline, Replaced, Transport, Unchanged
from .plugins import FALLBACK, PluginEntry, PluginRegistry, register_plugins
from .records import FileRecord, FileStat, fingerprint

__all__ = [
    "FALLBACK",
    "CacheEntry",
    "ContentCache",
    "Deferred",
    "FileRecord",
    "FileStat",
    "Pipeline",
    "PluginEntry",
    "PluginRegistry",
    "Replaced",
    "Transport",
    "Unchanged",
    "fingerprint",
    "register_plugins",
]
