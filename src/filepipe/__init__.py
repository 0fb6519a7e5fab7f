"""Utilities shared by file-transform build plugins."""

from .core.config import TransportOptions, load_options
from .core.paths import is_out_of_bounds, normalize
from .pipeline import (
    FALLBACK,
    ContentCache,
    FileRecord,
    FileStat,
    Pipeline,
    PluginRegistry,
    Transport,
    register_plugins,
)

__all__ = [
    "FALLBACK",
    "ContentCache",
    "FileRecord",
    "FileStat",
    "Pipeline",
    "PluginRegistry",
    "Transport",
    "TransportOptions",
    "is_out_of_bounds",
    "load_options",
    "normalize",
    "register_plugins",
]

__version__ = "0.1.0"
