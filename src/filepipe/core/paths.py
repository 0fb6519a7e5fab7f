"""String-level path helpers used by the resolver and the transport."""
from __future__ import annotations

import logging
import os
import re
from typing import Any, Callable, Mapping, Optional, Union

LOGGER = logging.getLogger(__name__)

RenameTransform = Union[str, Mapping[str, Any], Callable[[str], Any], None]

__all__ = [
    "is_absolute",
    "is_local",
    "is_out_of_bounds",
    "is_relative",
    "normalize",
    "path_from_cwd",
    "rename",
]

WINDOWS_PATH_RE = re.compile(r"\\")
SCHEME_SLASH_RE = re.compile(r"(:)?/{2,}")
DOT_RE = re.compile(r"/\./")
MULTI_SLASH_RE = re.compile(r"([^:])/{2,}")
# Only correct once repeated slashes have been collapsed.
DOUBLE_DOT_RE = re.compile(r"([^/]+)/\.\.(?:/|$)")
LEADING_PARENT_RE = re.compile(r"^/(\.\./)+")

RELATIVE_RE = re.compile(r"^\.{1,2}[\\/]")
ABSOLUTE_RE = re.compile(r"^[\\/](?:[^\\/]|$)")
NONLOCAL_RE = re.compile(r"^(?:[a-z0-9.+-]+:)?//|^data:\w+?/\w+?[,;]", re.IGNORECASE)
OUT_OF_BOUNDS_RE = re.compile(r"^[\\/]?\.\.(?:[\\/]|$)")


def _fold_parent(match: "re.Match[str]") -> str:
    return match.group(0) if match.group(1) == ".." else ""


def normalize(path: str) -> str:
    """Normalise a slash-separated path without touching the file system.

    >>> normalize("a\\\\b\\\\.\\\\c")
    'a/b/c'
    >>> normalize("a//b/c/../../d")
    'a/d'
    >>> normalize("/../../a")
    '/a'
    """

    path = WINDOWS_PATH_RE.sub("/", path)
    path = SCHEME_SLASH_RE.sub(lambda match: (match.group(1) or "") + "//", path, count=1)
    path = DOT_RE.sub("/", path)
    path = MULTI_SLASH_RE.sub(r"\1/", path)

    while True:
        folded = DOUBLE_DOT_RE.sub(_fold_parent, path)
        if folded == path:
            break
        path = folded

    return LEADING_PARENT_RE.sub("/", path)


def is_relative(path: str) -> bool:
    return RELATIVE_RE.match(path) is not None


def is_absolute(path: str) -> bool:
    return ABSOLUTE_RE.match(path) is not None


def is_local(path: str) -> bool:
    """``False`` for URLs, protocol-relative paths and ``data:`` URIs."""

    return NONLOCAL_RE.search(path) is None


def is_out_of_bounds(path: str, root: str) -> bool:
    """Return ``True`` when ``path`` escapes ``root``.

    The check is purely lexical: the path relative to ``root`` must not start
    with a ``..`` segment.
    """

    return OUT_OF_BOUNDS_RE.match(os.path.relpath(path, root)) is not None


def path_from_cwd(path: str, cwd: Optional[str] = None) -> str:
    """Return ``path`` relative to the working directory for display."""

    relative = os.path.relpath(path, cwd or os.getcwd())
    if relative == ".":
        return "./"
    return normalize(relative) or "./"


def _format(dirname: str, basename: str, extname: str) -> str:
    prefix = f"{dirname}/" if dirname else ""
    if prefix in ("//", "\\/"):
        prefix = "/"
    return f"{prefix}{basename}{extname}"


def rename(path: str, transform: RenameTransform) -> str:
    """Return the output path for ``path`` under ``transform``.

    ``transform`` may be a replacement path, a mapping with optional
    ``prefix``/``suffix`` strings applied around the file stem, or a callable
    taking ``path`` and returning either of those. Blank strings and empty
    results leave ``path`` unchanged.

    >>> rename("src/app.js", {"prefix": "min-", "suffix": ".v2"})
    'src/min-app.v2.js'
    """

    if callable(transform):
        transform = transform(path)

    if transform:
        if isinstance(transform, str):
            path = transform.strip() or path
        elif isinstance(transform, Mapping):
            stem, extname = os.path.splitext(os.path.basename(path))
            prefix = transform.get("prefix")
            suffix = transform.get("suffix")
            if isinstance(prefix, str):
                stem = prefix + stem
            if isinstance(suffix, str):
                stem += suffix
            renamed = _format(os.path.dirname(path) or ".", stem, extname)
            if renamed.startswith(".") and not path.startswith("."):
                renamed = renamed[2:]
            path = renamed

    LOGGER.debug("rename to: %s", os.path.basename(path))
    return path
