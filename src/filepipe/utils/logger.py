"""Timestamped console logging for pipeline diagnostics."""
from __future__ import annotations

import logging
import sys
from typing import IO, Optional

import colorlog

ROOT_LOGGER_NAME = "filepipe"
LOG_FORMAT = "[%(light_black)s%(asctime)s%(reset)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"

__all__ = [
    "TimestampFormatter",
    "configure_logging",
    "get_logger",
]


class TimestampFormatter(colorlog.ColoredFormatter):
    """Prefix each message with a gray ``[HH:MM:SS]``.

    Colour is dropped when ``stream`` is not a terminal, when ``no_color`` is
    set, or when ``NO_COLOR`` is in the environment; ``force_color`` (or
    ``FORCE_COLOR``) wins over all of these.
    """

    def __init__(
        self,
        stream: Optional[IO[str]] = None,
        *,
        no_color: bool = False,
        force_color: bool = False,
    ) -> None:
        super().__init__(
            LOG_FORMAT,
            datefmt=DATE_FORMAT,
            reset=False,
            stream=stream,
            no_color=no_color,
            force_color=force_color,
        )


def configure_logging(
    level: int = logging.INFO,
    stream: Optional[IO[str]] = None,
    *,
    no_color: bool = False,
    force_color: bool = False,
) -> logging.Logger:
    """Attach a timestamped console handler to the package logger.

    Calling this more than once only updates the level.
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    stream = stream if stream is not None else sys.stderr
    handler = colorlog.StreamHandler(stream)
    handler.setFormatter(TimestampFormatter(stream, no_color=no_color, force_color=force_color))
    logger.addHandler(handler)
    return logger


def get_logger(namespace: str) -> logging.Logger:
    """Return a debug logger nested under the package logger."""

    if namespace == ROOT_LOGGER_NAME or namespace.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(namespace)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{namespace}")
