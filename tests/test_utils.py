"""Unit tests for the small shared helpers."""

from __future__ import annotations

import io
import logging
import re
from typing import Iterator, List

import pytest

from filepipe.utils.logger import (
    ROOT_LOGGER_NAME,
    TimestampFormatter,
    configure_logging,
    get_logger,
)
from filepipe.utils.series import series
from filepipe.utils.types import is_awaitable, is_bytes, is_function, is_plain_object, is_string, type_of


class Widget:
    pass


async def _noop() -> None:
    return None


def test_type_of() -> None:
    assert type_of(float("nan")) == "nan"
    assert type_of(float("-inf")) == "infinity"
    assert type_of(1.5) == "number"
    assert type_of(3) == "number"
    assert type_of(True) == "boolean"
    assert type_of("s") == "string"
    assert type_of(b"") == "bytes"
    assert type_of(None) == "none"
    assert type_of([]) == "list"
    assert type_of({}) == "dict"
    assert type_of(lambda: None) == "function"
    assert type_of(Widget()) == "widget"

    coroutine = _noop()
    try:
        assert type_of(coroutine) == "awaitable"
        assert is_awaitable(coroutine)
    finally:
        coroutine.close()


def test_predicates() -> None:
    assert is_function(len)
    assert is_function(lambda: None)
    assert not is_function(Widget)
    assert not is_function("len")
    assert is_string("x") and not is_string(b"x")
    assert is_bytes(b"x") and not is_bytes(bytearray(b"x"))
    assert is_plain_object({}) and not is_plain_object([])
    assert not is_awaitable(None)


@pytest.mark.asyncio
async def test_series_runs_in_order_and_awaits() -> None:
    seen: List[str] = []

    async def worker(item: str, index: int) -> None:
        seen.append(f"{index}:{item}")

    def sync_worker(item: str, index: int) -> None:
        seen.append(item.upper())

    await series(["a", "b"], worker)
    await series(["c"], sync_worker)

    assert seen == ["0:a", "1:b", "C"]


@pytest.mark.asyncio
async def test_series_stops_on_error() -> None:
    seen: List[int] = []

    def worker(item: int, index: int) -> None:
        if item == 2:
            raise ValueError("stop")
        seen.append(item)

    with pytest.raises(ValueError):
        await series([1, 2, 3], worker)
    assert seen == [1]


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def test_timestamp_formatter(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    record = logging.LogRecord("filepipe", logging.INFO, __file__, 1, "load plugin: %s", ("js",), None)

    plain = TimestampFormatter(io.StringIO()).format(record)
    colored = TimestampFormatter(io.StringIO(), force_color=True).format(record)

    assert re.fullmatch(r"\[\d{2}:\d{2}:\d{2}\] load plugin: js", plain)
    assert re.fullmatch(r"\[\x1b\[90m\d{2}:\d{2}:\d{2}\x1b\[0m\] load plugin: js", colored)


def test_configure_logging_is_idempotent(package_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    stream = io.StringIO()

    configure_logging(logging.DEBUG, stream)
    configure_logging(logging.DEBUG, stream)
    get_logger("transport").debug("read file: %s", "app.js")

    assert len(package_logger.handlers) == 1
    assert re.fullmatch(r"\[\d{2}:\d{2}:\d{2}\] read file: app.js\n", stream.getvalue())


def test_get_logger_namespacing() -> None:
    assert get_logger("transport").name == "filepipe.transport"
    assert get_logger("filepipe.pipeline").name == "filepipe.pipeline"


def test_colour_follows_stream_and_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    record = logging.LogRecord("filepipe", logging.WARNING, __file__, 1, "slow hook", (), None)

    class Terminal(io.StringIO):
        def isatty(self) -> bool:
            return True

    assert "\x1b[" not in TimestampFormatter(io.StringIO()).format(record)
    assert "\x1b[90m" in TimestampFormatter(Terminal()).format(record)
    assert "\x1b[" not in TimestampFormatter(Terminal(), no_color=True).format(record)

    monkeypatch.setenv("NO_COLOR", "1")
    assert "\x1b[" not in TimestampFormatter(Terminal()).format(record)
    assert "\x1b[90m" in TimestampFormatter(io.StringIO(), force_color=True).format(record)
