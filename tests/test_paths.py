"""Unit tests for the path helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from filepipe.core.paths import (
    is_absolute,
    is_local,
    is_out_of_bounds,
    is_relative,
    normalize,
    path_from_cwd,
    rename,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a\\b\\.\\c\\.\\d", "a/b/c/d"),
        ("http:///a/b/c", "http://a/b/c"),
        ("/a/b/./c/./d", "/a/b/c/d"),
        ("a//b/c", "a/b/c"),
        ("a///b/////c", "a/b/c"),
        ("a/b/c/../../d", "a/d"),
        ("a/b/c//../d", "a/b/d"),
        ("/../../../a", "/a"),
        ("../../a", "../../a"),
        ("a/b/..", "a/"),
    ],
)
def test_normalize(raw: str, expected: str) -> None:
    assert normalize(raw) == expected


def test_relative_and_absolute() -> None:
    assert is_relative("./a.js")
    assert is_relative("..\\a.js")
    assert not is_relative("a.js")
    assert not is_relative(".../a.js")

    assert is_absolute("/a.js")
    assert is_absolute("\\a.js")
    assert is_absolute("/")
    assert not is_absolute("//cdn.example.com/a.js")
    assert not is_absolute("a.js")


def test_is_local() -> None:
    assert is_local("./a.js")
    assert is_local("/assets/a.png")
    assert not is_local("https://example.com/a.js")
    assert not is_local("//example.com/a.js")
    assert not is_local("data:image/png;base64,AAAA")
    assert not is_local("DATA:text/css,body{}")


def test_out_of_bounds() -> None:
    assert is_out_of_bounds("/root/sub/../../etc/passwd", "/root")
    assert not is_out_of_bounds("/root/sub/file.js", "/root")
    assert not is_out_of_bounds("/root/..file.js", "/root")
    assert is_out_of_bounds("/other/file.js", "/root")
    assert not is_out_of_bounds("/root", "/root")


def test_path_from_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = tmp_path.resolve()
    monkeypatch.chdir(root)
    assert path_from_cwd(str(root)) == "./"
    assert path_from_cwd(str(root / "src" / "a.js")) == "src/a.js"
    assert path_from_cwd("/x/y.js", cwd="/x") == "y.js"


@pytest.mark.parametrize(
    "path, transform, expected",
    [
        ("src/app.js", "dist/bundle.js", "dist/bundle.js"),
        ("src/app.js", "  dist/bundle.js  ", "dist/bundle.js"),
        ("src/app.js", "   ", "src/app.js"),
        ("src/app.js", None, "src/app.js"),
        ("src/app.js", {}, "src/app.js"),
        ("src/app.js", {"prefix": "min-"}, "src/min-app.js"),
        ("src/app.js", {"suffix": ".min"}, "src/app.min.js"),
        ("app.js", {"prefix": "x-", "suffix": "-y"}, "x-app-y.js"),
        ("./app.js", {"suffix": "-1"}, "./app-1.js"),
        ("/app.js", {"prefix": "p"}, "/papp.js"),
        ("src/README", {"suffix": "-draft"}, "src/README-draft"),
        ("src/app.js", {"prefix": 1, "suffix": None}, "src/app.js"),
        ("src/app.js", lambda path: path.replace("src", "dist"), "dist/app.js"),
        ("src/app.js", lambda path: {"suffix": "-" + path.count("/") * "x"}, "src/app-x.js"),
        ("src/app.js", lambda path: None, "src/app.js"),
    ],
)
def test_rename(path: str, transform, expected: str) -> None:
    assert rename(path, transform) == expected
