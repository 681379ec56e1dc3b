from __future__ import annotations

from pathlib import Path

import pytest

from tagsmith.adapters.filesystem import (
    TemplateDirectoryScanner,
    iter_template_files,
    scan_template_directory,
)
from tagsmith.core.exceptions import TemplateSourceError
from tagsmith.core.protocols import FileScanner


def _touch(path: Path, text: str = "<div></div>") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_scan_order_is_files_first_then_subdirectories(tmp_path: Path) -> None:
    for relative in (
        "sub/deeper/d.html",
        "sub/c.html",
        "b.html",
        "a.njk",
        "aa/e.html",
        "notes.txt",
    ):
        _touch(tmp_path / relative)

    found = [path.relative_to(tmp_path).as_posix() for path in iter_template_files(tmp_path)]

    assert found == ["a.njk", "b.html", "aa/e.html", "sub/c.html", "sub/deeper/d.html"]


def test_extensions_are_configurable(tmp_path: Path) -> None:
    _touch(tmp_path / "card.html")
    _touch(tmp_path / "card.jinja")

    found = [path.name for path in iter_template_files(tmp_path, extensions=[".jinja"])]

    assert found == ["card.jinja"]


def test_scan_returns_posix_relative_paths_and_text(tmp_path: Path) -> None:
    _touch(tmp_path / "cards" / "card.HTML", "<section>{{ content }}</section>")

    assert scan_template_directory(tmp_path) == [
        ("cards/card.HTML", "<section>{{ content }}</section>")
    ]


def test_missing_directory_is_reported(tmp_path: Path) -> None:
    with pytest.raises(TemplateSourceError):
        list(iter_template_files(tmp_path / "absent"))


def test_undecodable_template_is_reported(tmp_path: Path) -> None:
    (tmp_path / "broken.html").write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(TemplateSourceError):
        scan_template_directory(tmp_path)


def test_directory_scanner_is_a_file_scanner(tmp_path: Path) -> None:
    _touch(tmp_path / "card.html", "<div></div>")
    _touch(tmp_path / "card.njk", "<span></span>")

    scanner = TemplateDirectoryScanner([".njk"])

    assert isinstance(scanner, FileScanner)
    assert scanner(tmp_path) == [("card.njk", "<span></span>")]
