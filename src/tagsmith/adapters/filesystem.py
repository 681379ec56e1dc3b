"""Directory scanning for tag template files."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path

from tagsmith.core.config import DEFAULT_TEMPLATE_EXTENSIONS
from tagsmith.core.exceptions import TemplateSourceError


def iter_template_files(
    root: Path | str,
    *,
    extensions: Sequence[str] | None = None,
) -> Iterator[Path]:
    """Yield template files under ``root`` in a stable order.

    Files of a directory come first in lexical order, then each subdirectory
    is visited in lexical order.
    """
    base = Path(root)
    if not base.is_dir():
        raise TemplateSourceError(f"Template directory does not exist: {base}")
    suffixes = tuple(suffix.lower() for suffix in (extensions or DEFAULT_TEMPLATE_EXTENSIONS))
    yield from _walk(base, suffixes)


def _walk(directory: Path, suffixes: tuple[str, ...]) -> Iterator[Path]:
    children = sorted(directory.iterdir(), key=lambda child: child.name)
    subdirectories: list[Path] = []
    for child in children:
        if child.is_dir():
            subdirectories.append(child)
        elif child.is_file() and child.name.lower().endswith(suffixes):
            yield child
    for subdirectory in subdirectories:
        yield from _walk(subdirectory, suffixes)


def scan_template_directory(
    root: Path | str,
    *,
    extensions: Sequence[str] | None = None,
    encoding: str = "utf-8",
) -> list[tuple[str, str]]:
    """Return ``(relative_path, raw_text)`` pairs for every template under ``root``."""
    base = Path(root)
    entries: list[tuple[str, str]] = []
    for path in iter_template_files(base, extensions=extensions):
        try:
            text = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateSourceError(f"Unable to read tag template '{path}': {exc}") from exc
        entries.append((path.relative_to(base).as_posix(), text))
    return entries


class TemplateDirectoryScanner:
    """Default :class:`~tagsmith.core.protocols.FileScanner` over a template directory."""

    def __init__(
        self, extensions: Sequence[str] | None = None, *, encoding: str = "utf-8"
    ) -> None:
        self.extensions = extensions
        self.encoding = encoding

    def __call__(self, root: Path | str) -> list[tuple[str, str]]:
        return scan_template_directory(
            root, extensions=self.extensions, encoding=self.encoding
        )


__all__ = ["TemplateDirectoryScanner", "iter_template_files", "scan_template_directory"]
