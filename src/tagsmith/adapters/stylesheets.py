"""Default stylesheet preprocessor reading plain CSS files from disk."""

from __future__ import annotations

from pathlib import Path

from tagsmith.core.exceptions import PreprocessError


class FileStylesheetPreprocessor:
    """Return the text of the CSS file a template front matter refers to.

    Relative references resolve against ``root``; absolute ones are used as is.
    Wrap a SASS or PostCSS compiler in a ``compile(path) -> str`` callable to
    replace this reader.
    """

    def __init__(self, root: Path | str | None = None, *, encoding: str = "utf-8") -> None:
        self.root = Path(root) if root is not None else Path.cwd()
        self.encoding = encoding

    def resolve(self, reference: str) -> Path:
        candidate = Path(reference).expanduser()
        if candidate.is_absolute():
            return candidate
        return (self.root / candidate).resolve()

    def __call__(self, path: str) -> str:
        resolved = self.resolve(path)
        try:
            return resolved.read_text(encoding=self.encoding)
        except OSError as exc:
            raise PreprocessError(
                f"Unable to read stylesheet '{path}' ({resolved}): {exc.strerror or exc}",
                reference=path,
            ) from exc


__all__ = ["FileStylesheetPreprocessor"]
