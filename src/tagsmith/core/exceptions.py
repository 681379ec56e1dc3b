"""Custom exception hierarchy for the tag-template expansion pipeline."""

from __future__ import annotations


class TagsmithError(RuntimeError):
    """Base exception for tag-template failures."""


class DuplicateTagError(TagsmithError):
    """Raised when two template definitions claim the same tag name."""

    def __init__(self, tag_name: str, *, source: str | None = None) -> None:
        self.tag_name = tag_name
        self.source = source
        message = f"There is already a tag template named '{tag_name}'"
        if source:
            message = f"{message} (while loading '{source}')"
        super().__init__(message)


class RegistryFrozenError(TagsmithError):
    """Raised when a frozen registry receives a new definition."""


class TemplateSourceError(TagsmithError):
    """Raised when a template file carries malformed front matter fields."""


class MultipleRootsError(TagsmithError):
    """Raised when an expansion does not produce exactly one top-level element."""

    def __init__(self, tag_name: str | None, count: int) -> None:
        self.tag_name = tag_name
        self.count = count
        subject = f"Tag template '{tag_name}'" if tag_name else "Template expansion"
        super().__init__(
            f"{subject} must have only one top level tag (found {count})"
        )


class RenderError(TagsmithError):
    """Raised when the renderer fails to evaluate a template body."""

    def __init__(self, message: str, *, tag_name: str | None = None) -> None:
        self.tag_name = tag_name
        super().__init__(message)


class PreprocessError(TagsmithError):
    """Raised when a stylesheet cannot be compiled."""

    def __init__(self, message: str, *, reference: str | None = None) -> None:
        self.reference = reference
        super().__init__(message)


class RecursionLimitExceeded(TagsmithError):
    """Raised when a document still rewrites after the configured pass limit."""

    def __init__(self, max_passes: int, pending: list[str] | None = None) -> None:
        self.max_passes = max_passes
        self.pending = list(pending or [])
        message = f"Tag expansion did not settle after {max_passes} passes"
        if self.pending:
            message = f"{message}; still expanding: {', '.join(self.pending)}"
        super().__init__(message)


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "DuplicateTagError",
    "MultipleRootsError",
    "PreprocessError",
    "RecursionLimitExceeded",
    "RegistryFrozenError",
    "RenderError",
    "TagsmithError",
    "TemplateSourceError",
    "exception_hint",
    "exception_messages",
]
