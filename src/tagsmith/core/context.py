"""Per-document state accumulated while expanding tag templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ExpansionState(Enum):
    """Lifecycle of a single document expansion."""

    SCANNING = "scanning"
    """Looking for usages of registered tags."""

    REWRITING = "rewriting"
    """Replacing matched usages with their rendered templates."""

    DONE = "done"
    """A full pass completed without any rewrite."""


@dataclass(slots=True)
class ExpansionContext:
    """State scoped to one document's run to a fixpoint."""

    processed_tags: set[str] = field(default_factory=set)
    accumulated_css: list[str] = field(default_factory=list)
    state: ExpansionState = ExpansionState.SCANNING
    passes: int = 0
    rewrites: int = 0
    expanded: dict[str, int] = field(default_factory=dict)

    @property
    def css(self) -> str:
        """Compiled stylesheets concatenated in tag-processing order."""
        return "".join(self.accumulated_css)

    def has_stylesheet(self, tag_name: str) -> bool:
        return tag_name in self.processed_tags

    def add_stylesheet(self, tag_name: str, css: str) -> None:
        """Record the compiled stylesheet of ``tag_name`` for this document."""
        self.accumulated_css.append(css)
        self.processed_tags.add(tag_name)

    def record_expansion(self, tag_name: str) -> None:
        self.rewrites += 1
        self.expanded[tag_name] = self.expanded.get(tag_name, 0) + 1

    def enter(self, state: ExpansionState) -> None:
        self.state = state


__all__ = ["ExpansionContext", "ExpansionState"]
