"""Capabilities the expansion core consumes from its collaborators.

The engine never imports a concrete template language, stylesheet compiler or
HTML library. It talks to narrow protocols instead; default implementations
live in :mod:`tagsmith.adapters`.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Renderer(Protocol):
    """Evaluate a template body against a mapping of variables."""

    def render(self, template_source: str, variables: Mapping[str, Any]) -> str: ...


@runtime_checkable
class VariableInspector(Protocol):
    """Optional renderer capability reporting the variables a body reads."""

    def referenced_variables(self, template_source: str) -> frozenset[str]: ...


@runtime_checkable
class StylesheetPreprocessor(Protocol):
    """Compile a stylesheet reference into CSS text."""

    def __call__(self, path: str) -> str: ...


@runtime_checkable
class FileScanner(Protocol):
    """Yield ``(relative_path, raw_text)`` pairs for template files under ``root``."""

    def __call__(self, root: Path | str) -> list[tuple[str, str]]: ...


@runtime_checkable
class DocumentTree(Protocol):
    """Parse, query and mutate HTML documents.

    Elements are opaque to the engine; it only hands them back to the tree
    implementation that produced them.
    """

    def parse(self, html: str) -> Any: ...

    def parse_fragment(self, html: str) -> Any: ...

    def serialize(self, tree: Any) -> str: ...

    def find_elements_by_tag(self, tree: Any, name: str) -> list[Any]: ...

    def top_level_elements(self, fragment: Any) -> list[Any]: ...

    def element_name(self, element: Any) -> str: ...

    def get_attributes(self, element: Any) -> dict[str, str]: ...

    def set_attribute(self, element: Any, name: str, value: str) -> None: ...

    def get_inner_content(self, element: Any) -> str: ...

    def replace_element(self, element: Any, html_fragment: str) -> None: ...

    def is_attached(self, element: Any, tree: Any) -> bool: ...

    def find_head(self, tree: Any) -> Any | None: ...

    def ensure_head(self, tree: Any) -> Any: ...

    def find_or_create_style_child(self, head: Any) -> Any: ...

    def get_text(self, element: Any) -> str: ...

    def set_text(self, element: Any, text: str) -> None: ...


__all__ = [
    "DocumentTree",
    "FileScanner",
    "Renderer",
    "StylesheetPreprocessor",
    "VariableInspector",
]
