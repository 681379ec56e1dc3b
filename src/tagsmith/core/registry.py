"""Registry of tag templates keyed by their custom element name.

A registry is built once, either from explicit :meth:`TemplateRegistry.register`
calls or from a batch of template files via
:meth:`TemplateRegistry.load_from_source`, and then handed to the expansion
engine which only ever reads from it. Freezing the registry makes that
contract explicit so one instance can be shared by concurrent builds.

Iteration follows insertion order. When templates come from a directory scan
the scanner order therefore decides in which order tags are expanded during a
pass, which keeps the generated output reproducible.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .exceptions import DuplicateTagError, RegistryFrozenError
from .front_matter import default_tag_name, parse_template_source


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .protocols import FileScanner


@dataclass(frozen=True, slots=True)
class TemplateDefinition:
    """Immutable description of one tag template."""

    tag_name: str
    body: str
    stylesheet_reference: str | None = None
    source_path: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not self.tag_name or not self.tag_name.strip():
            raise ValueError("Tag templates require a non-empty tag name.")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def element_name(self) -> str:
        """Name under which HTML parsers report usages of this tag."""
        return self.tag_name.lower()

    @classmethod
    def from_source(cls, relative_path: str, raw_text: str) -> TemplateDefinition:
        """Build a definition from a template file and its front matter."""
        parsed = parse_template_source(raw_text)
        tag_name = parsed.tag or default_tag_name(relative_path)
        extra = {
            key: value
            for key, value in parsed.metadata.items()
            if key not in {"tag", "stylesheet"}
        }
        return cls(
            tag_name=tag_name,
            body=parsed.body,
            stylesheet_reference=parsed.stylesheet,
            source_path=relative_path,
            metadata=extra,
        )


class TemplateRegistry:
    """Ordered mapping from tag name to :class:`TemplateDefinition`."""

    def __init__(self, definitions: Iterable[TemplateDefinition] = ()) -> None:
        self._definitions: dict[str, TemplateDefinition] = {}
        self._by_element: dict[str, list[TemplateDefinition]] = {}
        self._frozen = False
        self._lock = Lock()
        self.register_all(definitions)

    @classmethod
    def from_directory(
        cls,
        root: Path | str,
        *,
        extensions: Sequence[str] | None = None,
        scanner: FileScanner | None = None,
        freeze: bool = True,
    ) -> TemplateRegistry:
        """Scan ``root`` for template files and build a registry from them.

        ``scanner`` replaces the default recursive directory walk; ``extensions``
        only applies to the default one.
        """
        if scanner is None:
            from tagsmith.adapters.filesystem import TemplateDirectoryScanner

            scanner = TemplateDirectoryScanner(extensions)

        registry = cls()
        registry.load_from_source(scanner(root))
        if freeze:
            registry.freeze()
        return registry

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> TemplateRegistry:
        """Reject any further registration."""
        self._frozen = True
        return self

    def register(self, definition: TemplateDefinition) -> None:
        """Register a single definition, rejecting duplicate tag names."""
        self.register_all((definition,))

    def register_all(self, definitions: Iterable[TemplateDefinition]) -> None:
        """Register a batch of definitions; either all of them land or none."""
        batch = list(definitions)
        if not batch:
            return
        with self._lock:
            self._ensure_writable()
            seen: set[str] = set()
            for definition in batch:
                if definition.tag_name in self._definitions or definition.tag_name in seen:
                    raise DuplicateTagError(
                        definition.tag_name, source=definition.source_path
                    )
                seen.add(definition.tag_name)
            for definition in batch:
                self._definitions[definition.tag_name] = definition
                self._by_element.setdefault(definition.element_name, []).append(definition)

    def load_from_source(self, entries: Iterable[tuple[str, str]]) -> list[TemplateDefinition]:
        """Register the templates described by ``(relative_path, raw_text)`` pairs."""
        definitions = [
            TemplateDefinition.from_source(relative_path, raw_text)
            for relative_path, raw_text in entries
        ]
        self.register_all(definitions)
        return definitions

    def lookup(self, tag_name: str) -> TemplateDefinition | None:
        """Return the definition registered under ``tag_name`` exactly."""
        return self._definitions.get(tag_name)

    def match(self, element_name: str) -> TemplateDefinition | None:
        """Return the first definition whose tag matches a parsed element name."""
        candidates = self._by_element.get(element_name.lower())
        return candidates[0] if candidates else None

    def is_template_element(self, element_name: str | None) -> bool:
        """Return True when ``element_name`` is itself a registered tag."""
        return bool(element_name) and self.match(element_name) is not None

    def tags(self) -> list[str]:
        return list(self._definitions)

    def items(self) -> Iterator[tuple[str, TemplateDefinition]]:
        return iter(list(self._definitions.items()))

    def __iter__(self) -> Iterator[TemplateDefinition]:
        return iter(list(self._definitions.values()))

    def __contains__(self, tag_name: object) -> bool:
        return tag_name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<TemplateRegistry {state} tags={self.tags()!r}>"

    def _ensure_writable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("The template registry is frozen; build a new one instead.")


__all__ = ["TemplateDefinition", "TemplateRegistry"]
