"""Forward usage attributes onto the root element of a rendered tag template.

Two mechanisms coexist:

`Implicit forwarding`
: :func:`forward_attributes` runs after every render. Usage attributes valid
  on the rendered root element are copied onto it; ``class`` and ``id`` values
  are merged with the ones the template already sets, usage tokens first. When
  the root is itself a registered tag every attribute is forwarded, the later
  pass that expands the nested tag applies the whitelist.

`Explicit helper`
: :class:`AttributeHelper` is exposed to templates as ``attrs``. Template
  authors call it to serialise a filtered selection of usage attributes
  wherever they want. Every attribute it emits, and every attribute the
  template body reads as a variable, is left alone by implicit forwarding.

``content`` and ``attrs`` are reserved variable names. A usage attribute
called ``content`` is shadowed by the inner HTML of the usage, one called
``attrs`` is shadowed by the helper and never serialised by it.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from markupsafe import Markup

from .exceptions import MultipleRootsError
from .html_attributes import is_allowed_attribute


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .protocols import DocumentTree
    from .registry import TemplateRegistry


MERGED_ATTRIBUTES = frozenset({"class", "id"})


def merge_tokens(usage_value: str, existing_value: str) -> str:
    """Return usage tokens followed by existing tokens, without deduplication."""
    return " ".join(usage_value.split() + existing_value.split())


def forward_attributes(
    html: str,
    attributes: Mapping[str, str] | None,
    *,
    registry: TemplateRegistry,
    tree: DocumentTree | None = None,
    explicit: Collection[str] = (),
    tag_name: str | None = None,
) -> str:
    """Merge ``attributes`` into the single root element of ``html``."""
    if tree is None:
        from tagsmith.adapters.html import SoupDocumentTree

        tree = SoupDocumentTree()

    fragment = tree.parse_fragment(html)
    roots = tree.top_level_elements(fragment)
    if len(roots) != 1:
        raise MultipleRootsError(tag_name, len(roots))

    root = roots[0]
    root_name = tree.element_name(root)
    forward_all = registry.is_template_element(root_name)
    existing = tree.get_attributes(root)

    for name, value in (attributes or {}).items():
        if name in explicit:
            continue
        if not forward_all and not is_allowed_attribute(root_name, name):
            continue
        if name in MERGED_ATTRIBUTES and name in existing:
            value = merge_tokens(value, existing[name])
        tree.set_attribute(root, name, value)

    return tree.serialize(fragment)


class AttributeHelper:
    """Template-side access to the usage attributes of the element being expanded.

    ``{{ attrs() }}`` renders every attribute, ``{{ attrs(include=["href"]) }}``
    and ``{{ attrs(exclude="class") }}`` filter the selection. Values are
    escaped and the result is marked safe for autoescaping environments.

    The expansion engine builds it without the reserved ``attrs`` attribute.
    """

    def __init__(self, attributes: Mapping[str, str] | None = None) -> None:
        self._attributes = dict(attributes or {})
        self.emitted: set[str] = set()

    def __call__(
        self,
        include: str | Iterable[str] | None = None,
        exclude: str | Iterable[str] | None = None,
    ) -> Markup:
        selected = self.select(include=include, exclude=exclude)
        self.emitted.update(selected)
        return Markup(" ").join(
            Markup('{}="{}"').format(name, value) for name, value in selected.items()
        )

    def select(
        self,
        include: str | Iterable[str] | None = None,
        exclude: str | Iterable[str] | None = None,
    ) -> dict[str, str]:
        """Return the attributes kept by the include/exclude filters."""
        included = _as_names(include)
        excluded = _as_names(exclude) or frozenset()
        return {
            name: value
            for name, value in self._attributes.items()
            if (included is None or name in included) and name not in excluded
        }

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._attributes.get(name, default)

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._attributes.items())

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __html__(self) -> Markup:
        return self()

    def __str__(self) -> str:
        return str(self())


def _as_names(value: str | Iterable[str] | None) -> frozenset[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return frozenset(part for part in value.replace(",", " ").split() if part)
    return frozenset(value)


__all__ = [
    "MERGED_ATTRIBUTES",
    "AttributeHelper",
    "forward_attributes",
    "merge_tokens",
]
