"""BeautifulSoup implementation of the document tree capability."""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import Doctype, NavigableString, Script, Stylesheet, Tag

from tagsmith.core.diagnostics import DiagnosticEmitter, NullEmitter


# Fragments are always parsed with the built-in parser: lxml and html5lib wrap
# loose markup into <html><body>, which would hide the top-level elements.
FRAGMENT_PARSER = "html.parser"

_STRING_CONTAINERS: dict[str, type[NavigableString]] = {
    "style": Stylesheet,
    "script": Script,
}


class SoupDocumentTree:
    """Parse, query and mutate HTML documents through BeautifulSoup."""

    def __init__(
        self,
        parser: str = "html.parser",
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.parser_backend = parser
        self.emitter = emitter or NullEmitter()

    def parse(self, html: str) -> BeautifulSoup:
        try:
            return self._soup(html, self.parser_backend)
        except FeatureNotFound:
            if self.parser_backend == FRAGMENT_PARSER:
                raise
            # Fall back to the built-in parser when the preferred backend is missing.
            self.emitter.warning(
                f"HTML parser '{self.parser_backend}' is unavailable; "
                f"falling back to '{FRAGMENT_PARSER}'."
            )
            self.emitter.event(
                "parser_fallback",
                {"preferred": self.parser_backend, "fallback": FRAGMENT_PARSER},
            )
            self.parser_backend = FRAGMENT_PARSER
            return self._soup(html, FRAGMENT_PARSER)

    def parse_fragment(self, html: str) -> BeautifulSoup:
        return self._soup(html, FRAGMENT_PARSER)

    def serialize(self, tree: Any) -> str:
        return tree.decode() if isinstance(tree, Tag) else str(tree)

    def find_elements_by_tag(self, tree: Tag, name: str) -> list[Tag]:
        return list(tree.find_all(name.lower()))

    def top_level_elements(self, fragment: Tag) -> list[Tag]:
        return [child for child in fragment.contents if isinstance(child, Tag)]

    def element_name(self, element: Tag) -> str:
        return element.name

    def get_attributes(self, element: Tag) -> dict[str, str]:
        attributes: dict[str, str] = {}
        for name, value in (element.attrs or {}).items():
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            attributes[name] = "" if value is None else str(value)
        return attributes

    def set_attribute(self, element: Tag, name: str, value: str) -> None:
        element[name] = value

    def get_inner_content(self, element: Tag) -> str:
        return element.decode_contents()

    def replace_element(self, element: Tag, html_fragment: str) -> None:
        fragment = self.parse_fragment(html_fragment)
        nodes = list(fragment.contents)
        if not nodes:
            element.decompose()
            return
        element.replace_with(*nodes)

    def is_attached(self, element: Tag, tree: Tag) -> bool:
        if element is tree:
            return True
        return any(parent is tree for parent in element.parents)

    def find_head(self, tree: Tag) -> Tag | None:
        return tree.find("head")

    def ensure_head(self, tree: BeautifulSoup) -> Tag:
        head = self.find_head(tree)
        if head is not None:
            return head
        head = tree.new_tag("head")
        html_element = tree.find("html")
        if html_element is not None:
            html_element.insert(0, head)
            return head
        position = 0
        for index, child in enumerate(tree.contents):
            if isinstance(child, Doctype):
                position = index + 1
        tree.insert(position, head)
        return head

    def find_or_create_style_child(self, head: Tag) -> Tag:
        style = head.find("style", recursive=False)
        if style is not None:
            return style
        soup = _owning_soup(head)
        style = soup.new_tag("style")
        head.append(style)
        return style

    def get_text(self, element: Tag) -> str:
        return element.get_text()

    def set_text(self, element: Tag, text: str) -> None:
        container = _STRING_CONTAINERS.get(element.name, NavigableString)
        element.string = container(text)

    @staticmethod
    def _soup(html: str, parser: str) -> BeautifulSoup:
        return BeautifulSoup(html, parser, multi_valued_attributes=None)


def _owning_soup(element: Tag) -> BeautifulSoup:
    for candidate in (element, *element.parents):
        if isinstance(candidate, BeautifulSoup):
            return candidate
    # Detached elements still need a factory for new tags.
    return BeautifulSoup("", FRAGMENT_PARSER)


__all__ = ["FRAGMENT_PARSER", "SoupDocumentTree"]
