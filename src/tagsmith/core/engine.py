"""Fixpoint expansion of tag templates over an HTML document.

The engine walks the registry in order and, for each tag, replaces every usage
found in the document with the rendered template body. One sweep over the
registry is a *pass*. Passes repeat until one of them performs no rewrite,
which picks up tags introduced by earlier expansions: templates that use other
templates, and usages nested in the content of a paired tag.

Each document gets a fresh :class:`~tagsmith.core.context.ExpansionContext`.
It remembers which tags already contributed their stylesheet so that the CSS
of a tag lands in the document head once, whatever the number of usages or
passes. Once the fixpoint is reached the accumulated CSS is appended to the
first ``<style>`` element of ``<head>`` (created when missing).

Rendering, stylesheet compilation and HTML manipulation are delegated to the
collaborators described in :mod:`tagsmith.core.protocols`. Any failure aborts
the document: :meth:`ExpansionEngine.expand` works on a private parse of its
input and returns nothing when an error propagates.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any

from .attributes import AttributeHelper, forward_attributes
from .context import ExpansionContext, ExpansionState
from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import MultipleRootsError, RecursionLimitExceeded, RenderError, TagsmithError
from .protocols import DocumentTree, Renderer, StylesheetPreprocessor, VariableInspector
from .registry import TemplateDefinition, TemplateRegistry
from .stylesheets import StylesheetCollector


logger = logging.getLogger(__name__)

CONTENT_VARIABLE = "content"
HELPER_VARIABLE = "attrs"
DEFAULT_MAX_PASSES = 100


@dataclass(slots=True)
class ExpansionResult:
    """Outcome of expanding one document or fragment."""

    html: str
    css: str
    context: ExpansionContext


class ExpansionEngine:
    """Expand the tags of a :class:`TemplateRegistry` in HTML documents."""

    def __init__(
        self,
        registry: TemplateRegistry,
        renderer: Renderer,
        *,
        preprocessor: StylesheetPreprocessor | None = None,
        tree: DocumentTree | None = None,
        max_passes: int | None = DEFAULT_MAX_PASSES,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        if max_passes is not None and max_passes < 1:
            raise ValueError("max_passes must be a positive integer or None.")
        if tree is None:
            from tagsmith.adapters.html import SoupDocumentTree

            tree = SoupDocumentTree(emitter=emitter)
        self.registry = registry
        self.renderer = renderer
        self.tree = tree
        self.max_passes = max_passes
        self.emitter = emitter or NullEmitter()
        self.collector = StylesheetCollector(preprocessor, emitter=self.emitter)
        self._consumed_cache: dict[str, frozenset[str]] = {}

    def expand(self, html: str, *, source: str | None = None) -> str:
        """Return ``html`` with every registered tag expanded."""
        return self.expand_document(html, source=source).html

    def expand_document(self, html: str, *, source: str | None = None) -> ExpansionResult:
        """Expand a full document and inject the collected CSS into its head."""
        document = self.tree.parse(html)
        context = self.run_to_fixpoint(document)
        self.finalize(document, context.css)
        self._report(context, source)
        return ExpansionResult(
            html=self.tree.serialize(document), css=context.css, context=context
        )

    def expand_fragment(self, html: str, *, source: str | None = None) -> ExpansionResult:
        """Expand an HTML fragment, returning the CSS instead of injecting it."""
        fragment = self.tree.parse_fragment(html)
        context = self.run_to_fixpoint(fragment)
        self._report(context, source)
        return ExpansionResult(
            html=self.tree.serialize(fragment), css=context.css, context=context
        )

    def run_to_fixpoint(
        self, document: Any, context: ExpansionContext | None = None
    ) -> ExpansionContext:
        """Repeat :meth:`transform_once` until a pass rewrites nothing."""
        context = context if context is not None else ExpansionContext()
        while self.transform_once(document, context):
            if self.max_passes is not None and context.passes >= self.max_passes:
                pending = self.pending_tags(document)
                if pending:
                    raise RecursionLimitExceeded(self.max_passes, pending)
                break
        context.enter(ExpansionState.DONE)
        logger.debug(
            "Expansion settled after %d pass(es), %d rewrite(s)",
            context.passes,
            context.rewrites,
        )
        return context

    def transform_once(self, document: Any, context: ExpansionContext) -> bool:
        """Run one pass over the registry; return True when anything was rewritten."""
        did_rewrite = False
        context.enter(ExpansionState.SCANNING)
        for tag_name, definition in self.registry.items():
            matched = False
            for element in self.tree.find_elements_by_tag(document, definition.element_name):
                # Usages nested in an already replaced usage are detached; their
                # copy inside the rendered content is handled on the next pass.
                if not self.tree.is_attached(element, document):
                    continue
                context.enter(ExpansionState.REWRITING)
                fragment = self.expand_element(element, definition)
                self.tree.replace_element(element, fragment)
                context.record_expansion(tag_name)
                matched = True
            if matched:
                did_rewrite = True
                self.collector.collect(definition, context)
        context.passes += 1
        return did_rewrite

    def expand_element(self, element: Any, definition: TemplateDefinition) -> str:
        """Render ``definition`` for one usage element and forward its attributes."""
        attributes = self.tree.get_attributes(element)
        # The reserved ``attrs`` name belongs to the helper.
        helper = AttributeHelper(
            {name: value for name, value in attributes.items() if name != HELPER_VARIABLE}
        )
        variables: dict[str, Any] = dict(attributes)
        variables[CONTENT_VARIABLE] = self.tree.get_inner_content(element)
        variables[HELPER_VARIABLE] = helper

        rendered = self._render(definition, variables)
        self._ensure_single_root(rendered, definition)

        explicit = set(helper.emitted)
        explicit.update(self._consumed_attributes(definition, attributes))
        return forward_attributes(
            rendered,
            attributes,
            registry=self.registry,
            tree=self.tree,
            explicit=explicit,
            tag_name=definition.tag_name,
        )

    def finalize(self, document: Any, css: str) -> None:
        """Append ``css`` to the first ``<style>`` of the head, creating both if needed."""
        head = self.tree.find_head(document)
        if head is None:
            head = self.tree.ensure_head(document)
        style = self.tree.find_or_create_style_child(head)
        existing = self.tree.get_text(style)
        self.tree.set_text(style, existing + css)

    def pending_tags(self, document: Any) -> list[str]:
        """Return the registered tags still used in ``document``."""
        return [
            tag_name
            for tag_name, definition in self.registry.items()
            if self.tree.find_elements_by_tag(document, definition.element_name)
        ]

    def _render(self, definition: TemplateDefinition, variables: Mapping[str, Any]) -> str:
        try:
            return self.renderer.render(definition.body, variables)
        except RenderError as exc:
            if exc.tag_name is not None:
                raise
            raise RenderError(
                f"Tag template '{definition.tag_name}': {exc}", tag_name=definition.tag_name
            ) from exc
        except TagsmithError:
            raise
        except Exception as exc:
            raise RenderError(
                f"Failed to render tag template '{definition.tag_name}': {exc}",
                tag_name=definition.tag_name,
            ) from exc

    def _ensure_single_root(self, rendered: str, definition: TemplateDefinition) -> None:
        fragment = self.tree.parse_fragment(rendered)
        count = len(self.tree.top_level_elements(fragment))
        if count != 1:
            raise MultipleRootsError(definition.tag_name, count)

    def _consumed_attributes(
        self, definition: TemplateDefinition, attributes: Mapping[str, str]
    ) -> set[str]:
        if not attributes or not isinstance(self.renderer, VariableInspector):
            return set()
        referenced = self._consumed_cache.get(definition.tag_name)
        if referenced is None:
            referenced = frozenset(self.renderer.referenced_variables(definition.body))
            self._consumed_cache[definition.tag_name] = referenced
        return {name for name in attributes if name in referenced}

    def _report(self, context: ExpansionContext, source: str | None) -> None:
        self.emitter.event(
            "document_expanded",
            {
                "source": source,
                "passes": context.passes,
                "rewrites": context.rewrites,
                "tags": dict(context.expanded),
            },
        )


__all__ = [
    "CONTENT_VARIABLE",
    "DEFAULT_MAX_PASSES",
    "HELPER_VARIABLE",
    "ExpansionEngine",
    "ExpansionResult",
]
