"""High-level helpers wiring the engine to its default collaborators."""

from __future__ import annotations

from pathlib import Path

from tagsmith.adapters.html import SoupDocumentTree
from tagsmith.adapters.jinja import JinjaRenderer
from tagsmith.adapters.stylesheets import FileStylesheetPreprocessor
from tagsmith.core.config import TagsmithConfig
from tagsmith.core.diagnostics import DiagnosticEmitter
from tagsmith.core.engine import ExpansionEngine
from tagsmith.core.protocols import Renderer, StylesheetPreprocessor
from tagsmith.core.registry import TemplateRegistry


def load_registry(config: TagsmithConfig) -> TemplateRegistry:
    """Scan the configured template directory into a frozen registry."""
    return TemplateRegistry.from_directory(config.template_dir, extensions=config.extensions)


def build_engine(
    config: TagsmithConfig | None = None,
    *,
    registry: TemplateRegistry | None = None,
    renderer: Renderer | None = None,
    preprocessor: StylesheetPreprocessor | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> ExpansionEngine:
    """Create an :class:`ExpansionEngine` from settings and optional overrides."""
    config = config or TagsmithConfig()
    if registry is None:
        registry = load_registry(config)
    if renderer is None:
        renderer = JinjaRenderer(autoescape=config.autoescape)
    if preprocessor is None:
        preprocessor = FileStylesheetPreprocessor(config.stylesheet_root)
    return ExpansionEngine(
        registry,
        renderer,
        preprocessor=preprocessor,
        tree=SoupDocumentTree(config.parser, emitter=emitter),
        max_passes=config.max_passes,
        emitter=emitter,
    )


def expand_html(
    html: str,
    template_dir: Path | str,
    *,
    stylesheet_root: Path | str | None = None,
) -> str:
    """Expand ``html`` with the templates found in ``template_dir``."""
    template_root = Path(template_dir)
    config = TagsmithConfig(
        template_dir=template_root,
        stylesheet_root=Path(stylesheet_root) if stylesheet_root is not None else None,
    )
    return build_engine(config).expand(html)


__all__ = ["build_engine", "expand_html", "load_registry"]
