"""Expand custom HTML tags into reusable template fragments at build time."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from tagsmith.adapters import FileStylesheetPreprocessor, JinjaRenderer, SoupDocumentTree
from tagsmith.api import build_engine, expand_html, load_registry
from tagsmith.core import (
    AttributeHelper,
    DuplicateTagError,
    ExpansionContext,
    ExpansionEngine,
    ExpansionResult,
    MultipleRootsError,
    PreprocessError,
    RecursionLimitExceeded,
    RegistryFrozenError,
    RenderError,
    TagsmithConfig,
    TagsmithError,
    TemplateDefinition,
    TemplateRegistry,
    TemplateSourceError,
    forward_attributes,
    load_config,
)


try:
    __version__ = _pkg_version("tagsmith")
except PackageNotFoundError:  # pragma: no cover - source checkout
    __version__ = "0.0.0"


__all__ = [
    "AttributeHelper",
    "DuplicateTagError",
    "ExpansionContext",
    "ExpansionEngine",
    "ExpansionResult",
    "FileStylesheetPreprocessor",
    "JinjaRenderer",
    "MultipleRootsError",
    "PreprocessError",
    "RecursionLimitExceeded",
    "RegistryFrozenError",
    "RenderError",
    "SoupDocumentTree",
    "TagsmithConfig",
    "TagsmithError",
    "TemplateDefinition",
    "TemplateRegistry",
    "TemplateSourceError",
    "__version__",
    "build_engine",
    "expand_html",
    "forward_attributes",
    "load_config",
    "load_registry",
]
