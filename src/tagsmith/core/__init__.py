"""Tag-template expansion core: registry, forwarding, stylesheets and engine."""

from __future__ import annotations

from .attributes import AttributeHelper, forward_attributes, merge_tokens
from .config import ConfigError, TagsmithConfig, load_config
from .context import ExpansionContext, ExpansionState
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .engine import ExpansionEngine, ExpansionResult
from .exceptions import (
    DuplicateTagError,
    MultipleRootsError,
    PreprocessError,
    RecursionLimitExceeded,
    RegistryFrozenError,
    RenderError,
    TagsmithError,
    TemplateSourceError,
)
from .registry import TemplateDefinition, TemplateRegistry
from .stylesheets import StylesheetCollector


__all__ = [
    "AttributeHelper",
    "ConfigError",
    "DiagnosticEmitter",
    "DuplicateTagError",
    "ExpansionContext",
    "ExpansionEngine",
    "ExpansionResult",
    "ExpansionState",
    "LoggingEmitter",
    "MultipleRootsError",
    "NullEmitter",
    "PreprocessError",
    "RecursionLimitExceeded",
    "RegistryFrozenError",
    "RenderError",
    "StylesheetCollector",
    "TagsmithConfig",
    "TagsmithError",
    "TemplateDefinition",
    "TemplateRegistry",
    "TemplateSourceError",
    "forward_attributes",
    "load_config",
    "merge_tokens",
]
