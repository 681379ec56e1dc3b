"""Command implementations for the tagsmith CLI."""

from __future__ import annotations

from .expand import expand
from .templates import list_templates


__all__ = ["expand", "list_templates"]
