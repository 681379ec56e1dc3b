"""Helpers shared by CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from tagsmith.core.config import TagsmithConfig, find_config_file, load_config


def resolve_config(
    config_path: Path | None,
    *,
    templates: Path | None = None,
    stylesheets: Path | None = None,
    max_passes: int | None = None,
) -> TagsmithConfig:
    """Load the configuration file, then apply command line overrides."""
    config = load_config(config_path or find_config_file())
    updates: dict[str, object] = {}
    if templates is not None:
        updates["template_dir"] = templates.resolve()
    if stylesheets is not None:
        updates["stylesheet_root"] = stylesheets.resolve()
    if max_passes is not None:
        updates["max_passes"] = max_passes or None
    return config.model_copy(update=updates) if updates else config


def collect_site_files(
    root: Path,
    suffixes: Iterable[str],
    *,
    exclude: Iterable[Path] = (),
) -> list[Path]:
    """Return the site files to expand, sorted for reproducible runs."""
    if root.is_file():
        return [root]
    allowed = tuple(suffix.lower() for suffix in suffixes)
    excluded = [path.resolve() for path in exclude]
    files: list[Path] = []
    for candidate in sorted(root.rglob("*")):
        if not candidate.is_file() or not candidate.name.lower().endswith(allowed):
            continue
        resolved = candidate.resolve()
        if any(resolved.is_relative_to(parent) for parent in excluded):
            continue
        files.append(candidate)
    return files


def format_list(values: Iterable[str]) -> str:
    """Format a sequence of strings into a comma-separated list or a placeholder."""
    sequence = list(values)
    return ", ".join(sequence) if sequence else "-"


__all__ = ["collect_site_files", "format_list", "resolve_config"]
