"""YAML front matter handling for tag template sources."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any

import yaml

from .exceptions import TemplateSourceError


FRONT_MATTER_DELIMITER = "---"
FRONT_MATTER_TERMINATORS = frozenset({"---", "..."})


@dataclass(slots=True)
class TemplateSource:
    """Template file split into its metadata block and body."""

    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @property
    def tag(self) -> str | None:
        return _string_field(self.metadata, "tag")

    @property
    def stylesheet(self) -> str | None:
        return _string_field(self.metadata, "stylesheet")


def split_front_matter(source: str, *, strict: bool = False) -> tuple[dict[str, Any], str]:
    """Split YAML front matter from template content, returning metadata and body.

    Without ``strict`` an unreadable block is treated as regular content, the
    same way Markdown front matter is handled. With ``strict`` a delimited block
    that fails to parse raises :class:`TemplateSourceError`.
    """
    candidate = source.lstrip("\ufeff")
    prefix_len = len(source) - len(candidate)
    lines = candidate.splitlines()
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return {}, source

    front_matter_lines: list[str] = []
    closing_index: int | None = None
    for idx, line in enumerate(lines[1:], start=1):
        stripped = line.strip()
        if stripped in FRONT_MATTER_TERMINATORS:
            closing_index = idx
            break
        front_matter_lines.append(line)

    if closing_index is None:
        return {}, source

    raw_block = "\n".join(front_matter_lines)
    try:
        metadata = yaml.safe_load(raw_block) or {}
    except yaml.YAMLError as exc:
        if strict:
            raise TemplateSourceError(f"Invalid front matter block: {exc}") from exc
        return {}, source

    if not isinstance(metadata, dict):
        if strict:
            raise TemplateSourceError("Front matter must be a mapping of fields.")
        metadata = {}

    body_lines = lines[closing_index + 1 :]
    body = "\n".join(body_lines)
    if source.endswith("\n") and body:
        body += "\n"

    prefix = source[:prefix_len]
    return metadata, prefix + body


def parse_template_source(source: str) -> TemplateSource:
    """Parse a template file, validating the fields tagsmith understands."""
    metadata, body = split_front_matter(source, strict=True)
    parsed = TemplateSource(metadata=metadata, body=body)
    # Accessing the properties validates field types eagerly.
    _ = parsed.tag, parsed.stylesheet
    return parsed


def default_tag_name(relative_path: str) -> str:
    """Derive a tag name from a template file path.

    The base name is cut at its first dot, so ``cards/card.html`` gives
    ``card`` and ``button.tpl.njk`` gives ``button``.
    """
    name = PurePosixPath(relative_path.replace("\\", "/")).name
    stem = name.split(".", 1)[0]
    if not stem:
        raise TemplateSourceError(f"Cannot infer a tag name from '{relative_path}'")
    return stem


def _string_field(metadata: Mapping[str, Any], key: str) -> str | None:
    if key not in metadata or metadata[key] is None:
        return None
    value = metadata[key]
    if not isinstance(value, str):
        raise TemplateSourceError(
            f"Front matter field '{key}' must be a string, got {type(value).__name__}"
        )
    value = value.strip()
    if not value:
        raise TemplateSourceError(f"Front matter field '{key}' must not be empty")
    return value


__all__ = [
    "TemplateSource",
    "default_tag_name",
    "parse_template_source",
    "split_front_matter",
]
