"""Configuration model for tagsmith builds.

TagsmithConfig

`template_dir` (`Path`)
: Directory scanned recursively for tag templates.

`extensions` (`list[str]`)
: File suffixes recognised as tag templates. Other files are ignored.

`stylesheet_root` (`Path | None`)
: Base directory for relative ``stylesheet`` references. Defaults to the
  directory holding the configuration file, or the working directory.

`parser` (`str`)
: BeautifulSoup backend used to parse full documents (``html.parser``,
  ``lxml`` or ``html5lib``).

`max_passes` (`int | None`)
: Upper bound on expansion passes per document. ``None`` removes the guard,
  which lets self-referencing templates loop forever.

`autoescape` (`bool`)
: Escape variables rendered into template bodies.

`output_suffixes` (`list[str]`)
: Suffixes of site files the command line expands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .exceptions import TagsmithError


DEFAULT_TEMPLATE_EXTENSIONS: tuple[str, ...] = (".html", ".njk")
DEFAULT_CONFIG_FILENAMES: tuple[str, ...] = ("tagsmith.yml", "tagsmith.yaml")


class ConfigError(TagsmithError):
    """Raised when a configuration file cannot be loaded."""


class TagsmithConfig(BaseModel):
    """Settings shared by the engine factory and the command line."""

    model_config = ConfigDict(extra="forbid")

    template_dir: Path = Path("_tags")
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_TEMPLATE_EXTENSIONS))
    stylesheet_root: Path | None = None
    parser: str = "html.parser"
    max_passes: int | None = Field(default=100, ge=1)
    autoescape: bool = True
    output_suffixes: list[str] = Field(default_factory=lambda: [".html"])

    @field_validator("extensions", "output_suffixes")
    @classmethod
    def normalise_suffixes(cls, value: list[str]) -> list[str]:
        """Lower-case suffixes and make sure they start with a dot."""
        normalised: list[str] = []
        for suffix in value:
            candidate = suffix.strip().lower()
            if not candidate:
                continue
            if not candidate.startswith("."):
                candidate = f".{candidate}"
            if candidate not in normalised:
                normalised.append(candidate)
        if not normalised:
            raise ValueError("At least one suffix is required.")
        return normalised

    def resolve_paths(self, base_dir: Path) -> TagsmithConfig:
        """Return a copy whose relative paths are anchored at ``base_dir``."""
        updates: dict[str, Any] = {}
        if not self.template_dir.is_absolute():
            updates["template_dir"] = (base_dir / self.template_dir).resolve()
        if self.stylesheet_root is None:
            updates["stylesheet_root"] = base_dir.resolve()
        elif not self.stylesheet_root.is_absolute():
            updates["stylesheet_root"] = (base_dir / self.stylesheet_root).resolve()
        return self.model_copy(update=updates)


def find_config_file(start: Path | None = None) -> Path | None:
    """Return the first ``tagsmith.yml`` found in ``start``, if any."""
    base = (start or Path.cwd()).resolve()
    for name in DEFAULT_CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | str | None = None, **overrides: Any) -> TagsmithConfig:
    """Load settings from a YAML file, applying keyword ``overrides`` on top.

    Relative paths in the file are resolved against the file's directory;
    without a file they are resolved against the working directory.
    """
    payload: dict[str, Any] = {}
    base_dir = Path.cwd()
    if path is not None:
        config_path = Path(path).expanduser()
        try:
            raw = config_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Unable to read configuration file '{config_path}': {exc}") from exc
        try:
            loaded = yaml.safe_load(raw) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in '{config_path}': {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"Configuration file '{config_path}' must contain a mapping.")
        payload.update(loaded)
        base_dir = config_path.resolve().parent

    payload.update({key: value for key, value in overrides.items() if value is not None})
    try:
        config = TagsmithConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid tagsmith configuration: {exc}") from exc
    return config.resolve_paths(base_dir)


__all__ = [
    "DEFAULT_CONFIG_FILENAMES",
    "DEFAULT_TEMPLATE_EXTENSIONS",
    "ConfigError",
    "TagsmithConfig",
    "find_config_file",
    "load_config",
]
