"""CLI helper listing the tag templates of a template directory."""

from __future__ import annotations

from rich import box
from rich.table import Table
import typer

from tagsmith.api import load_registry
from tagsmith.core.exceptions import TagsmithError

from .._options import ConfigOption, TemplatesOption
from ..state import emit_error, get_cli_state
from ..utils import format_list, resolve_config


def list_templates(
    config: ConfigOption = None,
    templates: TemplatesOption = None,
) -> None:
    """Print a table listing the registered tag templates."""
    try:
        settings = resolve_config(config, templates=templates)
        registry = load_registry(settings)
    except TagsmithError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    table = Table(
        title=f"Tag templates in {settings.template_dir}",
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    table.add_column("Tag", style="magenta")
    table.add_column("Source", style="green")
    table.add_column("Stylesheet")
    table.add_column("Metadata")

    if not len(registry):
        table.add_row("-", "-", "-", "No templates found")
    for definition in registry:
        table.add_row(
            definition.tag_name,
            definition.source_path or "-",
            definition.stylesheet_reference or "-",
            format_list(sorted(definition.metadata)),
        )

    get_cli_state().console.print(table)


__all__ = ["list_templates"]
