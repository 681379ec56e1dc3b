"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


TEMPLATES_PANEL = "Templates"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to a tagsmith.yml file (defaults to ./tagsmith.yml when present).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=TEMPLATES_PANEL,
    ),
]

TemplatesOption = Annotated[
    Path | None,
    typer.Option(
        "--templates",
        "-t",
        help="Directory scanned recursively for tag templates (.html, .njk).",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        rich_help_panel=TEMPLATES_PANEL,
    ),
]

StylesheetRootOption = Annotated[
    Path | None,
    typer.Option(
        "--stylesheets",
        help="Base directory for relative stylesheet references.",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        rich_help_panel=TEMPLATES_PANEL,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write expanded files under this directory instead of rewriting in place.",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

MaxPassesOption = Annotated[
    int | None,
    typer.Option(
        "--max-passes",
        min=0,
        help="Abort a document after this many expansion passes (0 disables the guard).",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

KeepGoingOption = Annotated[
    bool,
    typer.Option(
        "--keep-going/--fail-fast",
        help="Continue with the remaining files when a document fails to expand.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerbosityOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase diagnostic verbosity (repeatable).",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks on failure.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
