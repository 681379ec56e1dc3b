"""Expand tag templates in the HTML files of a built site."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from tagsmith.api import build_engine
from tagsmith.core.exceptions import TagsmithError

from .._options import (
    ConfigOption,
    DebugOption,
    KeepGoingOption,
    MaxPassesOption,
    OutputOption,
    StylesheetRootOption,
    TemplatesOption,
    VerbosityOption,
)
from ..diagnostics import CliEmitter
from ..state import emit_error, emit_info, set_cli_state
from ..utils import collect_site_files, resolve_config


SiteArgument = Annotated[
    Path,
    typer.Argument(
        metavar="SITE",
        help="Built site directory (or a single HTML file) to expand.",
        exists=True,
        file_okay=True,
        dir_okay=True,
        resolve_path=True,
    ),
]


def expand(
    site: SiteArgument,
    config: ConfigOption = None,
    templates: TemplatesOption = None,
    stylesheets: StylesheetRootOption = None,
    output: OutputOption = None,
    max_passes: MaxPassesOption = None,
    keep_going: KeepGoingOption = False,
    verbose: VerbosityOption = 0,
    debug: DebugOption = False,
) -> None:
    """Replace custom tags with their templates in every HTML file of SITE."""
    state = set_cli_state(verbosity=verbose, debug=debug)
    try:
        settings = resolve_config(
            config, templates=templates, stylesheets=stylesheets, max_passes=max_passes
        )
        engine = build_engine(settings, emitter=CliEmitter(state))
    except TagsmithError as exc:
        if debug:
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    base = site if site.is_dir() else site.parent
    files = collect_site_files(
        site, settings.output_suffixes, exclude=(settings.template_dir,)
    )

    written = 0
    failures = 0
    for path in files:
        relative = path.relative_to(base)
        try:
            html = path.read_text(encoding="utf-8")
            result = engine.expand_document(html, source=relative.as_posix())
        except (OSError, TagsmithError) as exc:
            failures += 1
            if debug:
                raise
            emit_error(f"{relative.as_posix()}: {exc}", exception=exc)
            if not keep_going:
                break
            continue

        target = (output / relative) if output is not None else path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result.html, encoding="utf-8")
        written += 1

    state.console.print(
        f"Expanded {written} file(s) with {len(engine.registry)} tag template(s)"
        + (f", {failures} failure(s)" if failures else "")
    )
    injected = state.event_counts()["stylesheet_collected"]
    if injected:
        emit_info(f"Injected {injected} stylesheet(s) across the site")
    if failures:
        raise typer.Exit(code=1)


__all__ = ["expand"]
