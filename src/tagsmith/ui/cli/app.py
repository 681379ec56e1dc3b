"""Typer application wiring for the tagsmith CLI."""

from __future__ import annotations

import typer

from .commands.expand import expand
from .commands.templates import list_templates
from .state import debug_enabled, emit_error, get_cli_state


app = typer.Typer(
    help="Expand custom HTML tags into their tag templates.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)

app.command("expand")(expand)
app.command("templates")(list_templates)


def _print_traceback(exc: BaseException) -> None:
    from rich.traceback import Traceback

    state = get_cli_state()
    state.err_console.print(
        Traceback.from_exception(
            type(exc), exc, exc.__traceback__, show_locals=state.verbosity >= 2
        )
    )


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Interrupted.")
        raise SystemExit(130) from exc
    except (typer.Exit, SystemExit):
        raise
    except Exception as exc:  # pragma: no cover - unexpected failures
        if debug_enabled():
            _print_traceback(exc)
        else:
            emit_error(str(exc) or type(exc).__name__, exception=exc)
        raise SystemExit(1) from exc


__all__ = ["app", "main"]
