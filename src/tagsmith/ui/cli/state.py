"""Per-invocation CLI state: verbosity, consoles and collected expansion events."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import TYPE_CHECKING, Any, TextIO

import click

from tagsmith.core.exceptions import exception_hint, exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_info",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]

_LEVEL_STYLES = {"warning": "yellow", "error": "red"}


@dataclass(slots=True)
class CLIState:
    """Options shared by every command of one tagsmith invocation."""

    verbosity: int = 0
    show_tracebacks: bool = False
    events: list[tuple[str, dict[str, Any]]] = field(default_factory=list, init=False)
    _consoles: dict[str, Console] = field(default_factory=dict, init=False, repr=False)

    @property
    def console(self) -> Console:
        return self._console_for("stdout", sys.stdout)

    @property
    def err_console(self) -> Console:
        return self._console_for("stderr", sys.stderr, highlight=False)

    def _console_for(self, key: str, stream: TextIO, **options: Any) -> Console:
        # Test runners swap the standard streams between invocations.
        console = self._consoles.get(key)
        if console is None or console.file is not stream:
            from rich.console import Console

            console = Console(file=stream, **options)
            self._consoles[key] = console
        return console

    def record_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        self.events.append((name, dict(payload or {})))

    def event_counts(self) -> Counter[str]:
        """Return how many times each event name was recorded."""
        return Counter(name for name, _ in self.events)


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("tagsmith_cli_state", default=None)


def get_cli_state(ctx: click.Context | None = None, *, create: bool = True) -> CLIState:
    """Return the state bound to the active click context, creating it on demand."""
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None:
        root = ctx.find_root()
        if not isinstance(root.obj, CLIState):
            if not create:
                raise RuntimeError("CLI state is not initialised for this context.")
            root.obj = CLIState()
        _STATE_VAR.set(root.obj)
        return root.obj

    state = _STATE_VAR.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised for this context.")
        state = CLIState()
        _STATE_VAR.set(state)
    return state


def set_cli_state(
    *,
    ctx: click.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    """Apply command line diagnostics flags to the current state."""
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print ``message`` according to its level and the current verbosity.

    ``info`` messages only appear with ``-v``. Warnings and errors always go to
    stderr; ``-v`` adds the exception type and its root cause, ``-vv`` the
    whole cause chain.
    """
    state = get_cli_state()
    if level == "info":
        if state.verbosity >= 1:
            state.console.log(message)
        return

    from rich.text import Text

    style = _LEVEL_STYLES.get(level, "red")
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))

    details: list[str] = []
    if exception is not None and state.verbosity >= 1:
        details.append(f"type: {type(exception).__name__}")
        hint = exception_hint(exception)
        if hint and hint not in message:
            details.append(f"hint: {hint}")
        if state.verbosity >= 2:
            causes = exception_messages(exception)[1:]
            if causes:
                details.append("caused by:")
                details.extend(f"  {cause}" for cause in causes)
    if details:
        text.append("\n" + "\n".join(details), style=style)

    state.err_console.print(text)


def emit_info(message: str) -> None:
    render_message("info", message)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether ``--debug`` asked for full tracebacks."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False
