"""Route expansion diagnostics to the rich CLI output."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tagsmith.core.diagnostics import format_event_message

from .state import CLIState, emit_error, emit_info, emit_warning, get_cli_state


class CliEmitter:
    """Diagnostic emitter recording events on the CLI state.

    Known events are summarised on stdout with ``-v``; every event stays
    available on :attr:`CLIState.events` for the end-of-run report.
    """

    def __init__(self, state: CLIState | None = None) -> None:
        self.state = state or get_cli_state()

    @property
    def debug_enabled(self) -> bool:
        return self.state.show_tracebacks

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.state.record_event(name, payload)
        summary = format_event_message(name, payload)
        if summary:
            emit_info(summary)


__all__ = ["CliEmitter"]
