"""Diagnostics emitted while loading templates and expanding documents."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Receiver of warnings, errors and structured expansion events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Default emitter of the engine; discards everything."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter writing diagnostics to a :mod:`logging` logger.

    Events with a known summary are logged at INFO, the others at DEBUG with
    their raw payload.
    """

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.log(logging.WARNING, message, exc_info=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.log(logging.ERROR, message, exc_info=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        summary = format_event_message(name, payload)
        if summary is None:
            self._logger.debug("event %s %r", name, dict(payload))
        else:
            self._logger.info(summary)


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a one-line summary for the events worth showing to users."""
    data = dict(payload)

    if name == "stylesheet_collected":
        tag = data.get("tag") or "<unknown>"
        reference = data.get("stylesheet") or "<unknown>"
        return f"Injected stylesheet {reference} for <{tag}>"

    if name == "document_expanded":
        passes = data.get("passes", 0)
        rewrites = data.get("rewrites", 0)
        source = data.get("source")
        prefix = f"{source}: " if source else ""
        return f"{prefix}expanded {rewrites} tag(s) in {passes} pass(es)"

    if name == "parser_fallback":
        return (
            f"HTML parser '{data.get('preferred')}' unavailable, "
            f"using '{data.get('fallback')}'"
        )

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
