"""Once-per-document collection of tag template stylesheets."""

from __future__ import annotations

import logging

from .context import ExpansionContext
from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import PreprocessError, TagsmithError
from .protocols import StylesheetPreprocessor
from .registry import TemplateDefinition


logger = logging.getLogger(__name__)


class StylesheetCollector:
    """Compile the stylesheet of each tag used in a document exactly once."""

    def __init__(
        self,
        preprocessor: StylesheetPreprocessor | None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.preprocessor = preprocessor
        self.emitter = emitter or NullEmitter()

    def collect(self, definition: TemplateDefinition, context: ExpansionContext) -> bool:
        """Append the compiled stylesheet of ``definition`` unless already emitted.

        Returns True when new CSS was added to the context.
        """
        reference = definition.stylesheet_reference
        if reference is None or context.has_stylesheet(definition.tag_name):
            return False
        if self.preprocessor is None:
            raise PreprocessError(
                f"Tag template '{definition.tag_name}' declares stylesheet "
                f"'{reference}' but no stylesheet preprocessor is configured.",
                reference=reference,
            )

        try:
            css = self.preprocessor(reference)
        except TagsmithError:
            raise
        except Exception as exc:
            raise PreprocessError(
                f"Failed to compile stylesheet '{reference}' for tag "
                f"'{definition.tag_name}': {exc}",
                reference=reference,
            ) from exc

        context.add_stylesheet(definition.tag_name, str(css))
        logger.debug("Collected stylesheet %s for tag %s", reference, definition.tag_name)
        self.emitter.event(
            "stylesheet_collected",
            {"tag": definition.tag_name, "stylesheet": reference},
        )
        return True


__all__ = ["StylesheetCollector"]
