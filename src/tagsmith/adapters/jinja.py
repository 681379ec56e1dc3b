"""Jinja2 renderer for tag template bodies."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from threading import Lock
from typing import Any

from jinja2 import Environment, Template, TemplateError, TemplateSyntaxError, meta
from markupsafe import Markup

from tagsmith.core.engine import CONTENT_VARIABLE
from tagsmith.core.exceptions import RenderError


def build_environment(*, autoescape: bool = True) -> Environment:
    """Return the default environment used to render tag templates."""
    return Environment(
        autoescape=autoescape,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class JinjaRenderer:
    """Render template bodies with Jinja2.

    Variables listed in ``safe_variables`` hold HTML produced by the document
    parser (the inner content of the usage element) and are never escaped.
    """

    def __init__(
        self,
        environment: Environment | None = None,
        *,
        autoescape: bool = True,
        safe_variables: Collection[str] = (CONTENT_VARIABLE,),
    ) -> None:
        self.environment = environment or build_environment(autoescape=autoescape)
        self.safe_variables = frozenset(safe_variables)
        self._templates: dict[str, Template] = {}
        self._lock = Lock()

    def render(self, template_source: str, variables: Mapping[str, Any]) -> str:
        context = dict(variables)
        for name in self.safe_variables:
            value = context.get(name)
            if isinstance(value, str) and not isinstance(value, Markup):
                context[name] = Markup(value)
        try:
            template = self._compile(template_source)
            return template.render(context)
        except TemplateError as exc:
            raise RenderError(_describe(exc)) from exc

    def referenced_variables(self, template_source: str) -> frozenset[str]:
        """Return the undeclared variables a template body reads."""
        try:
            ast = self.environment.parse(template_source)
        except TemplateError as exc:
            raise RenderError(_describe(exc)) from exc
        return frozenset(meta.find_undeclared_variables(ast))

    def _compile(self, template_source: str) -> Template:
        template = self._templates.get(template_source)
        if template is None:
            with self._lock:
                template = self._templates.get(template_source)
                if template is None:
                    template = self.environment.from_string(template_source)
                    self._templates[template_source] = template
        return template


def _describe(exc: TemplateError) -> str:
    if isinstance(exc, TemplateSyntaxError) and exc.lineno:
        return f"Template syntax error on line {exc.lineno}: {exc.message}"
    return f"Template rendering failed: {exc}"


__all__ = ["JinjaRenderer", "build_environment"]
