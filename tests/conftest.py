from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
import sys

import pytest


SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from tagsmith.adapters.jinja import JinjaRenderer  # noqa: E402
from tagsmith.core.engine import ExpansionEngine  # noqa: E402
from tagsmith.core.registry import TemplateDefinition, TemplateRegistry  # noqa: E402


CARD_BODY = (
    '<div class="card"><h2>{{title}}</h2>'
    '<div class="card-body">{{content}}</div></div>'
)
CARD_CSS = ".card{border:1px solid #ccc}"


class RecordingPreprocessor:
    """Stylesheet preprocessor returning canned CSS and remembering its calls."""

    def __init__(self, stylesheets: dict[str, str]) -> None:
        self.stylesheets = stylesheets
        self.calls: list[str] = []

    def __call__(self, path: str) -> str:
        self.calls.append(path)
        return self.stylesheets[path]


@pytest.fixture
def card_definition() -> TemplateDefinition:
    return TemplateDefinition(tag_name="Card", body=CARD_BODY, stylesheet_reference="card.css")


@pytest.fixture
def preprocessor() -> RecordingPreprocessor:
    return RecordingPreprocessor({"card.css": CARD_CSS})


@pytest.fixture
def make_engine(
    preprocessor: RecordingPreprocessor,
) -> Callable[..., ExpansionEngine]:
    def factory(*definitions: TemplateDefinition, **options: object) -> ExpansionEngine:
        registry = TemplateRegistry(definitions).freeze()
        options.setdefault("preprocessor", preprocessor)
        return ExpansionEngine(registry, JinjaRenderer(), **options)  # type: ignore[arg-type]

    return factory
