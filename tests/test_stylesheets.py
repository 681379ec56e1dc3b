from __future__ import annotations

from pathlib import Path

import pytest

from tagsmith.adapters.stylesheets import FileStylesheetPreprocessor
from tagsmith.core.context import ExpansionContext
from tagsmith.core.exceptions import PreprocessError
from tagsmith.core.registry import TemplateDefinition
from tagsmith.core.stylesheets import StylesheetCollector


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        _ = message, exc

    def error(self, message: str, exc: BaseException | None = None) -> None:
        _ = message, exc

    def event(self, name: str, payload) -> None:
        self.events.append((name, dict(payload)))


def test_collector_compiles_each_tag_once(card_definition, preprocessor) -> None:
    emitter = RecordingEmitter()
    collector = StylesheetCollector(preprocessor, emitter=emitter)
    context = ExpansionContext()

    assert collector.collect(card_definition, context) is True
    assert collector.collect(card_definition, context) is False

    assert preprocessor.calls == ["card.css"]
    assert context.css == ".card{border:1px solid #ccc}"
    assert context.processed_tags == {"Card"}
    assert emitter.events == [("stylesheet_collected", {"tag": "Card", "stylesheet": "card.css"})]


def test_collector_ignores_templates_without_stylesheet(preprocessor) -> None:
    collector = StylesheetCollector(preprocessor)
    context = ExpansionContext()

    assert collector.collect(TemplateDefinition(tag_name="Plain", body="<p></p>"), context) is False
    assert preprocessor.calls == []
    assert context.processed_tags == set()


def test_collector_concatenates_in_processing_order() -> None:
    collector = StylesheetCollector(lambda path: f"/*{path}*/")
    context = ExpansionContext()

    for name in ("B", "A"):
        collector.collect(
            TemplateDefinition(tag_name=name, body="<p></p>", stylesheet_reference=f"{name}.css"),
            context,
        )

    assert context.css == "/*B.css*//*A.css*/"


def test_collector_requires_a_preprocessor(card_definition) -> None:
    collector = StylesheetCollector(None)

    with pytest.raises(PreprocessError) as excinfo:
        collector.collect(card_definition, ExpansionContext())

    assert excinfo.value.reference == "card.css"


def test_collector_wraps_preprocessor_failures(card_definition) -> None:
    def explode(path: str) -> str:
        raise ValueError(f"bad syntax in {path}")

    collector = StylesheetCollector(explode)
    context = ExpansionContext()

    with pytest.raises(PreprocessError) as excinfo:
        collector.collect(card_definition, context)

    assert "Card" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert not context.has_stylesheet("Card")


def test_file_preprocessor_reads_relative_references(tmp_path: Path) -> None:
    (tmp_path / "styles").mkdir()
    (tmp_path / "styles" / "card.css").write_text(".card{}", encoding="utf-8")

    preprocessor = FileStylesheetPreprocessor(tmp_path)

    assert preprocessor("styles/card.css") == ".card{}"
    assert preprocessor(str(tmp_path / "styles" / "card.css")) == ".card{}"


def test_file_preprocessor_reports_missing_files(tmp_path: Path) -> None:
    preprocessor = FileStylesheetPreprocessor(tmp_path)

    with pytest.raises(PreprocessError) as excinfo:
        preprocessor("missing.css")

    assert excinfo.value.reference == "missing.css"
    assert "missing.css" in str(excinfo.value)
