from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from tagsmith.ui.cli import app


CARD_TEMPLATE = (
    "---\ntag: Card\nstylesheet: card.css\n---\n"
    '<div class="card"><h2>{{ title }}</h2>{{ content }}</div>\n'
)


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    templates = tmp_path / "components"
    templates.mkdir()
    (templates / "card.html").write_text(CARD_TEMPLATE, encoding="utf-8")
    styles = tmp_path / "styles"
    styles.mkdir()
    (styles / "card.css").write_text(".card{}", encoding="utf-8")
    site = tmp_path / "site"
    (site / "blog").mkdir(parents=True)
    (site / "index.html").write_text(
        '<html><head></head><body><Card title="Hi">Body</Card></body></html>',
        encoding="utf-8",
    )
    (site / "blog" / "post.html").write_text(
        "<html><head></head><body><p>No tags</p></body></html>",
        encoding="utf-8",
    )
    (site / "robots.txt").write_text("<Card></Card>", encoding="utf-8")
    return tmp_path


def _expand_args(project: Path, *extra: str) -> list[str]:
    return [
        "expand",
        str(project / "site"),
        "--templates",
        str(project / "components"),
        "--stylesheets",
        str(project / "styles"),
        *extra,
    ]


def test_expand_rewrites_site_in_place(project: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, _expand_args(project))

    assert result.exit_code == 0, result.output
    assert "Expanded 2 file(s) with 1 tag template(s)" in result.output
    index = (project / "site" / "index.html").read_text(encoding="utf-8")
    assert index == (
        "<html><head><style>.card{}</style></head><body>"
        '<div class="card"><h2>Hi</h2>Body</div>'
        "</body></html>"
    )
    assert (project / "site" / "robots.txt").read_text(encoding="utf-8") == "<Card></Card>"


def test_expand_writes_to_output_directory(project: Path) -> None:
    runner = CliRunner()
    output = project / "build"

    result = runner.invoke(app, _expand_args(project, "--output", str(output)))

    assert result.exit_code == 0, result.output
    assert (output / "blog" / "post.html").exists()
    assert "<style>.card{}</style>" in (output / "index.html").read_text(encoding="utf-8")
    assert "<Card" in (project / "site" / "index.html").read_text(encoding="utf-8")


def test_expand_reads_configuration_file(project: Path) -> None:
    (project / "tagsmith.yml").write_text(
        "template_dir: components\nstylesheet_root: styles\n", encoding="utf-8"
    )
    runner = CliRunner()

    result = runner.invoke(app, ["expand", str(project / "site" / "index.html")])

    assert result.exit_code == 0, result.output
    assert "Expanded 1 file(s)" in result.output
    assert "<h2>Hi</h2>" in (project / "site" / "index.html").read_text(encoding="utf-8")


def test_expand_reports_failures(project: Path) -> None:
    (project / "components" / "loop.html").write_text(
        "---\ntag: Loop\n---\n<div><Loop></Loop></div>", encoding="utf-8"
    )
    (project / "site" / "index.html").write_text("<Loop></Loop>", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, _expand_args(project, "--max-passes", "3", "--keep-going"))

    assert result.exit_code == 1
    assert "did not settle" in result.output
    assert "1 failure(s)" in result.output
    assert (project / "site" / "index.html").read_text(encoding="utf-8") == "<Loop></Loop>"


def test_expand_rejects_duplicate_templates(project: Path) -> None:
    (project / "components" / "other.html").write_text(
        "---\ntag: Card\n---\n<section></section>", encoding="utf-8"
    )
    runner = CliRunner()

    result = runner.invoke(app, _expand_args(project))

    assert result.exit_code == 1
    assert "Card" in result.output


def test_templates_command_lists_registry(project: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["templates", "--templates", str(project / "components")])

    assert result.exit_code == 0, result.output
    assert "Card" in result.output
    assert "card.css" in result.output


def test_templates_command_handles_empty_directory(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["templates", "--templates", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "No templates found" in result.output


def test_no_arguments_prints_help() -> None:
    runner = CliRunner()

    result = runner.invoke(app, [])

    assert "expand" in result.output
    assert "templates" in result.output


def test_cli_emitter_records_events() -> None:
    from tagsmith.ui.cli.diagnostics import CliEmitter
    from tagsmith.ui.cli.state import CLIState

    state = CLIState()
    emitter = CliEmitter(state)

    emitter.event("stylesheet_collected", {"tag": "Card", "stylesheet": "card.css"})
    emitter.event("document_expanded", {"passes": 2, "rewrites": 1})

    assert state.event_counts() == {"stylesheet_collected": 1, "document_expanded": 1}
    assert state.events[0] == ("stylesheet_collected", {"tag": "Card", "stylesheet": "card.css"})
    assert not emitter.debug_enabled


def test_verbose_errors_show_the_cause_chain(project: Path) -> None:
    (project / "styles" / "card.css").unlink()
    runner = CliRunner()

    result = runner.invoke(app, [*_expand_args(project), "-vv"])

    assert result.exit_code == 1
    assert "type: PreprocessError" in result.output
    assert "hint:" in result.output
    assert "caused by:" in result.output


def test_quiet_errors_hide_the_cause_chain(project: Path) -> None:
    (project / "styles" / "card.css").unlink()
    runner = CliRunner()

    result = runner.invoke(app, _expand_args(project))

    assert result.exit_code == 1
    assert "card.css" in result.output
    assert "caused by:" not in result.output
