from __future__ import annotations

from pathlib import Path

import pytest

from tagsmith.core.config import ConfigError, TagsmithConfig, find_config_file, load_config


def test_defaults_resolve_against_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    config = load_config()

    assert config.template_dir == (tmp_path / "_tags").resolve()
    assert config.stylesheet_root == tmp_path.resolve()
    assert config.extensions == [".html", ".njk"]
    assert config.max_passes == 100


def test_file_paths_are_relative_to_the_file(tmp_path: Path) -> None:
    project = tmp_path / "site"
    project.mkdir()
    config_file = project / "tagsmith.yml"
    config_file.write_text(
        "template_dir: components\nstylesheet_root: styles\nextensions: [HTML, '.jinja']\nmax_passes: 7\n",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.template_dir == (project / "components").resolve()
    assert config.stylesheet_root == (project / "styles").resolve()
    assert config.extensions == [".html", ".jinja"]
    assert config.max_passes == 7


def test_overrides_take_precedence_and_none_is_ignored(tmp_path: Path) -> None:
    config_file = tmp_path / "tagsmith.yml"
    config_file.write_text("parser: lxml\nautoescape: false\n", encoding="utf-8")

    config = load_config(config_file, parser="html5lib", autoescape=None)

    assert config.parser == "html5lib"
    assert config.autoescape is False


@pytest.mark.parametrize(
    "content",
    ["unknown_key: 1\n", "max_passes: 0\n", "extensions: ['  ']\n", "- a list\n", "key: [broken\n"],
)
def test_invalid_files_raise_config_error(tmp_path: Path, content: str) -> None:
    config_file = tmp_path / "tagsmith.yml"
    config_file.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(config_file)


def test_missing_file_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yml")


def test_find_config_file(tmp_path: Path) -> None:
    assert find_config_file(tmp_path) is None

    (tmp_path / "tagsmith.yaml").write_text("{}", encoding="utf-8")

    assert find_config_file(tmp_path) == (tmp_path / "tagsmith.yaml").resolve()


def test_max_passes_accepts_none() -> None:
    assert TagsmithConfig(max_passes=None).max_passes is None
