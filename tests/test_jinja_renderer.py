from __future__ import annotations

from markupsafe import Markup
import pytest

from tagsmith.adapters.jinja import JinjaRenderer, build_environment
from tagsmith.core.exceptions import RenderError


def test_renders_variables_with_escaping() -> None:
    renderer = JinjaRenderer()

    html = renderer.render("<h2>{{ title }}</h2>", {"title": "Fish & <Chips>"})

    assert html == "<h2>Fish &amp; &lt;Chips&gt;</h2>"


def test_content_is_inserted_verbatim() -> None:
    renderer = JinjaRenderer()

    html = renderer.render("<div>{{ content }}</div>", {"content": "<b>bold</b> &amp; more"})

    assert html == "<div><b>bold</b> &amp; more</div>"


def test_missing_variables_render_empty() -> None:
    renderer = JinjaRenderer()

    assert renderer.render("<p>{{ missing }}</p>", {}) == "<p></p>"


def test_autoescape_can_be_disabled() -> None:
    renderer = JinjaRenderer(autoescape=False)

    assert renderer.render("{{ value }}", {"value": "<i>"}) == "<i>"


def test_control_flow_is_supported() -> None:
    renderer = JinjaRenderer()
    source = "<ul>\n{% for item in items.split(',') %}\n<li>{{ item }}</li>\n{% endfor %}\n</ul>"

    html = renderer.render(source, {"items": "a,b"})

    assert html == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>"


def test_compiled_templates_are_cached() -> None:
    renderer = JinjaRenderer()
    source = "<p>{{ text }}</p>"

    renderer.render(source, {"text": "one"})
    first = renderer._templates[source]
    renderer.render(source, {"text": "two"})

    assert renderer._templates[source] is first


def test_syntax_errors_raise_render_error() -> None:
    renderer = JinjaRenderer()

    with pytest.raises(RenderError) as excinfo:
        renderer.render("<p>{% if %}</p>", {})

    assert "line 1" in str(excinfo.value)
    assert excinfo.value.tag_name is None


def test_referenced_variables_lists_undeclared_names() -> None:
    renderer = JinjaRenderer()
    source = "{% set local = 1 %}<a href=\"{{ href }}\">{{ content }}{{ local }}</a>"

    assert renderer.referenced_variables(source) == frozenset({"href", "content"})


def test_custom_environment_is_used() -> None:
    environment = build_environment()
    environment.filters["shout"] = lambda value: f"{value}!".upper()
    renderer = JinjaRenderer(environment)

    assert renderer.render("{{ word | shout }}", {"word": "hey"}) == "HEY!"


def test_markup_values_are_not_double_escaped() -> None:
    renderer = JinjaRenderer()

    assert renderer.render("{{ attrs }}", {"attrs": Markup('class="x"')}) == 'class="x"'
