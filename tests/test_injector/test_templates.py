"""Tests for the Jinja2 renderer and the shipped templates (catalyst.injector.templates)."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from catalyst.injector import TemplateRenderer
from catalyst.modules import MODULES


pytestmark = pytest.mark.unit

VARIABLES = {
    "app_name": "my_app",
    "app_module": "MyApp",
    "web_module": "MyAppWeb",
    "docs_dir": "docs/catalyst",
}


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


class TestTemplateRenderer:
    def test_render_string(self, renderer: TemplateRenderer):
        assert renderer.render_string("{{ app_module }}.Repo", VARIABLES) == "MyApp.Repo"

    def test_undefined_variable_raises(self, renderer: TemplateRenderer):
        with pytest.raises(UndefinedError):
            renderer.render_string("{{ missing }}", {})

    def test_trailing_newline_kept(self, renderer: TemplateRenderer):
        assert renderer.render_string("x\n", {}) == "x\n"

    def test_slugify_filter(self, renderer: TemplateRenderer):
        assert renderer.render_string("{{ 'My_App' | slugify }}", {}) == "my-app"

    def test_list_templates_uses_posix_paths(self, tmp_path: Path):
        (tmp_path / "a" / "b").mkdir(parents=True)
        (tmp_path / "a" / "b" / "c.ex.j2").write_text("")
        (tmp_path / "a" / "skip.txt").write_text("")
        assert TemplateRenderer(tmp_path).list_templates("a") == ["a/b/c.ex.j2"]

    def test_list_templates_missing_prefix(self, renderer: TemplateRenderer):
        assert renderer.list_templates("does-not-exist") == []


class TestShippedTemplates:
    def test_every_module_has_documentation(self, renderer: TemplateRenderer):
        docs = set(renderer.list_templates("docs"))
        for descriptor in MODULES:
            assert f"docs/{descriptor.key}.md.j2" in docs

    def test_every_template_renders(self, renderer: TemplateRenderer):
        for template in renderer.list_templates():
            rendered = renderer.render(template, VARIABLES)
            assert rendered.strip(), template
            assert "{{" not in rendered, template

    def test_elixir_templates_use_app_module(self, renderer: TemplateRenderer):
        for template in renderer.list_templates():
            if template.endswith(".ex.j2"):
                rendered = renderer.render(template, VARIABLES)
                assert rendered.startswith("defmodule MyApp"), template
