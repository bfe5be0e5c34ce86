"""Tests for the Jinja2 TemplateRenderer (modulegen.scaffolder.templates)."""

from __future__ import annotations

import jinja2
import pytest

from modulegen.scaffolder.templates import TemplateRenderer


pytestmark = pytest.mark.unit


@pytest.fixture
def template_dir(tmp_path):
    """A template directory with two small templates."""
    root = tmp_path / "templates"
    (root / "nested").mkdir(parents=True)
    (root / "hello.txt.j2").write_text("Hello {{ name }}!\n", encoding="utf-8")
    (root / "nested" / "tab.j2").write_text("\t{{ value }}\n", encoding="utf-8")
    (root / "ignored.txt").write_text("not a template", encoding="utf-8")
    return root


class TestTemplateRenderer:
    def test_default_template_dir_ships_unit_templates(self):
        renderer = TemplateRenderer()
        assert renderer.list_templates() == [
            "Makefile.j2",
            "docs.md.j2",
            "go.mod.j2",
            "unit.go.j2",
            "unit_test.go.j2",
        ]

    def test_render(self, template_dir):
        renderer = TemplateRenderer(template_dir)
        assert renderer.render("hello.txt.j2", {"name": "World"}) == "Hello World!\n"

    def test_keeps_trailing_newline_and_tabs(self, template_dir):
        renderer = TemplateRenderer(template_dir)
        assert renderer.render("nested/tab.j2", {"value": "x"}) == "\tx\n"

    def test_does_not_escape_html(self, template_dir):
        renderer = TemplateRenderer(template_dir)
        assert renderer.render("hello.txt.j2", {"name": '<a href="x">'}) == 'Hello <a href="x">!\n'

    def test_missing_variable_is_an_error(self, template_dir):
        renderer = TemplateRenderer(template_dir)
        with pytest.raises(jinja2.UndefinedError):
            renderer.render("hello.txt.j2", {})

    def test_missing_template_is_an_error(self, template_dir):
        renderer = TemplateRenderer(template_dir)
        with pytest.raises(jinja2.TemplateNotFound):
            renderer.render("nope.j2", {})

    def test_render_to_file_creates_parents(self, template_dir, tmp_path):
        renderer = TemplateRenderer(template_dir)
        out = renderer.render_to_file("hello.txt.j2", tmp_path / "a" / "b" / "hello.txt", {"name": "Go"})
        assert out == tmp_path / "a" / "b" / "hello.txt"
        assert out.read_bytes() == b"Hello Go!\n"

    def test_list_templates_includes_nested(self, template_dir):
        renderer = TemplateRenderer(template_dir)
        assert renderer.list_templates() == ["hello.txt.j2", "nested/tab.j2"]

    def test_list_templates_of_missing_dir(self, tmp_path):
        assert TemplateRenderer(tmp_path / "missing").list_templates() == []
