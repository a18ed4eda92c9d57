"""
Field registry and edit capture.

Capture reads back only regions that are editable, inside the content
container, one FieldEdit per region.
"""

import pytest

from pagekit.capture import capture
from pagekit.fields import EditModeInactive, FieldRegistry
from pagekit.renderer import render
from pagekit.types import BaseContent, RenderContext, RenderOptions, Region


def make_base():
    return BaseContent(
        title="Test Page",
        layout="{{{regions.a}}}<section>{{{regions.b}}}</section>{{{regions.c}}}",
        regions=[
            Region(id="a", tag="h1", html="Alpha"),
            Region(id="b", tag="p", html='Bravo <a href="/x">link</a>'),
            Region(id="c", tag="pre", html="line one<br />line two"),
        ],
    )


def render_page(edit_mode=False):
    return render(make_base(), RenderContext.canonical(), RenderOptions(edit_mode=edit_mode))


class TestFieldRegistry:
    def test_ids_in_document_order(self):
        registry = FieldRegistry.from_html(render_page())
        assert registry.ids == ["a", "b", "c"]

    def test_text_reads_displayed_text(self):
        registry = FieldRegistry.from_html(render_page())
        assert registry.text("a") == "Alpha"
        assert registry.text("b") == "Bravo link"
        assert registry.text("c") == "line one\nline two"

    def test_edit_mode_detected_from_document(self):
        assert FieldRegistry.from_html(render_page()).edit_mode is False
        assert FieldRegistry.from_html(render_page(edit_mode=True)).edit_mode is True

    def test_toggle_flips_presentation_not_content(self):
        registry = FieldRegistry.from_html(render_page())
        before = registry.as_mapping()

        registry.set_edit_mode(True)
        assert 'contenteditable="false"' not in registry.to_html()
        assert registry.as_mapping() == before

        registry.set_edit_mode(False)
        assert 'contenteditable="true"' not in registry.to_html()
        assert registry.as_mapping() == before

    def test_set_text_requires_edit_mode(self):
        registry = FieldRegistry.from_html(render_page())
        with pytest.raises(EditModeInactive):
            registry.set_text("a", "Changed")

    def test_set_text_replaces_markup_with_plain_text(self):
        registry = FieldRegistry.from_html(render_page())
        registry.set_edit_mode(True)
        registry.set_text("b", "<b>not bold</b>\nsecond")
        assert registry.text("b") == "<b>not bold</b>\nsecond"
        assert "<b>" not in registry.to_html()

    def test_unknown_region(self):
        registry = FieldRegistry.from_html(render_page(edit_mode=True))
        with pytest.raises(KeyError):
            registry.set_text("missing", "x")

    def test_no_container(self):
        registry = FieldRegistry.from_html("<html><body><p>nothing</p></body></html>")
        assert registry.ids == []
        assert registry.container is None


class TestCapture:
    def test_capture_outside_edit_mode_is_empty(self):
        assert capture(render_page()) == []

    def test_capture_every_editable_region(self):
        edits = capture(render_page(edit_mode=True))
        assert {e.id: e.text for e in edits} == {
            "a": "Alpha",
            "b": "Bravo link",
            "c": "line one\nline two",
        }

    def test_capture_from_registry_reflects_live_edits(self):
        registry = FieldRegistry.from_html(render_page())
        registry.set_edit_mode(True)
        registry.set_text("a", "Hello")

        edits = capture(registry)

        assert len(edits) == 3
        assert {e.id: e.text for e in edits}["a"] == "Hello"

    def test_capture_ignores_regions_outside_container(self):
        html = (
            '<div id="outside"><h1 contenteditable="true">Nope</h1></div>'
            '<main id="content"><div id="inside"><p contenteditable="true">Yes</p></div></main>'
        )
        edits = capture(html)
        assert [(e.id, e.text) for e in edits] == [("inside", "Yes")]

    def test_capture_custom_container(self):
        html = '<section id="editor"><div id="x"><p contenteditable="true">X</p></div></section>'
        assert capture(html) == []
        assert [e.id for e in capture(html, container_id="editor")] == ["x"]

    def test_capture_is_pure(self):
        html = render_page(edit_mode=True)
        assert capture(html) == capture(html)
