"""Tests for the plugin registry and the footnotes plugin."""

import pytest

from marcado import Markdown, MarkdownEngine, PluginError
from marcado.nodes import FootnoteDefinition, FootnoteReference, Paragraph
from marcado.plugins import (
    BUILTIN_PLUGINS,
    FootnotesPlugin,
    MarcadoPlugin,
    get_plugin,
    plugin_configuration,
    register_plugin,
)


@pytest.fixture
def extended():
    return MarkdownEngine().parser("extended")


class TestRegistry:
    """Plugin lookup and configuration."""

    def test_footnotes_registered(self) -> None:
        assert BUILTIN_PLUGINS["footnotes"] is FootnotesPlugin
        assert isinstance(get_plugin("footnotes"), MarcadoPlugin)

    def test_unknown_plugin(self) -> None:
        with pytest.raises(KeyError, match="Unknown plugin: 'nope'"):
            get_plugin("nope")

    def test_all_selects_every_plugin(self) -> None:
        everything = plugin_configuration(["all"])
        footnotes = plugin_configuration(["footnotes"])
        assert len(everything.block) == len(footnotes.block)

    def test_duplicates_applied_once(self) -> None:
        config = plugin_configuration(["footnotes", "footnotes", "all"])
        assert len(config.block) == 1
        assert len(config.inline) == 1

    def test_installed_plugin_skipped(self) -> None:
        installed = plugin_configuration(["footnotes"])
        config = plugin_configuration(["footnotes"], installed=installed)
        assert config.block == ()
        assert config.inline == ()

    def test_plugin_on_preset_that_already_has_it(self) -> None:
        engine = MarkdownEngine()
        extended = engine.parser("extended")
        doubled = engine.parser("extended", plugins=["footnotes"])
        assert len(doubled.block_handlers) == len(extended.block_handlers)
        assert len(doubled.inline_handlers) == len(extended.inline_handlers)

    def test_plugin_on_preset_without_it(self) -> None:
        engine = MarkdownEngine()
        parser = engine.parser("strict", plugins=["footnotes"])
        assert len(parser.block_handlers) == len(engine.parser("extended").block_handlers)

    def test_markdown_extended_with_footnotes_plugin(self) -> None:
        html = Markdown("extended", plugins=["footnotes"])("a[^1]\n\n[^1]: Note.")
        assert html.count('<sup class="footnote-ref">') == 1
        assert html.count('<li id="fn-1">') == 1

    def test_invalid_handler_raises_plugin_error(self) -> None:
        @register_plugin("broken-for-test")
        class BrokenPlugin:
            @property
            def name(self) -> str:
                return "broken-for-test"

            def block_handlers(self):
                return (object(),)

            def inline_handlers(self):
                return ()

        try:
            with pytest.raises(PluginError, match="broken-for-test"):
                plugin_configuration(["broken-for-test"])
        finally:
            del BUILTIN_PLUGINS["broken-for-test"]


class TestFootnotes:
    """``[^id]`` references and ``[^id]: text`` definitions."""

    def test_reference_and_definition(self, extended) -> None:
        ast = extended.parse("Text[^1]\n\n[^1]: A note.")
        assert ast == [
            Paragraph(children=["Text", FootnoteReference(id="1", source="[^1]")]),
            FootnoteDefinition(id="1", children=[Paragraph(children=["A note."])]),
        ]

    def test_multiline_definition(self, extended) -> None:
        ast = extended.parse("[^note]: First.\n\n    Second.")
        definition = ast[0]
        assert definition.children == [
            Paragraph(children=["First."]),
            Paragraph(children=["Second."]),
        ]

    def test_definition_ends_at_unindented_line(self, extended) -> None:
        ast = extended.parse("[^a]: one\n\nafter")
        assert ast[1] == Paragraph(children=["after"])

    def test_strict_leaves_footnote_syntax_alone(self) -> None:
        assert MarkdownEngine().parser("strict").parse("a[^1]") == [Paragraph(children=["a[^1]"])]

    def test_render(self) -> None:
        html = Markdown(plugins=["footnotes"])("Text[^1]\n\n[^1]: Note.")
        assert html == (
            '<p>Text<sup class="footnote-ref"><a href="#fn-1" id="fnref-1">1</a></sup></p>\n'
            '<section class="footnotes">\n<ol>\n<li id="fn-1">\n<p>Note.</p>\n'
            '<a href="#fnref-1">↩</a>\n</li>\n</ol>\n</section>\n'
        )

    def test_numbered_by_first_reference(self) -> None:
        html = Markdown("extended")("a[^x] b[^y] c[^x]\n\n[^y]: Y\n[^x]: X")
        assert 'id="fnref-x">1</a>' in html
        assert 'id="fnref-y">2</a>' in html
        assert html.index('<li id="fn-x">') < html.index('<li id="fn-y">')

    def test_reference_without_definition_renders_source(self) -> None:
        assert Markdown("extended")("a[^missing]") == "<p>a[^missing]</p>\n"
