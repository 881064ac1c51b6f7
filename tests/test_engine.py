"""Tests for MarkdownEngine presets and parser construction."""

import logging

import pytest

from marcado import MarcadoError, MarkdownEngine, ParserConfiguration, PresetError
from marcado.nodes import Heading, Link, Node, Paragraph
from marcado.parsing.blocks import ParagraphHandler


class NoteHandler:
    """Block handler for ``%%% text`` lines."""

    def parse(self, parser, stream, ast: list[Node]) -> bool:
        m = stream.peek().match(r"^%%% (.*)$")
        if not m:
            return False
        stream.consume()
        ast.append(Heading(level=6, children=parser.parse_inlines(m.group(1))))
        return True


class MentionHandler:
    """Inline handler turning ``@name`` into a profile link."""

    def parse(self, parser, text: str, state) -> list:
        import re

        def substitute(m: re.Match[str]) -> str:
            node = Link(children=["@" + m.group(1)], href="/u/" + m.group(1))
            return parser.add_inline(state, node)

        return parser.parse_inlines(re.sub(r"@(\w+)", substitute, text), state)


class TestPresets:
    """Built-in presets."""

    def test_default_presets(self) -> None:
        assert MarkdownEngine().presets == ("strict", "extended")

    def test_paragraph_handler_is_last(self) -> None:
        parser = MarkdownEngine().parser("strict")
        assert isinstance(parser.block_handlers[-1], ParagraphHandler)
        assert sum(isinstance(h, ParagraphHandler) for h in parser.block_handlers) == 1

    def test_unknown_preset(self) -> None:
        with pytest.raises(PresetError, match="Unknown parser type: nope") as exc_info:
            MarkdownEngine().parser("nope")
        assert exc_info.value.available == ["extended", "strict"]

    def test_preset_error_is_marcado_error(self) -> None:
        with pytest.raises(MarcadoError):
            MarkdownEngine().parser("nope")

    def test_extended_adds_footnotes(self) -> None:
        engine = MarkdownEngine()
        strict = engine.parser("strict")
        extended = engine.parser("extended")
        assert len(extended.block_handlers) == len(strict.block_handlers) + 1
        assert len(extended.inline_handlers) == len(strict.inline_handlers) + 1

    def test_each_call_builds_a_new_parser(self) -> None:
        engine = MarkdownEngine()
        assert engine.parser() is not engine.parser()


class TestRegistration:
    """Custom presets."""

    def test_custom_block_handler(self) -> None:
        engine = MarkdownEngine()
        config = ParserConfiguration(block=(NoteHandler(),), parent="strict")
        engine.register_parser("notes", config)
        ast = engine.parser("notes").parse("%%% remember\n\n*text*")
        assert ast[0] == Heading(level=6, children=["remember"])
        assert ast[1].children[0].type == "emphasis"

    def test_custom_inline_handler(self) -> None:
        engine = MarkdownEngine()
        engine.register_parser("social", {"inline": (MentionHandler(),), "parent": "strict"})
        ast = engine.parser("social").parse("hi @ana")
        assert ast == [Paragraph(children=["hi ", Link(children=["@ana"], href="/u/ana")])]

    def test_preset_without_parent_starts_empty(self) -> None:
        engine = MarkdownEngine()
        engine.register_parser("notes-only", ParserConfiguration(block=(NoteHandler(),)))
        parser = engine.parser("notes-only")
        assert len(parser.block_handlers) == 2
        assert parser.parse("# not a heading") == [Paragraph(children=["# not a heading"])]

    def test_parent_chain(self) -> None:
        engine = MarkdownEngine()
        engine.register_parser("a", ParserConfiguration(block=(NoteHandler(),), parent="extended"))
        engine.register_parser("b", ParserConfiguration(flags={"x": 1}, parent="a"))
        parser = engine.parser("b")
        assert parser.flags["x"] == 1
        assert len(parser.block_handlers) == len(engine.parser("extended").block_handlers) + 1

    def test_unknown_parent(self) -> None:
        engine = MarkdownEngine()
        engine.register_parser("orphan", ParserConfiguration(parent="missing"))
        with pytest.raises(PresetError, match="missing"):
            engine.parser("orphan")

    def test_inheritance_cycle(self) -> None:
        engine = MarkdownEngine()
        engine.register_parser("a", ParserConfiguration(parent="b"))
        engine.register_parser("b", ParserConfiguration(parent="a"))
        with pytest.raises(MarcadoError, match="cycle"):
            engine.parser("a")

    def test_handler_without_parse_rejected(self) -> None:
        with pytest.raises(TypeError, match="no parse"):
            MarkdownEngine().register_parser("bad", ParserConfiguration(block=(object(),)))

    def test_extra_configuration_at_build_time(self) -> None:
        engine = MarkdownEngine()
        parser = engine.parser("strict", ParserConfiguration(block=(NoteHandler(),)))
        assert parser.parse("%%% hi") == [Heading(level=6, children=["hi"])]

    def test_register_replaces(self) -> None:
        engine = MarkdownEngine()
        engine.register_parser("strict", ParserConfiguration())
        assert engine.presets == ("strict", "extended")
        assert engine.parser("strict").parse("# x") == [Paragraph(children=["# x"])]


class TestEngineRendering:
    """to_html and logging."""

    def test_to_html(self) -> None:
        engine = MarkdownEngine()
        assert engine.to_html(engine.parser().parse("# Hi")) == "<h1>Hi</h1>\n"

    def test_parser_build_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="marcado.engine"):
            MarkdownEngine().parser("strict")
        assert any("Building 'strict' parser" in record.getMessage() for record in caplog.records)
