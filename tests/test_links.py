"""Tests for inline links, images and reference resolution."""

from marcado import parse, render
from marcado.nodes import Image, Link, LinkDefinition, Paragraph


def _inlines(source: str) -> list:
    ast = parse(source)
    assert isinstance(ast[0], Paragraph), ast
    return ast[0].children


class TestInlineLinks:
    """``[text](href "title")``."""

    def test_balanced_brackets_in_text(self) -> None:
        assert _inlines("[a[b]c](d)") == [
            Link(children=["a[b]c"], href="d", source="[a[b]c](d)")
        ]

    def test_title(self) -> None:
        link = _inlines('[t](http://x "T")')[0]
        assert link.href == "http://x"
        assert link.title == "T"

    def test_title_requires_whitespace(self) -> None:
        link = _inlines("[t](http://x'T')")[0]
        assert link.href == "http://x'T'"
        assert link.title is None

    def test_angle_bracket_destination(self) -> None:
        assert _inlines("[t](<a b>)")[0].href == "a b"

    def test_parentheses_in_destination(self) -> None:
        assert _inlines("[t](a(b)c)")[0].href == "a(b)c"

    def test_escape_in_destination(self) -> None:
        assert _inlines("[t](a\\_b)")[0].href == "a_b"

    def test_surrounding_text(self) -> None:
        children = _inlines("see [here](/x) now")
        assert children[0] == "see "
        assert isinstance(children[1], Link)
        assert children[2] == " now"

    def test_link_text_inlines(self) -> None:
        link = _inlines("[**bold**](/x)")[0]
        assert link.children[0].type == "strong"

    def test_links_never_nest(self) -> None:
        link = _inlines("[a [b](c) d](e)")[0]
        assert link.href == "e"
        assert link.children == ["a [b](c) d"]

    def test_source_has_no_placeholders(self) -> None:
        link = _inlines("[`x`](u)")[0]
        assert isinstance(link, Link)
        assert "\x02" not in link.source
        assert "\x03" not in link.source

    def test_unclosed_target_is_text(self) -> None:
        assert render(parse("[t](a")) == "<p>[t](a</p>\n"


class TestImages:
    """``![alt](src "title")``."""

    def test_image(self) -> None:
        assert _inlines('![alt](a.png "T")') == [
            Image(children=["alt"], href="a.png", title="T", source='![alt](a.png "T")')
        ]

    def test_image_inside_link(self) -> None:
        link = _inlines("[![i](s)](h)")[0]
        assert isinstance(link, Link)
        assert link.href == "h"
        image = link.children[0]
        assert isinstance(image, Image)
        assert image.href == "s"

    def test_render(self) -> None:
        html = render(parse('![a "b"](/p.png "T")'))
        assert html == '<p><img src="/p.png" alt="a &quot;b&quot;" title="T" /></p>\n'


class TestReferenceLinks:
    """``[text][id]`` and friends, resolved after the whole document is parsed."""

    def test_full_reference_end_to_end(self) -> None:
        ast = parse('[text][id]\n\n[id]: http://x "T"')
        assert ast == [
            Paragraph(children=[Link(children=["text"], href="http://x", title="T", id="id")]),
            LinkDefinition(id="id", href="http://x", title="T"),
        ]
        assert render(ast) == '<p><a href="http://x" title="T">text</a></p>\n'

    def test_definition_before_use(self) -> None:
        link = parse("[a]: /u\n\n[a]")[1].children[0]
        assert link.href == "/u"
        assert link.subtype is None

    def test_collapsed_and_shortcut_forms(self) -> None:
        for source in ("[id][]", "[id]", "[id] []"):
            link = parse(source + "\n\n[id]: /u")[0].children[0]
            assert link.href == "/u", source
            assert link.children == ["id"], source

    def test_space_between_text_and_label(self) -> None:
        link = parse("[text] [id]\n\n[id]: /u")[0].children[0]
        assert link.href == "/u"
        assert link.children == ["text"]

    def test_unresolved_keeps_source(self) -> None:
        link = _inlines("[nope]")[0]
        assert link.subtype == "ref"
        assert link.id == "nope"
        assert link.href is None
        assert not link.resolved
        assert render(parse("[nope]")) == "<p>[nope]</p>\n"

    def test_ids_match_exactly(self) -> None:
        link = parse("[Foo]\n\n[foo]: /x")[0].children[0]
        assert link.href is None

    def test_first_definition_wins(self) -> None:
        link = parse("[a]\n\n[a]: /1\n[a]: /2")[0].children[0]
        assert link.href == "/1"

    def test_reference_image(self) -> None:
        ast = parse("![logo]\n\n[logo]: /l.png")
        image = ast[0].children[0]
        assert isinstance(image, Image)
        assert image.href == "/l.png"
        assert render(ast) == '<p><img src="/l.png" alt="logo" /></p>\n'

    def test_resolved_inside_nested_blocks(self) -> None:
        ast = parse("- [a]\n\n> [b]\n\n[a]: /1\n[b]: /2")
        assert ast[0].children[0].children[0].href == "/1"
        assert ast[1].children[0].children[0].href == "/2"

    def test_footnote_syntax_is_not_a_reference(self) -> None:
        assert parse("[^1]") == [Paragraph(children=["[^1]"])]
