"""Tests for the core block handlers."""

from marcado import parse
from marcado.nodes import (
    BlockQuote,
    Code,
    Heading,
    HorizontalRule,
    Html,
    LinkDefinition,
    List,
    Literal,
    Paragraph,
)


class TestHeadings:
    """ATX and setext headings."""

    def test_atx_levels(self) -> None:
        ast = parse("# One\n\n###### Six")
        assert ast == [Heading(level=1, children=["One"]), Heading(level=6, children=["Six"])]

    def test_atx_closing_hashes_stripped(self) -> None:
        assert parse("## Title ##") == [Heading(level=2, children=["Title"])]

    def test_atx_closing_hashes_without_space(self) -> None:
        assert parse("# foo#") == [Heading(level=1, children=["foo"])]
        assert parse("### bar ###   ") == [Heading(level=3, children=["bar"])]

    def test_atx_requires_space(self) -> None:
        assert parse("#Title") == [Paragraph(children=["#Title"])]

    def test_seven_hashes_is_paragraph(self) -> None:
        ast = parse("####### Title")
        assert isinstance(ast[0], Paragraph)

    def test_atx_inline_content(self) -> None:
        ast = parse("# Hello *World*")
        heading = ast[0]
        assert isinstance(heading, Heading)
        assert heading.children[0] == "Hello "
        assert heading.children[1].type == "emphasis"

    def test_setext_level_one(self) -> None:
        assert parse("Title\n=====") == [Heading(level=1, children=["Title"])]

    def test_setext_level_two(self) -> None:
        assert parse("Title\n---") == [Heading(level=2, children=["Title"])]

    def test_setext_not_after_block_start(self) -> None:
        """A list line followed by dashes is not heading text."""
        ast = parse("- item\n---")
        assert isinstance(ast[0], List)
        assert not any(isinstance(node, Heading) for node in ast)


class TestHeadingThenParagraph:
    """Blank line separates a heading from the following paragraph."""

    def test_heading_and_paragraph(self) -> None:
        assert parse("# H\n\nText") == [
            Heading(level=1, children=["H"]),
            Paragraph(children=["Text"]),
        ]


class TestBlockquotes:
    """Block quotes with lazy continuation and merging."""

    def test_simple_quote(self) -> None:
        assert parse("> a\n> b") == [BlockQuote(children=[Paragraph(children=["a\nb"])])]

    def test_lazy_continuation(self) -> None:
        assert parse("> a\nb") == [BlockQuote(children=[Paragraph(children=["a\nb"])])]

    def test_nested_quote(self) -> None:
        ast = parse("> > deep")
        assert ast == [BlockQuote(children=[BlockQuote(children=[Paragraph(children=["deep"])])])]

    def test_adjacent_quotes_merge(self) -> None:
        ast = parse("> a\n\n> b")
        assert len(ast) == 1
        assert ast[0].children == [Paragraph(children=["a"]), Paragraph(children=["b"])]

    def test_quote_holds_blocks(self) -> None:
        ast = parse("> # Title\n> - item")
        quote = ast[0]
        assert isinstance(quote.children[0], Heading)
        assert isinstance(quote.children[1], List)


class TestFencedCode:
    """Fenced code blocks."""

    def test_fenced_with_language(self) -> None:
        assert parse("```js\ncode\n```") == [
            Code(children=[Literal(value="code")], source="js")
        ]

    def test_fenced_fields(self) -> None:
        code = parse("```js\ncode\n```")[0]
        assert code.type == "code"
        assert code.source == "js"
        assert code.inline is False
        assert code.text == "code"

    def test_tilde_fence_without_language(self) -> None:
        code = parse("~~~\nx\n~~~")[0]
        assert code.source == ""
        assert code.text == "x"

    def test_language_is_first_word_of_info(self) -> None:
        code = parse("``` python title=x\npass\n```")[0]
        assert code.source == "python"

    def test_content_is_verbatim(self) -> None:
        code = parse("```\n*not emphasis* \\*kept\\*\n\n# not heading\n```")[0]
        assert code.text == "*not emphasis* \\*kept\\*\n\n# not heading"

    def test_closing_fence_at_least_as_long(self) -> None:
        code = parse("````\n```\n````")[0]
        assert code.text == "```"

    def test_closing_fence_same_character(self) -> None:
        code = parse("```\n~~~\n```")[0]
        assert code.text == "~~~"

    def test_unterminated_fence_runs_to_end(self) -> None:
        code = parse("```py\nx\ny")[0]
        assert isinstance(code, Code)
        assert code.text == "x\ny"

    def test_backtick_in_info_is_not_a_fence(self) -> None:
        ast = parse("``` a`b")
        assert not any(isinstance(node, Code) and not node.inline for node in ast)


class TestIndentedCode:
    """Indented code blocks."""

    def test_indented_block(self) -> None:
        assert parse("    x = 1\n    y = 2") == [Code(children=[Literal(value="x = 1\ny = 2")])]

    def test_inner_blank_line_kept(self) -> None:
        assert parse("    a\n\n    b")[0].text == "a\n\nb"

    def test_trailing_blank_line_dropped(self) -> None:
        ast = parse("    a\n\nText")
        assert ast == [Code(children=[Literal(value="a")]), Paragraph(children=["Text"])]

    def test_not_a_paragraph_continuation(self) -> None:
        assert parse("para\n    more") == [Paragraph(children=["para\nmore"])]


class TestHorizontalRules:
    """Thematic breaks."""

    def test_rule_variants(self) -> None:
        for source in ("***", "---", "___", "- - -", "  * * *", "*-_"):
            assert parse(source) == [HorizontalRule()], source

    def test_four_asterisks_line_is_rule(self) -> None:
        assert parse("****") == [HorizontalRule()]


class TestReferenceDefinitions:
    """Reference link definitions."""

    def test_definition_without_title(self) -> None:
        assert parse("[id]: http://example.com") == [
            LinkDefinition(id="id", href="http://example.com")
        ]

    def test_title_forms(self) -> None:
        for source in ('[a]: /u "T"', "[a]: /u 'T'", "[a]: /u (T)"):
            assert parse(source) == [LinkDefinition(id="a", href="/u", title="T")], source

    def test_angle_bracket_destination(self) -> None:
        assert parse("[a]: <http://x>")[0].href == "http://x"

    def test_title_on_next_line(self) -> None:
        assert parse('[a]: /u\n   "Title"') == [LinkDefinition(id="a", href="/u", title="Title")]

    def test_definitions_not_recognized_in_quotes(self) -> None:
        ast = parse("> [a]: /u")
        assert not isinstance(ast[0].children[0], LinkDefinition)

    def test_footnote_syntax_is_not_a_definition(self) -> None:
        ast = parse("[^1]: note")
        assert not isinstance(ast[0], LinkDefinition)


class TestHtml:
    """Raw HTML blocks and comments."""

    def test_html_block(self) -> None:
        assert parse("<div>\nhi\n</div>") == [Html(html="<div>\nhi\n</div>")]

    def test_self_closing_single_line(self) -> None:
        assert parse('<img src="a.png" />\n\nText') == [
            Html(html='<img src="a.png" />'),
            Paragraph(children=["Text"]),
        ]

    def test_unclosed_block_runs_to_end(self) -> None:
        assert parse("<div>\na\n\nb") == [Html(html="<div>\na\n\nb")]

    def test_html_content_is_verbatim(self) -> None:
        assert parse("<div>\n\\*x\\*\n</div>")[0].html == "<div>\n\\*x\\*\n</div>"

    def test_comment(self) -> None:
        assert parse("<!-- note -->") == [Html(html="<!-- note -->\n", subtype="comment")]

    def test_multiline_comment(self) -> None:
        ast = parse("<!--\na\n-->\nText")
        assert ast[0] == Html(html="<!--\na\n-->\n", subtype="comment")
        assert ast[1] == Paragraph(children=["Text"])


class TestParagraphs:
    """Fallback paragraphs and interruption by other blocks."""

    def test_multiline_paragraph(self) -> None:
        assert parse("a\nb") == [Paragraph(children=["a\nb"])]

    def test_leading_whitespace_stripped(self) -> None:
        assert parse("a\n   b") == [Paragraph(children=["a\nb"])]

    def test_blank_line_separates_paragraphs(self) -> None:
        assert parse("a\n\n\nb") == [Paragraph(children=["a"]), Paragraph(children=["b"])]

    def test_interrupted_by_heading(self) -> None:
        assert parse("a\n# H") == [Paragraph(children=["a"]), Heading(level=1, children=["H"])]

    def test_interrupted_by_list(self) -> None:
        ast = parse("a\n- b")
        assert ast[0] == Paragraph(children=["a"])
        assert isinstance(ast[1], List)

    def test_interrupted_by_fence(self) -> None:
        ast = parse("a\n```\ncode\n```")
        assert ast == [Paragraph(children=["a"]), Code(children=[Literal(value="code")])]

    def test_empty_input(self) -> None:
        assert parse("") == []
        assert parse("\n\n  \n") == []
