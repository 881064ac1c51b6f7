"""Tests for the plain text renderer."""

from marcado import markdown_to_plain_text, parse
from marcado.renderers import PlainTextRenderer


class TestPlainText:
    """Readable text without markup."""

    def test_heading_and_paragraph(self) -> None:
        assert markdown_to_plain_text("# Title\n\nSome **bold** text") == "Title\n\nSome bold text"

    def test_links_reduce_to_text(self) -> None:
        assert markdown_to_plain_text("[docs](http://e.com) and <http://x.org>") == (
            "docs and http://x.org"
        )

    def test_image_alt_text(self) -> None:
        assert markdown_to_plain_text("![a cat](cat.png)") == "a cat"

    def test_code_blocks_dropped(self) -> None:
        assert markdown_to_plain_text("Intro\n\n```\ncode\n```\n\nOutro") == "Intro\n\nOutro"

    def test_inline_code_kept(self) -> None:
        assert markdown_to_plain_text("Run `make`") == "Run make"

    def test_list_items_one_per_line(self) -> None:
        assert markdown_to_plain_text("- a\n- b\n\nText") == "a\nb\n\nText"

    def test_loose_list(self) -> None:
        assert markdown_to_plain_text("- a\n\n- b") == "a\nb"

    def test_blockquote(self) -> None:
        assert markdown_to_plain_text("> a\n>\n> b") == "a\n\nb"

    def test_markup_blocks_dropped(self) -> None:
        source = "<div>\nx\n</div>\n\n---\n\n[a]: /u\n\nText"
        assert markdown_to_plain_text(source) == "Text"

    def test_unresolved_reference(self) -> None:
        assert PlainTextRenderer().render(parse("[missing]")) == "missing"

    def test_empty(self) -> None:
        assert markdown_to_plain_text("") == ""
