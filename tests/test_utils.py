"""Tests for utility modules."""

import logging

from marcado.stringbuilder import StringBuilder
from marcado.utils.logger import get_logger
from marcado.utils.text import escape_attribute, escape_html


class TestEscapeHtml:
    """escape_html()."""

    def test_ampersand(self) -> None:
        assert escape_html("a & b") == "a &amp; b"

    def test_existing_entities_kept(self) -> None:
        assert escape_html("&amp; &#42; &copy;") == "&amp; &#42; &copy;"

    def test_stray_less_than(self) -> None:
        assert escape_html("1 < 2") == "1 &lt; 2"

    def test_tags_kept_by_default(self) -> None:
        assert escape_html("<em>x</em>") == "<em>x</em>"

    def test_escape_all(self) -> None:
        assert escape_html("<em>x</em>", escape_all=True) == "&lt;em&gt;x&lt;/em&gt;"

    def test_empty(self) -> None:
        assert escape_html("") == ""

    def test_attribute_quotes(self) -> None:
        assert escape_attribute('say "hi" <b>') == "say &quot;hi&quot; &lt;b&gt;"


class TestLogger:
    """get_logger()."""

    def test_prefix_added(self) -> None:
        assert get_logger("engine").name == "marcado.engine"

    def test_package_names_unchanged(self) -> None:
        assert get_logger("marcado.parser").name == "marcado.parser"
        assert get_logger("marcado").name == "marcado"

    def test_returns_stdlib_logger(self) -> None:
        assert isinstance(get_logger("x"), logging.Logger)


class TestStringBuilder:
    """StringBuilder."""

    def test_append_and_build(self) -> None:
        sb = StringBuilder()
        sb.append("<p>").append("Hello").append("</p>")
        assert sb.build() == "<p>Hello</p>"

    def test_empty_strings_skipped(self) -> None:
        sb = StringBuilder()
        sb.append("")
        assert not sb
        assert sb.build() == ""
