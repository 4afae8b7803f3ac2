# tests/test_template_line.py
"""Tests for directive detection and line classification."""

import pytest

from swiftemplate.core.lines import (
    classify_line, text_after_escape, first_word_and_rest,
    Text, TemplateStart, TemplateEnd, ForStart, ForEnd,
    IfStart, IfElif, IfElse, IfEnd,
)
from swiftemplate.exceptions import InvalidDirective


class TestTextAfterEscape:
    """Tests for recognizing the %% escape prefix."""

    def test_returns_trimmed_directive_text(self):
        assert text_after_escape("   %% foo(bar)") == "foo(bar)"
        assert text_after_escape("\t%%  if x  \t") == "if x"

    def test_bare_prefix_is_not_a_directive(self):
        assert text_after_escape("   %%") is None
        assert text_after_escape("   %%   ") is None

    def test_prefix_must_lead_the_line(self):
        assert text_after_escape(" Hello world") is None
        assert text_after_escape("this is not an escape   %% foo(bar)") is None


class TestFirstWordAndRest:
    def test_splits_on_first_whitespace_run(self):
        assert first_word_and_rest("foo bar baz") == ("foo", "bar baz")
        assert first_word_and_rest("   foo \t bar baz") == ("foo", "bar baz")

    def test_single_word(self):
        assert first_word_and_rest("foo ") == ("foo", "")
        assert first_word_and_rest("foo") == ("foo", "")

    def test_no_word(self):
        assert first_word_and_rest("") is None
        assert first_word_and_rest(" \t ") is None


class TestClassifyLine:
    """Tests for mapping raw lines onto TemplateLine variants."""

    @pytest.mark.parametrize("line, expected", [
        ("Hello world", Text("Hello world")),
        ("  <p>indented</p>  ", Text("  <p>indented</p>  ")),
        ("%%", Text("%%")),
        (" %% template foo(v1:String, v2:[Int])", TemplateStart("foo(v1:String, v2:[Int])")),
        ("%% endtemplate", TemplateEnd()),
        ("%% for i in items", ForStart("i", "items")),
        ("%% for (i, item) in items.enumerate()", None),
        ("%% endfor", ForEnd()),
        ("%% if a==b", IfStart("a==b")),
        ("%% if foo == bar", IfStart("foo == bar")),
        ("%% elif foo==bar", IfElif("foo==bar")),
        ("%% else if foo==bar", IfElif("foo==bar")),
        ("%% else", IfElse()),
        ("%% endif", IfEnd()),
    ])
    def test_classification(self, line, expected):
        if expected is None:
            with pytest.raises(InvalidDirective):
                classify_line(line)
        else:
            assert classify_line(line) == expected

    def test_for_iterable_is_captured_verbatim(self):
        assert classify_line("%% for row in model.rows(where: x > 1)") == ForStart("row", "model.rows(where: x > 1)")

    def test_else_followed_by_other_word_is_plain_else(self):
        assert classify_line("%% else whatever") == IfElse()

    def test_for_without_in_is_invalid(self):
        with pytest.raises(InvalidDirective) as exc_info:
            classify_line("%% for i of items", filename="page.swtpl", line_number=7)
        assert exc_info.value.text == "i of items"
        assert exc_info.value.filename == "page.swtpl"
        assert exc_info.value.line_number == 7

    @pytest.mark.parametrize("line", ["%% for", "%% for i", "%% for i in"])
    def test_incomplete_for_is_invalid(self, line):
        with pytest.raises(InvalidDirective):
            classify_line(line)

    def test_unknown_keyword_is_invalid(self):
        with pytest.raises(InvalidDirective) as exc_info:
            classify_line("%% while true", filename="page.swtpl", line_number=3)
        assert exc_info.value.text == "while true"
        assert str(exc_info.value) == "page.swtpl:3: Invalid directive: while true"

    def test_directives_render_back_to_text(self):
        assert str(TemplateStart("foo()")) == "template foo()"
        assert str(IfElif("x")) == "else if x"
        assert str(ForStart("i", "items")) == "for i in items"
        assert str(IfEnd()) == "endif"
