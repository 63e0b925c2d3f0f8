"""Tests for scope-aware context extraction around a caret or selection."""

from __future__ import annotations

import pytest

from indentscope.context import IndentationContext, IndentationContextProcessor
from indentscope.tokens import Range, StandardTokenType

O = StandardTokenType.OTHER
S = StandardTokenType.STRING
C = StandardTokenType.COMMENT


@pytest.fixture
def script_lines(make_line):
    """Two lines of a template whose embedded script spans the line break."""
    first = make_line(("<script>", O, "tpl"), ("if (x) {", O, "js"), (" // {", C, "js"))
    second = make_line(("  foo(", O, "js"), ('"}"', S, "js"), (")", O, "js"))
    return first, second


# ---------------------------------------------------------------------------
# Previous line
# ---------------------------------------------------------------------------


class TestPreviousLine:
    def test_scope_continues_from_line_above(self, script_lines, fake_model, brackets) -> None:
        model = fake_model(*script_lines)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.caret(2, 1))
        assert context.previous_line == "if (x) { // "

    def test_caret_later_on_line_still_uses_previous_line(self, script_lines, fake_model, brackets) -> None:
        model = fake_model(*script_lines)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.caret(2, 7))
        assert context.previous_line == "if (x) { // "

    def test_scope_opened_mid_line_has_no_previous_line(self, script_lines, fake_model, make_line, brackets) -> None:
        second = make_line(("<b>", O, "tpl"), ("foo()", O, "js"))
        model = fake_model(script_lines[0], second)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.caret(2, 5))
        assert context.previous_line == ""

    def test_language_change_across_lines(self, fake_model, make_line, brackets) -> None:
        first = make_line(("<p>", O, "tpl"))
        second = make_line(("foo()", O, "js"))
        model = fake_model(first, second)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.caret(2, 1))
        assert context.previous_line == ""

    def test_first_line_has_no_previous_line(self, script_lines, fake_model, brackets) -> None:
        model = fake_model(*script_lines)
        processor = IndentationContextProcessor(model, brackets)
        for column in (1, 5, 12, 40):
            assert processor.extract_context(Range.caret(1, column)).previous_line == ""
        assert processor.extract_context(Range.between(1, 2, 2, 3)).previous_line == ""

    def test_previous_line_is_clipped_to_its_scope(self, fake_model, make_line, brackets) -> None:
        first = make_line(("<i>", O, "tpl"), ("a(", O, "js"), ('"("', S, "js"))
        second = make_line(("b)", O, "js"))
        model = fake_model(first, second)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.caret(2, 1))
        assert context.previous_line == 'a(""'

    def test_previous_line_is_tokenized_first(self, script_lines, fake_model, brackets) -> None:
        model = fake_model(*script_lines)
        IndentationContextProcessor(model, brackets).extract_context(Range.caret(2, 1))
        assert model.forced == [2, 1]


# ---------------------------------------------------------------------------
# Before / after on the same line
# ---------------------------------------------------------------------------


class TestBeforeAfter:
    def test_before_is_clipped_to_scope(self, script_lines, fake_model, brackets) -> None:
        model = fake_model(*script_lines)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.caret(1, 13))
        assert context.before == "if ("
        assert context.after == "x) { // "

    def test_before_in_host_scope(self, script_lines, fake_model, brackets) -> None:
        model = fake_model(*script_lines)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.caret(1, 3))
        assert context.before == "<s"
        assert context.after == "cript>"

    def test_collapsed_range_after(self, fake_model, make_line, brackets) -> None:
        line = make_line(("01234", O, "js"), ('"{}"', S, "js"), ("9", O, "js"))
        model = fake_model(line)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.caret(1, 6))
        assert context.before == "01234"
        assert context.after == '""9'

    def test_out_of_range_column_is_clamped(self, fake_model, make_line, brackets) -> None:
        line = make_line(("0123456789", O, "js"))
        model = fake_model(line)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.caret(1, 99))
        assert context == IndentationContext(before="0123456789", after="", previous_line="")

    def test_empty_line(self, fake_model, make_line, brackets) -> None:
        model = fake_model(make_line(("", O, "js")), make_line(("", O, "js")))
        context = IndentationContextProcessor(model, brackets).extract_context(Range.caret(2, 1))
        assert context == IndentationContext(before="", after="", previous_line="")


# ---------------------------------------------------------------------------
# Selections
# ---------------------------------------------------------------------------


class TestSelection:
    def test_after_comes_from_end_line(self, fake_model, make_line, brackets) -> None:
        first = make_line(("abcdefghij", O, "js"))
        second = make_line(("01234567", O, "js"), ('"{x}"', S, "js"), ("ABC", O, "js"))
        model = fake_model(first, second)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.between(1, 3, 2, 9))
        assert context.before == "ab"
        # Clipped to the start scope's span [0, 10) of the end line
        assert context.after == '"'

    def test_selection_on_one_line(self, fake_model, make_line, brackets) -> None:
        line = make_line(("0123456789", O, "js"))
        model = fake_model(line)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.between(1, 3, 1, 8))
        assert context.before == "01"
        assert context.after == "789"

    def test_start_scope_opened_mid_line(self, fake_model, make_line, brackets) -> None:
        first = make_line(("<script>", O, "tpl"), ("x = 1", O, "js"))
        second = make_line(("abcdefghijklmnop", O, "js"))
        model = fake_model(first, second)
        # Start scope is js [8, 13); the end line is cut at that span's end only
        context = IndentationContextProcessor(model, brackets).extract_context(Range.between(1, 10, 2, 3))
        assert context.before == "x"
        assert context.after == "cdefghijklm"

    def test_end_line_in_other_language_uses_start_scope_span(self, fake_model, make_line, brackets) -> None:
        first = make_line(("<a>", O, "tpl"), ("x = 1", O, "js"))
        second = make_line(("</script>  ", O, "tpl"), ("y", O, "js"))
        model = fake_model(first, second)
        # Start scope is js [3, 8); the selection ends inside the tpl run of line 2
        context = IndentationContextProcessor(model, brackets).extract_context(Range.between(1, 5, 2, 6))
        assert context.before == "x"
        assert context.after == "ipt"

    def test_end_column_past_start_scope_is_empty(self, fake_model, make_line, brackets) -> None:
        first = make_line(("abc", O, "js"))
        second = make_line(("def(x)", O, "js"))
        model = fake_model(first, second)
        context = IndentationContextProcessor(model, brackets).extract_context(Range.between(1, 2, 2, 4))
        assert context.after == ""

    def test_end_line_is_tokenized_first(self, fake_model, make_line, brackets) -> None:
        model = fake_model(make_line(("abc", O, "js")), make_line(("def", O, "js")))
        IndentationContextProcessor(model, brackets).extract_context(Range.between(1, 1, 2, 2))
        assert 2 in model.forced


# ---------------------------------------------------------------------------
# Real tokenizer
# ---------------------------------------------------------------------------


class TestWithTextModel:
    SOURCE = '<div>\n<script>\nif (a) {\n  foo("}");\n</script>\n</div>'

    def test_previous_line_inside_script(self, text_model, registry) -> None:
        model = text_model(self.SOURCE, "html")
        context = IndentationContextProcessor(model, registry).extract_context(Range.caret(4, 3))
        assert context.previous_line == "if (a) {"
        assert context.before == "  "
        assert context.after == 'foo("");'

    def test_no_previous_line_after_open_tag(self, text_model, registry) -> None:
        model = text_model(self.SOURCE, "html")
        context = IndentationContextProcessor(model, registry).extract_context(Range.caret(3, 1))
        assert context.previous_line == ""

    def test_host_lines_continue(self, text_model, registry) -> None:
        model = text_model(self.SOURCE, "html")
        context = IndentationContextProcessor(model, registry).extract_context(Range.caret(2, 1))
        assert context.previous_line == "<div>"
        assert context.after == "<script>"

    def test_inline_script_has_no_previous_line(self, text_model, registry) -> None:
        model = text_model("<div>\n<p><script>if (a) {", "html")
        context = IndentationContextProcessor(model, registry).extract_context(Range.caret(2, 20))
        assert context.before == "if (a) {"
        assert context.previous_line == ""
