"""
Line index tests

Tests line/offset conversion, clamping and incremental maintenance.
"""

import pytest

from neonlight.lib.lineindex import LineIndex


class TestLineCount:
    """Line counting"""

    def test_empty(self):
        """An empty document has one empty line"""
        index = LineIndex("")
        assert index.line_count == 1
        assert index.lineRange_get(1) == (0, 0)

    def test_trailing_newline_starts_a_line(self):
        assert LineIndex("a\n").line_count == 2
        assert LineIndex("a\nb").line_count == 2
        assert LineIndex("\n\n").line_count == 3

    def test_carriage_return_is_content(self):
        """Only \\n breaks lines"""
        index = LineIndex("a\r\nb")
        assert index.line_count == 2
        assert index.lineRange_get(1) == (0, 2)


class TestConversion:
    """Offsets <-> line numbers"""

    text = "one\ntwo\n\nfour"

    def test_line_starts(self):
        assert LineIndex(self.text).lineStarts_get() == (0, 4, 8, 9)

    def test_line_ranges(self):
        index = LineIndex(self.text)
        assert index.lineRange_get(1) == (0, 3)
        assert index.lineRange_get(2) == (4, 7)
        assert index.lineRange_get(3) == (8, 8)
        assert index.lineRange_get(4) == (9, 13)
        assert index.lineRange_get(2, include_break=True) == (4, 8)

    def test_line_number_at(self):
        index = LineIndex(self.text)
        assert index.lineNumber_at(0) == 1
        assert index.lineNumber_at(3) == 1
        assert index.lineNumber_at(4) == 2
        assert index.lineNumber_at(8) == 3
        assert index.lineNumber_at(13) == 4

    def test_round_trip(self):
        """offset_forLine and lineNumber_at agree on every line"""
        index = LineIndex(self.text)
        for line in range(1, index.line_count + 1):
            assert index.lineNumber_at(index.offset_forLine(line)) == line

    def test_clamping(self):
        index = LineIndex(self.text)
        assert index.offset_forLine(0) == 0
        assert index.offset_forLine(-5) == 0
        assert index.offset_forLine(99) == 9
        assert index.lineNumber_at(-1) == 1
        assert index.lineNumber_at(1000) == 4

    def test_position(self):
        index = LineIndex(self.text)
        assert index.position_get(0) == (1, 1)
        assert index.position_get(6) == (2, 3)
        assert index.position_get(13) == (4, 5)

    def test_visible_lines(self):
        index = LineIndex(self.text)
        assert list(index.visibleLines_get(5, 10)) == [2, 3, 4]
        assert list(index.visibleLines_get(10, 5)) == [2, 3, 4]


class TestIncrementalEdit:
    """edit_apply() keeps the table equal to a full rebuild"""

    @pytest.mark.parametrize("start,end,replacement", [
        (0, 0, "new\n"),
        (3, 4, ""),
        (3, 4, " "),
        (4, 8, "x\ny\nz"),
        (13, 13, "\nfive"),
        (0, 13, ""),
        (2, 10, "\n"),
    ])
    def test_matches_rebuild(self, start, end, replacement):
        text = "one\ntwo\n\nfour"
        index = LineIndex(text)
        index.edit_apply(start, end, replacement)

        edited = text[:start] + replacement + text[end:]
        assert index.lineStarts_get() == LineIndex(edited).lineStarts_get()
        assert index.length == len(edited)

    def test_sequence_of_edits(self):
        text = ""
        index = LineIndex(text)
        for chunk in ["func a() {\n", "  return\n", "}\n", "// end"]:
            index.edit_apply(len(text), len(text), chunk)
            text += chunk
        assert index.lineStarts_get() == LineIndex(text).lineStarts_get()

    def test_out_of_range(self):
        index = LineIndex("abc")
        with pytest.raises(ValueError):
            index.edit_apply(2, 5, "x")
        with pytest.raises(ValueError):
            index.edit_apply(2, 1, "x")
