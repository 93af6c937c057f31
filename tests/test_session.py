"""
Editor session tests

Tests document mutations, emitted events, navigation and the paint surface.
"""

import pytest

from neonlight.lib.session import EditorSession
from neonlight.lib.theme import theme_load
from neonlight.models import (
    Language,
    LanguageChanged,
    LineJumped,
    SelectionChanged,
    TextChanged,
    ThemeChanged,
)


@pytest.fixture
def events():
    return []


@pytest.fixture
def session(events):
    session = EditorSession("one\ntwo\nthree", language="swift")
    session.listener_connect(events.append)
    return session


class TestMutations:
    """Text edits and the events they emit"""

    def test_insert_emits_text_changed(self, session, events):
        session.text_insert(0, "// ")
        assert session.text_get() == "// one\ntwo\nthree"
        assert events == [TextChanged("// one\ntwo\nthree")]

    def test_replace_updates_line_index(self, session):
        session.text_replace(3, 4, " ")
        assert session.line_index.line_count == 2
        assert session.line_index.length == len(session.text_get())

    def test_replace_out_of_range(self, session, events):
        with pytest.raises(ValueError):
            session.text_replace(5, 100, "x")
        assert events == []

    def test_inserted_text_is_uncoloured(self, session):
        session.color_apply(0, len(session.text_get()), "#000000")
        session.text_insert(3, "!")
        colors = session.colors_get()
        assert len(colors) == len(session.text_get())
        assert colors[3] is None
        assert colors[2] == "#000000"

    def test_selection_shifts_after_insert(self, session):
        session.selection_set((5, 6))
        session.text_insert(0, "ab")
        assert session.selection_get() == (7, 8)

    def test_caret_at_insertion_point_stays(self, session):
        session.selection_set((3, 3))
        session.text_insert(3, "!!")
        assert session.selection_get() == (3, 3)

    def test_append_leaves_caret_at_end(self, session):
        """Appended text lands after a caret at the end of the document"""
        session.selection_set((13, 13))
        session.text_append("\nfour")
        assert session.selection_get() == (13, 13)
        assert session.caretStatus_get() == "Ln 3, Col 6"

    def test_replaced_selection_covers_replacement(self, session):
        session.selection_set((4, 7))
        session.text_replace(4, 7, "2")
        assert session.selection_get() == (4, 5)

    def test_selection_before_edit_unchanged(self, session):
        session.selection_set((1, 1))
        session.text_insert(5, "xyz")
        assert session.selection_get() == (1, 1)

    def test_text_set_resets(self, session, events):
        session.selection_set((5, 5))
        session.text_set("new")
        assert session.selection_get() == (0, 0)
        assert session.line_index.line_count == 1
        assert events[-1] == TextChanged("new")

    def test_suggestion_stream(self, session, events):
        """Streamed chunks are appended one by one and the view follows"""
        count = session.suggestion_stream(["\nfour", "", "\nfive"])
        assert count == 10
        assert session.text_get().endswith("\nfour\nfive")
        assert [type(e) for e in events] == [TextChanged, TextChanged]
        assert session.scroll_get() == 5
        assert session.selection_get() == (0, 0)

    def test_language_set(self, session, events):
        session.language_set("python")
        session.language_set(Language.PYTHON)
        assert session.language_get() is Language.PYTHON
        assert events == [LanguageChanged(Language.PYTHON)]

    def test_theme_set(self, session, events):
        dark = theme_load("neon", "dark")
        session.theme_set(dark)
        session.theme_set(theme_load("neon", "dark"))
        assert events == [ThemeChanged(dark)]

    def test_selection_clamped(self, session, events):
        session.selection_set((-4, 999))
        assert session.selection_get() == (0, len(session.text_get()))
        assert events == [SelectionChanged((0, 13))]

    def test_listener_disconnect(self, session, events):
        session.listener_disconnect(events.append)
        session.text_append("!")
        assert events == []


class TestNavigation:
    """Jump-to-line, caret status and current line"""

    def test_line_goto(self, session, events):
        offset = session.line_goto(2)
        assert offset == 4
        assert session.selection_get() == (4, 4)
        assert session.scroll_get() == 2
        assert events == [LineJumped(2, 4)]

    def test_line_goto_clamps(self, session):
        assert session.line_goto(99) == 8
        assert session.line_goto(0) == 0

    def test_line_goto_empty_document(self, events):
        empty = EditorSession("")
        empty.listener_connect(events.append)
        assert empty.line_goto(3) == 0
        assert events == []

    def test_caret_status(self, session):
        assert session.caretStatus_get() == "Ln 1, Col 1"
        session.selection_set((6, 6))
        assert session.caretStatus_get() == "Ln 2, Col 3"

    def test_current_line_range(self, session):
        session.selection_set((5, 5))
        assert session.currentLine_range() == (4, 8)

    def test_line_lookups(self, session):
        assert session.lineNumber_at(9) == 3
        assert session.offset_forLine(3) == 8

    def test_word_count(self, session):
        assert session.wordCount_get() == 3
        assert EditorSession("").wordCount_get() == 0
        assert EditorSession("  let\tx =\n\n 1 ").wordCount_get() == 4


class TestTypingAids:
    """input_insert(): auto-indent and bracket pairing"""

    def test_newline_copies_indent(self):
        session = EditorSession("    if x:\n        pass", language="python")
        session.selection_set((9, 9))
        assert session.input_insert("\n") == 14
        assert session.text_get() == "    if x:\n    \n        pass"
        assert session.selection_get() == (14, 14)
        assert session.caretStatus_get() == "Ln 2, Col 5"

    def test_newline_copies_tabs(self):
        session = EditorSession("\t\treturn")
        session.selection_set((8, 8))
        session.input_insert("\n")
        assert session.text_get() == "\t\treturn\n\t\t"

    def test_newline_without_indent(self):
        session = EditorSession("abc")
        session.selection_set((3, 3))
        assert session.input_insert("\n") == 4
        assert session.text_get() == "abc\n"

    @pytest.mark.parametrize(
        "opening, closing",
        [("(", ")"), ("[", "]"), ("{", "}"), ('"', '"'), ("'", "'")],
    )
    def test_pairs_inserted(self, opening, closing):
        """The closing partner follows and the caret sits between"""
        session = EditorSession("f")
        session.selection_set((1, 1))
        assert session.input_insert(opening) == 2
        assert session.text_get() == "f" + opening + closing
        assert session.selection_get() == (2, 2)

    def test_plain_character(self):
        session = EditorSession("ab")
        session.selection_set((1, 1))
        assert session.input_insert("x") == 2
        assert session.text_get() == "axb"

    def test_typing_replaces_selection(self):
        session = EditorSession("let x = 1")
        session.selection_set((4, 5))
        assert session.input_insert("(") == 5
        assert session.text_get() == "let () = 1"
        assert session.colors_get()[4:6] == [None, None]

    def test_emits_ordinary_events(self, session, events):
        session.selection_set((3, 3))
        session.input_insert("(")
        assert events[1:] == [
            TextChanged("one()\ntwo\nthree"),
            SelectionChanged((4, 4)),
        ]

class TestPaintSurface:
    """Attribute storage used by the render applier"""

    def test_color_runs(self):
        session = EditorSession("abcdef")
        session.color_apply(0, 6, "#111111")
        session.color_apply(2, 4, "#222222")
        assert session.colorRuns_get() == [
            (0, 2, "#111111"),
            (2, 4, "#222222"),
            (4, 6, "#111111"),
        ]

    def test_color_apply_clamped(self):
        session = EditorSession("abc")
        session.color_apply(-2, 10, "#111111")
        assert session.colors_get() == ["#111111"] * 3

    def test_nested_edits_count_once(self):
        session = EditorSession("abc")
        session.edits_begin()
        session.edits_begin()
        session.edits_end()
        assert session.paint_count == 0
        session.edits_end()
        assert session.paint_count == 1

    def test_default_theme(self):
        assert EditorSession().theme_get() == theme_load()
