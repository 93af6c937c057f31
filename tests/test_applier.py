"""
Render applier tests

Tests painting order, staleness rejection and selection handling against an
EditorSession paint surface.
"""

import pytest

from neonlight.lib.applier import RenderApplier
from neonlight.lib.session import EditorSession
from neonlight.lib.theme import theme_load
from neonlight.models import ApplyOutcome, HighlightSpan, Language, Snapshot, TokenClass


K = TokenClass


@pytest.fixture
def theme():
    return theme_load()


def snapshot_of(session, theme, generation=1):
    return Snapshot(
        text=session.text_get(),
        language=session.language_get(),
        theme=theme,
        selection=session.selection_get(),
        generation=generation,
    )


class TestApply:
    """Test a normal apply"""

    def test_base_then_spans(self, theme):
        """Uncovered text gets the base colour; spans get their token colour"""
        session = EditorSession("let x = 1", language=Language.SWIFT, theme=theme)
        spans = [HighlightSpan(0, 3, K.VARIABLE), HighlightSpan(8, 9, K.NUMBER)]

        outcome = RenderApplier().highlight_apply(session, spans, snapshot_of(session, theme), theme)

        assert outcome is ApplyOutcome.APPLIED
        assert session.colorRuns_get() == [
            (0, 3, theme.color_for(K.VARIABLE)),
            (3, 8, theme.base),
            (8, 9, theme.color_for(K.NUMBER)),
        ]

    def test_later_span_wins(self, theme):
        session = EditorSession('"if"', theme=theme)
        spans = [HighlightSpan(1, 3, K.KEYWORD), HighlightSpan(0, 4, K.STRING)]
        RenderApplier().highlight_apply(session, spans, snapshot_of(session, theme), theme)
        assert set(session.colors_get()) == {theme.color_for(K.STRING)}

    def test_single_batched_edit(self, theme):
        """All painting happens inside one begin/end pair"""
        session = EditorSession("abc", theme=theme)
        RenderApplier().highlight_apply(session, [HighlightSpan(0, 1, K.META)], snapshot_of(session, theme), theme)
        assert session.paint_count == 1
        assert session.edit_depth == 0

    def test_empty_spans_resets_to_base(self, theme):
        """Stale colours from an earlier pass are cleared"""
        session = EditorSession("abc", theme=theme)
        session.color_apply(0, 3, "#123456")
        RenderApplier().highlight_apply(session, [], snapshot_of(session, theme), theme)
        assert session.colors_get() == [theme.base] * 3

    def test_text_untouched(self, theme):
        session = EditorSession("let x = 1", language="swift", theme=theme)
        session.scroll_set(1)
        RenderApplier().highlight_apply(session, [HighlightSpan(0, 3, K.VARIABLE)], snapshot_of(session, theme), theme)
        assert session.text_get() == "let x = 1"
        assert session.language_get() is Language.SWIFT
        assert session.theme_get() == theme
        assert session.scroll_get() == 1


class TestStaleness:
    """Spans computed for other text are never painted"""

    def test_changed_text_discarded(self, theme):
        session = EditorSession("let x = 1", theme=theme)
        snapshot = snapshot_of(session, theme)
        session.text_append("0")

        outcome = RenderApplier().highlight_apply(session, [HighlightSpan(0, 3, K.VARIABLE)], snapshot, theme)

        assert outcome is ApplyOutcome.DISCARDED
        assert session.colors_get() == [None] * len("let x = 10")
        assert session.paint_count == 0


class TestSelection:
    """Caret and selection handling"""

    def test_selection_preserved(self, theme):
        session = EditorSession("let x = 1", theme=theme)
        session.selection_set((4, 5))
        RenderApplier().highlight_apply(session, [], snapshot_of(session, theme), theme)
        assert session.selection_get() == (4, 5)

    def test_moved_selection_not_reverted(self, theme):
        """A caret moved after the snapshot stays where the user put it"""
        session = EditorSession("let x = 1", theme=theme)
        session.selection_set((1, 1))
        snapshot = snapshot_of(session, theme)
        session.selection_set((7, 7))

        outcome = RenderApplier().highlight_apply(session, [], snapshot, theme)

        assert outcome is ApplyOutcome.APPLIED
        assert session.selection_get() == (7, 7)


class TestIdempotence:
    """Re-applying the same pass changes nothing"""

    def test_apply_twice(self, theme):
        session = EditorSession('let s = "hi" // x', language="swift", theme=theme)
        session.selection_set((2, 6))
        spans = [
            HighlightSpan(0, 3, K.VARIABLE),
            HighlightSpan(8, 12, K.STRING),
            HighlightSpan(13, 17, K.COMMENT),
        ]
        snapshot = snapshot_of(session, theme)
        applier = RenderApplier()

        applier.highlight_apply(session, spans, snapshot, theme)
        runs, selection = session.colorRuns_get(), session.selection_get()
        applier.highlight_apply(session, spans, snapshot, theme)

        assert session.colorRuns_get() == runs
        assert session.selection_get() == selection == (2, 6)
        assert session.paint_count == 2
