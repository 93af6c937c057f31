"""
Render applier: paint computed spans onto a live document

Runs on the interactive thread only. The applier changes visual attributes
and nothing else: document text, language, theme and scroll position are
never touched, and the caret/selection is restored only when the user has
not moved it since the snapshot was taken.
"""

from typing import Protocol, Sequence, Tuple

from ..models.snapshot import ApplyOutcome, Snapshot
from ..models.tokens import HighlightSpan
from .log import LOG
from .theme import Theme


class HighlightTarget(Protocol):
    """Surface of the editor document the applier paints on"""

    def text_get(self) -> str:
        ...

    def selection_get(self) -> Tuple[int, int]:
        ...

    def selection_set(self, selection: Tuple[int, int]) -> None:
        ...

    def edits_begin(self) -> None:
        ...

    def edits_end(self) -> None:
        ...

    def attributes_clear(self, start: int, end: int) -> None:
        ...

    def color_apply(self, start: int, end: int, color: str) -> None:
        ...


class RenderApplier:
    """
    Applies highlight spans to a HighlightTarget

    Example:
        >>> outcome = RenderApplier().highlight_apply(session, spans, snapshot, theme)
        >>> outcome
        <ApplyOutcome.APPLIED: 'applied'>
    """

    def highlight_apply(
        self,
        target: HighlightTarget,
        spans: Sequence[HighlightSpan],
        snapshot: Snapshot,
        theme: Theme,
    ) -> ApplyOutcome:
        """
        Repaint the whole document from a span set.

        Steps:
            1. Discard if the live text no longer equals the snapshot text
            2. In one batched edit: clear colours, paint the base colour
               over everything, paint each span in order (later wins)
            3. Put the selection back only if it still equals the one
               captured with the snapshot

        Args:
            target: Live document
            spans: Spans computed from `snapshot`
            snapshot: The capture the spans were computed against
            theme: Colours to paint with

        Returns:
            ApplyOutcome.APPLIED, or ApplyOutcome.DISCARDED on staleness
        """
        text = target.text_get()
        if text != snapshot.text:
            LOG(f"Discarding highlight for generation {snapshot.generation}: text changed", level=2)
            return ApplyOutcome.DISCARDED

        length = len(text)
        target.edits_begin()
        try:
            target.attributes_clear(0, length)
            target.color_apply(0, length, theme.base)
            for span in spans:
                target.color_apply(span.start, span.end, theme.color_for(span.token))
        finally:
            target.edits_end()

        if target.selection_get() == snapshot.selection:
            target.selection_set(snapshot.selection)

        LOG(f"Applied {len(spans)} spans for generation {snapshot.generation}", level=3)
        return ApplyOutcome.APPLIED
