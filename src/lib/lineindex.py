"""
Line index: 1-based line numbers <-> character offsets

Keeps a sorted array of line-start offsets. The array can be rebuilt from
scratch (text_update) or patched in place for a single edit (edit_apply),
which keeps jump-to-line, caret status and gutter numbering cheap on large
documents.

Line breaks are "\\n". A "\\r" before it stays part of the line's content.

Example:
    >>> index = LineIndex("one\\ntwo\\n")
    >>> index.line_count
    3
    >>> index.lineRange_get(2)
    (4, 7)
    >>> index.lineNumber_at(5)
    2
"""

from bisect import bisect_right
from typing import List, Tuple


class LineIndex:
    """
    Line-start table for one document

    Attributes:
        line_count: Number of lines (an empty document has one)
        length: Length of the indexed text
    """

    def __init__(self, text: str = "") -> None:
        self._starts: List[int] = [0]
        self._length = 0
        self.text_update(text)

    @staticmethod
    def _breaks_find(text: str, base: int = 0) -> List[int]:
        """Offsets (shifted by base) of the character after every line break"""
        starts: List[int] = []
        pos = text.find("\n")
        while pos != -1:
            starts.append(base + pos + 1)
            pos = text.find("\n", pos + 1)
        return starts

    def text_update(self, text: str) -> None:
        """Rebuild the index from the full text"""
        self._starts = [0] + self._breaks_find(text)
        self._length = len(text)

    def edit_apply(self, start: int, end: int, replacement: str) -> None:
        """
        Patch the index for text[start:end] being replaced by `replacement`.

        Args:
            start: First replaced offset
            end: One past the last replaced offset
            replacement: Inserted text

        Raises:
            ValueError: If the range is outside the indexed text
        """
        if not 0 <= start <= end <= self._length:
            raise ValueError(f"Edit range {start}-{end} outside document of length {self._length}")

        delta = len(replacement) - (end - start)
        lo = bisect_right(self._starts, start)
        hi = bisect_right(self._starts, end)
        self._starts = (
            self._starts[:lo]
            + self._breaks_find(replacement, start)
            + [offset + delta for offset in self._starts[hi:]]
        )
        self._length += delta

    @property
    def line_count(self) -> int:
        return len(self._starts)

    @property
    def length(self) -> int:
        return self._length

    def lineStarts_get(self) -> Tuple[int, ...]:
        return tuple(self._starts)

    def line_clamp(self, line: int) -> int:
        """Clamp a 1-based line number to [1, line_count]"""
        return max(1, min(line, self.line_count))

    def offset_forLine(self, line: int) -> int:
        """Offset of the first character of a (clamped) 1-based line"""
        return self._starts[self.line_clamp(line) - 1]

    def lineRange_get(self, line: int, include_break: bool = False) -> Tuple[int, int]:
        """
        Offset range of a (clamped) 1-based line.

        Args:
            line: 1-based line number; out-of-range values are clamped
            include_break: Include the trailing "\\n" in the range

        Returns:
            (start, end) with end exclusive
        """
        index = self.line_clamp(line) - 1
        start = self._starts[index]
        if index + 1 < len(self._starts):
            next_start = self._starts[index + 1]
            return start, next_start if include_break else next_start - 1
        return start, self._length

    def lineNumber_at(self, offset: int) -> int:
        """1-based line containing `offset` (clamped to the document)"""
        offset = max(0, min(offset, self._length))
        return bisect_right(self._starts, offset)

    def position_get(self, offset: int) -> Tuple[int, int]:
        """
        Caret position for status display.

        Returns:
            (line, column), both 1-based
        """
        offset = max(0, min(offset, self._length))
        line = self.lineNumber_at(offset)
        return line, offset - self._starts[line - 1] + 1

    def visibleLines_get(self, start_offset: int, end_offset: int) -> range:
        """
        Line numbers intersecting an offset range, for gutter drawing.

        Args:
            start_offset: First visible character offset
            end_offset: Last visible character offset

        Returns:
            range of 1-based line numbers
        """
        if end_offset < start_offset:
            start_offset, end_offset = end_offset, start_offset
        return range(self.lineNumber_at(start_offset), self.lineNumber_at(end_offset) + 1)
