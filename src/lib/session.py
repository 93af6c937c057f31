"""
Editor session: the in-memory document the highlight engine works against

Holds text, language, theme, caret/selection, scroll position and the
per-character foreground colour attributes painted by the render applier.
Every mutation is announced to connected listeners as a typed event (see
models.events), which is how a HighlightScheduler learns about keystrokes,
pasted text and streamed AI suggestions alike.

All methods belong to the interactive thread.
"""

from typing import Callable, Iterable, List, Optional, Tuple, Union

from ..models.events import (
    DocumentEvent,
    LanguageChanged,
    LineJumped,
    SelectionChanged,
    TextChanged,
    ThemeChanged,
)
from ..models.language import Language, language_resolve
from .lineindex import LineIndex
from .theme import Theme, theme_load

Listener = Callable[[DocumentEvent], None]

# Opening character -> closing partner inserted with it
BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}", '"': '"', "'": "'"}


class EditorSession:
    """
    One open document

    Attributes:
        line_index: LineIndex kept in step with every edit
        edit_depth: Nesting depth of edits_begin()/edits_end()
        paint_count: Number of completed batched attribute edits

    Example:
        >>> session = EditorSession("print('hi')", language="python")
        >>> session.caretStatus_get()
        'Ln 1, Col 1'
    """

    def __init__(
        self,
        text: str = "",
        language: Union[Language, str, None] = None,
        theme: Optional[Theme] = None,
    ) -> None:
        self._text = text
        self._language = language_resolve(language)
        self._theme = theme or theme_load()
        self._selection: Tuple[int, int] = (0, 0)
        self._scroll_line = 1
        self._colors: List[Optional[str]] = [None] * len(text)
        self._listeners: List[Listener] = []
        self.line_index = LineIndex(text)
        self.edit_depth = 0
        self.paint_count = 0

    # -------------------------------------------------------------- listeners

    def listener_connect(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def listener_disconnect(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _emit(self, event: DocumentEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------- document surface

    def text_get(self) -> str:
        return self._text

    def language_get(self) -> Optional[Language]:
        return self._language

    def theme_get(self) -> Theme:
        return self._theme

    def selection_get(self) -> Tuple[int, int]:
        return self._selection

    def scroll_get(self) -> int:
        """First visible line (1-based)"""
        return self._scroll_line

    def scroll_set(self, line: int) -> None:
        self._scroll_line = self.line_index.line_clamp(line)

    # -------------------------------------------------------------- mutations

    def text_replace(self, start: int, end: int, replacement: str) -> None:
        """
        Replace text[start:end] with `replacement`.

        Inserted characters carry no colour until the next highlight pass.
        The selection is shifted to stay on the same text where possible; a
        caret sitting exactly where text is inserted stays put, so appended
        and streamed text never drags it along.

        Raises:
            ValueError: If the range is outside the document
        """
        if not 0 <= start <= end <= len(self._text):
            raise ValueError(f"Edit range {start}-{end} outside document of length {len(self._text)}")

        self._text = self._text[:start] + replacement + self._text[end:]
        self._colors[start:end] = [None] * len(replacement)
        self.line_index.edit_apply(start, end, replacement)

        delta = len(replacement) - (end - start)

        def shifted(offset: int) -> int:
            if offset > end:
                return offset + delta
            if offset > start:
                return start + len(replacement)
            return offset

        sel_start, sel_end = self._selection
        self._selection = (shifted(sel_start), shifted(sel_end))
        self._emit(TextChanged(self._text))

    def text_set(self, text: str) -> None:
        """Replace the whole document; caret goes to the start"""
        self._text = text
        self._colors = [None] * len(text)
        self.line_index.text_update(text)
        self._selection = (0, 0)
        self._scroll_line = 1
        self._emit(TextChanged(self._text))

    def text_insert(self, offset: int, text: str) -> None:
        self.text_replace(offset, offset, text)

    def text_append(self, chunk: str) -> None:
        self.text_replace(len(self._text), len(self._text), chunk)

    def suggestion_stream(self, chunks: Iterable[str]) -> int:
        """
        Append streamed suggestion text chunk by chunk.

        Each chunk goes through the same mutation path as typing, so the
        highlighter reacts to it exactly as it does to keystrokes. The view
        follows the end of the document.

        Args:
            chunks: Text fragments in arrival order

        Returns:
            Number of characters appended
        """
        appended = 0
        for chunk in chunks:
            if not chunk:
                continue
            self.text_append(chunk)
            self.scroll_set(self.line_index.line_count)
            appended += len(chunk)
        return appended

    def input_insert(self, text: str) -> int:
        """
        Type `text` over the current selection.

        A newline carries over the leading spaces and tabs of the line the
        caret is on. An opening bracket or quote is inserted together with
        its closing partner and the caret lands between them. Anything else
        is inserted as-is with the caret after it. The edit goes through
        text_replace(), so listeners see an ordinary TextChanged.

        Returns:
            The caret offset after the insertion
        """
        start, end = min(self._selection), max(self._selection)
        if text == "\n":
            line_start = self.line_index.offset_forLine(self.line_index.lineNumber_at(start))
            before = self._text[line_start:start]
            inserted = "\n" + before[: len(before) - len(before.lstrip(" \t"))]
            caret = start + len(inserted)
        elif text in BRACKET_PAIRS:
            inserted = text + BRACKET_PAIRS[text]
            caret = start + 1
        else:
            inserted = text
            caret = start + len(text)

        self.text_replace(start, end, inserted)
        self.selection_set((caret, caret))
        return caret

    def language_set(self, language: Union[Language, str, None]) -> None:
        resolved = language_resolve(language)
        if resolved is self._language:
            return
        self._language = resolved
        self._emit(LanguageChanged(resolved))

    def theme_set(self, theme: Theme) -> None:
        if theme == self._theme:
            return
        self._theme = theme
        self._emit(ThemeChanged(theme))

    def selection_set(self, selection: Tuple[int, int]) -> None:
        """Move caret/selection (clamped to the document)"""
        length = len(self._text)
        start, end = (max(0, min(value, length)) for value in selection)
        if (start, end) == self._selection:
            return
        self._selection = (start, end)
        self._emit(SelectionChanged(self._selection))

    # ------------------------------------------------------------- navigation

    def lineNumber_at(self, offset: int) -> int:
        return self.line_index.lineNumber_at(offset)

    def offset_forLine(self, line: int) -> int:
        return self.line_index.offset_forLine(line)

    def line_goto(self, line: int) -> int:
        """
        Jump to a 1-based line: move the caret to its start and scroll to it.

        Out-of-range lines are clamped. Does nothing on an empty document.

        Returns:
            The caret offset after the jump
        """
        if not self._text:
            return 0
        target = self.line_index.line_clamp(line)
        offset = self.line_index.offset_forLine(target)
        self._selection = (offset, offset)
        self._scroll_line = target
        self._emit(LineJumped(target, offset))
        return offset

    def caretStatus_get(self) -> str:
        """Status-bar caret text, e.g. "Ln 3, Col 7" """
        line, column = self.line_index.position_get(self._selection[0])
        return f"Ln {line}, Col {column}"

    def wordCount_get(self) -> int:
        """Whitespace-separated words, shown next to the caret status"""
        return len(self._text.split())

    def currentLine_range(self) -> Tuple[int, int]:
        """Range of the caret's line including its break, for line highlighting"""
        line = self.line_index.lineNumber_at(self._selection[0])
        return self.line_index.lineRange_get(line, include_break=True)

    # -------------------------------------------------------- paint surface

    def edits_begin(self) -> None:
        self.edit_depth += 1

    def edits_end(self) -> None:
        self.edit_depth -= 1
        if self.edit_depth == 0:
            self.paint_count += 1

    def attributes_clear(self, start: int, end: int) -> None:
        self._colors[start:end] = [None] * (end - start)

    def color_apply(self, start: int, end: int, color: str) -> None:
        start = max(0, start)
        end = min(len(self._colors), end)
        if end > start:
            self._colors[start:end] = [color] * (end - start)

    def colors_get(self) -> List[Optional[str]]:
        """Copy of the per-character foreground colours"""
        return list(self._colors)

    def colorRuns_get(self) -> List[Tuple[int, int, Optional[str]]]:
        """Foreground colours as (start, end, colour) runs"""
        runs: List[Tuple[int, int, Optional[str]]] = []
        for index, color in enumerate(self._colors):
            if runs and runs[-1][2] == color and runs[-1][1] == index:
                runs[-1] = (runs[-1][0], index + 1, color)
            else:
                runs.append((index, index + 1, color))
        return runs
