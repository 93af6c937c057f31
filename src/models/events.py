"""
Typed document events

An EditorSession announces every change with one of these objects; the
HighlightScheduler consumes them through event_handle(). Each listener is
connected explicitly, there is no global notification centre.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union, TYPE_CHECKING

from .language import Language

if TYPE_CHECKING:
    from ..lib.theme import Theme


@dataclass(frozen=True)
class TextChanged:
    """Document text changed (keystroke, paste, streamed suggestion)"""
    text: str


@dataclass(frozen=True)
class LanguageChanged:
    language: Optional[Language]


@dataclass(frozen=True)
class ThemeChanged:
    theme: "Theme"


@dataclass(frozen=True)
class SelectionChanged:
    selection: Tuple[int, int]


@dataclass(frozen=True)
class LineJumped:
    """Caret moved by an explicit jump-to-line request"""
    line: int
    offset: int


DocumentEvent = Union[TextChanged, LanguageChanged, ThemeChanged, SelectionChanged, LineJumped]
