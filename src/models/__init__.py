"""
Models package for neonlight

Contains data structures and type definitions shared by the highlight engine.
"""

from .state import ProgramState, pipeline
from .tokens import TokenClass, PatternRule, HighlightSpan, ColorScheme
from .language import Language, language_resolve, language_detect
from .snapshot import Snapshot, TokenizeResult, ApplyOutcome, SchedulerState, HighlightStats
from .events import (
    DocumentEvent,
    TextChanged,
    LanguageChanged,
    ThemeChanged,
    SelectionChanged,
    LineJumped,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "TokenClass",
    "PatternRule",
    "HighlightSpan",
    "ColorScheme",
    "Language",
    "language_resolve",
    "language_detect",
    "Snapshot",
    "TokenizeResult",
    "ApplyOutcome",
    "SchedulerState",
    "HighlightStats",
    "DocumentEvent",
    "TextChanged",
    "LanguageChanged",
    "ThemeChanged",
    "SelectionChanged",
    "LineJumped",
]
