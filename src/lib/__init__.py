"""
neonlight - Incremental syntax highlighting engine

Regex-pattern-driven colouring for editor documents, computed off the
interactive thread and applied without disturbing caret, selection or scroll.
"""

__version__ = "1.0.0"

from .patterns import patterns_get, rules_get, languages_supported
from .tokenizer import Tokenizer, spans_segment
from .scheduler import HighlightScheduler
from .applier import RenderApplier
from .lineindex import LineIndex
from .session import EditorSession
from .theme import Theme, ThemeError, theme_load
from .outline import outline_build, OutlineEntry
from .dispatch import InteractiveLoop
from .log import LOG, state_connectToLogger

__all__ = [
    "patterns_get",
    "rules_get",
    "languages_supported",
    "Tokenizer",
    "spans_segment",
    "HighlightScheduler",
    "RenderApplier",
    "LineIndex",
    "EditorSession",
    "Theme",
    "ThemeError",
    "theme_load",
    "outline_build",
    "OutlineEntry",
    "InteractiveLoop",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
