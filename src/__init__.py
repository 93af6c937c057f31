"""
neonlight - Incremental syntax highlighting engine

The colouring core of the Neon Vision editor: per-language pattern tables,
an off-thread tokenizer, a debouncing scheduler and a render applier that
never disturbs the caret, selection or scroll position.
"""

__version__ = "1.0.0"

from .lib import (
    EditorSession,
    HighlightScheduler,
    LineIndex,
    RenderApplier,
    Tokenizer,
    patterns_get,
    theme_load,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "EditorSession",
    "HighlightScheduler",
    "LineIndex",
    "RenderApplier",
    "Tokenizer",
    "patterns_get",
    "theme_load",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
