"""
Highlight pass data models

Type-safe structures that travel between the scheduler, the tokenizer worker
and the render applier during one highlight pass.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, TYPE_CHECKING

from .language import Language
from .tokens import HighlightSpan

if TYPE_CHECKING:
    from ..lib.theme import Theme


Selection = Tuple[int, int]


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable capture of the document taken on the interactive thread

    The worker only ever sees this object, never the live document. The
    text is the identity used for the staleness check at apply time.

    Attributes:
        text: Document text at capture time
        language: Active language at capture time (None when unknown)
        theme: Active theme at capture time
        selection: Caret/selection (start, end) at capture time
        generation: Scheduler request counter; newer requests have larger values

    Example:
        Snapshot(text="let x = 1", language=Language.SWIFT, theme=theme,
                 selection=(9, 9), generation=3)
    """
    text: str
    language: Optional[Language]
    theme: "Theme"
    selection: Selection = (0, 0)
    generation: int = 0

    @property
    def key(self) -> Tuple[str, Optional[Language], "Theme"]:
        """The (text, language, theme) triple compared against the last pass"""
        return (self.text, self.language, self.theme)


@dataclass
class TokenizeResult:
    """
    Output of one tokenizer run

    Attributes:
        spans: Matched spans, in rule application order
        bypassed: True when the text exceeded the size threshold and no
                  matching was attempted
        skipped_rules: Number of rules that failed to compile or match
    """
    spans: List[HighlightSpan] = field(default_factory=list)
    bypassed: bool = False
    skipped_rules: int = 0


class ApplyOutcome(Enum):
    """Result of handing spans to the render applier"""
    APPLIED = "applied"
    DISCARDED = "discarded"


class SchedulerState(Enum):
    """Per-document highlight state machine"""
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    COMPUTING = "computing"
    APPLYING = "applying"


@dataclass
class HighlightStats:
    """Counters kept by the scheduler, mostly for tests and diagnostics"""
    requested: int = 0
    deferred: int = 0
    computed: int = 0
    applied: int = 0
    discarded: int = 0
    bypassed: int = 0
    failed: int = 0
