"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern used by
the command line front end, and the pipeline() helper for composing stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

# Forward references for type hints - avoid circular import
if TYPE_CHECKING:
    from ..lib.theme import Theme
    from .language import Language


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the highlight pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputFile, language, theme, themesDir, scheme, format, verbosity
        - env_check: inputSourceFile, resolvedLanguage, resolvedTheme, envOK
        - source_read: sourceText
        - source_highlight: spans, rendered
        - results_report: (no additions, terminal stage)

    Attributes:
        inputFile: Path of the file to highlight
        language: Language identifier forced on the command line (None = detect)
        theme: Theme name
        themesDir: Directory holding YAML themes
        scheme: Colour scheme name ("light" or "dark")
        format: Output format (terminal, html, spans, outline)
        verbosity: Logging verbosity level (0-3)
        envOK: Environment validation passed
        inputSourceFile: Resolved input path
        resolvedLanguage: Language actually used
        resolvedTheme: Loaded Theme
        sourceText: File contents
        spans: Computed highlight spans
        rendered: Final text written to stdout
    """

    # CLI arguments
    inputFile: str = field(default="")
    language: Optional[str] = field(default=None)
    theme: str = field(default="neon")
    themesDir: str = field(default="themes")
    scheme: str = field(default="light")
    format: str = field(default="terminal")
    verbosity: int = field(default=1)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    resolvedLanguage: Optional["Language"] = field(default=None)
    resolvedTheme: Optional["Theme"] = field(default=None)
    sourceText: str = field(default="")
    spans: Optional[List[Any]] = field(default=None)  # List[HighlightSpan] at runtime
    rendered: str = field(default="")

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace
    ) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Only attributes that name a ProgramState field are copied; anything
        else on the namespace is ignored.

        Args:
            options: Parsed CLI arguments

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}
        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            source_highlight,
            results_report
        )

    This is equivalent to:
        results_report(source_highlight(source_read(env_check(initial_state))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
