"""
Centralized logging using Loguru with context-aware verbosity.

Every neonlight component reports through LOG(); which messages reach stderr
depends on the `verbosity` of the state connected to the current context.
The CLI connects its ProgramState, whose verbosity -v and -vv raise. An
embedding editor connects any object with a `verbosity` attribute before
it starts a HighlightScheduler.

Highlight passes run on a worker thread, which starts with an empty context.
The scheduler therefore submits work through context_run(), so a pattern
skipped on the worker is gated by the same verbosity as the keystroke that
triggered the pass. The thread column in the log format tells the
interactive thread and the worker apart.

Where neonlight logs, by level:
    1  malformed patterns skipped while compiling a table
       (lib.patterns), a failed worker or applier pass that keeps the
       previous colours (lib.scheduler), oversized sources printed
       uncoloured (__main__)
    2  modal deferral, superseded generations discarded by the scheduler
       or the applier, CLI environment checks
    3  per-pass span counts from the tokenizer and applier

Usage:
    from neonlight.lib.log import LOG, context_run, state_connectToLogger

    state_connectToLogger(state)
    LOG(f"Skipping malformed pattern {pattern!r}: {e}", level=1)
    LOG(f"Discarding superseded highlight generation {generation}", level=2)

    future = executor.submit(context_run(self._compute, snapshot))
"""

from loguru import logger
from typing import Any, Callable, Optional, TypeVar
from contextvars import ContextVar, copy_context
import sys

# Context variable to hold the state whose verbosity gates LOG()
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

T = TypeVar("T")

# Configure loguru with neonlight-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{thread.name: <22}</cyan> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a state object to the logging context.

    Args:
        state: Object with an integer `verbosity` attribute (ProgramState,
               a scheduler, a test stub), or None to silence LOG()
    """
    _program_state.set(state)


def context_run(fn: Callable[..., T], *args: Any) -> Callable[[], T]:
    """
    Bind `fn(*args)` to a copy of the current context.

    ThreadPoolExecutor workers start with an empty context; submitting the
    returned callable instead of `fn` makes the connected verbosity follow
    the work onto the worker thread.

    Example:
        executor.submit(context_run(tokenizer.snapshot_tokenize, snapshot))
    """
    ctx = copy_context()
    return lambda: ctx.run(fn, *args)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (-v)
        3 = Debug (-vv or higher)
    """
    state = _program_state.get()

    if state is not None and getattr(state, 'verbosity', 0) >= level:
        logger.opt(depth=1).debug(message, **kwargs)
