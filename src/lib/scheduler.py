"""
Highlight scheduler: decide when to tokenize, and never apply stale work

State machine per document:

    IDLE --request--> DEBOUNCING --timer--> COMPUTING --result--> APPLYING --> IDLE
                       ^   |
                       +---+  further requests restart the timer

Threads:
    - interactive thread: highlight_request(), event_handle(), result
      handling and painting. Owns the document.
    - timer thread (threading.Timer): only submits work to the executor.
    - worker thread (ThreadPoolExecutor): runs the tokenizer on a snapshot.

Every request bumps a generation counter. A result whose snapshot
generation is no longer current is dropped when it reaches the interactive
thread; the applier additionally refuses spans whose snapshot text differs
from the live text. In-flight tokenization is not interrupted.
"""

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, Optional, Protocol, Tuple

from ..config import appsettings, AppSettings
from ..models.events import (
    DocumentEvent,
    LanguageChanged,
    LineJumped,
    SelectionChanged,
    TextChanged,
    ThemeChanged,
)
from ..models.language import Language
from ..models.snapshot import (
    ApplyOutcome,
    HighlightStats,
    SchedulerState,
    Snapshot,
    TokenizeResult,
)
from .applier import HighlightTarget, RenderApplier
from .dispatch import InteractiveLoop
from .log import LOG, context_run
from .theme import Theme
from .tokenizer import Tokenizer


class HighlightDocument(HighlightTarget, Protocol):
    """What the scheduler reads from the document, on top of the paint surface"""

    def language_get(self) -> Optional[Language]:
        ...

    def theme_get(self) -> Theme:
        ...


class HighlightScheduler:
    """
    Debounced, off-thread highlighting for one document

    Args:
        document: Live document (read and painted on the interactive thread)
        settings: Debounce/retry/size settings (default: appsettings)
        dispatch: Callable that runs a callback on the interactive thread.
                  Defaults to post() of a private InteractiveLoop exposed as
                  `self.loop`
        tokenizer: Tokenizer instance (default: Tokenizer(settings))
        applier: RenderApplier instance
        executor: Executor for tokenization (default: a private thread pool)
        modal_check: Returns True while a modal UI blocks the interactive
                     thread; highlighting is deferred and retried meanwhile
        timer_factory: threading.Timer compatible factory

    Example:
        scheduler = HighlightScheduler(session)
        session.listener_connect(scheduler.event_handle)
        session.text_insert(0, "let x = 1")
        scheduler.loop.run_until(scheduler.idle_is)
    """

    def __init__(
        self,
        document: HighlightDocument,
        settings: Optional[AppSettings] = None,
        dispatch: Optional[Callable[[Callable[[], None]], None]] = None,
        tokenizer: Optional[Tokenizer] = None,
        applier: Optional[RenderApplier] = None,
        executor: Optional[Executor] = None,
        modal_check: Optional[Callable[[], bool]] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self.document = document
        self.settings = settings or appsettings
        self.loop: Optional[InteractiveLoop] = None
        if dispatch is None:
            self.loop = InteractiveLoop()
            dispatch = self.loop.post
        self.dispatch = dispatch
        self.tokenizer = tokenizer or Tokenizer(self.settings)
        self.applier = applier or RenderApplier()
        self._owns_executor = executor is None
        self.executor: Executor = executor or ThreadPoolExecutor(
            max_workers=self.settings.worker_threads,
            thread_name_prefix="neonlight-highlight",
        )
        self.modal_check = modal_check
        self.timer_factory = timer_factory

        self.stats = HighlightStats()
        self._lock = threading.RLock()
        self._state = SchedulerState.IDLE
        self._generation = 0
        self._timer: Optional[threading.Timer] = None
        self._future: Optional[Future] = None
        self._last_key: Optional[Tuple] = None
        self._closed = False

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_highlighted(self) -> Optional[Tuple]:
        """(text, language, theme) of the last pass applied or bypassed"""
        return self._last_key

    def idle_is(self) -> bool:
        return self._state is SchedulerState.IDLE

    def cache_clear(self) -> None:
        """Forget the last highlighted triple so the next request always runs"""
        self._last_key = None

    # --------------------------------------------------------------- requests

    def snapshot_capture(self, generation: int, text: Optional[str] = None) -> Snapshot:
        """Copy the document state the worker is allowed to see"""
        return Snapshot(
            text=self.document.text_get() if text is None else text,
            language=self.document.language_get(),
            theme=self.document.theme_get(),
            selection=self.document.selection_get(),
            generation=generation,
        )

    def highlight_request(self, text: Optional[str] = None) -> bool:
        """
        Schedule a highlight pass after the debounce window.

        Call on the interactive thread. Any pending pass is superseded.

        Args:
            text: Current text, if the caller already has it

        Returns:
            True if a pass was scheduled; False when deferred, closed, or
            when (text, language, theme) equals the last highlighted triple
        """
        if self._closed:
            return False
        self.stats.requested += 1

        if self.modal_check is not None and self.modal_check():
            with self._lock:
                self._generation += 1
                self._work_cancel()
                self._timer_start(self.settings.modal_retry_seconds, self._deferred_fire, self._generation)
                self._state = SchedulerState.DEBOUNCING
            self.stats.deferred += 1
            LOG("Modal UI active, deferring highlight", level=2)
            return False

        with self._lock:
            self._generation += 1
            snapshot = self.snapshot_capture(self._generation, text)
            self._work_cancel()
            if snapshot.key == self._last_key:
                self._state = SchedulerState.IDLE
                return False
            self._timer_start(self.settings.debounce_seconds, self._debounce_fire, snapshot)
            self._state = SchedulerState.DEBOUNCING
        return True

    def highlight_cancel(self) -> None:
        """Drop any pending or in-flight pass (its result will be discarded)"""
        with self._lock:
            self._generation += 1
            self._work_cancel()
            self._state = SchedulerState.IDLE

    def highlight_now(self) -> Optional[ApplyOutcome]:
        """
        Tokenize and apply synchronously on the calling (interactive) thread.

        Pending debounced work is superseded.

        Returns:
            ApplyOutcome, or None when the pass was bypassed or failed
        """
        with self._lock:
            self._generation += 1
            snapshot = self.snapshot_capture(self._generation)
            self._work_cancel()
            self._state = SchedulerState.COMPUTING
        self.stats.requested += 1
        future: Future = Future()
        try:
            future.set_result(self._compute(snapshot))
        except Exception as e:
            future.set_exception(e)
        return self._result_handle(snapshot, future)

    def event_handle(self, event: DocumentEvent) -> None:
        """
        Consume a typed document event (interactive thread).

        Text, language, theme and selection changes request a pass. An edit
        always repaints, even when it leaves the text as it was, because
        the edited characters lost their colours. A jump-to-line first drops
        pending work so it cannot restore the pre-jump selection, then
        requests a pass for the new state.
        """
        if isinstance(event, TextChanged):
            self.cache_clear()
            self.highlight_request(event.text)
        elif isinstance(event, (LanguageChanged, ThemeChanged, SelectionChanged)):
            self.highlight_request()
        elif isinstance(event, LineJumped):
            self.highlight_cancel()
            self.highlight_request()

    # ------------------------------------------------------------- internals

    def _timer_start(self, delay: float, fn: Callable, arg: object) -> None:
        timer = self.timer_factory(delay, fn, args=(arg,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _work_cancel(self) -> None:
        """Cancel the debounce timer and a not-yet-started future (lock held)"""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._future is not None:
            self._future.cancel()
            self._future = None

    def _deferred_fire(self, generation: int) -> None:
        """Timer thread: retry a deferred request on the interactive thread"""
        self.dispatch(partial(self._deferred_retry, generation))

    def _deferred_retry(self, generation: int) -> None:
        if generation == self._generation and not self._closed:
            self.highlight_request()

    def _debounce_fire(self, snapshot: Snapshot) -> None:
        """Timer thread: hand the snapshot to the executor"""
        with self._lock:
            if self._closed or snapshot.generation != self._generation:
                return
            self._timer = None
            self._state = SchedulerState.COMPUTING
            try:
                future = self.executor.submit(context_run(self._compute, snapshot))
            except RuntimeError as e:
                LOG(f"Highlight executor unavailable: {e}", level=1)
                self._state = SchedulerState.IDLE
                return
            self._future = future
        future.add_done_callback(
            lambda done: self.dispatch(partial(self._result_handle, snapshot, done))
        )

    def _compute(self, snapshot: Snapshot) -> TokenizeResult:
        """Worker thread: pure tokenization of the snapshot"""
        with self._lock:
            self.stats.computed += 1
        return self.tokenizer.snapshot_tokenize(snapshot)

    def _result_handle(self, snapshot: Snapshot, future: Future) -> Optional[ApplyOutcome]:
        """Interactive thread: validate and apply one finished pass"""
        if future.cancelled() or self._closed:
            return None

        with self._lock:
            current = snapshot.generation == self._generation
            if current:
                self._future = None
                self._state = SchedulerState.APPLYING

        error = future.exception()
        if error is not None:
            self.stats.failed += 1
            LOG(f"Highlight worker failed, keeping previous colours: {error!r}", level=1)
            self._idle_return(snapshot)
            return None

        if not current:
            self.stats.discarded += 1
            LOG(f"Discarding superseded highlight generation {snapshot.generation}", level=2)
            return ApplyOutcome.DISCARDED

        result: TokenizeResult = future.result()
        outcome: Optional[ApplyOutcome] = None
        try:
            if result.bypassed:
                if self.document.text_get() == snapshot.text:
                    self.stats.bypassed += 1
                    self._last_key = snapshot.key
                else:
                    outcome = ApplyOutcome.DISCARDED
            else:
                outcome = self.applier.highlight_apply(
                    self.document, result.spans, snapshot, snapshot.theme
                )
                if outcome is ApplyOutcome.APPLIED:
                    self.stats.applied += 1
                    self._last_key = snapshot.key
        except Exception as e:
            self.stats.failed += 1
            LOG(f"Applying highlight failed, keeping previous colours: {e!r}", level=1)
            self._idle_return(snapshot)
            return None

        self._idle_return(snapshot)
        if outcome is ApplyOutcome.DISCARDED:
            # Text changed without an event reaching us; start over.
            self.stats.discarded += 1
            self.highlight_request()
        return outcome

    def _idle_return(self, snapshot: Snapshot) -> None:
        with self._lock:
            if snapshot.generation == self._generation and self._state in (
                SchedulerState.APPLYING,
                SchedulerState.COMPUTING,
            ):
                self._state = SchedulerState.IDLE

    # -------------------------------------------------------------- lifetime

    def close(self) -> None:
        """Cancel pending work and stop the private executor"""
        with self._lock:
            self._closed = True
            self._generation += 1
            self._work_cancel()
            self._state = SchedulerState.IDLE
        if self._owns_executor:
            self.executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "HighlightScheduler":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
