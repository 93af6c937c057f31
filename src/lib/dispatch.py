"""
Interactive-thread dispatch queue

Worker threads never touch the document. They hand callbacks to the
interactive thread through post(); whoever owns the document (a GUI event
loop integration, the CLI, a test) drains the queue from that thread.
"""

import queue
import time
from typing import Callable, Optional


class InteractiveLoop:
    """
    Minimal run-queue for callbacks that must execute on one thread

    Example:
        >>> loop = InteractiveLoop()
        >>> loop.post(lambda: print("hello"))
        >>> loop.pending_run()
        hello
        1
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[Callable[[], None]]" = queue.Queue()

    def post(self, callback: Callable[[], None]) -> None:
        """Queue a callback; safe to call from any thread"""
        self._queue.put(callback)

    def pending_count(self) -> int:
        return self._queue.qsize()

    def pending_run(self, timeout: Optional[float] = None) -> int:
        """
        Run queued callbacks on the calling thread.

        Args:
            timeout: None runs only what is already queued; a number waits
                     up to that long for the first callback

        Returns:
            Number of callbacks executed
        """
        executed = 0
        block = timeout is not None
        while True:
            try:
                callback = self._queue.get(block=block, timeout=timeout if block else None)
            except queue.Empty:
                return executed
            callback()
            executed += 1
            block = False

    def run_until(self, predicate: Callable[[], bool], timeout: float = 5.0, poll: float = 0.01) -> bool:
        """
        Keep running callbacks until `predicate()` holds or time runs out.

        Args:
            predicate: Checked after every batch of callbacks
            timeout: Seconds to wait overall
            poll: Seconds to wait for each new callback

        Returns:
            True if the predicate became true
        """
        deadline = time.monotonic() + timeout
        while True:
            self.pending_run()
            if predicate():
                return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            self.pending_run(timeout=min(poll, remaining))
