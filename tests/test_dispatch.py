"""
Interactive loop tests

Tests cross-thread posting and draining of callbacks.
"""

import threading

from neonlight.lib.dispatch import InteractiveLoop


class TestInteractiveLoop:
    """post() from any thread, run on the draining thread"""

    def test_runs_in_order(self):
        loop = InteractiveLoop()
        seen = []
        loop.post(lambda: seen.append(1))
        loop.post(lambda: seen.append(2))
        assert loop.pending_count() == 2
        assert loop.pending_run() == 2
        assert seen == [1, 2]
        assert loop.pending_count() == 0

    def test_runs_on_draining_thread(self):
        loop = InteractiveLoop()
        threads = []
        worker = threading.Thread(target=lambda: loop.post(lambda: threads.append(threading.current_thread())))
        worker.start()
        worker.join()
        loop.pending_run()
        assert threads == [threading.main_thread()]

    def test_pending_run_waits(self):
        loop = InteractiveLoop()
        timer = threading.Timer(0.02, loop.post, args=(lambda: None,))
        timer.start()
        assert loop.pending_run(timeout=2) == 1

    def test_run_until_timeout(self):
        loop = InteractiveLoop()
        assert loop.run_until(lambda: False, timeout=0.05) is False

    def test_run_until_predicate(self):
        loop = InteractiveLoop()
        done = []
        loop.post(lambda: done.append(True))
        assert loop.run_until(lambda: bool(done), timeout=1)
