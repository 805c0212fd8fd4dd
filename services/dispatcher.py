"""Background worker pool with completions delivered to a single consumer."""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable


logger = logging.getLogger(__name__)

ResultCallback = Callable[[Any], None]
ErrorCallback = Callable[[BaseException], None]


class UiDispatcher:
    """Runs network calls on a worker pool and funnels results back.

    Completed tasks are queued in completion order; nothing runs a callback
    until the UI context calls :meth:`drain`. There is no cancellation: a task
    that finishes after its caller has gone away still has its callback run
    on the next drain.
    """

    def __init__(self, max_workers: int = 4, *, executor: Executor | None = None) -> None:
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="redvelvet-net",
        )
        self._completions: "queue.Queue[tuple[ResultCallback | None, ErrorCallback | None, Future]]" = queue.Queue()
        self._lock = threading.Lock()
        self._outstanding = 0

    @property
    def outstanding(self) -> int:
        """Number of submitted tasks whose callback has not run yet."""

        with self._lock:
            return self._outstanding

    def submit(
        self,
        task: Callable[[], Any],
        on_result: ResultCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Future:
        """Run ``task`` in the pool.

        ``on_result`` receives the return value; ``on_error`` receives the
        exception when the task raises. Both run on the draining thread.
        """

        with self._lock:
            self._outstanding += 1
        future = self._executor.submit(task)
        future.add_done_callback(lambda done: self._completions.put((on_result, on_error, done)))
        return future

    def drain(self, *, wait: bool = False, timeout: float | None = None) -> int:
        """Run queued callbacks on the calling thread and return how many ran.

        With ``wait`` the call blocks until every outstanding task has been
        delivered, or until ``timeout`` seconds pass without a completion.
        """

        delivered = 0
        while True:
            block = wait and self.outstanding > 0
            try:
                on_result, on_error, future = self._completions.get(block=block, timeout=timeout if block else None)
            except queue.Empty:
                return delivered
            with self._lock:
                self._outstanding -= 1
            delivered += 1
            self._deliver(on_result, on_error, future)

    def _deliver(self, on_result: ResultCallback | None, on_error: ErrorCallback | None, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error("Background task failed: %s", exc, exc_info=exc)
            callback, argument = on_error, exc
        else:
            callback, argument = on_result, future.result()
        if callback is None:
            return
        try:
            callback(argument)
        except Exception:
            logger.exception("Completion callback failed")

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


__all__ = ["UiDispatcher"]
