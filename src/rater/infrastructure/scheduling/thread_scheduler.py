"""Thread-backed TaskScheduler.

Each task gets its own daemon thread that sleeps for the delay, runs the
task once and resolves the Future. There is no pool and no queue.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import Future
from typing import Callable, TypeVar

from rater.application.scheduler import TaskScheduler

T = TypeVar("T")


class ThreadScheduler(TaskScheduler):

    def schedule(self, task: Callable[[], T], delay: float) -> Future[T]:
        future: Future[T] = Future()

        def run() -> None:
            if delay > 0:
                time.sleep(delay)
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = task()
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

        threading.Thread(target=run, name="rating-job", daemon=True).start()
        return future
