"""Port for deferred work.

The job store hands each rating computation to a TaskScheduler and gets a
Future back. The future is the completion signal: it resolves once the
task has run (after the requested delay) and carries its result or error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Callable, TypeVar

T = TypeVar("T")


class TaskScheduler(ABC):

    @abstractmethod
    def schedule(self, task: Callable[[], T], delay: float) -> Future[T]:
        """Run ``task`` once, no sooner than ``delay`` seconds from now."""
