"""In-memory fakes for testing.

These implement the same abstract interfaces as the real adapters but
keep everything in a dict and run scheduled work only when told to. No
threads, no sleeps, no side effects.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Callable

from rater.application.scheduler import TaskScheduler
from rater.domain.model.job import RatingJob
from rater.domain.model.rate_tables import RatingTables
from rater.domain.repository.job_repository import JobRepository
from rater.infrastructure.config import DEFAULT_TABLES_PATH
from rater.infrastructure.persistence.json_rate_table_repository import (
    JsonRateTableRepository,
)


class FakeJobRepository(JobRepository):

    def __init__(self) -> None:
        self._store: dict[str, RatingJob] = {}
        self._next_id = 1

    def next_id(self) -> str:
        job_id = f"job-{self._next_id}"
        self._next_id += 1
        return job_id

    def get_by_id(self, job_id: str) -> RatingJob | None:
        return self._store.get(job_id)

    def save(self, job: RatingJob) -> None:
        self._store[job.id] = job

    def __len__(self) -> int:
        return len(self._store)


class ManualScheduler(TaskScheduler):
    """Holds scheduled tasks until ``run_all()`` is called."""

    def __init__(self) -> None:
        self.pending: list[tuple[Callable[[], object], Future, float]] = []

    def schedule(self, task, delay):
        future: Future = Future()
        self.pending.append((task, future, delay))
        return future

    def run_all(self) -> None:
        pending, self.pending = self.pending, []
        for task, future, _ in pending:
            future.set_running_or_notify_cancel()
            try:
                future.set_result(task())
            except Exception as exc:
                future.set_exception(exc)


def load_tables() -> RatingTables:
    """The rating tables shipped with the package."""
    return JsonRateTableRepository(DEFAULT_TABLES_PATH).load()
