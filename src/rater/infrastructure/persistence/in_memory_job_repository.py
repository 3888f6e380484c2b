"""Process-local implementation of JobRepository.

Jobs live for the lifetime of the process; there is no expiry. Each save
replaces the stored reference under a lock, so readers only ever see a
whole job.
"""

from __future__ import annotations

import threading
import uuid

from rater.domain.model.job import RatingJob
from rater.domain.repository.job_repository import JobRepository


class InMemoryJobRepository(JobRepository):

    def __init__(self) -> None:
        self._store: dict[str, RatingJob] = {}
        self._lock = threading.Lock()

    # --- JobRepository interface ----------------------------------------------

    def next_id(self) -> str:
        return str(uuid.uuid4())

    def get_by_id(self, job_id: str) -> RatingJob | None:
        with self._lock:
            return self._store.get(job_id)

    def save(self, job: RatingJob) -> None:
        with self._lock:
            self._store[job.id] = job

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
