"""Abstract repository for RatingJob aggregate.

Defined in the domain layer so the job store never depends on
infrastructure. Implementations must make ``save`` a single atomic
replacement of the stored job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rater.domain.model.job import RatingJob


class JobRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a fresh, collision-free job ID."""

    @abstractmethod
    def get_by_id(self, job_id: str) -> RatingJob | None:
        """Return a job by its ID, or None if not found."""

    @abstractmethod
    def save(self, job: RatingJob) -> None:
        """Persist a new or updated job."""
