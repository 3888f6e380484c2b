"""RatingJob aggregate: the request/poll lifecycle of one rate request.

A job is created PROCESSING and moves to COMPLETED exactly once. It is a
frozen dataclass: ``complete()`` returns a new instance, and the repository
swaps the whole reference, so a concurrent reader sees either the old job
or the finished one, never a half-written result.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from rater.domain.exceptions import ValidationError
from rater.domain.model.quote import RateQuote


class JobStatus(Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class RatingJob:

    id: str
    request: dict[str, Any]  # raw payload, retained for debugging
    status: JobStatus = JobStatus.PROCESSING
    result: tuple[RateQuote, ...] | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def start(job_id: str, request: dict[str, Any]) -> RatingJob:
        if not job_id:
            raise ValidationError("Job ID is required")
        return RatingJob(id=job_id, request=request)

    # --- State transitions ----------------------------------------------------

    def complete(self, rates: list[RateQuote]) -> RatingJob:
        """Transition PROCESSING -> COMPLETED, returning the new state."""
        if self.status != JobStatus.PROCESSING:
            raise ValidationError(
                f"Cannot complete job {self.id}, current status is "
                f"{self.status.value}, expected processing"
            )
        return replace(
            self,
            status=JobStatus.COMPLETED,
            result=tuple(rates),
            completed_at=datetime.now(timezone.utc),
        )

    @property
    def is_done(self) -> bool:
        return self.status == JobStatus.COMPLETED
