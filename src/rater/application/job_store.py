"""Application service: JobStore, the asynchronous request/poll façade.

``submit`` validates the request, records a PROCESSING job and schedules
the rating pipeline without blocking the caller. ``poll`` reports progress
until the scheduled task has swapped in the COMPLETED job.

There is no failure state on the job itself. If the scheduled task dies,
its future holds the exception and ``poll`` surfaces it as
ComputationUnavailableError.
"""

from __future__ import annotations

import copy
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any

from loguru import logger

from rater.application.dto import JobView, RateRequestSpec
from rater.application.parse_rate_request import parse_rate_request
from rater.application.rate_shipment import RateShipmentHandler
from rater.application.scheduler import TaskScheduler
from rater.domain.exceptions import ComputationUnavailableError, JobNotFoundError
from rater.domain.model.job import RatingJob
from rater.domain.model.quote import RateQuote
from rater.domain.repository.job_repository import JobRepository

DEFAULT_PROCESSING_DELAY = 0.8  # seconds


class JobStore:

    def __init__(
        self,
        job_repo: JobRepository,
        rater: RateShipmentHandler,
        scheduler: TaskScheduler,
        processing_delay: float = DEFAULT_PROCESSING_DELAY,
    ) -> None:
        self._job_repo = job_repo
        self._rater = rater
        self._scheduler = scheduler
        self._processing_delay = processing_delay
        self._futures: dict[str, Future] = {}
        self._lock = threading.Lock()

    # --- Commands -------------------------------------------------------------

    def submit(self, payload: dict[str, Any]) -> str:
        """Accept a rate request and return its job ID immediately.

        Raises InvalidInputError before anything is stored if the payload
        is structurally incomplete.
        """
        request = copy.deepcopy(payload)
        spec = parse_rate_request(request)

        job = RatingJob.start(self._job_repo.next_id(), request)
        self._job_repo.save(job)
        logger.info(
            "Rate request {} accepted: {} to {}, {}",
            job.id,
            spec.kind.value,
            spec.destination.city or "?",
            spec.destination.region or "?",
        )

        future = self._scheduler.schedule(
            lambda: self._complete(job.id, spec), self._processing_delay
        )
        with self._lock:
            self._futures[job.id] = future
        future.add_done_callback(lambda f: self._on_done(job.id, f))
        return job.id

    # --- Queries --------------------------------------------------------------

    def poll(self, job_id: str) -> JobView:
        job = self._get(job_id)
        if job.is_done:
            rates = job.result or ()
            return JobView(done=True, total=len(rates), complete=len(rates), rates=rates)

        with self._lock:
            future = self._futures.get(job_id)
        if future is not None and future.done() and future.exception() is not None:
            raise ComputationUnavailableError() from future.exception()

        spec = parse_rate_request(job.request)
        return JobView(done=False, total=self._rater.candidate_count(spec), complete=0)

    def wait(self, job_id: str, timeout: float | None = None) -> JobView:
        """Block until the job's computation finishes, then poll it."""
        self._get(job_id)
        with self._lock:
            future = self._futures.get(job_id)
        if future is not None:
            try:
                future.exception(timeout=timeout)
            except FutureTimeoutError:
                pass
        return self.poll(job_id)

    # --- Internal helpers -----------------------------------------------------

    def _get(self, job_id: str) -> RatingJob:
        job = self._job_repo.get_by_id(job_id)
        if job is None:
            raise JobNotFoundError(f"Rate request {job_id} not found")
        return job

    def _complete(self, job_id: str, spec: RateRequestSpec) -> list[RateQuote]:
        quotes = self._rater.handle(spec)
        job = self._get(job_id)
        self._job_repo.save(job.complete(quotes))

        logger.info("Generated {} rate(s) for request {}", len(quotes), job_id)
        for quote in quotes:
            logger.debug("  {} {}: {}", quote.carrier_name, quote.service_name, quote.total)
        return quotes

    def _on_done(self, job_id: str, future: Future) -> None:
        error = future.exception()
        if error is not None:
            # the handler already logged the traceback of a masked failure
            if isinstance(error, ComputationUnavailableError) and error.__cause__ is not None:
                logger.error("Rate request {} failed", job_id)
            else:
                logger.opt(exception=error).error("Rate request {} failed", job_id)
            return
        with self._lock:
            self._futures.pop(job_id, None)
