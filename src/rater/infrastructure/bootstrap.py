"""Builds the rating stack from settings.

The CLI and the HTTP app get their JobStore here; nothing else imports the
concrete repositories or the thread scheduler.
"""

from __future__ import annotations

from pathlib import Path

from rater.application.job_store import JobStore
from rater.application.rate_shipment import RateShipmentHandler
from rater.domain.model.rate_tables import RatingTables
from rater.infrastructure.config import Settings, load_settings
from rater.infrastructure.persistence.in_memory_job_repository import (
    InMemoryJobRepository,
)
from rater.infrastructure.persistence.json_rate_table_repository import (
    JsonRateTableRepository,
)
from rater.infrastructure.scheduling.thread_scheduler import ThreadScheduler


def settings() -> Settings:
    return load_settings()


def rate_tables(path: Path | None = None) -> RatingTables:
    return JsonRateTableRepository(path or settings().tables_path).load()


def rate_shipment_handler(config: Settings | None = None) -> RateShipmentHandler:
    config = config or settings()
    return RateShipmentHandler(rate_tables(config.tables_path))


def job_store(config: Settings | None = None) -> JobStore:
    config = config or settings()
    return JobStore(
        job_repo=InMemoryJobRepository(),
        rater=rate_shipment_handler(config),
        scheduler=ThreadScheduler(),
        processing_delay=config.processing_delay,
    )
