"""Abstract source of rating tables."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rater.domain.model.rate_tables import RatingTables


class RateTableRepository(ABC):

    @abstractmethod
    def load(self) -> RatingTables:
        """Return the complete set of rating tables."""
