"""
app/services/facility_stats_service.py

Aggregates the latest import of each kind into per-facility statistics.
"""

from __future__ import annotations

import logging

from app.domain.facility_stats import FacilityStatSummary
from app.repositories.facility_stats_repository import SQLAlchemyFacilityStatsRepository

logger = logging.getLogger(__name__)


class FacilityStatsService:
    """
    Read side of the pipeline: latest figures per facility and age class.

    Only facilities with a registered location are reported, ordered by id.
    """

    def __init__(self, repository: SQLAlchemyFacilityStatsRepository) -> None:
        self._repository = repository

    def get_facility_stats(self) -> list[FacilityStatSummary]:
        locations = self._repository.fetch_facility_locations()
        latest_batches = self._repository.fetch_latest_import_batches()
        stats = self._repository.fetch_facility_age_class_stats(
            [batch.id for batch in latest_batches]
        )

        summaries: dict[int, FacilityStatSummary] = {
            location.facility_id: FacilityStatSummary(
                facility_id=location.facility_id,
                name=location.name,
                longitude=location.longitude,
                latitude=location.latitude,
            )
            for location in locations
        }
        for stat in stats:
            summary = summaries.get(stat.facility_id)
            if summary is not None:
                summary.stats.append(stat)

        logger.info(
            "Aggregated facility stats facilities=%d batches=%s",
            len(summaries),
            {batch.kind: batch.id for batch in latest_batches},
        )
        return list(summaries.values())
