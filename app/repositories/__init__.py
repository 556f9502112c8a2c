"""
app/repositories package marker.
"""

from app.repositories.facility_stats_repository import (
    FacilityStatsRepository,
    SQLAlchemyFacilityStatsRepository,
)

__all__ = [
    "FacilityStatsRepository",
    "SQLAlchemyFacilityStatsRepository",
]
