"""
app/domain package marker.
"""

from app.domain.facility_stats import (
    AgeClass,
    Facility,
    FacilityAgeClassStat,
    FacilityLocation,
    FacilityRow,
    FacilityStatSummary,
    ImportBatch,
    MonthlyStatistic,
)

__all__ = [
    "AgeClass",
    "Facility",
    "FacilityAgeClassStat",
    "FacilityLocation",
    "FacilityRow",
    "FacilityStatSummary",
    "ImportBatch",
    "MonthlyStatistic",
]
