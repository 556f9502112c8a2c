"""
app/mappers package marker.
"""

from app.mappers.facility_row_mapper import (
    AGE_CLASS_COLUMNS,
    DEFAULT_COLUMN_INDEX,
    REQUIRED_COLUMNS,
    FacilityRowMapper,
    normalize_count,
)

__all__ = [
    "AGE_CLASS_COLUMNS",
    "DEFAULT_COLUMN_INDEX",
    "REQUIRED_COLUMNS",
    "FacilityRowMapper",
    "normalize_count",
]
