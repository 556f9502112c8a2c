"""
app/schemas package marker.
"""

from app.schemas.facility_report import (
    AgeClassStatResponse,
    FacilityFeature,
    FacilityFeatureCollection,
    FacilityProperties,
    PointGeometry,
)

__all__ = [
    "AgeClassStatResponse",
    "FacilityFeature",
    "FacilityFeatureCollection",
    "FacilityProperties",
    "PointGeometry",
]
