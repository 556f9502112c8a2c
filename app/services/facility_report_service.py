"""
app/services/facility_report_service.py

Serializes aggregated facility statistics to the GeoJSON report.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.domain.facility_stats import FacilityStatSummary
from app.schemas.facility_report import (
    AgeClassStatResponse,
    FacilityFeature,
    FacilityFeatureCollection,
    FacilityProperties,
    PointGeometry,
)


def build_feature_collection(summaries: Sequence[FacilityStatSummary]) -> FacilityFeatureCollection:
    """
    One Point feature per facility; coordinates are [longitude, latitude, 0].
    """

    features = [
        FacilityFeature(
            properties=FacilityProperties(
                id=summary.facility_id,
                name=summary.name,
                stats=[
                    AgeClassStatResponse(
                        age_class=stat.age_class,
                        acceptance_count=stat.acceptance_count,
                        children_count=stat.children_count,
                        waiting_count=stat.waiting_count,
                    )
                    for stat in summary.stats
                ],
            ),
            geometry=PointGeometry(coordinates=[summary.longitude, summary.latitude, 0.0]),
        )
        for summary in summaries
    ]
    return FacilityFeatureCollection(features=features)


def render_report_json(collection: FacilityFeatureCollection) -> bytes:
    return collection.model_dump_json().encode("utf-8")
