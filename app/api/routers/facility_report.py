"""
app/api/routers/facility_report.py

Facility statistics report endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.repositories.facility_stats_repository import SQLAlchemyFacilityStatsRepository
from app.schemas.facility_report import FacilityFeatureCollection
from app.services.facility_report_service import build_feature_collection
from app.services.facility_stats_service import FacilityStatsService
from db.repositories.errors import PersistenceError
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["facility-stats"])


@router.get("/facility-stats", response_model=FacilityFeatureCollection)
def get_facility_stats(db: Session = Depends(get_db)) -> FacilityFeatureCollection:
    """
    Return the latest statistics of every located facility as GeoJSON.
    """

    service = FacilityStatsService(SQLAlchemyFacilityStatsRepository(db))
    try:
        summaries = service.get_facility_stats()
    except PersistenceError as exc:
        logger.error("Facility stats query failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to load facility statistics.",
        ) from exc

    return build_feature_collection(summaries)
