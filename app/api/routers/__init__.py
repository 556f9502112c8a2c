"""
app/api/routers package marker.
"""

from app.api.routers.facility_report import router as facility_report_router

__all__ = [
    "facility_report_router",
]
