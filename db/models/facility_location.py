"""
db/models/facility_location.py

Geographic position of a facility, consumed by the GeoJSON report.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Float, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.facility import FacilityRecord


class FacilityLocationRecord(Base, TimestampMixin):
    __tablename__ = "facility_locations"

    facility_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("facilities.id", ondelete="CASCADE"),
        primary_key=True,
    )
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)

    facility: Mapped["FacilityRecord"] = relationship(
        "FacilityRecord",
        back_populates="location",
    )
