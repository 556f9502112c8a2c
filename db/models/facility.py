"""
db/models/facility.py

Facility registry keyed by the municipality's building code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.facility_location import FacilityLocationRecord


class FacilityRecord(Base, TimestampMixin):
    """
    One childcare facility.

    building_code is the natural key used to reconcile CSV rows; rows are
    created lazily the first time an unknown code is imported and are never
    updated by the import pipeline.
    """

    __tablename__ = "facilities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    building_code: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        unique=True,
        comment="施設番号 column of the municipal export",
    )

    location: Mapped["FacilityLocationRecord | None"] = relationship(
        "FacilityLocationRecord",
        back_populates="facility",
        uselist=False,
    )

    __table_args__ = (Index("ix_facilities_name", "name"),)

    def __repr__(self) -> str:
        return f"<FacilityRecord id={self.id} building_code={self.building_code!r}>"
