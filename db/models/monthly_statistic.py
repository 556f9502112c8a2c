"""
db/models/monthly_statistic.py

Per-facility, per-age-class monthly figure produced by one import run.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin


class MonthlyStatisticRecord(Base, CreatedAtMixin):
    """
    Append-only statistic row.

    value keeps the source text (a non-negative count); sentinel cells are
    normalized before they reach this table.
    """

    __tablename__ = "facility_monthly_stats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    csv_import_history_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("csv_import_histories.id", ondelete="CASCADE"),
        nullable=False,
    )
    facility_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("facilities.id", ondelete="CASCADE"),
        nullable=False,
    )
    age_class_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("age_classes.id"),
        nullable=False,
    )
    target_month: Mapped[date] = mapped_column(Date, nullable=False)
    kind: Mapped[str] = mapped_column(String(32), nullable=False)
    value: Mapped[str] = mapped_column(String(32), nullable=False)

    __table_args__ = (
        Index("ix_facility_monthly_stats_import", "csv_import_history_id"),
        Index("ix_facility_monthly_stats_facility_age", "facility_id", "age_class_id"),
        Index("ix_facility_monthly_stats_target_month_kind", "target_month", "kind"),
    )
