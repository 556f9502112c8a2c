"""
db/models/csv_import_history.py

One row per CSV import run. Its id ties together every monthly statistic
written by that run.
"""

from __future__ import annotations

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin


class ImportKind:
    WAITING = "waiting"
    ACCEPTANCE = "acceptance"
    CHILDREN = "children"

    ALL: tuple[str, ...] = (WAITING, ACCEPTANCE, CHILDREN)


class CsvImportHistoryRecord(Base, CreatedAtMixin):
    __tablename__ = "csv_import_histories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    kind: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="waiting, acceptance, children",
    )

    __table_args__ = (
        Index("ix_csv_import_histories_kind_created_at", "kind", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<CsvImportHistoryRecord id={self.id} kind={self.kind!r} file_name={self.file_name!r}>"
