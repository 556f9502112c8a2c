"""
app/repositories/facility_stats_repository.py

Persistence layer for the facility registry, import history and monthly
statistics.

The repository is bound to one session; the session's transaction is the
unit of work the import pipeline runs in. Nothing here commits.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Protocol

from sqlalchemy import case, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.facility_stats import (
    AgeClass,
    Facility,
    FacilityAgeClassStat,
    FacilityLocation,
    ImportBatch,
    MonthlyStatistic,
)
from db.models.age_class import AgeClassRecord
from db.models.csv_import_history import CsvImportHistoryRecord, ImportKind
from db.models.facility import FacilityRecord
from db.models.facility_location import FacilityLocationRecord
from db.models.monthly_statistic import MonthlyStatisticRecord
from db.repositories.errors import ImportBatchNotFoundError, PersistenceError

_DEFAULT_BATCH_SIZE = 1000
MISSING_VALUE = "-"


class FacilityStatsRepository(Protocol):
    """
    Operations the CSV import pipeline depends on.
    """

    def fetch_facilities(self) -> list[Facility]:
        ...

    def insert_facilities(self, facilities: Sequence[Facility]) -> None:
        ...

    def insert_import_batch(self, file_name: str, kind: str) -> None:
        ...

    def fetch_latest_import_batch(self, kind: str) -> ImportBatch:
        ...

    def insert_monthly_statistics(self, statistics: Sequence[MonthlyStatistic]) -> None:
        ...

    def fetch_age_classes(self) -> list[AgeClass]:
        ...


class SQLAlchemyFacilityStatsRepository:
    """
    SQLAlchemy implementation of FacilityStatsRepository plus report queries.
    """

    def __init__(self, session: Session, *, batch_size: int = _DEFAULT_BATCH_SIZE) -> None:
        self._session = session
        self._batch_size = max(1, batch_size)

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def fetch_facilities(self) -> list[Facility]:
        stmt = select(FacilityRecord.id, FacilityRecord.name, FacilityRecord.building_code)
        with self._translate_errors("fetch_facilities"):
            rows = self._session.execute(stmt).all()
        return [Facility(id=row.id, name=row.name, building_code=row.building_code) for row in rows]

    def insert_facilities(self, facilities: Sequence[Facility]) -> None:
        payloads = [
            {"name": facility.name, "building_code": facility.building_code}
            for facility in facilities
        ]
        with self._translate_errors("insert_facilities"):
            self._insert_chunked(FacilityRecord, payloads)

    def fetch_age_classes(self) -> list[AgeClass]:
        stmt = select(AgeClassRecord.id, AgeClassRecord.name).order_by(AgeClassRecord.id)
        with self._translate_errors("fetch_age_classes"):
            rows = self._session.execute(stmt).all()
        return [AgeClass(id=row.id, name=row.name) for row in rows]

    # ------------------------------------------------------------------
    # Import history
    # ------------------------------------------------------------------

    def insert_import_batch(self, file_name: str, kind: str) -> None:
        with self._translate_errors("insert_import_batch"):
            self._session.execute(
                insert(CsvImportHistoryRecord).values(file_name=file_name, kind=kind)
            )

    def fetch_latest_import_batch(self, kind: str) -> ImportBatch:
        stmt = (
            select(CsvImportHistoryRecord)
            .where(CsvImportHistoryRecord.kind == kind)
            .order_by(CsvImportHistoryRecord.id.desc())
            .limit(1)
        )
        with self._translate_errors("fetch_latest_import_batch"):
            record = self._session.scalars(stmt).first()
        if record is None:
            raise ImportBatchNotFoundError(kind)
        return ImportBatch(id=record.id, file_name=record.file_name, kind=record.kind)

    def fetch_latest_import_batches(self) -> list[ImportBatch]:
        """
        Return the most recent import batch of every kind that has one.
        """

        latest_ids = (
            select(func.max(CsvImportHistoryRecord.id))
            .where(CsvImportHistoryRecord.kind.in_(ImportKind.ALL))
            .group_by(CsvImportHistoryRecord.kind)
        )
        stmt = (
            select(CsvImportHistoryRecord)
            .where(CsvImportHistoryRecord.id.in_(latest_ids))
            .order_by(CsvImportHistoryRecord.id.desc())
        )
        with self._translate_errors("fetch_latest_import_batches"):
            records = self._session.scalars(stmt).all()
        return [
            ImportBatch(id=record.id, file_name=record.file_name, kind=record.kind)
            for record in records
        ]

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def insert_monthly_statistics(self, statistics: Sequence[MonthlyStatistic]) -> None:
        payloads = [
            {
                "csv_import_history_id": statistic.import_batch_id,
                "facility_id": statistic.facility_id,
                "age_class_id": statistic.age_class_id,
                "target_month": statistic.target_month,
                "kind": statistic.kind,
                "value": statistic.value,
            }
            for statistic in statistics
        ]
        with self._translate_errors("insert_monthly_statistics"):
            self._insert_chunked(MonthlyStatisticRecord, payloads)

    def fetch_facility_locations(self) -> list[FacilityLocation]:
        stmt = (
            select(
                FacilityRecord.id,
                FacilityRecord.name,
                FacilityRecord.building_code,
                FacilityLocationRecord.longitude,
                FacilityLocationRecord.latitude,
            )
            .join(FacilityLocationRecord, FacilityLocationRecord.facility_id == FacilityRecord.id)
            .order_by(FacilityRecord.id)
        )
        with self._translate_errors("fetch_facility_locations"):
            rows = self._session.execute(stmt).all()
        return [
            FacilityLocation(
                facility_id=row.id,
                name=row.name,
                building_code=row.building_code,
                longitude=row.longitude,
                latitude=row.latitude,
            )
            for row in rows
        ]

    def fetch_facility_age_class_stats(
        self,
        import_batch_ids: Sequence[int],
    ) -> list[FacilityAgeClassStat]:
        """
        Pivot the statistics of the given batches to one row per facility and age class.

        Kinds without a value for a facility and age class are rendered as "-".
        """

        if not import_batch_ids:
            return []

        stmt = (
            select(
                FacilityRecord.id.label("facility_id"),
                AgeClassRecord.name.label("age_class"),
                self._pivot(ImportKind.WAITING).label("waiting_count"),
                self._pivot(ImportKind.CHILDREN).label("children_count"),
                self._pivot(ImportKind.ACCEPTANCE).label("acceptance_count"),
            )
            .select_from(MonthlyStatisticRecord)
            .join(FacilityRecord, FacilityRecord.id == MonthlyStatisticRecord.facility_id)
            .join(AgeClassRecord, AgeClassRecord.id == MonthlyStatisticRecord.age_class_id)
            .where(MonthlyStatisticRecord.csv_import_history_id.in_(list(import_batch_ids)))
            .group_by(FacilityRecord.id, AgeClassRecord.id, AgeClassRecord.name)
            .order_by(FacilityRecord.id.asc(), AgeClassRecord.id.asc())
        )
        with self._translate_errors("fetch_facility_age_class_stats"):
            rows = self._session.execute(stmt).all()
        return [
            FacilityAgeClassStat(
                facility_id=row.facility_id,
                age_class=row.age_class,
                waiting_count=row.waiting_count,
                children_count=row.children_count,
                acceptance_count=row.acceptance_count,
            )
            for row in rows
        ]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _pivot(kind: str) -> Any:
        return func.coalesce(
            func.max(case((MonthlyStatisticRecord.kind == kind, MonthlyStatisticRecord.value))),
            MISSING_VALUE,
        )

    def _insert_chunked(self, model: type[Any], payloads: list[dict[str, Any]]) -> None:
        for start in range(0, len(payloads), self._batch_size):
            chunk = payloads[start : start + self._batch_size]
            self._session.execute(insert(model), chunk)

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            raise PersistenceError(operation, str(exc.__class__.__name__)) from exc
