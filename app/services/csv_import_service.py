"""
app/services/csv_import_service.py

Imports one municipal CSV export as a single unit of work.

Steps, all inside one transaction:

    1. Record the import batch and re-read it for its id.
    2. Load the facility registry keyed by building code.
    3. Load the age-class reference table.
    4. Stream the file; map rows; queue new facilities and statistics.
    5. Insert new facilities, then re-read the registry to resolve ids.
    6. Bulk-insert the resolved statistics.
    7. Commit.

Any failure rolls back every write of the invocation. When the caller
passes a session that already has a transaction open, the import joins it
under a SAVEPOINT: its own writes are undone on failure, and the final
commit or rollback is left to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import closing
from dataclasses import dataclass, replace
from datetime import date, datetime
from functools import lru_cache
from os import PathLike
from pathlib import Path

from sqlalchemy.orm import Session

from app.config import get_csv_import_settings
from app.logging_utils import log_event
from app.mappers.facility_row_mapper import AGE_CLASS_COLUMNS, FacilityRowMapper
from app.repositories.facility_stats_repository import (
    FacilityStatsRepository,
    SQLAlchemyFacilityStatsRepository,
)
from app.services.csv_reader import DEFAULT_ENCODING, DEFAULT_SKIP_ROWS, read_csv_rows
from app.services.facility_reconciler import FacilityReconciler, index_by_building_code
from app.services.statistics_builder import ReconciliationError, StatisticsBuilder
from db.models.csv_import_history import ImportKind
from db.transaction import transaction_scope

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[Session], FacilityStatsRepository]


class ImportStage:
    STARTED = "started"
    BATCH_RECORDED = "batch_recorded"
    REGISTRY_LOADED = "registry_loaded"
    ROWS_PARSED = "rows_parsed"
    FACILITIES_RECONCILED = "facilities_reconciled"
    STATISTICS_RESOLVED = "statistics_resolved"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class CSVImportError(RuntimeError):
    """
    Raised when an import aborts. No write of the invocation survives.

    `stage` is the last stage reached before the failure.
    """

    def __init__(self, *, file_name: str, kind: str, stage: str, message: str) -> None:
        super().__init__(f"Import of {file_name!r} ({kind}) failed after {stage}: {message}")
        self.file_name = file_name
        self.kind = kind
        self.stage = stage


@dataclass(frozen=True)
class ImportSummary:
    file_name: str
    kind: str
    import_batch_id: int
    target_month: date
    rows_read: int
    rows_skipped: int
    facilities_inserted: int
    statistics_inserted: int
    stage: str

    @property
    def rows_imported(self) -> int:
        return self.rows_read - self.rows_skipped


@dataclass
class _ImportProgress:
    file_name: str
    kind: str
    stage: str = ImportStage.STARTED

    def advance(self, stage: str, **fields: object) -> None:
        self.stage = stage
        log_event(
            logger,
            logging.DEBUG,
            "csv_import_stage",
            file_name=self.file_name,
            kind=self.kind,
            stage=stage,
            **fields,
        )


def first_day_of_month(moment: datetime) -> date:
    return date(moment.year, moment.month, 1)


class CSVImportService:
    """
    Coordinates decoding, mapping, reconciliation and persistence of one export.
    """

    def __init__(
        self,
        *,
        session_factory: Callable[[], Session],
        repository_factory: RepositoryFactory | None = None,
        row_mapper: FacilityRowMapper | None = None,
        encoding: str = DEFAULT_ENCODING,
        header_rows: int = DEFAULT_SKIP_ROWS,
        batch_size: int = 1000,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._session_factory = session_factory
        self._repository_factory = repository_factory or (
            lambda session: SQLAlchemyFacilityStatsRepository(session, batch_size=batch_size)
        )
        self._row_mapper = row_mapper or FacilityRowMapper()
        self._encoding = encoding
        self._header_rows = header_rows
        self._clock = clock

    def import_csv(
        self,
        file_path: str | PathLike[str],
        kind: str,
        *,
        session: Session | None = None,
    ) -> ImportSummary:
        """
        Import `file_path` as statistics of `kind`.

        Args:
            file_path: Local path of the export.
            kind:      One of "waiting", "acceptance", "children".
            session:   Optional caller session. Its active transaction is
                       joined under a SAVEPOINT; otherwise a transaction
                       is opened on it.

        Raises:
            ValueError:     `kind` is not a known import kind.
            CSVImportError: Any step failed; all writes of this import were
                            rolled back (to the SAVEPOINT when joined).
        """

        if kind not in ImportKind.ALL:
            raise ValueError(f"Unknown import kind {kind!r}. Allowed: {list(ImportKind.ALL)}.")

        if session is not None:
            return self._import_in_session(session, Path(file_path), kind)

        with self._session_factory() as own_session:
            return self._import_in_session(own_session, Path(file_path), kind)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _import_in_session(self, session: Session, path: Path, kind: str) -> ImportSummary:
        progress = _ImportProgress(file_name=path.name, kind=kind)
        try:
            with transaction_scope(session) as owns_transaction:
                summary = self._run(session=session, path=path, kind=kind, progress=progress)
        except Exception as exc:
            failed_stage = progress.stage
            log_event(
                logger,
                logging.ERROR,
                "csv_import_failed",
                file_name=path.name,
                kind=kind,
                failed_stage=failed_stage,
                stage=ImportStage.ROLLED_BACK,
                error=str(exc),
            )
            raise CSVImportError(
                file_name=path.name,
                kind=kind,
                stage=failed_stage,
                message=str(exc),
            ) from exc

        if owns_transaction:
            progress.advance(ImportStage.COMMITTED)

        result = replace(summary, stage=progress.stage)
        log_event(
            logger,
            logging.INFO,
            "csv_import_completed",
            file_name=result.file_name,
            kind=result.kind,
            import_batch_id=result.import_batch_id,
            target_month=result.target_month.isoformat(),
            rows_read=result.rows_read,
            rows_skipped=result.rows_skipped,
            facilities_inserted=result.facilities_inserted,
            statistics_inserted=result.statistics_inserted,
            stage=result.stage,
        )
        return result

    def _run(
        self,
        *,
        session: Session,
        path: Path,
        kind: str,
        progress: _ImportProgress,
    ) -> ImportSummary:
        repository = self._repository_factory(session)
        target_month = first_day_of_month(self._clock())

        repository.insert_import_batch(path.name, kind)
        import_batch = repository.fetch_latest_import_batch(kind)
        progress.advance(ImportStage.BATCH_RECORDED, import_batch_id=import_batch.id)

        registry = index_by_building_code(repository.fetch_facilities())
        age_class_ids = {age_class.name: age_class.id for age_class in repository.fetch_age_classes()}
        missing_age_classes = [name for name in AGE_CLASS_COLUMNS if name not in age_class_ids]
        if missing_age_classes:
            raise ReconciliationError(
                "Age classes are not seeded: " + ", ".join(missing_age_classes)
            )
        progress.advance(ImportStage.REGISTRY_LOADED, registered_facilities=len(registry))

        reconciler = FacilityReconciler(registry)
        builder = StatisticsBuilder(
            import_batch_id=import_batch.id,
            target_month=target_month,
            kind=kind,
            age_class_ids=age_class_ids,
        )
        rows_read = 0
        rows_skipped = 0
        rows = read_csv_rows(path, encoding=self._encoding, skip_rows=self._header_rows)
        with closing(rows):
            for raw_row in rows:
                rows_read += 1
                row = self._row_mapper.map_row(raw_row)
                if row is None:
                    rows_skipped += 1
                    continue
                reconciler.observe(building_code=row.building_code, name=row.facility_name)
                builder.add_row(row)
        progress.advance(ImportStage.ROWS_PARSED, rows_read=rows_read, rows_skipped=rows_skipped)

        new_facilities = reconciler.new_facilities()
        if new_facilities:
            repository.insert_facilities(new_facilities)
            registry = index_by_building_code(repository.fetch_facilities())
        progress.advance(ImportStage.FACILITIES_RECONCILED, facilities_inserted=len(new_facilities))

        statistics = builder.resolve(registry)
        if statistics:
            repository.insert_monthly_statistics(statistics)
        progress.advance(ImportStage.STATISTICS_RESOLVED, statistics_inserted=len(statistics))

        return ImportSummary(
            file_name=path.name,
            kind=kind,
            import_batch_id=import_batch.id,
            target_month=target_month,
            rows_read=rows_read,
            rows_skipped=rows_skipped,
            facilities_inserted=len(new_facilities),
            statistics_inserted=len(statistics),
            stage=progress.stage,
        )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_csv_import_service() -> CSVImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    from db.session import get_session_factory

    settings = get_csv_import_settings()
    return CSVImportService(
        session_factory=get_session_factory(),
        encoding=settings.encoding,
        header_rows=settings.header_rows,
        batch_size=settings.batch_size,
    )
