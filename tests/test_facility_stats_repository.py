"""
Repository tests against in-memory SQLite.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from app.domain.facility_stats import Facility, MonthlyStatistic
from app.repositories.facility_stats_repository import SQLAlchemyFacilityStatsRepository
from db.init_db import seed_age_classes
from db.models import CsvImportHistoryRecord, FacilityLocationRecord
from db.models.age_class import AGE_CLASS_NAMES
from db.repositories.errors import ImportBatchNotFoundError, PersistenceError

TARGET_MONTH = date(2025, 9, 1)


@pytest.fixture()
def session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture()
def repository(session) -> SQLAlchemyFacilityStatsRepository:
    return SQLAlchemyFacilityStatsRepository(session, batch_size=2)


def _record_batch(repository: SQLAlchemyFacilityStatsRepository, kind: str) -> int:
    repository.insert_import_batch(f"{kind}.csv", kind)
    return repository.fetch_latest_import_batch(kind).id


def _stat(batch_id: int, facility_id: int, age_class_id: int, kind: str, value: str) -> MonthlyStatistic:
    return MonthlyStatistic(
        import_batch_id=batch_id,
        facility_id=facility_id,
        age_class_id=age_class_id,
        target_month=TARGET_MONTH,
        kind=kind,
        value=value,
    )


class TestRegistry:
    def test_insert_facilities_in_chunks(self, repository) -> None:
        repository.insert_facilities(
            [Facility(name=f"保育園{index}", building_code=str(index)) for index in range(5)]
        )

        facilities = repository.fetch_facilities()

        assert sorted(f.building_code for f in facilities) == ["0", "1", "2", "3", "4"]
        assert all(f.id > 0 for f in facilities)

    def test_duplicate_building_code_raises_persistence_error(self, repository) -> None:
        repository.insert_facilities([Facility(name="A", building_code="100")])

        with pytest.raises(PersistenceError) as ctx:
            repository.insert_facilities([Facility(name="B", building_code="100")])

        assert ctx.value.operation == "insert_facilities"

    def test_fetch_age_classes_returns_seeded_rows(self, repository) -> None:
        age_classes = repository.fetch_age_classes()

        assert [a.id for a in age_classes] == [1, 2, 3, 4, 5, 6]
        assert tuple(a.name for a in age_classes) == tuple(AGE_CLASS_NAMES)


class TestImportHistory:
    def test_latest_batch_missing_raises(self, repository) -> None:
        with pytest.raises(ImportBatchNotFoundError) as ctx:
            repository.fetch_latest_import_batch("waiting")

        assert ctx.value.kind == "waiting"

    def test_latest_batch_is_most_recent_of_kind(self, repository) -> None:
        first = _record_batch(repository, "waiting")
        _record_batch(repository, "children")
        repository.insert_import_batch("second.csv", "waiting")

        latest = repository.fetch_latest_import_batch("waiting")

        assert latest.id > first
        assert latest.file_name == "second.csv"

    def test_latest_batch_follows_insert_order_not_created_at(self, repository, session) -> None:
        session.add(
            CsvImportHistoryRecord(
                file_name="earlier.csv",
                kind="waiting",
                created_at=datetime(2099, 1, 1, tzinfo=timezone.utc),
            )
        )
        session.flush()
        repository.insert_import_batch("current.csv", "waiting")

        latest = repository.fetch_latest_import_batch("waiting")

        assert latest.file_name == "current.csv"

    def test_latest_batches_has_one_entry_per_kind(self, repository) -> None:
        _record_batch(repository, "waiting")
        newest_waiting = _record_batch(repository, "waiting")
        children = _record_batch(repository, "children")

        batches = {batch.kind: batch.id for batch in repository.fetch_latest_import_batches()}

        assert batches == {"waiting": newest_waiting, "children": children}


class TestReportQueries:
    def test_pivot_fills_missing_kinds_with_dash(self, repository) -> None:
        repository.insert_facilities([Facility(name="横浜保育園", building_code="100")])
        facility_id = repository.fetch_facilities()[0].id
        waiting = _record_batch(repository, "waiting")
        children = _record_batch(repository, "children")
        repository.insert_monthly_statistics(
            [
                _stat(waiting, facility_id, 1, "waiting", "3"),
                _stat(waiting, facility_id, 2, "waiting", "0"),
                _stat(children, facility_id, 1, "children", "9"),
            ]
        )

        stats = repository.fetch_facility_age_class_stats([waiting, children])

        assert [(s.age_class, s.waiting_count, s.children_count, s.acceptance_count) for s in stats] == [
            ("０歳児", "3", "9", "-"),
            ("１歳児", "0", "-", "-"),
        ]

    def test_pivot_ignores_other_batches(self, repository) -> None:
        repository.insert_facilities([Facility(name="横浜保育園", building_code="100")])
        facility_id = repository.fetch_facilities()[0].id
        old = _record_batch(repository, "waiting")
        new = _record_batch(repository, "waiting")
        repository.insert_monthly_statistics(
            [
                _stat(old, facility_id, 1, "waiting", "7"),
                _stat(new, facility_id, 1, "waiting", "2"),
            ]
        )

        stats = repository.fetch_facility_age_class_stats([new])

        assert [s.waiting_count for s in stats] == ["2"]

    def test_pivot_without_batches_is_empty(self, repository) -> None:
        assert repository.fetch_facility_age_class_stats([]) == []

    def test_locations_only_include_located_facilities(self, repository, session) -> None:
        repository.insert_facilities(
            [
                Facility(name="位置あり", building_code="100"),
                Facility(name="位置なし", building_code="200"),
            ]
        )
        located = next(f for f in repository.fetch_facilities() if f.building_code == "100")
        session.add(FacilityLocationRecord(facility_id=located.id, longitude=139.62, latitude=35.46))
        session.flush()

        locations = repository.fetch_facility_locations()

        assert [(loc.facility_id, loc.name, loc.longitude, loc.latitude) for loc in locations] == [
            (located.id, "位置あり", 139.62, 35.46)
        ]


def test_seed_age_classes_is_idempotent(session) -> None:
    assert seed_age_classes(session) == 0
    assert len(SQLAlchemyFacilityStatsRepository(session).fetch_age_classes()) == 6
