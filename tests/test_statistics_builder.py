from __future__ import annotations

from datetime import date

import pytest

from app.domain.facility_stats import Facility, FacilityRow
from app.services.statistics_builder import ReconciliationError, StatisticsBuilder
from db.models.age_class import AGE_CLASS_NAMES

AGE_CLASS_IDS = {name: position for position, name in enumerate(AGE_CLASS_NAMES, start=1)}
TARGET_MONTH = date(2025, 9, 1)


def _row(building_code: str, values: tuple[str, ...]) -> FacilityRow:
    return FacilityRow(
        region="西区",
        area_code="14103",
        facility_name=f"保育園{building_code}",
        building_code=building_code,
        age_class_values=dict(zip(AGE_CLASS_NAMES, values)),
    )


@pytest.fixture()
def builder() -> StatisticsBuilder:
    return StatisticsBuilder(
        import_batch_id=42,
        target_month=TARGET_MONTH,
        kind="waiting",
        age_class_ids=AGE_CLASS_IDS,
    )


def test_one_pending_record_per_age_class(builder: StatisticsBuilder) -> None:
    builder.add_row(_row("100", ("1", "2", "3", "4", "5", "6")))

    stats = builder.resolve({"100": Facility(id=9, name="A", building_code="100")})

    assert len(stats) == 6
    assert {stat.facility_id for stat in stats} == {9}


def test_resolve_backfills_facility_id(builder: StatisticsBuilder) -> None:
    builder.add_row(_row("100", ("1", "2", "3", "4", "5", "6")))

    stats = builder.resolve({"100": Facility(id=9, name="A", building_code="100")})

    assert {stat.facility_id for stat in stats} == {9}
    assert [stat.age_class_id for stat in stats] == [1, 2, 3, 4, 5, 6]
    assert [stat.value for stat in stats] == ["1", "2", "3", "4", "5", "6"]
    assert {(stat.import_batch_id, stat.kind, stat.target_month) for stat in stats} == {
        (42, "waiting", TARGET_MONTH)
    }


def test_later_row_overwrites_pending_records(builder: StatisticsBuilder) -> None:
    builder.add_row(_row("100", ("1", "1", "1", "1", "1", "1")))
    builder.add_row(_row("100", ("9", "9", "9", "9", "9", "9")))

    stats = builder.resolve({"100": Facility(id=3, name="A", building_code="100")})

    assert len(stats) == 6
    assert {stat.value for stat in stats} == {"9"}


def test_unknown_building_code_after_reread_is_fatal(builder: StatisticsBuilder) -> None:
    builder.add_row(_row("100", ("1", "2", "3", "4", "5", "6")))
    builder.add_row(_row("200", ("1", "2", "3", "4", "5", "6")))

    with pytest.raises(ReconciliationError, match="200"):
        builder.resolve({"100": Facility(id=3, name="A", building_code="100")})


def test_unpersisted_registry_entry_is_fatal(builder: StatisticsBuilder) -> None:
    builder.add_row(_row("100", ("1", "2", "3", "4", "5", "6")))

    with pytest.raises(ReconciliationError):
        builder.resolve({"100": Facility(name="A", building_code="100")})


def test_unknown_age_class_column_is_fatal() -> None:
    builder = StatisticsBuilder(
        import_batch_id=1,
        target_month=TARGET_MONTH,
        kind="children",
        age_class_ids={"０歳児": 1},
    )

    with pytest.raises(ReconciliationError, match="１歳児"):
        builder.add_row(_row("100", ("1", "2", "3", "4", "5", "6")))


def test_resolve_with_nothing_pending_is_empty(builder: StatisticsBuilder) -> None:
    assert builder.resolve({}) == []
