from __future__ import annotations

from collections.abc import Iterable, Mapping

from app.domain.facility_stats import Facility
from app.services.facility_reconciler import FacilityReconciler, index_by_building_code


def _registry(*facilities: Facility) -> dict[str, Facility]:
    return index_by_building_code(facilities)


def _reconcile(registry: Mapping[str, Facility], observed: Iterable[tuple[str, str]]) -> list[Facility]:
    reconciler = FacilityReconciler(registry)
    for building_code, name in observed:
        reconciler.observe(building_code=building_code, name=name)
    return reconciler.new_facilities()


def test_returns_only_codes_absent_from_registry() -> None:
    registry = _registry(Facility(id=1, name="既存保育園", building_code="100"))

    new = _reconcile(registry, [("100", "既存保育園"), ("200", "新保育園")])

    assert new == [Facility(name="新保育園", building_code="200")]


def test_preserves_first_occurrence_order() -> None:
    new = _reconcile({}, [("300", "C"), ("100", "A"), ("200", "B")])

    assert [facility.building_code for facility in new] == ["300", "100", "200"]


def test_duplicate_code_is_queued_once_with_last_seen_name() -> None:
    new = _reconcile({}, [("100", "旧名"), ("200", "B"), ("100", "新名")])

    assert new == [
        Facility(name="新名", building_code="100"),
        Facility(name="B", building_code="200"),
    ]


def test_registered_facility_is_never_requeued() -> None:
    reconciler = FacilityReconciler(_registry(Facility(id=7, name="A", building_code="100")))

    for _ in range(3):
        reconciler.observe(building_code="100", name="A (renamed)")

    assert reconciler.new_facilities() == []


def test_new_facilities_have_unresolved_ids() -> None:
    new = _reconcile({}, [("100", "A")])

    assert new[0].id == 0
