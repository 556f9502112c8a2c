"""
app/services/facility_reconciler.py

Diffs the facilities referenced by an export against the registry.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from app.domain.facility_stats import Facility


class FacilityReconciler:
    """
    Accumulates facilities seen in one export that are absent from the registry.

    A building code seen on several rows is queued once at its first
    position; the last-seen name is kept.
    """

    def __init__(self, registry: Mapping[str, Facility]) -> None:
        self._registry = registry
        self._pending: dict[str, Facility] = {}

    def observe(self, *, building_code: str, name: str) -> None:
        if building_code in self._registry:
            return
        self._pending[building_code] = Facility(name=name, building_code=building_code)

    def new_facilities(self) -> list[Facility]:
        return list(self._pending.values())


def index_by_building_code(facilities: Iterable[Facility]) -> dict[str, Facility]:
    return {facility.building_code: facility for facility in facilities}

