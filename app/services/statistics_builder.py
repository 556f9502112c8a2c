"""
app/services/statistics_builder.py

Builds monthly statistic records for one import batch.

Records are accumulated per building code with an unresolved facility id,
then backfilled once new facilities have been persisted and the registry
re-read.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from datetime import date

from app.domain.facility_stats import UNRESOLVED_FACILITY_ID, Facility, FacilityRow, MonthlyStatistic


class ReconciliationError(RuntimeError):
    """
    Raised when a pending statistic cannot be tied to a registry entry.
    """


class StatisticsBuilder:
    def __init__(
        self,
        *,
        import_batch_id: int,
        target_month: date,
        kind: str,
        age_class_ids: Mapping[str, int],
    ) -> None:
        self._import_batch_id = import_batch_id
        self._target_month = target_month
        self._kind = kind
        self._age_class_ids = dict(age_class_ids)
        self._pending: dict[str, list[MonthlyStatistic]] = {}

    def add_row(self, row: FacilityRow) -> None:
        """
        Queue one record per age class of `row`.

        A later row with the same building code replaces the earlier one.
        """

        records: list[MonthlyStatistic] = []
        for age_class_name, value in row.age_class_values.items():
            age_class_id = self._age_class_ids.get(age_class_name)
            if age_class_id is None:
                raise ReconciliationError(f"Unknown age class column {age_class_name!r}.")
            records.append(
                MonthlyStatistic(
                    import_batch_id=self._import_batch_id,
                    facility_id=UNRESOLVED_FACILITY_ID,
                    age_class_id=age_class_id,
                    target_month=self._target_month,
                    kind=self._kind,
                    value=value,
                )
            )
        self._pending[row.building_code] = records

    def resolve(self, registry: Mapping[str, Facility]) -> list[MonthlyStatistic]:
        """
        Return every pending record with its facility id filled from `registry`.
        """

        unresolved = sorted(code for code in self._pending if code not in registry)
        if unresolved:
            raise ReconciliationError(
                "No registered facility for building code(s): " + ", ".join(unresolved)
            )

        resolved: list[MonthlyStatistic] = []
        for building_code, records in self._pending.items():
            facility_id = registry[building_code].id
            if facility_id == UNRESOLVED_FACILITY_ID:
                raise ReconciliationError(
                    f"Facility {building_code!r} has no persisted id."
                )
            resolved.extend(replace(record, facility_id=facility_id) for record in records)
        return resolved
