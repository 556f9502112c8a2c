"""
app/domain/facility_stats.py

Domain records exchanged between the CSV import pipeline, the repository
and the report builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

UNRESOLVED_FACILITY_ID = 0


@dataclass(frozen=True)
class Facility:
    """
    Registry entry. id is UNRESOLVED_FACILITY_ID until persisted.
    """

    name: str
    building_code: str
    id: int = UNRESOLVED_FACILITY_ID


@dataclass(frozen=True)
class FacilityLocation:
    facility_id: int
    name: str
    building_code: str
    longitude: float
    latitude: float


@dataclass(frozen=True)
class AgeClass:
    id: int
    name: str


@dataclass(frozen=True)
class ImportBatch:
    id: int
    file_name: str
    kind: str


@dataclass(frozen=True)
class MonthlyStatistic:
    """
    One statistic value for a facility and age class.
    """

    import_batch_id: int
    facility_id: int
    age_class_id: int
    target_month: date
    kind: str
    value: str


@dataclass(frozen=True)
class FacilityRow:
    """
    A CSV data row that passed required-field validation.

    age_class_values is keyed by age-class column name, in column order.
    """

    region: str
    area_code: str
    facility_name: str
    building_code: str
    age_class_values: dict[str, str]


@dataclass(frozen=True)
class FacilityAgeClassStat:
    """
    Pivoted latest figures of one facility and age class across kinds.
    """

    facility_id: int
    age_class: str
    waiting_count: str
    children_count: str
    acceptance_count: str


@dataclass(frozen=True)
class FacilityStatSummary:
    facility_id: int
    name: str
    longitude: float
    latitude: float
    stats: list[FacilityAgeClassStat] = field(default_factory=list)
