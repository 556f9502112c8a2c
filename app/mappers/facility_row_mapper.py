"""
app/mappers/facility_row_mapper.py

Maps raw export rows to FacilityRow records by column name.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from app.domain.facility_stats import FacilityRow
from db.models.age_class import AGE_CLASS_NAMES

REGION_COLUMN = "施設所在区"
AREA_CODE_COLUMN = "標準地域コード"
FACILITY_NAME_COLUMN = "施設・事業名"
BUILDING_CODE_COLUMN = "施設番号"
TOTAL_COLUMN = "合計"
UPDATED_AT_COLUMN = "更新日"

REQUIRED_COLUMNS: tuple[str, ...] = (
    REGION_COLUMN,
    AREA_CODE_COLUMN,
    FACILITY_NAME_COLUMN,
    BUILDING_CODE_COLUMN,
)

AGE_CLASS_COLUMNS: tuple[str, ...] = AGE_CLASS_NAMES

DEFAULT_COLUMN_INDEX: dict[str, int] = {
    REGION_COLUMN: 0,
    AREA_CODE_COLUMN: 1,
    FACILITY_NAME_COLUMN: 2,
    BUILDING_CODE_COLUMN: 3,
    "０歳児": 4,
    "１歳児": 5,
    "２歳児": 6,
    "３歳児": 7,
    "４歳児": 8,
    "５歳児": 9,
    TOTAL_COLUMN: 10,
    UPDATED_AT_COLUMN: 11,
}

SENTINEL_VALUES = frozenset({"-", ""})
NORMALIZED_SENTINEL = "0"


class FacilityRowMapper:
    """
    Extracts required fields and age-class values from one raw row.

    Rows missing any required field are skipped, which tolerates blank
    trailing lines and footer notes in the exports. Age-class cells holding
    a sentinel are coerced to "0".
    """

    def __init__(self, column_index: Mapping[str, int] | None = None) -> None:
        index = dict(column_index or DEFAULT_COLUMN_INDEX)
        missing = [name for name in (*REQUIRED_COLUMNS, *AGE_CLASS_COLUMNS) if name not in index]
        if missing:
            raise ValueError(f"Column index is missing columns: {', '.join(missing)}")
        self._column_index = index

    def map_row(self, raw_row: Sequence[str]) -> FacilityRow | None:
        """
        Return the mapped row, or None when the row must be skipped.
        """

        required = {name: self._cell(raw_row, name).strip() for name in REQUIRED_COLUMNS}
        if not all(required.values()):
            return None

        return FacilityRow(
            region=required[REGION_COLUMN],
            area_code=required[AREA_CODE_COLUMN],
            facility_name=required[FACILITY_NAME_COLUMN],
            building_code=required[BUILDING_CODE_COLUMN],
            age_class_values={
                name: normalize_count(self._cell(raw_row, name)) for name in AGE_CLASS_COLUMNS
            },
        )

    def _cell(self, raw_row: Sequence[str], column: str) -> str:
        position = self._column_index[column]
        if position >= len(raw_row):
            return ""
        return raw_row[position] or ""


def normalize_count(value: str | None) -> str:
    """
    Trim one age-class cell and coerce "no data" sentinels to "0".
    """

    stripped = (value or "").strip()
    if stripped in SENTINEL_VALUES:
        return NORMALIZED_SENTINEL
    return stripped
