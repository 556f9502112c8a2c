"""
Builders for municipal-style CSV export content used across tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

TITLE_ROW = ["【令和７年９月１日時点】"]
HEADER_ROW = [
    "施設所在区",
    "標準地域コード",
    "施設・事業名",
    "施設番号",
    "０歳児",
    "１歳児",
    "２歳児",
    "３歳児",
    "４歳児",
    "５歳児",
    "合計",
    "更新日",
]

FROZEN_NOW = datetime(2025, 9, 17, 10, 30)


def make_row(
    building_code: str = "12345",
    name: str = "横浜保育園",
    counts: Sequence[str] = ("10", "12", "15", "18", "20", "20"),
    *,
    region: str = "西区",
    area_code: str = "14103",
    total: str = "95",
    updated_at: str = "2024/06/01",
) -> list[str]:
    return [region, area_code, name, building_code, *counts, total, updated_at]
