"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class CSVImportSettings:
    """
    Runtime settings for the municipal CSV import.

    cp932 is the Windows superset of Shift_JIS used by the exports.
    """

    encoding: str = "cp932"
    header_rows: int = 2
    batch_size: int = 1000


@dataclass(frozen=True)
class ReportSettings:
    """
    Object storage destination for the published GeoJSON report.
    """

    s3_bucket: str | None = None
    s3_key: str = "latest.json"
    s3_region: str = "ap-northeast-1"
    s3_profile: str | None = None


@lru_cache(maxsize=1)
def get_csv_import_settings() -> CSVImportSettings:
    """
    Return cached CSV import settings from environment variables.
    """

    return CSVImportSettings(
        encoding=_get_str_env("CSV_IMPORT_ENCODING", "cp932"),
        header_rows=max(0, _get_int_env("CSV_IMPORT_HEADER_ROWS", 2)),
        batch_size=max(1, _get_int_env("CSV_IMPORT_BATCH_SIZE", 1000)),
    )


@lru_cache(maxsize=1)
def get_report_settings() -> ReportSettings:
    """
    Return cached report publishing settings from environment variables.
    """

    return ReportSettings(
        s3_bucket=_get_optional_str_env("REPORT_S3_BUCKET"),
        s3_key=_get_str_env("REPORT_S3_KEY", "latest.json"),
        s3_region=_get_str_env("REPORT_S3_REGION", "ap-northeast-1"),
        s3_profile=_get_optional_str_env("REPORT_S3_PROFILE"),
    )
