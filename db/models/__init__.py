"""
Model package exports.

Import all SQLAlchemy models here so metadata registration works without
extra imports.
"""

from db.models.age_class import AGE_CLASS_NAMES, AgeClassRecord
from db.models.csv_import_history import CsvImportHistoryRecord, ImportKind
from db.models.facility import FacilityRecord
from db.models.facility_location import FacilityLocationRecord
from db.models.monthly_statistic import MonthlyStatisticRecord

__all__ = [
    "AGE_CLASS_NAMES",
    "AgeClassRecord",
    "CsvImportHistoryRecord",
    "FacilityLocationRecord",
    "FacilityRecord",
    "ImportKind",
    "MonthlyStatisticRecord",
]
