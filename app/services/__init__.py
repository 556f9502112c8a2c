"""
app/services package marker.
"""

from app.services.batch_import_service import (
    BatchImportResult,
    CSVBatchImportService,
    CSVImportFailure,
    CSVImportTarget,
)
from app.services.csv_import_service import (
    CSVImportError,
    CSVImportService,
    ImportStage,
    ImportSummary,
    get_csv_import_service,
)
from app.services.csv_reader import CSVDecodeError, read_csv_rows
from app.services.facility_stats_service import FacilityStatsService
from app.services.statistics_builder import ReconciliationError, StatisticsBuilder

__all__ = [
    "BatchImportResult",
    "CSVBatchImportService",
    "CSVDecodeError",
    "CSVImportError",
    "CSVImportFailure",
    "CSVImportService",
    "CSVImportTarget",
    "FacilityStatsService",
    "ImportStage",
    "ImportSummary",
    "ReconciliationError",
    "StatisticsBuilder",
    "get_csv_import_service",
    "read_csv_rows",
]
