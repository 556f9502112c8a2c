"""
Import municipal CSV exports from CLI.

Example:
    python -m scripts.import_csv 0860_20250901.csv:waiting \
        0857_20250901.csv:acceptance 0854_20250901.csv:children
"""

from __future__ import annotations

import argparse
import json

from app.logging_utils import configure_logging
from app.services.batch_import_service import CSVBatchImportService, CSVImportTarget
from app.services.csv_import_service import get_csv_import_service
from db.session import dispose_engine


def main() -> int:
    parser = argparse.ArgumentParser(description="Import preschool statistics CSV exports.")
    parser.add_argument(
        "targets",
        nargs="+",
        type=CSVImportTarget.parse,
        metavar="PATH:KIND",
        help="Export file and its kind (waiting, acceptance or children).",
    )
    parser.add_argument(
        "--continue-on-error",
        dest="continue_on_error",
        action="store_true",
        help="Import remaining files after a failure instead of halting.",
    )
    args = parser.parse_args()

    configure_logging()
    try:
        service = CSVBatchImportService(get_csv_import_service())
        result = service.import_files(args.targets, stop_on_error=not args.continue_on_error)
    finally:
        dispose_engine()

    payload = {
        "imported": [
            {
                "file_name": summary.file_name,
                "kind": summary.kind,
                "import_batch_id": summary.import_batch_id,
                "target_month": summary.target_month.isoformat(),
                "rows_imported": summary.rows_imported,
                "rows_skipped": summary.rows_skipped,
                "facilities_inserted": summary.facilities_inserted,
                "statistics_inserted": summary.statistics_inserted,
            }
            for summary in result.summaries
        ],
        "failed": [
            {
                "path": str(failure.target.path),
                "kind": failure.target.kind,
                "stage": failure.stage,
                "error": failure.message,
            }
            for failure in result.failures
        ],
        "not_attempted": [str(target.path) for target in result.skipped],
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0 if result.succeeded else 1


if __name__ == "__main__":
    raise SystemExit(main())
