"""
Build the facility GeoJSON report and publish it to S3.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from app.config import get_report_settings
from app.logging_utils import configure_logging
from app.repositories.facility_stats_repository import SQLAlchemyFacilityStatsRepository
from app.services.facility_report_service import build_feature_collection, render_report_json
from app.services.facility_stats_service import FacilityStatsService
from app.services.report_publisher import ReportPublisher, create_s3_client
from db.session import SessionLocal, dispose_engine

logger = logging.getLogger("scripts.publish_report")


def main() -> int:
    settings = get_report_settings()
    parser = argparse.ArgumentParser(description="Publish the facility statistics report.")
    parser.add_argument("--bucket", default=settings.s3_bucket, help="Destination S3 bucket.")
    parser.add_argument("--key", default=settings.s3_key, help="Destination object key.")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to this local file instead of S3.",
    )
    args = parser.parse_args()

    configure_logging()
    try:
        with SessionLocal() as db:
            summaries = FacilityStatsService(SQLAlchemyFacilityStatsRepository(db)).get_facility_stats()
    finally:
        dispose_engine()

    body = render_report_json(build_feature_collection(summaries))

    if args.output is not None:
        args.output.write_bytes(body)
        logger.info("Wrote facility report to %s (%d bytes)", args.output, len(body))
        return 0

    publisher = ReportPublisher(create_s3_client(settings), bucket=args.bucket, key=args.key)
    publisher.publish(body)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
