"""
Create tables and seed the age-class reference data.
"""

from __future__ import annotations

import logging

from app.logging_utils import configure_logging
from db.init_db import create_schema, seed_age_classes
from db.session import SessionLocal, dispose_engine, get_engine

logger = logging.getLogger("scripts.init_db")


def main() -> int:
    configure_logging()
    try:
        create_schema(get_engine())
        with SessionLocal() as db, db.begin():
            added = seed_age_classes(db)
    finally:
        dispose_engine()

    logger.info("Schema ready; seeded %d age class(es)", added)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
