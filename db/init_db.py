"""
db/init_db.py

Table creation and reference data seeding.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

import db.models  # noqa: F401  registers all ORM models on Base.metadata
from db.base import Base
from db.models.age_class import AGE_CLASS_NAMES, AgeClassRecord


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


def seed_age_classes(session: Session) -> int:
    """
    Insert the six age classes (ids 1..6) that are not present yet.

    Returns the number of rows added. The caller commits.
    """

    existing = set(session.scalars(select(AgeClassRecord.name)).all())
    added = 0
    for age_class_id, name in enumerate(AGE_CLASS_NAMES, start=1):
        if name in existing:
            continue
        session.add(AgeClassRecord(id=age_class_id, name=name))
        added += 1
    session.flush()
    return added
