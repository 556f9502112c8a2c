"""
Shared fixtures: in-memory SQLite database and CSV export writer.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from db.init_db import create_schema, seed_age_classes
from db.session import build_session_factory, enable_sqlite_savepoints
from tests.export_helpers import HEADER_ROW, TITLE_ROW

ExportWriter = Callable[..., Path]


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = enable_sqlite_savepoints(
        create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    create_schema(engine)
    factory = build_session_factory(engine)
    with factory() as session, session.begin():
        seed_age_classes(session)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return build_session_factory(engine)


@pytest.fixture()
def write_export(tmp_path: Path) -> ExportWriter:
    """
    Write a municipal-style export: title + header rows, cp932, CRLF.
    """

    def _write(
        rows: Sequence[Sequence[str]],
        *,
        name: str = "0860_20250901.csv",
        header_rows: Sequence[Sequence[str]] = (TITLE_ROW, HEADER_ROW),
    ) -> Path:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\r\n")
        writer.writerows(header_rows)
        writer.writerows(rows)
        path = tmp_path / name
        path.write_bytes(buffer.getvalue().encode("cp932"))
        return path

    return _write
