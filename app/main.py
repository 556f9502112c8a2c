from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI


def _check_db() -> None:
    """Open a session and run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from sqlalchemy import text

    from db.session import SessionLocal

    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Validate DB connectivity on boot; dispose the engine on exit."""
    from db.session import dispose_engine

    _check_db()
    logging.getLogger(__name__).info("Database connectivity confirmed")
    try:
        yield
    finally:
        dispose_engine()
        logging.getLogger(__name__).info("Database engine disposed")


def create_app(*, check_database: bool = True) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    from app.logging_utils import configure_logging

    configure_logging()

    application = FastAPI(
        title="Preschool Stats API",
        version="1.0.0",
        lifespan=_lifespan if check_database else None,
    )

    from app.api.routers import facility_report_router

    application.include_router(facility_report_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
