"""
Logging setup and structured event helpers.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any


def configure_logging() -> None:
    """
    Configure root logging once for the process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.

    Used for CSV import events (`csv_import_stage`, `csv_import_completed`,
    `csv_import_failed`) so a run can be followed per file and kind. Keys are
    sorted and Japanese file names are kept readable (no ASCII escaping).
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, ensure_ascii=False, sort_keys=True))
