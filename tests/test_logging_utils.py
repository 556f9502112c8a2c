from __future__ import annotations

import json
import logging

from app.logging_utils import log_event


def test_log_event_emits_sorted_json(caplog) -> None:
    logger = logging.getLogger("tests.log_event")

    with caplog.at_level(logging.INFO, logger="tests.log_event"):
        log_event(logger, logging.INFO, "csv_import_completed", file_name="待機児童.csv", rows_read=3)

    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert json.loads(record.getMessage()) == {
        "event": "csv_import_completed",
        "file_name": "待機児童.csv",
        "rows_read": 3,
    }
    assert "待機児童" in record.getMessage()
