"""
app/services/batch_import_service.py

Sequential import of several exports, one transaction per file.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from app.services.csv_import_service import CSVImportError, CSVImportService, ImportSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CSVImportTarget:
    path: Path
    kind: str

    @classmethod
    def parse(cls, spec: str) -> "CSVImportTarget":
        """
        Parse a `PATH:KIND` command-line argument.
        """

        path, separator, kind = spec.rpartition(":")
        if not separator or not path or not kind:
            raise ValueError(f"Expected PATH:KIND, got {spec!r}.")
        return cls(path=Path(path), kind=kind.strip())


@dataclass(frozen=True)
class CSVImportFailure:
    target: CSVImportTarget
    stage: str
    message: str


@dataclass
class BatchImportResult:
    summaries: list[ImportSummary] = field(default_factory=list)
    failures: list[CSVImportFailure] = field(default_factory=list)
    skipped: list[CSVImportTarget] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures


class CSVBatchImportService:
    """
    Imports targets in order.

    With stop_on_error the first failure halts the run and the remaining
    targets are reported as skipped; otherwise every target is attempted.
    """

    def __init__(self, import_service: CSVImportService) -> None:
        self._import_service = import_service

    def import_files(
        self,
        targets: Sequence[CSVImportTarget],
        *,
        stop_on_error: bool = True,
    ) -> BatchImportResult:
        result = BatchImportResult()

        for position, target in enumerate(targets):
            try:
                summary = self._import_service.import_csv(target.path, target.kind)
            except (CSVImportError, ValueError) as exc:
                stage = exc.stage if isinstance(exc, CSVImportError) else "started"
                logger.error("CSV import failed path=%s kind=%s: %s", target.path, target.kind, exc)
                result.failures.append(CSVImportFailure(target=target, stage=stage, message=str(exc)))
                if stop_on_error:
                    result.skipped.extend(targets[position + 1 :])
                    break
                continue

            result.summaries.append(summary)

        if result.skipped:
            logger.warning(
                "Halted after failure; %d file(s) not imported: %s",
                len(result.skipped),
                ", ".join(str(target.path) for target in result.skipped),
            )
        return result
