"""
Repository-layer exceptions for facility statistics persistence.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for repository failures."""


class PersistenceError(RepositoryError):
    """Raised when a database read or write fails."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class ImportBatchNotFoundError(RepositoryError):
    """Raised when no import batch exists for the requested kind."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"No CSV import history recorded for kind={kind!r}.")
        self.kind = kind
