"""
Repository layer exports.
"""

from db.repositories.errors import ImportBatchNotFoundError, PersistenceError, RepositoryError

__all__ = [
    "ImportBatchNotFoundError",
    "PersistenceError",
    "RepositoryError",
]
