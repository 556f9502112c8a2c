"""
db/transaction.py

Re-entrant transaction scope for one SQLAlchemy session.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session


@contextmanager
def transaction_scope(session: Session) -> Iterator[bool]:
    """
    Run the enclosed block inside a transaction on `session`.

    When the session already has an active transaction, the block joins it
    under a SAVEPOINT: an error undoes only the block's own writes, and the
    caller that opened the transaction still owns the final commit or
    rollback. Otherwise a new transaction is begun, committed on success
    and rolled back on any error.

    Yields True when this scope owns the transaction.
    """

    if session.in_transaction():
        with session.begin_nested():
            yield False
        return

    with session.begin():
        yield True
