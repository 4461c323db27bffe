"""Transaction-bound service base.

Invariants:
    - A service instance from the container holds no session; with_transaction()
      returns a bound copy, so the shared instance is never mutated
    - Using an unbound service for IO raises immediately

Design Decisions:
    - copy.copy over re-construction: subclasses keep their collaborators without
      repeating constructor wiring
"""

import copy
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession


class TransactionBaseService:
    """Base for services that run inside a caller-owned transaction."""

    def __init__(self) -> None:
        self._db: AsyncSession | None = None

    def with_transaction(self, db: AsyncSession) -> Self:
        bound = copy.copy(self)
        bound._db = db
        return bound

    @property
    def db(self) -> AsyncSession:
        if self._db is None:
            raise RuntimeError(
                f"{type(self).__name__} used outside a transaction; call with_transaction()",
            )
        return self._db
