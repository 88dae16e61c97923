"""
Row Store

Thin adapter over an ``AsyncSession`` that runs one parameterized statement
at a time. Each statement is committed on its own; there is no transaction
spanning several calls. Errors that look transient (network trouble, timeouts,
a busy or locked database) are retried with exponential backoff, everything
else propagates unchanged.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002
from sqlalchemy.sql import Executable  # noqa: TC002

from content_admin.exceptions import TransientStoreError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
BASE_DELAY_SECONDS = 0.2

TRANSIENT_MARKERS = (
    "network",
    "timeout",
    "timed out",
    "econnreset",
    "econnrefused",
    "connection reset",
    "connection refused",
    "unavailable",
    "busy",
    "database is locked",
)

T = TypeVar("T")


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a write statement."""

    rows_affected: int
    last_insert_id: int | None = None


def is_transient(error: BaseException) -> bool:
    """Return True when ``error`` is worth retrying."""
    if isinstance(error, IntegrityError):
        return False
    if isinstance(error, DBAPIError):
        if error.connection_invalidated:
            return True
        # str(DBAPIError) carries the statement and its bound parameters
        message = str(error.orig if error.orig is not None else error).lower()
    else:
        message = str(error).lower()
    return any(marker in message for marker in TRANSIENT_MARKERS)


class RowStore:
    """Statement runner with per-statement commit and transient-error retry."""

    def __init__(
        self,
        session: AsyncSession,
        max_attempts: int = MAX_ATTEMPTS,
        base_delay: float = BASE_DELAY_SECONDS,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.session = session
        self.max_attempts = max_attempts
        self.base_delay = base_delay

    @property
    def dialect_name(self) -> str:
        return self.session.bind.dialect.name

    async def fetch_all(self, statement: Executable) -> list[dict[str, Any]]:
        async def run() -> list[dict[str, Any]]:
            result = await self.session.execute(statement)
            return [dict(row) for row in result.mappings().all()]

        return await self._with_retry(run)

    async def fetch_one(self, statement: Executable) -> dict[str, Any] | None:
        rows = await self.fetch_all(statement)
        return rows[0] if rows else None

    async def scalar(self, statement: Executable) -> Any:
        async def run() -> Any:
            result = await self.session.execute(statement)
            return result.scalar()

        return await self._with_retry(run)

    async def execute(self, statement: Executable) -> ExecutionResult:
        async def run() -> ExecutionResult:
            result = await self.session.execute(statement)
            last_insert_id = None
            if getattr(statement, "is_insert", False):
                primary_key = result.inserted_primary_key
                if primary_key:
                    last_insert_id = primary_key[0]
            return ExecutionResult(rows_affected=result.rowcount, last_insert_id=last_insert_id)

        return await self._with_retry(run)

    async def _with_retry(self, operation: Callable[[], Awaitable[T]]) -> T:
        for attempt in range(self.max_attempts):
            try:
                value = await operation()
                await self.session.commit()
                return value
            except Exception as e:
                await self.session.rollback()
                if not is_transient(e):
                    raise
                if attempt == self.max_attempts - 1:
                    logger.error(f"Statement failed after {self.max_attempts} attempts: {e}")
                    raise TransientStoreError(attempts=self.max_attempts) from e
                delay = self.base_delay * (2**attempt)
                logger.warning(
                    f"Transient store error (attempt {attempt + 1}/{self.max_attempts}), retrying in {delay:.2f}s: {e}"
                )
                await asyncio.sleep(delay)
        # Unreachable: the loop either returns or raises.
        raise TransientStoreError(attempts=self.max_attempts)
