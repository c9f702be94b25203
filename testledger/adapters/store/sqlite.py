"""SQLite test result store adapter.

Implements TestResultStorePort using SQLite with aiosqlite for async access.
Provides transactional batch inserts with zero operational overhead.
"""

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

import aiosqlite

from testledger.core.models import RUN_TIME_QUANTUM, TestResult
from testledger.core.ports import TestResultStorePort

logger = logging.getLogger(__name__)


class SQLiteTestResultStore(TestResultStorePort):
    """SQLite-backed result store with connection pooling and async access."""

    def __init__(self, db_path: str, pool_size: int = 5):
        """Initialize SQLite store with connection pooling.

        Args:
            db_path: Path to SQLite database file.
            pool_size: Number of connections to maintain in the pool.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._pool: list[aiosqlite.Connection] = []
        self._pool_lock = asyncio.Lock()
        self._schema_lock = asyncio.Lock()
        self._pool_size = pool_size
        self._schema_initialized = False

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get a connection from the pool or create a new one."""
        async with self._pool_lock:
            if self._pool:
                return self._pool.pop()
        return await aiosqlite.connect(str(self.db_path))

    async def _return_connection(self, conn: aiosqlite.Connection) -> None:
        """Return a connection to the pool."""
        async with self._pool_lock:
            if len(self._pool) < self._pool_size:
                self._pool.append(conn)
                return
        await conn.close()

    async def close(self) -> None:
        """Close all pooled connections."""
        async with self._pool_lock:
            for conn in self._pool:
                await conn.close()
            self._pool.clear()

    async def _init_schema(self) -> None:
        """Initialize database schema on first use.

        Only runs once per instance. Subsequent calls are no-ops.
        """
        if self._schema_initialized:
            return

        async with self._schema_lock:
            # Check again after acquiring lock to prevent race
            if self._schema_initialized:
                return

            conn = await self._get_connection()
            try:
                await conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS TestData (
                        Id INTEGER PRIMARY KEY AUTOINCREMENT,
                        DisplayName VARCHAR(500) NOT NULL,
                        Passed BOOLEAN NOT NULL,
                        RunTime DECIMAL(7, 3) NOT NULL,
                        Time TIMESTAMP NOT NULL
                    )
                    """
                )
                await conn.commit()
                self._schema_initialized = True
                logger.debug(f"TestData table ready in {self.db_path}")
            finally:
                await self._return_connection(conn)

    async def save_all(self, results: Iterable[TestResult] | None) -> int:
        """Insert all results in a single transaction."""
        if results is None:
            return 0
        batch = list(results)
        if not batch:
            return 0

        for result in batch:
            result.check_storable()

        await self._init_schema()

        conn = await self._get_connection()
        try:
            ids: list[int] = []
            for result in batch:
                cursor = await conn.execute(
                    """
                    INSERT INTO TestData (DisplayName, Passed, RunTime, Time)
                    VALUES (?, ?, ?, ?)
                    """,
                    self._result_to_row(result),
                )
                ids.append(cursor.lastrowid)
            await conn.commit()
        except Exception as e:
            await conn.rollback()
            logger.error(f"Failed to store {len(batch)} test result(s): {e}")
            raise
        finally:
            await self._return_connection(conn)

        for result, row_id in zip(batch, ids):
            result.id = row_id
        return len(batch)

    async def get_all(self) -> list[TestResult]:
        """Return all stored results ordered by id."""
        await self._init_schema()

        conn = await self._get_connection()
        try:
            cursor = await conn.execute(
                "SELECT Id, DisplayName, Passed, RunTime, Time FROM TestData ORDER BY Id"
            )
            rows = await cursor.fetchall()
            return [self._row_to_result(row) for row in rows]
        finally:
            await self._return_connection(conn)

    async def count(self) -> int:
        """Number of stored results."""
        await self._init_schema()

        conn = await self._get_connection()
        try:
            cursor = await conn.execute("SELECT COUNT(*) FROM TestData")
            return (await cursor.fetchone())[0]
        finally:
            await self._return_connection(conn)

    @staticmethod
    def _result_to_row(result: TestResult) -> tuple[Any, ...]:
        """Convert a result into insert parameters.

        RunTime is bound as text so the stored value is the rounded
        decimal, not a float approximation of it.
        """
        assert result.time is not None
        return (
            result.display_name,
            int(result.passed),
            str(result.stored_run_time()),
            result.time.isoformat(),
        )

    @staticmethod
    def _row_to_result(row: tuple[Any, ...]) -> TestResult:
        """Convert a database row to a TestResult.

        Raises:
            ValueError: If row is malformed or contains invalid data.
        """
        try:
            row_id, display_name, passed, run_time, time = row
            return TestResult(
                id=row_id,
                display_name=display_name,
                passed=bool(passed),
                run_time=Decimal(str(run_time)).quantize(RUN_TIME_QUANTUM),
                time=datetime.fromisoformat(time),
            )
        except (ValueError, TypeError, ArithmeticError) as e:
            logger.error(f"Failed to parse database row: {e}")
            raise ValueError(f"Row parsing failed: {e}") from e
