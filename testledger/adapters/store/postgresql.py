"""PostgreSQL test result store adapter.

Implements TestResultStorePort using PostgreSQL with asyncpg for async access.
Provides transactional batch inserts for shared result databases.
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import asyncpg

from testledger.core.models import TestResult
from testledger.core.ports import TestResultStorePort

logger = logging.getLogger(__name__)


class PostgreSQLTestResultStore(TestResultStorePort):
    """PostgreSQL-backed result store with connection pooling and async access."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        database: str = "testdata",
        user: str = "testledger",
        password: str = "",
        pool_size: int = 10,
    ):
        """Initialize PostgreSQL store with connection pooling.

        Args:
            host: PostgreSQL server hostname.
            port: PostgreSQL server port.
            database: Database name.
            user: Database user.
            password: Database password.
            pool_size: Number of connections to maintain in the pool.
        """
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self._pool: asyncpg.Pool | None = None
        self._pool_size = pool_size
        self._schema_lock = asyncio.Lock()
        self._schema_initialized = False

    async def _init_pool(self) -> None:
        """Initialize the connection pool on first use."""
        if self._pool is not None:
            return

        self._pool = await asyncpg.create_pool(
            host=self.host,
            port=self.port,
            database=self.database,
            user=self.user,
            password=self.password,
            min_size=1,
            max_size=self._pool_size,
        )

    async def close(self) -> None:
        """Close all pooled connections."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    async def _init_schema(self) -> None:
        """Initialize database schema on first use.

        Only runs once per instance. Subsequent calls are no-ops.
        """
        if self._schema_initialized:
            return

        async with self._schema_lock:
            if self._schema_initialized:
                return

            await self._init_pool()
            assert self._pool is not None

            async with self._pool.acquire() as conn:
                await conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS "TestData" (
                        "Id" BIGSERIAL PRIMARY KEY,
                        "DisplayName" VARCHAR(500) NOT NULL,
                        "Passed" BOOLEAN NOT NULL,
                        "RunTime" NUMERIC(7, 3) NOT NULL,
                        "Time" TIMESTAMPTZ NOT NULL
                    )
                    """
                )
                self._schema_initialized = True
                logger.debug("TestData table ready in PostgreSQL")

    async def save_all(self, results: Iterable[TestResult] | None) -> int:
        """Insert all results inside one transaction."""
        if results is None:
            return 0
        batch = list(results)
        if not batch:
            return 0

        for result in batch:
            result.check_storable()

        await self._init_schema()
        assert self._pool is not None

        async with self._pool.acquire() as conn:
            try:
                async with conn.transaction():
                    ids = [
                        await conn.fetchval(
                            """
                            INSERT INTO "TestData" ("DisplayName", "Passed", "RunTime", "Time")
                            VALUES ($1, $2, $3, $4)
                            RETURNING "Id"
                            """,
                            *self._result_to_row(result),
                        )
                        for result in batch
                    ]
            except Exception as e:
                logger.error(f"Failed to store {len(batch)} test result(s): {e}")
                raise

        for result, row_id in zip(batch, ids):
            result.id = row_id
        return len(batch)

    async def get_all(self) -> list[TestResult]:
        """Return all stored results ordered by id."""
        await self._init_schema()
        assert self._pool is not None

        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT "Id", "DisplayName", "Passed", "RunTime", "Time"
                FROM "TestData"
                ORDER BY "Id"
                """
            )
            return [self._row_to_result(row) for row in rows]

    async def count(self) -> int:
        """Number of stored results."""
        await self._init_schema()
        assert self._pool is not None

        async with self._pool.acquire() as conn:
            return await conn.fetchval('SELECT COUNT(*) FROM "TestData"')

    @staticmethod
    def _result_to_row(result: TestResult) -> tuple[Any, ...]:
        """Convert a result into insert parameters."""
        return (
            result.display_name,
            result.passed,
            result.stored_run_time(),
            result.time,
        )

    @staticmethod
    def _row_to_result(row: Any) -> TestResult:
        """Convert an asyncpg record to a TestResult."""
        return TestResult(
            id=row["Id"],
            display_name=row["DisplayName"],
            passed=row["Passed"],
            run_time=row["RunTime"],
            time=row["Time"],
        )
