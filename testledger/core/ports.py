"""Port interfaces for the testledger result recorder.

These abstract base classes define the boundary between core domain
logic and external adapters. Implementations live in the adapters/
package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - TestResultStorePort: Persist accumulated test results

2. **Driving Ports** (the test runner calls into core)
   - TestMessageVisitor (core/visitor.py): one entry point per message
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from .models import TestResult


class TestResultStorePort(ABC):
    """Port for writing test results to a relational table.

    Adapters implementing this port should provide transactional storage
    of TestResult rows in the TestData table.

    Implementations must handle:
    - Creating the table on first use
    - All-or-nothing batch inserts
    - Assigning identity keys to inserted rows
    """

    __test__ = False

    @abstractmethod
    async def save_all(self, results: Iterable[TestResult] | None) -> int:
        """Insert every result as a new row and commit once.

        Rows are always inserted; existing rows are never updated or
        merged. The generated id of each row is written back onto the
        corresponding TestResult.

        Args:
            results: Results to insert. None or an empty iterable writes
                nothing.

        Returns:
            Number of rows written.

        Raises:
            ValueError: If any result fails ``check_storable``. Nothing
                is written in that case.
            Exception: If the database is unavailable or the commit
                fails. The batch is rolled back.
        """

    @abstractmethod
    async def get_all(self) -> list[TestResult]:
        """Return every stored result ordered by id.

        Raises:
            Exception: If the database is unavailable.
        """

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored results.

        Raises:
            Exception: If the database is unavailable.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release any pooled connections."""


__all__ = ["TestResultStorePort"]
