"""Collects per-test results during a run and stores them when it ends.

Lifecycle of one assembly run:

- AssemblyStarting clears the run context.
- TestCaseStarting adds a result holding only the display name.
- TestFinished records the run time and completion time.
- TestPassed marks the result as passed.
- AssemblyFinished writes a snapshot of every result in one batch.

The context is left populated after the batch is written and is only
cleared when the next run starts.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from .context import RunContext
from .messages import AssemblyFinished, AssemblyStarting, TestCaseStarting, TestFinished, TestPassed
from .models import TestResult, to_run_time
from .ports import TestResultStorePort
from .visitor import TestMessageVisitor

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TestResultCollector(TestMessageVisitor):
    """Visitor that builds one TestResult per test case and persists the batch."""

    def __init__(
        self,
        store: TestResultStorePort,
        context: RunContext | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the collector.

        Args:
            store: Where results are written at the end of a run.
            context: Run context to accumulate into. A new one is created
                if omitted.
            clock: Source of completion timestamps.
        """
        if store is None:
            raise ValueError("store must not be None")

        self.store = store
        self._context = context if context is not None else RunContext()
        self._clock = clock

    @property
    def context(self) -> RunContext:
        return self._context

    def reset(self, context: RunContext | None = None) -> None:
        """Start accumulating into a different (or fresh) run context."""
        self._context = context if context is not None else RunContext()

    def results(self) -> list[TestResult]:
        """Snapshot of the results accumulated so far."""
        return self._context.snapshot()

    async def visit_assembly_starting(self, message: AssemblyStarting) -> bool:
        self._context.clear()
        logger.debug(f"Collecting results for assembly {message.assembly_name}")
        return await super().visit_assembly_starting(message)

    async def visit_assembly_finished(self, message: AssemblyFinished) -> bool:
        results = self._context.snapshot()
        written = await self.store.save_all(results)
        logger.info(
            f"Stored {written} test result(s) for assembly {message.assembly_name}"
        )
        return await super().visit_assembly_finished(message)

    async def visit_test_case_starting(self, message: TestCaseStarting) -> bool:
        test_case = message.test_case
        added = self._context.add_if_absent(
            test_case, TestResult(display_name=test_case.display_name)
        )
        if not added:
            logger.debug(f"Test case already tracked, keeping first entry: {test_case.display_name}")
        return await super().visit_test_case_starting(message)

    async def visit_test_finished(self, message: TestFinished) -> bool:
        if message is None:
            raise ValueError("message must not be None")

        result = self._context.get(message.test_case)
        result.run_time = to_run_time(message.execution_time)
        result.time = self._clock()
        return await super().visit_test_finished(message)

    async def visit_test_passed(self, message: TestPassed) -> bool:
        self._context.get(message.test_case).passed = True
        return await super().visit_test_passed(message)


__all__ = ["TestResultCollector"]
