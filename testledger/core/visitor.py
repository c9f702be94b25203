"""Base class for consumers of runner lifecycle messages.

``on_message`` is the single entry point a runner calls. It matches the
message against the LifecycleMessage union and awaits the hook for that
kind. Subclasses override only the hooks they care about; every default
hook returns True, meaning "keep delivering messages".
"""

import logging

from .messages import (
    AssemblyFinished,
    AssemblyStarting,
    TestCaseFinished,
    TestCaseStarting,
    TestFailed,
    TestFinished,
    TestPassed,
    TestSkipped,
)

logger = logging.getLogger(__name__)


class TestMessageVisitor:
    """Dispatches lifecycle messages to one overridable hook per kind."""

    __test__ = False

    async def on_message(self, message: object) -> bool:
        """Handle one message from the runner.

        Args:
            message: A LifecycleMessage. Anything else goes to
                ``visit_unknown``.

        Returns:
            The hook's verdict on whether delivery should continue.
        """
        match message:
            case AssemblyStarting():
                return await self.visit_assembly_starting(message)
            case AssemblyFinished():
                return await self.visit_assembly_finished(message)
            case TestCaseStarting():
                return await self.visit_test_case_starting(message)
            case TestCaseFinished():
                return await self.visit_test_case_finished(message)
            case TestFinished():
                return await self.visit_test_finished(message)
            case TestPassed():
                return await self.visit_test_passed(message)
            case TestFailed():
                return await self.visit_test_failed(message)
            case TestSkipped():
                return await self.visit_test_skipped(message)
            case _:
                return await self.visit_unknown(message)

    async def visit_assembly_starting(self, message: AssemblyStarting) -> bool:
        return True

    async def visit_assembly_finished(self, message: AssemblyFinished) -> bool:
        return True

    async def visit_test_case_starting(self, message: TestCaseStarting) -> bool:
        return True

    async def visit_test_case_finished(self, message: TestCaseFinished) -> bool:
        return True

    async def visit_test_finished(self, message: TestFinished) -> bool:
        return True

    async def visit_test_passed(self, message: TestPassed) -> bool:
        return True

    async def visit_test_failed(self, message: TestFailed) -> bool:
        return True

    async def visit_test_skipped(self, message: TestSkipped) -> bool:
        return True

    async def visit_unknown(self, message: object) -> bool:
        """Fallback for objects outside the LifecycleMessage union."""
        logger.debug(f"Ignoring unrecognized message type {type(message).__name__}")
        return True


__all__ = ["TestMessageVisitor"]
