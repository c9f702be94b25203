"""Lifecycle messages emitted by a test runner.

Every message kind is a frozen dataclass and ``LifecycleMessage`` is the
union visitors match against. Messages are produced by the runner and never
mutated by the visitors that consume them.
"""

from collections.abc import Hashable
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, TypeAlias


class TestCaseHandle(Hashable, Protocol):
    """Identity of a test case as handed out by the runner.

    Any hashable object exposing a ``display_name`` can be used as a key
    for result accumulation.
    """

    @property
    def display_name(self) -> str: ...


@dataclass(frozen=True)
class TestCase:
    """Concrete test case handle shipped with the package."""

    __test__ = False

    unique_id: str
    display_name: str

    def __post_init__(self) -> None:
        """Validate test case identity on creation."""
        if not self.unique_id or not self.unique_id.strip():
            raise ValueError("unique_id must be a non-empty string")


@dataclass(frozen=True)
class AssemblyStarting:
    """A test assembly is about to run."""

    assembly_name: str


@dataclass(frozen=True)
class AssemblyFinished:
    """A test assembly has finished; totals are the runner's own counts."""

    assembly_name: str
    tests_run: int = 0
    tests_failed: int = 0
    tests_skipped: int = 0
    execution_time: Decimal = Decimal("0")


@dataclass(frozen=True)
class TestCaseStarting:
    """A test case is about to run."""

    __test__ = False

    test_case: TestCaseHandle


@dataclass(frozen=True)
class TestFinished:
    """A test has completed, whatever its outcome."""

    __test__ = False

    test_case: TestCaseHandle
    execution_time: Decimal  # seconds
    output: str = ""


@dataclass(frozen=True)
class TestPassed:
    """A test has passed."""

    __test__ = False

    test_case: TestCaseHandle
    execution_time: Decimal = Decimal("0")


@dataclass(frozen=True)
class TestFailed:
    """A test has failed."""

    __test__ = False

    test_case: TestCaseHandle
    message: str = ""
    execution_time: Decimal = Decimal("0")


@dataclass(frozen=True)
class TestSkipped:
    """A test was skipped."""

    __test__ = False

    test_case: TestCaseHandle
    reason: str = ""


@dataclass(frozen=True)
class TestCaseFinished:
    """A test case has finished running all of its tests."""

    __test__ = False

    test_case: TestCaseHandle


LifecycleMessage: TypeAlias = (
    AssemblyStarting
    | AssemblyFinished
    | TestCaseStarting
    | TestFinished
    | TestPassed
    | TestFailed
    | TestSkipped
    | TestCaseFinished
)


__all__ = [
    "AssemblyFinished",
    "AssemblyStarting",
    "LifecycleMessage",
    "TestCase",
    "TestCaseFinished",
    "TestCaseHandle",
    "TestCaseStarting",
    "TestFailed",
    "TestFinished",
    "TestPassed",
    "TestSkipped",
]
