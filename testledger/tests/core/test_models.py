"""Unit tests for domain models, messages and the run context."""

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from testledger.core.context import RunContext
from testledger.core.messages import TestCase, TestPassed
from testledger.core.models import (
    DISPLAY_NAME_MAX_LENGTH,
    RUN_TIME_MAX,
    TestResult,
    to_run_time,
)


@pytest.fixture
def finished_result() -> TestResult:
    """A result with every required column filled in."""
    return TestResult(
        display_name="A.Foo",
        passed=True,
        run_time=Decimal("0.125"),
        time=datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC),
    )


class TestMessages:
    """Tests for lifecycle message types."""

    def test_test_case_requires_unique_id(self) -> None:
        with pytest.raises(ValueError, match="unique_id"):
            TestCase(unique_id="  ", display_name="A.Foo")

    def test_test_cases_compare_by_value(self) -> None:
        """Handles with the same identity are equal and hash alike."""
        assert TestCase("id", "A.Foo") == TestCase("id", "A.Foo")
        assert hash(TestCase("id", "A.Foo")) == hash(TestCase("id", "A.Foo"))

    def test_messages_are_immutable(self) -> None:
        message = TestPassed(TestCase("id", "A.Foo"))
        with pytest.raises(FrozenInstanceError):
            message.test_case = TestCase("other", "B.Bar")  # type: ignore[misc]


class TestStorageChecks:
    """Tests for TestResult.check_storable."""

    def test_complete_result_is_storable(self, finished_result: TestResult) -> None:
        finished_result.check_storable()

    def test_empty_display_name_rejected(self, finished_result: TestResult) -> None:
        finished_result.display_name = ""
        with pytest.raises(ValueError, match="display_name"):
            finished_result.check_storable()

    def test_display_name_length_limit(self, finished_result: TestResult) -> None:
        """500 characters fit, 501 do not."""
        finished_result.display_name = "x" * DISPLAY_NAME_MAX_LENGTH
        finished_result.check_storable()

        finished_result.display_name = "x" * (DISPLAY_NAME_MAX_LENGTH + 1)
        with pytest.raises(ValueError, match="exceeds"):
            finished_result.check_storable()

    def test_missing_time_rejected(self, finished_result: TestResult) -> None:
        finished_result.time = None
        with pytest.raises(ValueError, match="time missing"):
            finished_result.check_storable()

    def test_run_time_range(self, finished_result: TestResult) -> None:
        """Run time must fit NUMERIC(7,3)."""
        assert RUN_TIME_MAX == Decimal("9999.999")

        finished_result.run_time = Decimal("9999.999")
        finished_result.check_storable()

        finished_result.run_time = Decimal("10000")
        with pytest.raises(ValueError, match="NUMERIC"):
            finished_result.check_storable()

    def test_stored_run_time_rounds_to_scale(self, finished_result: TestResult) -> None:
        finished_result.run_time = Decimal("1.23456")
        assert finished_result.stored_run_time() == Decimal("1.235")

        finished_result.run_time = Decimal("0.0005")
        assert finished_result.stored_run_time() == Decimal("0.000")


class TestRunTimeConversion:
    """Tests for to_run_time."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("0.125"), Decimal("0.125")),
            (0.1, Decimal("0.1")),
            (3, Decimal("3")),
            ("2.5", Decimal("2.5")),
        ],
    )
    def test_conversion(self, value, expected) -> None:
        assert to_run_time(value) == expected

    @pytest.mark.parametrize("value", ["abc", float("nan"), Decimal("Infinity")])
    def test_invalid_values_rejected(self, value) -> None:
        with pytest.raises(ValueError):
            to_run_time(value)


class TestRunContext:
    """Tests for the per-run accumulation mapping."""

    def test_add_if_absent_keeps_first(self) -> None:
        context = RunContext()
        first = TestResult(display_name="first")
        second = TestResult(display_name="second")

        assert context.add_if_absent("key", first) is True
        assert context.add_if_absent("key", second) is False
        assert context.get("key") is first

    def test_get_unknown_key_raises(self) -> None:
        with pytest.raises(KeyError, match="not tracked"):
            RunContext().get("missing")

    def test_snapshot_is_detached(self) -> None:
        """Mutating a snapshot does not change the live record."""
        context = RunContext()
        live = TestResult(display_name="A.Foo")
        context.add_if_absent("key", live)

        [copy] = context.snapshot()
        copy.passed = True

        assert live.passed is False

    def test_snapshot_preserves_insertion_order(self) -> None:
        context = RunContext()
        for name in ["c", "a", "b"]:
            context.add_if_absent(name, TestResult(display_name=name))

        assert [r.display_name for r in context.snapshot()] == ["c", "a", "b"]

    def test_clear(self) -> None:
        context = RunContext()
        context.add_if_absent("key", TestResult(display_name="A.Foo"))

        context.clear()

        assert len(context) == 0
        assert "key" not in context
