"""Domain models for the testledger result recorder.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

# Storage constraints of the TestData table
DISPLAY_NAME_MAX_LENGTH = 500
RUN_TIME_PRECISION = 7
RUN_TIME_SCALE = 3
RUN_TIME_QUANTUM = Decimal(1).scaleb(-RUN_TIME_SCALE)
RUN_TIME_MAX = Decimal(10 ** (RUN_TIME_PRECISION - RUN_TIME_SCALE)) - RUN_TIME_QUANTUM


def to_run_time(seconds: Decimal | float | int | str) -> Decimal:
    """Convert a runner-supplied duration to a Decimal without float noise.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(seconds, Decimal):
        value = seconds
    else:
        try:
            value = Decimal(str(seconds))
        except InvalidOperation as e:
            raise ValueError(f"Invalid run time: {seconds!r}") from e
    if not value.is_finite():
        raise ValueError(f"Run time must be finite, got {seconds!r}")
    return value


@dataclass
class TestResult:
    """Outcome of a single test case in one assembly run.

    Created with only a display name when the test case starts, then
    filled in as the runner reports progress. ``passed`` stays False
    unless a pass was observed, so failed, skipped and unreported tests
    look the same.

    Note: This dataclass is intentionally mutable; the collector updates
    it in place as messages arrive.
    """

    __test__ = False

    display_name: str
    passed: bool = False
    run_time: Decimal | None = None  # seconds
    time: datetime | None = None  # when the test completed
    id: int | None = None  # assigned by the store on insert

    def check_storable(self) -> None:
        """Verify the record satisfies the TestData table constraints.

        Raises:
            ValueError: If a required column would be empty or a value
                does not fit its column.
        """
        if not self.display_name or not self.display_name.strip():
            raise ValueError("display_name must be a non-empty string")
        if len(self.display_name) > DISPLAY_NAME_MAX_LENGTH:
            raise ValueError(
                f"display_name exceeds {DISPLAY_NAME_MAX_LENGTH} characters: "
                f"{self.display_name[:50]!r}..."
            )
        if self.run_time is None:
            raise ValueError(f"run_time missing for {self.display_name!r}")
        if self.time is None:
            raise ValueError(f"time missing for {self.display_name!r}")
        run_time = self.stored_run_time()
        if abs(run_time) > RUN_TIME_MAX:
            raise ValueError(
                f"run_time {self.run_time} for {self.display_name!r} does not fit "
                f"NUMERIC({RUN_TIME_PRECISION},{RUN_TIME_SCALE})"
            )

    def stored_run_time(self) -> Decimal:
        """Run time rounded to the column scale."""
        if self.run_time is None:
            raise ValueError(f"run_time missing for {self.display_name!r}")
        return self.run_time.quantize(RUN_TIME_QUANTUM, rounding=ROUND_HALF_EVEN)


__all__ = [
    "DISPLAY_NAME_MAX_LENGTH",
    "RUN_TIME_MAX",
    "RUN_TIME_PRECISION",
    "RUN_TIME_SCALE",
    "TestResult",
    "to_run_time",
]
