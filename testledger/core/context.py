"""Per-run accumulation of test results.

A RunContext maps test case handles to the TestResult being built for
them. Runners may deliver messages for different test cases from several
threads or interleaved tasks, so every operation takes the internal lock.
Callers never lock.
"""

import threading
from collections.abc import Hashable
from dataclasses import replace

from .models import TestResult


class RunContext:
    """Thread-safe mapping of test case handle to TestResult for one run."""

    def __init__(self) -> None:
        self._results: dict[Hashable, TestResult] = {}
        self._lock = threading.Lock()

    def add_if_absent(self, key: Hashable, result: TestResult) -> bool:
        """Insert a result unless the key is already tracked.

        Returns:
            True if the result was inserted, False if the key existed
            and the stored result was left untouched.
        """
        with self._lock:
            if key in self._results:
                return False
            self._results[key] = result
            return True

    def get(self, key: Hashable) -> TestResult:
        """Return the live result for a key.

        Raises:
            KeyError: If the key was never added in this run.
        """
        with self._lock:
            try:
                return self._results[key]
            except KeyError:
                raise KeyError(f"Test case not tracked in this run: {key!r}") from None

    def clear(self) -> None:
        with self._lock:
            self._results.clear()

    def snapshot(self) -> list[TestResult]:
        """Copies of all results, in insertion order."""
        with self._lock:
            return [replace(result) for result in self._results.values()]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._results

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)


__all__ = ["RunContext"]
