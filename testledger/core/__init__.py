"""Core domain logic for the testledger result recorder.

This package contains zero external dependencies and represents
the pure logic of the application. Storage backends are handled by
the adapters package.
"""

from .collector import TestResultCollector
from .context import RunContext
from .messages import (
    AssemblyFinished,
    AssemblyStarting,
    LifecycleMessage,
    TestCase,
    TestCaseFinished,
    TestCaseStarting,
    TestFailed,
    TestFinished,
    TestPassed,
    TestSkipped,
)
from .models import TestResult
from .observer import TestMessageObserver
from .ports import TestResultStorePort
from .visitor import TestMessageVisitor

__all__ = [
    "AssemblyFinished",
    "AssemblyStarting",
    "LifecycleMessage",
    "RunContext",
    "TestCase",
    "TestCaseFinished",
    "TestCaseStarting",
    "TestFailed",
    "TestFinished",
    "TestMessageObserver",
    "TestMessageVisitor",
    "TestPassed",
    "TestResult",
    "TestResultCollector",
    "TestResultStorePort",
    "TestSkipped",
]
