"""Fake implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeTestResultStorePort: In-memory result persistence
- RecordingVisitor: Captures every message it is handed
- FailingVisitor: Raises on every message
"""

from .store import FakeTestResultStorePort
from .visitors import FailingVisitor, RecordingVisitor

__all__ = [
    "FailingVisitor",
    "FakeTestResultStorePort",
    "RecordingVisitor",
]
