"""Visitors that record or reject messages, for observer tests."""

from testledger.core.visitor import TestMessageVisitor


class RecordingVisitor(TestMessageVisitor):
    """Captures each message handed to on_message.

    An optional shared ``log`` list receives ``(name, message)`` pairs so
    several visitors can record a single global delivery order.
    """

    def __init__(self, name: str = "recorder", log: list | None = None, verdict: bool = True):
        self.name = name
        self.messages: list[object] = []
        self.log = log if log is not None else []
        self.verdict = verdict

    async def on_message(self, message: object) -> bool:
        self.messages.append(message)
        self.log.append((self.name, message))
        return self.verdict


class FailingVisitor(TestMessageVisitor):
    """Raises the given exception for every message."""

    def __init__(self, error: Exception | None = None):
        self.error = error or RuntimeError("visitor failed")
        self.calls = 0

    async def on_message(self, message: object) -> bool:
        self.calls += 1
        raise self.error
