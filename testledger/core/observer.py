"""Fan-out of lifecycle messages to several visitors.

Runners accept a single visitor. TestMessageObserver is that visitor and
re-emits every message to each subscriber it holds, so reporters,
recorders and the like can all observe the same run.
"""

from .visitor import TestMessageVisitor


class TestMessageObserver(TestMessageVisitor):
    """A visitor that forwards each message to all subscribed visitors.

    Subscribers receive messages in the order they were added. Errors
    raised by a subscriber are not caught: they propagate to the runner
    and later subscribers do not see that message.
    """

    def __init__(self, *visitors: TestMessageVisitor | None):
        """Create an observer with an initial set of subscribers.

        Args:
            visitors: Visitors to subscribe. None entries are skipped.
        """
        self._visitors: list[TestMessageVisitor] = []
        self.add_visitors(*visitors)

    @property
    def visitors(self) -> tuple[TestMessageVisitor, ...]:
        return tuple(self._visitors)

    def add_visitors(self, *visitors: TestMessageVisitor | None) -> None:
        """Subscribe more visitors. None entries are skipped; duplicates are kept."""
        self._visitors.extend(v for v in visitors if v is not None)

    async def on_message(self, message: object) -> bool:
        """Forward the message to every subscriber, then handle it here."""
        for visitor in self._visitors:
            await visitor.on_message(message)

        return await super().on_message(message)


__all__ = ["TestMessageObserver"]
