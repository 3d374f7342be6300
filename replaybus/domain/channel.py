"""A single named channel: its subscribers and its bounded history."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable

from replaybus.domain.models import Message

Callback = Callable[..., Any]


class History:
    """Most recent messages on a channel, oldest first.

    Holds at most ``max_history`` messages; appending past the bound drops the
    oldest. A bound of 0 disables storage entirely.
    """

    def __init__(self, max_history: int) -> None:
        self.max_history = max_history
        self._messages: deque[Message] = deque(maxlen=max_history)

    def append(self, message: Message) -> None:
        if self.max_history <= 0:
            return
        self._messages.append(message)

    def window(self, count: int | None = None) -> list[Message]:
        """Return the last *count* messages (all of them when ``None``)."""
        start = 0
        if count is not None:
            start = max(0, len(self._messages) - max(count, 0))
        return list(self._messages)[start:]

    def __len__(self) -> int:
        return len(self._messages)


class Channel:
    """Subscribers keyed by handle plus the channel's message history.

    Subscribers are notified in registration order.
    """

    def __init__(self, name: str, max_history: int) -> None:
        self.name = name
        self.history = History(max_history)
        self._subscribers: dict[int, Callback] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def add_subscriber(self, handle: int, callback: Callback) -> None:
        self._subscribers[handle] = callback

    def remove_subscriber(self, handle: int) -> bool:
        """Drop the subscription for *handle*; return False if it was already gone."""
        return self._subscribers.pop(handle, None) is not None

    def has_subscriber(self, handle: int) -> bool:
        return handle in self._subscribers

    def publish(self, message: Message) -> int:
        """Deliver *message* to current subscribers, then store it.

        Only subscribers present when delivery starts are called. One that is
        removed before its turn (e.g. by an earlier callback) is skipped.
        Returns the number of callbacks invoked.
        """
        delivered = 0
        for handle, callback in list(self._subscribers.items()):
            if not self.has_subscriber(handle):
                continue
            message.deliver(callback)
            delivered += 1
        self.history.append(message)
        return delivered
