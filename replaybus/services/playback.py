"""Replay of stored channel history to a late subscriber."""

from __future__ import annotations

from typing import Any, Callable

from replaybus.domain.channel import History


def rewind(
    history: History,
    callback: Callable[..., Any],
    count: int | None = None,
) -> int:
    """Play back up to *count* stored messages to *callback*, oldest first.

    With ``count=None`` the whole history is replayed. A count larger than the
    history replays everything; zero or a negative count replays nothing.
    Returns the number of messages replayed.
    """
    replayed = 0
    for message in history.window(count):
        message.deliver(callback)
        replayed += 1
    return replayed
