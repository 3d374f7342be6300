"""Synchronous in-process publish/subscribe bus with per-channel history."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from replaybus.domain.channel import Channel
from replaybus.domain.models import Message
from replaybus.errors import ConfigurationError
from replaybus.repos.memory import ChannelRepository
from replaybus.services.playback import rewind

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 10


def validate_max_history(value: Any) -> int:
    """Return *value* if it is a usable history size, else raise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"max_history must be an integer, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"max_history must be >= 0, got {value}")
    return value


class PubSub:
    """Publish/subscribe bus for named channels.

    Callbacks are called synchronously in subscription order. Each channel
    keeps the last ``max_history`` messages so late subscribers can ask for
    playback. Every public operation holds one re-entrant lock, so callbacks
    may publish or subscribe on the same bus.
    """

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY) -> None:
        self._max_history = validate_max_history(max_history)
        self._channels = ChannelRepository(self._max_history)
        self._next_id = 0
        self._lock = threading.RLock()

    @property
    def max_history(self) -> int:
        return self._max_history

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    def publish(self, channel: str, *values: Any) -> None:
        """Send *values* to every subscriber of *channel* and record them."""
        with self._lock:
            target = self._channels.get_or_create(channel)
            delivered = target.publish(Message(values=values))
            logger.debug("published on %r to %d subscriber(s)", channel, delivered)

    # ------------------------------------------------------------------
    # Subscribing
    # ------------------------------------------------------------------

    def subscribe(
        self,
        channel: str,
        callback: Callable[..., Any],
        playback: bool = False,
        max_playback: int | None = None,
    ) -> Callable[[], None]:
        """Register *callback* on *channel* and return its unsubscribe function.

        With ``playback=True`` the stored history (capped at *max_playback*
        messages, newest kept) is replayed to the callback before this call
        returns.
        """
        with self._lock:
            target = self._channels.get_or_create(channel)
            handle = self._new_handle()
            target.add_subscriber(handle, callback)
            logger.debug("subscriber %d added to %r", handle, channel)

            if playback is True:
                try:
                    replayed = rewind(target.history, callback, max_playback)
                except BaseException:
                    target.remove_subscriber(handle)
                    raise
                logger.debug("replayed %d message(s) to subscriber %d", replayed, handle)

            return self._unsubscriber(target, handle)

    def _new_handle(self) -> int:
        self._next_id += 1
        return self._next_id

    def _unsubscriber(self, channel: Channel, handle: int) -> Callable[[], None]:
        def unsubscribe() -> None:
            with self._lock:
                if channel.remove_subscriber(handle):
                    logger.debug("subscriber %d removed from %r", handle, channel.name)

        return unsubscribe

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def history(self, channel: str) -> list[Message]:
        """Stored messages for *channel*, oldest first."""
        with self._lock:
            target = self._channels.get(channel)
            if target is None:
                return []
            return target.history.window()

    def subscriber_count(self, channel: str) -> int:
        with self._lock:
            target = self._channels.get(channel)
            return target.subscriber_count if target is not None else 0

    def channel_names(self) -> list[str]:
        with self._lock:
            return self._channels.list_names()
