"""In-memory registry of channels."""

from __future__ import annotations

import logging

from replaybus.domain.channel import Channel

logger = logging.getLogger(__name__)


class ChannelRepository:
    """Dict-backed store for Channel instances, keyed by name.

    Channels are never removed once created.
    """

    def __init__(self, max_history: int) -> None:
        self.max_history = max_history
        self._store: dict[str, Channel] = {}

    def get(self, name: str) -> Channel | None:
        return self._store.get(name)

    def get_or_create(self, name: str) -> Channel:
        channel = self._store.get(name)
        if channel is None:
            channel = Channel(name, self.max_history)
            self._store[name] = channel
            logger.debug("created channel %r", name)
        return channel

    def list_names(self) -> list[str]:
        return list(self._store)
