"""Value types carried over the bus."""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict


class Message(BaseModel):
    """One published message: the positional values given to ``publish``."""

    model_config = ConfigDict(frozen=True)

    values: tuple[Any, ...] = ()

    def deliver(self, callback: Callable[..., Any]) -> None:
        """Call *callback* with the message values spread as positional args."""
        callback(*self.values)
