"""Configuration of the history bound and construction of bus instances."""

from __future__ import annotations

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from replaybus.domain.bus import DEFAULT_MAX_HISTORY, PubSub, validate_max_history
from replaybus.errors import ConfigurationError


class PubSubSettings(BaseSettings):
    """Bus settings, overridable via ``REPLAYBUS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPLAYBUS_", case_sensitive=False, extra="ignore"
    )

    max_history: int = Field(default=DEFAULT_MAX_HISTORY, ge=0)


def load_settings() -> PubSubSettings:
    try:
        return PubSubSettings()
    except ValidationError as exc:
        raise ConfigurationError(f"invalid bus settings: {exc}") from exc


class BusFactory:
    """Builds PubSub instances with a configured history bound.

    Lifetime of the built bus (singleton or not) is up to the caller.
    """

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY) -> None:
        self.max_history = validate_max_history(max_history)

    def set_max_history(self, max_history: int) -> BusFactory:
        """Change the history bound for buses built from now on."""
        self.max_history = validate_max_history(max_history)
        return self

    def __call__(self) -> PubSub:
        return PubSub(max_history=self.max_history)


def configure(max_history: int | None = None) -> BusFactory:
    """Return a factory for buses keeping *max_history* messages per channel.

    When *max_history* is omitted the value comes from :class:`PubSubSettings`
    (``REPLAYBUS_MAX_HISTORY``, default 10). Zero disables history.
    """
    if max_history is None:
        max_history = load_settings().max_history
    return BusFactory(max_history)
