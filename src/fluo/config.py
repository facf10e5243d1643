"""Process-wide settings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .scheduling import AsyncioScheduler, Scheduler


class Settings(BaseModel):
    """Settings shared by every action and store in the process."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    scheduler: Scheduler = Field(default_factory=AsyncioScheduler)


_settings = Settings()


def get_settings() -> Settings:
    return _settings


def configure(settings: Settings | None = None, **changes: Any) -> Settings:
    """Replace the current settings. Returns the previous ones.

    Pass a `Settings` instance to restore it, or keyword changes applied
    on top of the current settings.
    """
    global _settings
    previous = _settings
    if settings is None:
        settings = Settings(**{**dict(previous), **changes})
    _settings = settings
    return previous
