"""Runtime settings for the resolver Lambda, read from its environment."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger: logging.Logger = logging.getLogger(__name__)

_MIN_RESOLUTION_SECONDS = 0.5


class ResolverSettings(BaseSettings):
    """Validated resolver configuration.

    Defaults fit the 10 second function timeout the stack provisions: lookups
    get at most 3 seconds, the reply PUT 5, and 2 are held back for the
    runtime itself.
    """

    model_config = SettingsConfigDict(env_prefix="ENI_RESOLVER_")

    max_workers: int = Field(default=4, ge=1, le=32)
    lookup_timeout_seconds: float = Field(default=6.0, gt=0)
    deadline_margin_seconds: float = Field(default=2.0, ge=0)
    response_timeout_seconds: float = Field(default=5.0, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @classmethod
    def load(cls) -> ResolverSettings:
        """Load and validate settings from the environment."""
        settings = cls()
        logger.debug(
            "resolver_settings_loaded",
            extra={
                "max_workers": settings.max_workers,
                "lookup_timeout_seconds": settings.lookup_timeout_seconds,
                "response_timeout_seconds": settings.response_timeout_seconds,
                "log_level": settings.log_level,
            },
        )
        return settings

    def resolution_timeout(self, remaining_seconds: float | None) -> float:
        """Return how long lookups may run before the invocation must reply.

        ``remaining_seconds`` is the Lambda's remaining wall-clock budget, or
        ``None`` outside Lambda. The reply PUT and the deadline margin are
        paid for out of that budget before lookups get any of it.
        """
        if remaining_seconds is None:
            return self.lookup_timeout_seconds
        budget = (
            remaining_seconds - self.deadline_margin_seconds - self.response_timeout_seconds
        )
        return max(_MIN_RESOLUTION_SECONDS, min(self.lookup_timeout_seconds, budget))
