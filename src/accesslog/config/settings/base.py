"""Config settings – Settings base class and LoggingSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from accesslog.config.validation import InvalidSettingValueError

LEVELS: frozenset[str] = frozenset({"debug", "info", "warning", "warn", "error"})

DEFAULT_LIFECYCLE_ENV_VARS: tuple[str, ...] = ("BUILD_NUMBER", "BUILD_HASH", "BUILD_DATE")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class LoggingSettings(Settings):
    """Everything the host hands to the logging layer at startup.

    Loaded from ``ACCESSLOG_*`` environment variables by
    :class:`~accesslog.config.settings.loaders.EnvSettingsLoader`; list
    fields are comma separated.
    """

    _prefix: ClassVar[str] = "ACCESSLOG"

    level: str = "info"
    text_logging: bool = False
    correlation_header: str = "X-Correlation-Id"
    user_correlation_header: str = "X-User-Correlation-Id"
    panic_status: int = 0
    mint_correlation_id: bool = False
    cookie_blacklist: list[str] = dataclasses.field(default_factory=list)
    anonymized_query_params: list[str] = dataclasses.field(default_factory=list)
    lifecycle_env_vars: list[str] = dataclasses.field(
        default_factory=lambda: list(DEFAULT_LIFECYCLE_ENV_VARS)
    )

    def _validate(self) -> None:
        if self.level.lower() not in LEVELS:
            raise InvalidSettingValueError(
                "level", self.level, f"expected one of {sorted(LEVELS)}"
            )
        if self.panic_status and not 100 <= self.panic_status <= 599:
            raise InvalidSettingValueError(
                "panic_status", self.panic_status, "must be 0 or an HTTP status code"
            )
        for name in ("correlation_header", "user_correlation_header"):
            if not getattr(self, name).strip():
                raise InvalidSettingValueError(name, getattr(self, name), "must not be empty")


__all__ = ["DEFAULT_LIFECYCLE_ENV_VARS", "LEVELS", "LoggingSettings", "Settings"]
