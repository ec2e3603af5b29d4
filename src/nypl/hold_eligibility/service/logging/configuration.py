from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pydantic import field_validator
from pydantic_settings import SettingsConfigDict

from nypl.hold_eligibility.service.configuration.service_configuration import (
    ServiceConfiguration,
)


class LogLevel(StrEnum):
    """Level names as the logging module spells them, so a member can be
    passed straight to it."""

    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"

    @property
    def levelno(self) -> int:
        return logging.getLevelNamesMapping()[self.value]


class LoggingConfiguration(ServiceConfiguration):
    """
    ELIGIBILITY_LOG_LEVEL applies to the service's own loggers.
    ELIGIBILITY_LOG_VERBOSE_LEVEL applies to the HTTP and AWS libraries,
    which log every request they make.
    """

    level: LogLevel = LogLevel.info
    verbose_level: LogLevel = LogLevel.warning

    model_config = SettingsConfigDict(env_prefix="ELIGIBILITY_LOG_")

    @field_validator("level", "verbose_level", mode="before")
    @classmethod
    def _level_name(cls, value: Any) -> Any:
        # Accept "debug" as well as "DEBUG", and numeric levels like 10
        if isinstance(value, int):
            return logging.getLevelName(value)
        if isinstance(value, str):
            return value.upper()
        return value
