from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from nypl.hold_eligibility.core.exceptions import CannotLoadConfiguration


class ServiceConfiguration(BaseSettings):
    """Settings read once at startup from the environment, or from a `.env`
    file in the working directory.

    Subclasses set their own `env_prefix`, so each field maps to one
    environment variable: `SierraConfiguration.base` is `SIERRA_BASE`.
    """

    model_config = SettingsConfigDict(
        env_prefix="ELIGIBILITY_",
        env_file=".env",
        str_strip_whitespace=True,
        frozen=True,
        extra="ignore",
    )

    def __init__(self, **values: Any) -> None:
        try:
            super().__init__(**values)
        except ValidationError as e:
            problems = "".join(
                f"\n  {self._env_var(error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
            raise CannotLoadConfiguration(
                f"Invalid {type(self).__name__} environment:{problems}"
            ) from e

    @classmethod
    def _env_var(cls, location: Sequence[int | str]) -> str:
        if not location:
            return "(all settings)"
        name = str(location[0])
        if name in cls.model_fields:
            name = f"{cls.model_config.get('env_prefix', '')}{name}"
        return name.upper()
