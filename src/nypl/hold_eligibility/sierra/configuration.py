from __future__ import annotations

from pydantic import HttpUrl, PositiveFloat, SecretStr
from pydantic_settings import SettingsConfigDict

from nypl.hold_eligibility.service.configuration.service_configuration import (
    ServiceConfiguration,
)


class SierraConfiguration(ServiceConfiguration):
    # The base URL of the Sierra REST API, e.g. https://catalog.example.org/iii/sierra-api/v6/
    base: HttpUrl

    # API key and secret. These are base64 encoded KMS ciphertexts unless
    # credentials_encrypted is turned off (e.g. for local development).
    key: SecretStr
    secret: SecretStr
    credentials_encrypted: bool = True
    aws_region: str = "us-east-1"

    # Seconds to wait on any single request to Sierra.
    timeout: PositiveFloat = 20.0

    model_config = SettingsConfigDict(env_prefix="SIERRA_")
