from __future__ import annotations

import boto3
from dependency_injector import providers
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Provider

from nypl.hold_eligibility.service.credentials.kms import KmsDecryptor
from nypl.hold_eligibility.sierra.client import SierraClient
from nypl.hold_eligibility.sierra.credentials import SierraCredentials


class SierraContainer(DeclarativeContainer):
    config = providers.Configuration()

    kms_client = providers.Singleton(
        boto3.client, "kms", region_name=config.aws_region
    )

    decryptor: Provider[KmsDecryptor] = providers.Singleton(
        KmsDecryptor, client=kms_client
    )

    credentials: Provider[SierraCredentials] = providers.Singleton(
        SierraCredentials.resolve,
        base=config.base,
        key=config.key,
        secret=config.secret,
        encrypted=config.credentials_encrypted,
        decryptor=decryptor,
    )

    # A new client for every eligibility check
    client: Provider[SierraClient] = providers.Factory(
        SierraClient, credentials=credentials, timeout=config.timeout
    )
