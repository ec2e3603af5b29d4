from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

from nypl.hold_eligibility.core.exceptions import CannotLoadConfiguration
from nypl.hold_eligibility.util.log import LoggerMixin

if TYPE_CHECKING:
    from mypy_boto3_kms import KMSClient


class KmsDecryptor(LoggerMixin):
    """Decrypts secrets that were encrypted with AWS KMS and stored in the
    environment as base64 encoded ciphertext."""

    def __init__(self, client: KMSClient) -> None:
        self._client = client

    def decrypt(self, encrypted: str, *, name: str = "secret") -> str:
        """Decrypt a single base64 encoded ciphertext.

        :param encrypted: The base64 encoded ciphertext.
        :param name: What the secret is, for error messages. The secret
            itself is never logged.
        :raise CannotLoadConfiguration: If the value can't be decoded or decrypted.
        """
        try:
            ciphertext = base64.b64decode(encrypted, validate=True)
        except (binascii.Error, ValueError) as e:
            raise CannotLoadConfiguration(
                f"Could not decrypt {name}: value is not valid base64."
            ) from e

        try:
            response = self._client.decrypt(CiphertextBlob=ciphertext)
        except (BotoCoreError, ClientError) as e:
            raise CannotLoadConfiguration(
                f"Could not decrypt {name}.", debug_message=str(e)
            ) from e

        self.log.debug(f"Decrypted {name}")
        return response["Plaintext"].decode("ascii")
