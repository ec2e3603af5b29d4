from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import HttpUrl, SecretStr

from nypl.hold_eligibility.service.credentials.kms import KmsDecryptor


@dataclass(frozen=True)
class SierraCredentials:
    """Plaintext credentials for the Sierra API. Resolved once at startup
    and treated as read-only afterwards."""

    base_url: str
    key: str = field(repr=False)
    secret: str = field(repr=False)

    @classmethod
    def resolve(
        cls,
        base: HttpUrl | str,
        key: SecretStr,
        secret: SecretStr,
        *,
        encrypted: bool,
        decryptor: KmsDecryptor | None = None,
    ) -> SierraCredentials:
        """Build the credentials from configuration, decrypting the key and
        secret with KMS if they are encrypted."""
        plain_key = key.get_secret_value()
        plain_secret = secret.get_secret_value()
        if encrypted:
            if decryptor is None:
                raise ValueError(
                    "A KMS decryptor is required when Sierra credentials are encrypted."
                )
            plain_key = decryptor.decrypt(plain_key, name="SIERRA_KEY")
            plain_secret = decryptor.decrypt(plain_secret, name="SIERRA_SECRET")

        base_url = str(base)
        # trailing slash, else relative paths don't join correctly
        if not base_url.endswith("/"):
            base_url += "/"
        return cls(base_url=base_url, key=plain_key, secret=plain_secret)
