import base64
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from nypl.hold_eligibility.core.exceptions import CannotLoadConfiguration
from nypl.hold_eligibility.service.credentials.kms import KmsDecryptor


class KmsFixture:
    def __init__(self) -> None:
        self.client = MagicMock()
        self.client.decrypt.return_value = {"Plaintext": b"plaintext"}
        self.decryptor = KmsDecryptor(self.client)


@pytest.fixture
def kms_fixture() -> KmsFixture:
    return KmsFixture()


class TestKmsDecryptor:
    def test_decrypt(self, kms_fixture: KmsFixture) -> None:
        encrypted = base64.b64encode(b"ciphertext").decode()
        assert kms_fixture.decryptor.decrypt(encrypted) == "plaintext"
        kms_fixture.client.decrypt.assert_called_once_with(
            CiphertextBlob=b"ciphertext"
        )

    def test_invalid_base64(self, kms_fixture: KmsFixture) -> None:
        with pytest.raises(
            CannotLoadConfiguration,
            match="Could not decrypt SIERRA_KEY: value is not valid base64",
        ):
            kms_fixture.decryptor.decrypt("not base64!", name="SIERRA_KEY")
        kms_fixture.client.decrypt.assert_not_called()

    def test_kms_error(self, kms_fixture: KmsFixture) -> None:
        kms_fixture.client.decrypt.side_effect = ClientError(
            {"Error": {"Code": "InvalidCiphertextException", "Message": "bad"}},
            "Decrypt",
        )
        with pytest.raises(CannotLoadConfiguration) as excinfo:
            kms_fixture.decryptor.decrypt(base64.b64encode(b"x").decode())
        assert str(excinfo.value) == "Could not decrypt secret."
        assert "InvalidCiphertextException" in (excinfo.value.debug_message or "")
