from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from nypl.hold_eligibility.core.exceptions import CannotLoadConfiguration
from nypl.hold_eligibility.eligibility.configuration import EligibilityConfiguration
from nypl.hold_eligibility.service.configuration.service_configuration import (
    ServiceConfiguration,
)
from nypl.hold_eligibility.service.logging.configuration import (
    LoggingConfiguration,
    LogLevel,
)
from nypl.hold_eligibility.sierra.configuration import SierraConfiguration

SIERRA_BASE = "https://sierra.example.org/iii/sierra-api/v6/"


class MockServiceConfiguration(ServiceConfiguration):
    string_with_default: str = "default"
    string_without_default: str
    int_type: int = 12

    model_config = SettingsConfigDict(env_prefix="MOCK_")


class ConfigurationFixture:
    def __init__(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        self.monkeypatch = monkeypatch
        self.tmp_path = tmp_path

        # Run from an empty directory, so no stray .env file is picked up
        monkeypatch.chdir(tmp_path)
        for key in (
            "MOCK_STRING_WITH_DEFAULT",
            "MOCK_STRING_WITHOUT_DEFAULT",
            "MOCK_INT_TYPE",
            "SIERRA_BASE",
            "SIERRA_KEY",
            "SIERRA_SECRET",
            "SIERRA_CREDENTIALS_ENCRYPTED",
            "SIERRA_TIMEOUT",
            "ELIGIBILITY_HOLDS_LIMIT",
            "ELIGIBILITY_PTYPE_MAPPING",
            "ELIGIBILITY_PROBE_BACKOFF_FACTOR",
            "ELIGIBILITY_LOG_LEVEL",
            "ELIGIBILITY_LOG_VERBOSE_LEVEL",
        ):
            monkeypatch.delenv(key, raising=False)

    def set(self, key: str, value: str) -> None:
        self.monkeypatch.setenv(key, value)

    def dot_env(self, contents: str) -> None:
        (self.tmp_path / ".env").write_text(contents)


@pytest.fixture
def config_fixture(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> ConfigurationFixture:
    return ConfigurationFixture(monkeypatch, tmp_path)


class TestServiceConfiguration:
    def test_load_from_env(self, config_fixture: ConfigurationFixture) -> None:
        config_fixture.set("MOCK_STRING_WITHOUT_DEFAULT", "  value  ")
        config_fixture.set("MOCK_INT_TYPE", "42")
        config = MockServiceConfiguration()
        assert config.string_with_default == "default"
        # Whitespace is stripped
        assert config.string_without_default == "value"
        assert config.int_type == 42

    def test_load_from_dot_env(self, config_fixture: ConfigurationFixture) -> None:
        config_fixture.dot_env("MOCK_STRING_WITHOUT_DEFAULT=from_file\n")
        assert MockServiceConfiguration().string_without_default == "from_file"

        # The environment takes precedence over the .env file
        config_fixture.set("MOCK_STRING_WITHOUT_DEFAULT", "from_env")
        assert MockServiceConfiguration().string_without_default == "from_env"

    def test_frozen(self, config_fixture: ConfigurationFixture) -> None:
        config = MockServiceConfiguration(string_without_default="x")
        with pytest.raises(ValueError):
            config.int_type = 1  # type: ignore[misc]

    def test_errors(self, config_fixture: ConfigurationFixture) -> None:
        config_fixture.set("MOCK_INT_TYPE", "not an int")
        with pytest.raises(CannotLoadConfiguration) as excinfo:
            MockServiceConfiguration()

        # Every invalid or missing setting is reported by its environment variable
        message = str(excinfo.value)
        assert message.startswith("Invalid MockServiceConfiguration environment:")
        assert "\n  MOCK_STRING_WITHOUT_DEFAULT: Field required" in message
        assert "\n  MOCK_INT_TYPE: Input should be a valid integer" in message


class TestSierraConfiguration:
    def test_defaults(self, config_fixture: ConfigurationFixture) -> None:
        config_fixture.set("SIERRA_BASE", SIERRA_BASE)
        config_fixture.set("SIERRA_KEY", "a2V5")
        config_fixture.set("SIERRA_SECRET", "c2VjcmV0")
        config = SierraConfiguration()
        assert str(config.base) == SIERRA_BASE
        assert isinstance(config.key, SecretStr)
        assert config.key.get_secret_value() == "a2V5"
        assert "a2V5" not in repr(config)
        assert config.credentials_encrypted is True
        assert config.aws_region == "us-east-1"
        assert config.timeout == 20.0

    def test_invalid(self, config_fixture: ConfigurationFixture) -> None:
        config_fixture.set("SIERRA_BASE", "not a url")
        config_fixture.set("SIERRA_TIMEOUT", "-1")
        with pytest.raises(CannotLoadConfiguration) as excinfo:
            SierraConfiguration()
        message = str(excinfo.value)
        assert "SIERRA_BASE" in message
        assert "SIERRA_KEY" in message
        assert "SIERRA_SECRET" in message
        assert "SIERRA_TIMEOUT" in message


class TestEligibilityConfiguration:
    def test_load(self, config_fixture: ConfigurationFixture) -> None:
        config_fixture.set("ELIGIBILITY_PTYPE_MAPPING", "/data/by-patron-type.json")
        config = EligibilityConfiguration()
        assert config.ptype_mapping == "/data/by-patron-type.json"
        assert config.holds_limit == 15
        assert config.probe_backoff_factor == 0.0

        config_fixture.set("ELIGIBILITY_HOLDS_LIMIT", "0")
        with pytest.raises(CannotLoadConfiguration, match="ELIGIBILITY_HOLDS_LIMIT"):
            EligibilityConfiguration()

    def test_mapping_required(self, config_fixture: ConfigurationFixture) -> None:
        with pytest.raises(CannotLoadConfiguration, match="ELIGIBILITY_PTYPE_MAPPING"):
            EligibilityConfiguration()


class TestLoggingConfiguration:
    def test_defaults(self, config_fixture: ConfigurationFixture) -> None:
        config = LoggingConfiguration()
        assert config.level == LogLevel.info
        assert config.verbose_level == LogLevel.warning

    @pytest.mark.parametrize("value", ["debug", "DEBUG"])
    def test_level(self, config_fixture: ConfigurationFixture, value: str) -> None:
        config_fixture.set("ELIGIBILITY_LOG_LEVEL", value)
        assert LoggingConfiguration().level == LogLevel.debug

        # Numeric levels are accepted too
        assert LoggingConfiguration(level=40).level == LogLevel.error

    def test_invalid_level(self, config_fixture: ConfigurationFixture) -> None:
        config_fixture.set("ELIGIBILITY_LOG_LEVEL", "chatty")
        with pytest.raises(CannotLoadConfiguration, match="ELIGIBILITY_LOG_LEVEL"):
            LoggingConfiguration()


class TestLogLevel:
    def test_levelno(self) -> None:
        assert LogLevel.debug.levelno == 10
        assert LogLevel.error.levelno == 40

    def test_logging_module_names(self) -> None:
        for level in LogLevel:
            assert logging.getLevelName(level.levelno) == level.value
