"""Tests for client configuration."""

import pytest

from bento import (
    BentoClient,
    Config,
    ConfigurationError,
    DEFAULT_TIMEOUT,
    ErrorKind,
    InvalidKeyLengthError,
)

from helpers import PUBLISHABLE_KEY, SECRET_KEY, SITE_UUID


def make_config(**overrides) -> Config:
    values = {
        "publishable_key": PUBLISHABLE_KEY,
        "secret_key": SECRET_KEY,
        "site_uuid": SITE_UUID,
    }
    values.update(overrides)
    return Config(**values)


class TestConfig:
    def test_valid_config(self):
        config = make_config(timeout=5)

        assert config.publishable_key == PUBLISHABLE_KEY
        assert config.timeout == 5

    @pytest.mark.parametrize("field", ["publishable_key", "secret_key", "site_uuid"])
    @pytest.mark.parametrize("value", ["", "   "])
    def test_missing_credential(self, field, value):
        with pytest.raises(ConfigurationError, match="is required") as exc_info:
            make_config(**{field: value})

        assert exc_info.value.kind is ErrorKind.INVALID_CONFIGURATION

    def test_zero_timeout_uses_default(self):
        assert make_config(timeout=0).timeout == DEFAULT_TIMEOUT == 10.0

    def test_negative_timeout(self):
        with pytest.raises(ConfigurationError, match="non-negative"):
            make_config(timeout=-1)

    @pytest.mark.parametrize("timeout", [None, "10", True, [5]])
    def test_non_numeric_timeout(self, timeout):
        with pytest.raises(ConfigurationError, match="number of seconds") as exc_info:
            make_config(timeout=timeout)
        assert exc_info.value.kind is ErrorKind.INVALID_CONFIGURATION
        assert exc_info.value.value == timeout

    @pytest.mark.parametrize("timeout", [0.001, 86400])
    def test_extreme_timeouts_accepted(self, timeout):
        assert make_config(timeout=timeout).timeout == timeout

    @pytest.mark.parametrize("field", ["publishable_key", "secret_key", "site_uuid"])
    @pytest.mark.parametrize("value", ["k" * 27, "k" * 37])
    def test_key_length_outside_band(self, field, value):
        with pytest.raises(InvalidKeyLengthError, match="between 28 and 36") as exc_info:
            make_config(**{field: value})

        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.value == len(value)

    @pytest.mark.parametrize("length", [28, 36])
    def test_key_length_band_is_inclusive(self, length):
        config = make_config(publishable_key="k" * length)

        assert len(config.publishable_key) == length

    def test_key_length_check_can_be_disabled(self):
        config = make_config(
            publishable_key="test-key",
            secret_key="test-secret",
            site_uuid="test-uuid",
            key_length=None,
        )

        assert config.site_uuid == "test-uuid"

    def test_custom_key_length_band(self):
        with pytest.raises(InvalidKeyLengthError, match="between 40 and 64"):
            make_config(key_length=(40, 64))

    def test_repr_hides_secret(self):
        assert SECRET_KEY not in repr(make_config())


class TestConfigFromEnv:
    def test_reads_environment(self):
        config = Config.from_env(
            {
                "BENTO_PUBLISHABLE_KEY": PUBLISHABLE_KEY,
                "BENTO_SECRET_KEY": SECRET_KEY,
                "BENTO_SITE_UUID": SITE_UUID,
                "BENTO_TIMEOUT": "2.5",
            }
        )

        assert config.site_uuid == SITE_UUID
        assert config.timeout == 2.5

    def test_missing_variables(self):
        with pytest.raises(ConfigurationError):
            Config.from_env({"BENTO_PUBLISHABLE_KEY": PUBLISHABLE_KEY})

    def test_invalid_timeout(self):
        with pytest.raises(ConfigurationError, match="BENTO_TIMEOUT"):
            Config.from_env(
                {
                    "BENTO_PUBLISHABLE_KEY": PUBLISHABLE_KEY,
                    "BENTO_SECRET_KEY": SECRET_KEY,
                    "BENTO_SITE_UUID": SITE_UUID,
                    "BENTO_TIMEOUT": "soon",
                }
            )

    def test_client_from_env(self, monkeypatch):
        monkeypatch.setenv("BENTO_PUBLISHABLE_KEY", PUBLISHABLE_KEY)
        monkeypatch.setenv("BENTO_SECRET_KEY", SECRET_KEY)
        monkeypatch.setenv("BENTO_SITE_UUID", SITE_UUID)
        monkeypatch.delenv("BENTO_TIMEOUT", raising=False)

        with BentoClient.from_env() as client:
            assert client.config.site_uuid == SITE_UUID
            assert client.config.timeout == DEFAULT_TIMEOUT


class TestClientConstruction:
    def test_client_validates_credentials(self):
        with pytest.raises(ConfigurationError):
            BentoClient(publishable_key="", secret_key=SECRET_KEY, site_uuid=SITE_UUID)

    def test_client_normalizes_timeout(self):
        with BentoClient(PUBLISHABLE_KEY, SECRET_KEY, SITE_UUID) as client:
            assert client.config.timeout == DEFAULT_TIMEOUT

    def test_client_rejects_negative_timeout(self):
        with pytest.raises(ConfigurationError):
            BentoClient(PUBLISHABLE_KEY, SECRET_KEY, SITE_UUID, timeout=-0.5)
