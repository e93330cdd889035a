"""Client configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .exceptions import ConfigurationError, InvalidKeyLengthError

DEFAULT_TIMEOUT = 10.0

# Inclusive length band accepted for each credential. Pass key_length=None
# to Config to skip the check.
KEY_LENGTH_RANGE: tuple[int, int] = (28, 36)

ENV_PUBLISHABLE_KEY = "BENTO_PUBLISHABLE_KEY"
ENV_SECRET_KEY = "BENTO_SECRET_KEY"
ENV_SITE_UUID = "BENTO_SITE_UUID"
ENV_TIMEOUT = "BENTO_TIMEOUT"


@dataclass(frozen=True)
class Config:
    """Credentials and transport settings for a Bento client.

    Attributes:
        publishable_key: Publishable key, sent as the basic auth username.
        secret_key: Secret key, sent as the basic auth password.
        site_uuid: Site identifier added to every request.
        timeout: Request timeout in seconds. Zero means DEFAULT_TIMEOUT.
        key_length: Inclusive (min, max) length band for the credentials,
            or None to accept any non-empty value.
    """

    publishable_key: str
    secret_key: str
    site_uuid: str
    timeout: float = 0.0
    key_length: tuple[int, int] | None = KEY_LENGTH_RANGE

    def __post_init__(self) -> None:
        credentials = {
            "publishable key": self.publishable_key,
            "secret key": self.secret_key,
            "site UUID": self.site_uuid,
        }
        for label, value in credentials.items():
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"invalid configuration: {label} is required")

        if self.key_length is not None:
            low, high = self.key_length
            for label, value in credentials.items():
                if not low <= len(value) <= high:
                    raise InvalidKeyLengthError(
                        f"invalid key length: {label} must be between {low} and {high} characters",
                        value=len(value),
                    )

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ConfigurationError(
                f"timeout must be a number of seconds, got {self.timeout!r}", value=self.timeout
            )
        if self.timeout < 0:
            raise ConfigurationError("timeout must be non-negative", value=self.timeout)
        if self.timeout == 0:
            object.__setattr__(self, "timeout", DEFAULT_TIMEOUT)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        key_length: tuple[int, int] | None = KEY_LENGTH_RANGE,
    ) -> Config:
        """Build a config from BENTO_* environment variables."""
        env = os.environ if environ is None else environ

        raw_timeout = env.get(ENV_TIMEOUT, "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else 0.0
        except ValueError:
            raise ConfigurationError(f"invalid {ENV_TIMEOUT}: {raw_timeout!r}", value=raw_timeout)

        return cls(
            publishable_key=env.get(ENV_PUBLISHABLE_KEY, ""),
            secret_key=env.get(ENV_SECRET_KEY, ""),
            site_uuid=env.get(ENV_SITE_UUID, ""),
            timeout=timeout,
            key_length=key_length,
        )

    def __repr__(self) -> str:
        return (
            f"Config(publishable_key={self.publishable_key!r}, secret_key='***', "
            f"site_uuid={self.site_uuid!r}, timeout={self.timeout!r}, key_length={self.key_length!r})"
        )
