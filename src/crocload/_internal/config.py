"""Configuration loading for crocload."""

from __future__ import annotations

import os
from dataclasses import dataclass

from crocload._internal.errors import ConfigError

DEFAULT_BASE_URL = "https://test-api.k6.io"


@dataclass(frozen=True)
class CrocLoadConfig:
    """Global crocload configuration.

    Attributes:
        base_url: Base URL of the crocodile API under test.
        username: Login username.
        password: Login password.
        request_timeout: Total timeout per HTTP request in seconds.
        pause_seconds: Pause at the end of every iteration in seconds.
    """

    base_url: str = DEFAULT_BASE_URL
    username: str = ""
    password: str = ""
    request_timeout: float = 30.0
    pause_seconds: float = 1.0

    def require_credentials(self) -> None:
        """Ensure both username and password are set.

        Raises:
            ConfigError: If either credential is empty.
        """
        missing = [
            name for name, value in (("username", self.username), ("password", self.password))
            if not value
        ]
        if missing:
            msg = (
                f"Missing credentials: {', '.join(missing)}. "
                "Set CROCLOAD_USERNAME / CROCLOAD_PASSWORD or pass --username / --password."
            )
            raise ConfigError(msg)


def _parse_float(name: str, default: str) -> float:
    raw = os.environ.get(name, default)
    try:
        return float(raw)
    except ValueError:
        msg = f"{name} must be a number, got: {raw!r}"
        raise ConfigError(msg) from None


def load_config() -> CrocLoadConfig:
    """Load configuration from environment variables with defaults.

    Environment variables:
        CROCLOAD_BASE_URL: API base URL (default: https://test-api.k6.io).
        CROCLOAD_USERNAME: Login username.
        CROCLOAD_PASSWORD: Login password.
        CROCLOAD_TIMEOUT: Request timeout in seconds (default: 30.0).
        CROCLOAD_PAUSE: End-of-iteration pause in seconds (default: 1.0).

    Returns:
        Populated CrocLoadConfig instance.

    Raises:
        ConfigError: If an environment variable has an invalid value.
    """
    timeout = _parse_float("CROCLOAD_TIMEOUT", "30.0")
    if timeout <= 0:
        msg = f"CROCLOAD_TIMEOUT must be positive, got: {timeout}"
        raise ConfigError(msg)

    pause = _parse_float("CROCLOAD_PAUSE", "1.0")
    if pause < 0:
        msg = f"CROCLOAD_PAUSE must be non-negative, got: {pause}"
        raise ConfigError(msg)

    return CrocLoadConfig(
        base_url=os.environ.get("CROCLOAD_BASE_URL", DEFAULT_BASE_URL),
        username=os.environ.get("CROCLOAD_USERNAME", ""),
        password=os.environ.get("CROCLOAD_PASSWORD", ""),
        request_timeout=timeout,
        pause_seconds=pause,
    )
