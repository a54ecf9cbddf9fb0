"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from crocload._internal.config import DEFAULT_BASE_URL, CrocLoadConfig, load_config
from crocload._internal.errors import ConfigError

_ENV_VARS = (
    "CROCLOAD_BASE_URL",
    "CROCLOAD_USERNAME",
    "CROCLOAD_PASSWORD",
    "CROCLOAD_TIMEOUT",
    "CROCLOAD_PAUSE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestCrocLoadConfig:
    """Tests for the CrocLoadConfig dataclass."""

    def test_defaults(self):
        """Defaults match the public test API and a 30 s timeout."""
        config = CrocLoadConfig()
        assert config.base_url == DEFAULT_BASE_URL == "https://test-api.k6.io"
        assert config.username == ""
        assert config.password == ""
        assert config.request_timeout == 30.0
        assert config.pause_seconds == 1.0

    def test_frozen(self):
        """Config is immutable."""
        config = CrocLoadConfig()
        with pytest.raises(AttributeError):
            config.base_url = "http://changed"  # type: ignore[misc]

    def test_require_credentials_passes_when_set(self):
        """Both credentials set passes."""
        CrocLoadConfig(username="croc", password="secret").require_credentials()

    def test_require_credentials_names_missing_fields(self):
        """The error names every missing credential."""
        with pytest.raises(ConfigError, match="username, password"):
            CrocLoadConfig().require_credentials()

    def test_require_credentials_missing_password_only(self):
        """Only the missing password is named."""
        with pytest.raises(ConfigError, match="Missing credentials: password"):
            CrocLoadConfig(username="croc").require_credentials()


class TestLoadConfig:
    """Tests for the load_config function."""

    def test_defaults_from_env(self):
        """An empty environment gives the defaults."""
        config = load_config()
        assert config == CrocLoadConfig()

    def test_values_from_env(self, monkeypatch: pytest.MonkeyPatch):
        """Every CROCLOAD_ variable is read."""
        monkeypatch.setenv("CROCLOAD_BASE_URL", "http://api.example.com")
        monkeypatch.setenv("CROCLOAD_USERNAME", "croc")
        monkeypatch.setenv("CROCLOAD_PASSWORD", "secret")
        monkeypatch.setenv("CROCLOAD_TIMEOUT", "10.5")
        monkeypatch.setenv("CROCLOAD_PAUSE", "0")

        config = load_config()
        assert config.base_url == "http://api.example.com"
        assert config.username == "croc"
        assert config.password == "secret"
        assert config.request_timeout == 10.5
        assert config.pause_seconds == 0.0

    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch):
        """A non-numeric timeout raises ConfigError."""
        monkeypatch.setenv("CROCLOAD_TIMEOUT", "soon")
        with pytest.raises(ConfigError, match="must be a number"):
            load_config()

    def test_non_positive_timeout_raises(self, monkeypatch: pytest.MonkeyPatch):
        """A zero timeout raises ConfigError."""
        monkeypatch.setenv("CROCLOAD_TIMEOUT", "0")
        with pytest.raises(ConfigError, match="must be positive"):
            load_config()

    def test_negative_pause_raises(self, monkeypatch: pytest.MonkeyPatch):
        """A negative pause raises ConfigError."""
        monkeypatch.setenv("CROCLOAD_PAUSE", "-1")
        with pytest.raises(ConfigError, match="must be non-negative"):
            load_config()
