from __future__ import annotations

import pytest

from pyglobe.config import CredentialStyle, GlobeConfig, Service
from pyglobe.exceptions import GlobeConfigError

_ENV_KEYS = (
    "GLOBE_AUTH_URL",
    "GLOBE_PROFILE_URL",
    "GLOBE_MEDIA_URL",
    "GLOBE_GLOBES_URL",
    "GLOBE_LIKES_URL",
    "GLOBE_TIMEOUT",
    "GLOBE_CREDENTIAL_STYLE",
    "GLOBE_COOKIE_NAME",
    "GLOBE_CREDENTIALS_PATH",
    "GLOBE_USER_AGENT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = GlobeConfig()

    assert config.timeout == 5.0
    assert config.credential_style is CredentialStyle.BEARER
    assert config.cookie_name == "auth_token"
    assert config.credentials_path is None
    assert config.service_url(Service.AUTH) == "http://localhost:8080"


def test_from_env_reads_globe_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLOBE_AUTH_URL", "https://auth.example.com/")
    monkeypatch.setenv("GLOBE_TIMEOUT", "2.5")
    monkeypatch.setenv("GLOBE_CREDENTIAL_STYLE", "COOKIE")
    monkeypatch.setenv("GLOBE_CREDENTIALS_PATH", "/tmp/creds.json")

    config = GlobeConfig.from_env()

    assert config.service_url("auth") == "https://auth.example.com"
    assert config.timeout == 2.5
    assert config.credential_style is CredentialStyle.COOKIE
    assert config.credentials_path == "/tmp/creds.json"


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLOBE_TIMEOUT", "not-a-number")
    monkeypatch.setenv("GLOBE_LIKES_URL", "http://likes.env")

    config = GlobeConfig.from_env(timeout=1.0, likes_url="http://likes.override")

    assert config.timeout == 1.0
    assert config.likes_url == "http://likes.override"


def test_from_env_invalid_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GLOBE_TIMEOUT", "soon")

    with pytest.raises(GlobeConfigError, match="GLOBE_TIMEOUT"):
        GlobeConfig.from_env()


@pytest.mark.parametrize("timeout", [0, -1.0])
def test_non_positive_timeout_rejected(timeout: float) -> None:
    with pytest.raises(GlobeConfigError):
        GlobeConfig(timeout=timeout)


def test_unknown_credential_style_rejected() -> None:
    with pytest.raises(GlobeConfigError):
        GlobeConfig(credential_style="header")  # type: ignore[arg-type]


def test_empty_cookie_name_rejected() -> None:
    with pytest.raises(GlobeConfigError):
        GlobeConfig(cookie_name="")


def test_unknown_service_rejected() -> None:
    with pytest.raises(GlobeConfigError):
        GlobeConfig().service_url("billing")
