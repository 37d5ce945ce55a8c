"""Client configuration for pyglobe."""

from __future__ import annotations

import dataclasses
import enum
import os
from typing import Any

from pyglobe._constants import (
    AUTH_URL,
    DEFAULT_COOKIE_NAME,
    DEFAULT_TIMEOUT,
    GLOBES_URL,
    LIKES_URL,
    MEDIA_URL,
    PROFILE_URL,
    USER_AGENT,
)
from pyglobe.exceptions import GlobeConfigError


class CredentialStyle(enum.StrEnum):
    """How the access token is attached to outgoing requests."""

    BEARER = "bearer"
    COOKIE = "cookie"


class Service(enum.StrEnum):
    """Remote services the client talks to."""

    AUTH = "auth"
    PROFILE = "profile"
    MEDIA = "media"
    GLOBES = "globes"
    LIKES = "likes"


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise GlobeConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class GlobeConfig:
    """Client configuration.

    Parameters
    ----------
    auth_url : str
        Base URL of the auth service (login, register, refresh-token).
    profile_url : str
        Base URL of the profile service.
    media_url : str
        Base URL of the media / trips service.
    globes_url : str
        Base URL of the globes (albums) service.
    likes_url : str
        Base URL of the likes / favourites service.
    timeout : float
        Per-call timeout in seconds.  An expired timeout surfaces as
        :class:`~pyglobe.exceptions.GlobeNetworkError` and is never retried.
    credential_style : CredentialStyle
        Attach the access token as ``Authorization: Bearer`` or as a cookie.
    cookie_name : str
        Cookie name used when ``credential_style`` is ``cookie``.  Also the
        cookie read from login responses that carry no token in the body.
    credentials_path : str or None
        When set, credentials persist to this JSON file instead of memory.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    auth_url: str = AUTH_URL
    profile_url: str = PROFILE_URL
    media_url: str = MEDIA_URL
    globes_url: str = GLOBES_URL
    likes_url: str = LIKES_URL
    timeout: float = DEFAULT_TIMEOUT
    credential_style: CredentialStyle = CredentialStyle.BEARER
    cookie_name: str = DEFAULT_COOKIE_NAME
    credentials_path: str | None = None
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise GlobeConfigError(f"timeout must be positive, got {self.timeout}")
        try:
            style = CredentialStyle(str(self.credential_style).lower())
        except ValueError as exc:
            raise GlobeConfigError(f"unknown credential_style {self.credential_style!r}") from exc
        object.__setattr__(self, "credential_style", style)
        if not self.cookie_name:
            raise GlobeConfigError("cookie_name must be non-empty")

    def service_url(self, service: Service | str) -> str:
        """Return the base URL for *service*, without a trailing slash."""
        try:
            key = Service(service)
        except ValueError as exc:
            raise GlobeConfigError(f"unknown service {service!r}") from exc
        url: str = getattr(self, f"{key.value}_url")
        return url.rstrip("/")

    @classmethod
    def from_env(cls, **overrides: Any) -> GlobeConfig:
        """Create configuration from environment variables.

        Reads ``GLOBE_AUTH_URL``, ``GLOBE_PROFILE_URL``, ``GLOBE_MEDIA_URL``,
        ``GLOBE_GLOBES_URL``, ``GLOBE_LIKES_URL``, ``GLOBE_TIMEOUT``,
        ``GLOBE_CREDENTIAL_STYLE``, ``GLOBE_COOKIE_NAME``,
        ``GLOBE_CREDENTIALS_PATH`` and ``GLOBE_USER_AGENT``.  Explicit
        keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "GLOBE_AUTH_URL": "auth_url",
            "GLOBE_PROFILE_URL": "profile_url",
            "GLOBE_MEDIA_URL": "media_url",
            "GLOBE_GLOBES_URL": "globes_url",
            "GLOBE_LIKES_URL": "likes_url",
            "GLOBE_CREDENTIAL_STYLE": "credential_style",
            "GLOBE_COOKIE_NAME": "cookie_name",
            "GLOBE_CREDENTIALS_PATH": "credentials_path",
            "GLOBE_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # timeout is numeric, handle separately
        timeout_env = env.get("GLOBE_TIMEOUT")
        if timeout_env is not None and "timeout" not in overrides:
            config_kwargs["timeout"] = _env_float("GLOBE_TIMEOUT", timeout_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
