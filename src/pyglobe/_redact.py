"""Helpers for safe debug logging.

Request and response bodies exchanged with the auth service carry
passwords and tokens, and request headers carry the access credential.
Everything that goes into a DEBUG log passes through :func:`redact_for_log`
first.

Credentials keep their shape so logs stay useful: ``Authorization`` keeps
its scheme (``Bearer <redacted>``) and cookie headers keep their names
(``auth_token=<redacted>``).
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, SecretStr

REDACTED = "<redacted>"

_SECRET_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "oldpassword",
        "newpassword",
        "password_hash",
        "token",
        "refreshtoken",
        "refresh_token",
        "accesstoken",
        "access_token",
        "auth_token",
    }
)
_AUTHORIZATION_KEYS: frozenset[str] = frozenset({"authorization", "proxy-authorization"})
_COOKIE_KEYS: frozenset[str] = frozenset({"cookie", "set-cookie"})

_BEARER_RE = re.compile(r"(Bearer\s+)[^\s\"',;]+", re.IGNORECASE)
_COOKIE_PAIR_RE = re.compile(r"([^=;\s]+)=([^;]*)")


def _redact_authorization(value: Any) -> str:
    scheme, _, credential = str(value).partition(" ")
    return f"{scheme} {REDACTED}" if credential else REDACTED


def _redact_cookie(value: Any) -> str:
    # Attributes such as Path or Max-Age are kept; every value is hidden.
    return _COOKIE_PAIR_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", str(value))


def _redact_text(value: str, max_string: int) -> str:
    # Non-JSON error bodies sometimes echo the Authorization header.
    text = _BEARER_RE.sub(rf"\g<1>{REDACTED}", value)
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def _redact_entry(key: str, value: Any, max_string: int, depth: int) -> Any:
    lowered = key.lower()
    if lowered in _SECRET_KEYS:
        return REDACTED
    if lowered in _AUTHORIZATION_KEYS:
        return _redact_authorization(value)
    if lowered in _COOKIE_KEYS:
        return _redact_cookie(value)
    return redact_for_log(value, max_string=max_string, _depth=depth + 1)


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, SecretStr):
        return REDACTED
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="python", by_alias=True)
    if isinstance(value, str):
        return _redact_text(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return {str(k): _redact_entry(str(k), v, max_string, _depth) for k, v in value.items()}
    if isinstance(value, Sequence):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]
    return repr(value)
