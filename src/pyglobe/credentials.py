"""Persistent key-value storage for the access token, refresh token and user id."""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pyglobe._constants import ACCESS_TOKEN_KEY, CREDENTIAL_KEYS, REFRESH_TOKEN_KEY, USER_ID_KEY
from pyglobe.exceptions import GlobeConfigError

__all__ = [
    "ACCESS_TOKEN_KEY",
    "CREDENTIAL_KEYS",
    "REFRESH_TOKEN_KEY",
    "USER_ID_KEY",
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "clear_credentials",
]


class CredentialStore(Protocol):
    """Async get/set/delete by key."""

    async def get(self, key: str) -> str | None:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


class MemoryCredentialStore:
    """In-process store; credentials are lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)


class FileCredentialStore:
    """JSON-file store.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash mid-write never leaves a truncated file behind.
    The file is created with mode ``0600``.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return str(value) if value is not None else None

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            values = self._read_all()
            values[key] = value
            self._write_all(values)

    async def delete(self, key: str) -> None:
        async with self._lock:
            values = self._read_all()
            if values.pop(key, None) is not None:
                self._write_all(values)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise GlobeConfigError(f"Credential file {self._path} is not valid JSON") from exc
        if not isinstance(raw, dict):
            raise GlobeConfigError(f"Credential file {self._path} is invalid; expected a JSON object")
        return raw

    def _write_all(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f"{self._path.name}.", suffix=".tmp", dir=self._path.parent)
        tmp_path = Path(tmp_name)
        try:
            os.chmod(tmp_path, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(values, handle, indent=2, sort_keys=True)
            os.replace(tmp_path, self._path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()


async def clear_credentials(store: CredentialStore) -> None:
    """Delete the access token, refresh token and cached user id."""
    for key in CREDENTIAL_KEYS:
        await store.delete(key)
