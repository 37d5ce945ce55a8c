"""HTTP transport over aiohttp with timeout and cookie handling."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Mapping, Sequence
from http.cookies import CookieError, SimpleCookie
from typing import Any, Protocol

import aiohttp

from pyglobe._redact import redact_for_log
from pyglobe.config import GlobeConfig
from pyglobe.exceptions import GlobeNetworkError

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class UploadFile:
    """One file part of a multipart upload."""

    content: bytes
    filename: str
    content_type: str = "image/jpeg"
    field_name: str = "media"


@dataclasses.dataclass(frozen=True)
class HttpResponse:
    """Status, decoded body and cookies of a completed HTTP exchange.

    ``body`` is the decoded JSON value, or ``None`` when the response was
    empty or not JSON (``is_json`` tells the two apart).
    """

    status: int
    body: Any = None
    text: str = ""
    is_json: bool = False
    cookies: Mapping[str, str] = dataclasses.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Structural transport interface used by :class:`AuthenticatedClient`.

    Tests pass in-memory doubles implementing ``send``; production uses
    :class:`HttpTransport`.
    """

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        json_body: Any = None,
        files: Sequence[UploadFile] | None = None,
    ) -> HttpResponse:
        ...


def _parse_cookies(headers: Any) -> dict[str, str]:
    """Extract ``Set-Cookie`` headers into a name -> value dict."""
    cookies: dict[str, str] = {}
    for raw in headers.getall("Set-Cookie", []):
        cookie: SimpleCookie = SimpleCookie()
        try:
            cookie.load(raw)
        except CookieError:
            _logger.debug("Ignoring malformed Set-Cookie header")
            continue
        for key, morsel in cookie.items():
            cookies[key] = morsel.value
    return cookies


def decode_body(text: str) -> tuple[Any, bool]:
    """Decode a response body; returns ``(value, is_json)``."""
    if not text.strip():
        return None, False
    try:
        return json.loads(text), True
    except json.JSONDecodeError:
        return None, False


def _build_form(files: Sequence[UploadFile]) -> aiohttp.FormData:
    form = aiohttp.FormData()
    for part in files:
        form.add_field(
            part.field_name,
            part.content,
            filename=part.filename,
            content_type=part.content_type,
        )
    return form


class HttpTransport:
    """aiohttp-backed transport.

    Every call is bounded by ``config.timeout``.  Connection failures and
    timeouts become :class:`GlobeNetworkError`; HTTP error statuses are
    returned as-is for the caller to interpret.
    """

    def __init__(self, config: GlobeConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.timeout)

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        json_body: Any = None,
        files: Sequence[UploadFile] | None = None,
    ) -> HttpResponse:
        request_headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        request_headers.update(headers)

        kwargs: dict[str, Any] = {"headers": request_headers, "timeout": self._timeout}
        if files:
            # Built per send: a FormData instance cannot be posted twice.
            kwargs["data"] = _build_form(files)
        elif json_body is not None:
            kwargs["json"] = json_body

        _logger.debug(
            "%s %s headers=%s body=%s",
            method,
            url,
            redact_for_log(request_headers),
            redact_for_log(json_body),
        )

        try:
            async with self._http.request(method, url, **kwargs) as resp:
                text = await resp.text()
                cookies = _parse_cookies(resp.headers)
                status = resp.status
        except TimeoutError as exc:
            raise GlobeNetworkError(
                f"{method} {url} timed out after {self._config.timeout}s",
                endpoint=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise GlobeNetworkError(
                f"{method} {url} failed: {exc}",
                endpoint=url,
            ) from exc

        body, is_json = decode_body(text)
        _logger.debug("%s %s -> %d body=%s", method, url, status, redact_for_log(body if is_json else text))
        return HttpResponse(status=status, body=body, text=text, is_json=is_json, cookies=cookies)
