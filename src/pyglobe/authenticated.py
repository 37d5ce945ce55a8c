"""HTTP client that attaches stored credentials and recovers once from a 401."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pyglobe._transport import HttpResponse, Transport, UploadFile
from pyglobe.config import CredentialStyle
from pyglobe.exceptions import GlobeRemoteError, GlobeResponseShapeError
from pyglobe.refresh import RefreshCoordinator

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ApiResponse:
    """Successful (2xx) response as seen by facades."""

    status: int
    body: Any
    cookies: Mapping[str, str] = dataclasses.field(default_factory=dict)


def _error_message(response: HttpResponse) -> str:
    body = response.body
    if isinstance(body, Mapping):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    text = response.text.strip()
    if text:
        return text[:200]
    return f"HTTP {response.status}"


class AuthenticatedClient:
    """Calls one remote service on behalf of the signed-in user.

    Parameters
    ----------
    base_url : str
        Service base address; request paths are relative to it.
    transport : Transport
        Performs the HTTP exchange.
    coordinator : RefreshCoordinator
        Shared refresh state; also the source of the current access token.
    credential_style : CredentialStyle
        ``bearer`` sends ``Authorization: Bearer <token>``, ``cookie`` sends
        ``Cookie: <cookie_name>=<token>``.
    cookie_name : str
        Cookie name for the ``cookie`` style.
    """

    def __init__(
        self,
        base_url: str,
        transport: Transport,
        coordinator: RefreshCoordinator,
        *,
        credential_style: CredentialStyle = CredentialStyle.BEARER,
        cookie_name: str = "auth_token",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._coordinator = coordinator
        self._credential_style = credential_style
        self._cookie_name = cookie_name

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def coordinator(self) -> RefreshCoordinator:
        return self._coordinator

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _auth_headers(self, token: str | None) -> dict[str, str]:
        if not token:
            return {}
        if self._credential_style is CredentialStyle.COOKIE:
            return {"cookie": f"{self._cookie_name}={token}"}
        return {"authorization": f"Bearer {token}"}

    async def _send_once(
        self,
        method: str,
        path: str,
        token: str | None,
        *,
        json_body: Any,
        files: Sequence[UploadFile] | None,
        headers: Mapping[str, str] | None,
    ) -> HttpResponse:
        request_headers = dict(headers or {})
        request_headers.update(self._auth_headers(token))
        return await self._transport.send(
            method,
            self._url(path),
            headers=request_headers,
            json_body=json_body,
            files=files,
        )

    async def send(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        files: Sequence[UploadFile] | None = None,
        headers: Mapping[str, str] | None = None,
        authenticate: bool = True,
    ) -> ApiResponse:
        """Perform a request and return the 2xx response.

        With ``authenticate`` the stored access token is attached and a 401
        triggers one refresh followed by one replay.  A second 401 is raised
        as :class:`GlobeRemoteError` rather than refreshing again.

        Raises
        ------
        GlobeNetworkError
            Transport failure or timeout.
        GlobeRemoteError
            Non-2xx status (other than a recoverable 401).
        GlobeResponseShapeError
            2xx response with a non-JSON body.
        GlobeAuthExpiredError
            The refresh triggered by a 401 failed.
        """
        token = await self._coordinator.current_token() if authenticate else None
        response = await self._send_once(method, path, token, json_body=json_body, files=files, headers=headers)

        if response.status == 401 and authenticate:
            _logger.debug("%s %s returned 401; refreshing credentials", method, path)
            fresh = await self._coordinator.refresh(token)
            response = await self._send_once(method, path, fresh, json_body=json_body, files=files, headers=headers)

        if not response.ok:
            raise GlobeRemoteError(_error_message(response), status_code=response.status, endpoint=path)

        if response.text.strip() and not response.is_json:
            raise GlobeResponseShapeError(
                f"expected JSON, got {response.text[:64]!r}",
                status_code=response.status,
                endpoint=path,
            )

        return ApiResponse(status=response.status, body=response.body, cookies=response.cookies)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        files: Sequence[UploadFile] | None = None,
        headers: Mapping[str, str] | None = None,
        authenticate: bool = True,
    ) -> Any:
        """Like :meth:`send` but return only the decoded body."""
        response = await self.send(
            method,
            path,
            json_body=json_body,
            files=files,
            headers=headers,
            authenticate=authenticate,
        )
        return response.body
