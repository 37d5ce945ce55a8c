"""Auth service endpoints.

Endpoints:
  - /login            (exchange email + password for tokens)
  - /register         (create an account)
  - /logout
  - /refresh-token    (exchange a refresh token for a new access token)
  - /validate-token
  - /forgot-password, /reset-password, /update-password
  - /profile          (current user)

Login, register and refresh are sent unauthenticated: they must work with no
stored token, and a 401 from them means bad input, not an expired session.
"""

from __future__ import annotations

import logging
from typing import Any

from pyglobe._api._common import coerce_input, parse_model
from pyglobe._constants import (
    FORGOT_PASSWORD_ENDPOINT,
    LOGIN_ENDPOINT,
    LOGOUT_ENDPOINT,
    PROFILE_ENDPOINT,
    REFRESH_TOKEN_ENDPOINT,
    RESET_PASSWORD_ENDPOINT,
    SIGNUP_ENDPOINT,
    UPDATE_PASSWORD_ENDPOINT,
    VALIDATE_TOKEN_ENDPOINT,
)
from pyglobe._transport import Transport
from pyglobe.authenticated import ApiResponse, AuthenticatedClient
from pyglobe.credentials import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_ID_KEY, CredentialStore, clear_credentials
from pyglobe.exceptions import GlobeAuthExpiredError, GlobeRemoteError, GlobeResponseShapeError
from pyglobe.models.auth import (
    AuthResponse,
    Credentials,
    CurrentUser,
    PasswordReset,
    PasswordResetRequest,
    PasswordUpdate,
    TokenPair,
)

_logger = logging.getLogger(__name__)


def _parse_auth_response(response: ApiResponse, endpoint: str, cookie_name: str) -> AuthResponse:
    body = response.body if response.body is not None else {}
    auth = parse_model(AuthResponse, body, endpoint=endpoint, status=response.status)
    if auth.token is None and response.cookies.get(cookie_name):
        # Cookie-based auth builds set the token only as a cookie.
        auth = auth.model_copy(update={"token": response.cookies[cookie_name]})
    return auth


async def _store_auth(store: CredentialStore, auth: AuthResponse) -> None:
    """Replace the stored session with *auth*; a response without a token leaves the store as is."""
    if not auth.token:
        return
    # Keys the new response omits must not survive from an earlier session.
    await clear_credentials(store)
    await store.set(ACCESS_TOKEN_KEY, auth.token)
    if auth.refresh_token:
        await store.set(REFRESH_TOKEN_KEY, auth.refresh_token)
    if auth.user_id:
        await store.set(USER_ID_KEY, auth.user_id)


async def login(
    api: AuthenticatedClient,
    store: CredentialStore,
    credentials: Credentials | dict[str, Any],
    *,
    cookie_name: str,
) -> AuthResponse:
    """Log in and persist the returned tokens and user id.

    Raises
    ------
    GlobeRemoteError
        Wrong credentials or other server-side rejection.
    GlobeResponseShapeError
        The server accepted the login but returned no token.
    """
    creds = coerce_input(Credentials, credentials)
    response = await api.send("POST", LOGIN_ENDPOINT, json_body=creds.to_payload(), authenticate=False)
    auth = _parse_auth_response(response, LOGIN_ENDPOINT, cookie_name)
    if not auth.token:
        raise GlobeResponseShapeError(
            "login response carries no token",
            status_code=response.status,
            endpoint=LOGIN_ENDPOINT,
        )
    await _store_auth(store, auth)
    _logger.info("Logged in user_id=%s", auth.user_id)
    return auth


async def signup(
    api: AuthenticatedClient,
    store: CredentialStore,
    credentials: Credentials | dict[str, Any],
    *,
    cookie_name: str,
) -> AuthResponse:
    """Register a new account; tokens are stored when the server returns any."""
    creds = coerce_input(Credentials, credentials)
    response = await api.send("POST", SIGNUP_ENDPOINT, json_body=creds.to_payload(), authenticate=False)
    auth = _parse_auth_response(response, SIGNUP_ENDPOINT, cookie_name)
    await _store_auth(store, auth)
    return auth


async def logout(api: AuthenticatedClient, store: CredentialStore) -> None:
    """End the session.

    Local credentials are cleared even when the remote call fails; the
    failure is still raised.
    """
    try:
        await api.request("POST", LOGOUT_ENDPOINT)
    finally:
        await clear_credentials(store)
        _logger.info("Logged out; credentials cleared")


async def refresh_access_token(transport: Transport, auth_url: str, refresh_token: str) -> TokenPair:
    """Call ``/refresh-token`` directly on the transport.

    Bypasses :class:`AuthenticatedClient`: the refresh call never attaches
    the expired token and never triggers another refresh.
    """
    url = f"{auth_url.rstrip('/')}{REFRESH_TOKEN_ENDPOINT}"
    response = await transport.send(
        "POST",
        url,
        headers={},
        json_body={"refreshToken": refresh_token},
    )
    if not response.ok:
        message = ""
        if isinstance(response.body, dict):
            message = str(response.body.get("message", ""))
        raise GlobeRemoteError(
            message or f"HTTP {response.status}",
            status_code=response.status,
            endpoint=REFRESH_TOKEN_ENDPOINT,
        )
    return parse_model(TokenPair, response.body, endpoint=REFRESH_TOKEN_ENDPOINT, status=response.status)


async def validate_token(api: AuthenticatedClient) -> bool:
    """Return whether the server still accepts the stored credentials."""
    try:
        await api.request("POST", VALIDATE_TOKEN_ENDPOINT)
    except (GlobeRemoteError, GlobeAuthExpiredError) as exc:
        _logger.debug("Token validation failed: %s", exc)
        return False
    return True


async def request_password_reset(api: AuthenticatedClient, email: str) -> None:
    body = coerce_input(PasswordResetRequest, {"email": email})
    await api.request("POST", FORGOT_PASSWORD_ENDPOINT, json_body=body.to_payload(), authenticate=False)


async def reset_password(api: AuthenticatedClient, reset: PasswordReset | dict[str, Any]) -> None:
    body = coerce_input(PasswordReset, reset)
    await api.request("POST", RESET_PASSWORD_ENDPOINT, json_body=body.to_payload(), authenticate=False)


async def update_password(api: AuthenticatedClient, update: PasswordUpdate | dict[str, Any]) -> None:
    body = coerce_input(PasswordUpdate, update)
    await api.request("POST", UPDATE_PASSWORD_ENDPOINT, json_body=body.to_payload())


async def get_current_user(api: AuthenticatedClient) -> CurrentUser:
    data = await api.request("GET", PROFILE_ENDPOINT)
    return parse_model(CurrentUser, data, endpoint=PROFILE_ENDPOINT)
