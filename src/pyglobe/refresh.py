"""Single-flight access-token refresh.

All :class:`~pyglobe.authenticated.AuthenticatedClient` instances sharing a
credential store share one :class:`RefreshCoordinator`.  The first caller to
see a 401 starts the refresh task; every caller that sees a 401 while it is
running awaits the same task instead of starting another one.  Once the task
resolves each caller replays its own request (success) or raises
:class:`~pyglobe.exceptions.GlobeAuthExpiredError` (failure).
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable

from pyglobe.credentials import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, CredentialStore, clear_credentials
from pyglobe.exceptions import GlobeAuthExpiredError, GlobeError
from pyglobe.models.auth import TokenPair

_logger = logging.getLogger(__name__)

Refresher = Callable[[str], Awaitable[TokenPair]]
"""Exchanges a refresh token for a new :class:`TokenPair`."""


class RefreshState(enum.Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshCoordinator:
    """Owns the refresh state and serialises it with credential reads.

    Parameters
    ----------
    store : CredentialStore
        Where access and refresh tokens live.
    refresher : Refresher
        Performs the actual refresh call against the auth service.
    """

    def __init__(self, store: CredentialStore, refresher: Refresher) -> None:
        self._store = store
        self._refresher = refresher
        self._inflight: asyncio.Task[str] | None = None
        self._pending = 0
        self.refresh_count = 0
        """Number of refresh calls actually issued to the auth service."""

    @property
    def store(self) -> CredentialStore:
        return self._store

    @property
    def state(self) -> RefreshState:
        return RefreshState.REFRESHING if self._inflight is not None else RefreshState.IDLE

    @property
    def pending_count(self) -> int:
        """Callers currently waiting on a refresh started by someone else."""
        return self._pending

    async def current_token(self) -> str | None:
        """Return the stored access token, waiting out any refresh in flight."""
        inflight = self._inflight
        if inflight is not None:
            # The outcome is delivered to the callers that joined the refresh;
            # here we only need it to be finished before reading the store.
            await asyncio.wait([inflight])
        return await self._store.get(ACCESS_TOKEN_KEY)

    async def refresh(self, stale_token: str | None) -> str:
        """Obtain a fresh access token after *stale_token* was rejected.

        Returns the new token.  Raises :class:`GlobeAuthExpiredError` when the
        refresh fails; stored credentials are cleared before that happens.
        """
        inflight = self._inflight
        if inflight is not None:
            self._pending += 1
            _logger.debug("Refresh in flight; waiting (pending=%d)", self._pending)
            try:
                return await asyncio.shield(inflight)
            finally:
                self._pending -= 1

        # Created synchronously so no other caller can slip in between the
        # state check above and this assignment.
        task = asyncio.ensure_future(self._run(stale_token))
        self._inflight = task
        return await asyncio.shield(task)

    async def _run(self, stale_token: str | None) -> str:
        try:
            current = await self._store.get(ACCESS_TOKEN_KEY)
            if current is not None and current != stale_token:
                _logger.debug("Access token already rotated; skipping refresh")
                return current

            refresh_token = await self._store.get(REFRESH_TOKEN_KEY)
            if not refresh_token:
                raise GlobeAuthExpiredError("Session expired and no refresh token is stored")

            self.refresh_count += 1
            _logger.debug("Refreshing access token")
            try:
                pair = await self._refresher(refresh_token)
            except GlobeError as exc:
                # Network, remote and client-lifecycle failures all end the session.
                raise GlobeAuthExpiredError(f"Token refresh failed: {exc}") from exc

            await self._store.set(ACCESS_TOKEN_KEY, pair.token)
            if pair.refresh_token:
                await self._store.set(REFRESH_TOKEN_KEY, pair.refresh_token)
            _logger.info("Access token refreshed")
            return pair.token
        except GlobeAuthExpiredError:
            _logger.warning("Token refresh failed; clearing stored credentials")
            await clear_credentials(self._store)
            raise
        finally:
            self._inflight = None
