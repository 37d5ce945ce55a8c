"""Tests for the single-flight refresh coordinator."""

from __future__ import annotations

import asyncio
import gc

import pytest

from pyglobe.credentials import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_ID_KEY, MemoryCredentialStore
from pyglobe.exceptions import GlobeAuthExpiredError, GlobeError, GlobeNetworkError, GlobeRemoteError
from pyglobe.models.auth import TokenPair
from pyglobe.refresh import RefreshCoordinator, RefreshState


class _Refresher:
    """Counts calls and answers after a short delay so callers can pile up."""

    def __init__(self, result: TokenPair | Exception, delay: float = 0.02) -> None:
        self.result = result
        self.delay = delay
        self.calls: list[str] = []

    async def __call__(self, refresh_token: str) -> TokenPair:
        self.calls.append(refresh_token)
        await asyncio.sleep(self.delay)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def _store() -> MemoryCredentialStore:
    return MemoryCredentialStore(
        {ACCESS_TOKEN_KEY: "stale", REFRESH_TOKEN_KEY: "refresh-1", USER_ID_KEY: "42"},
    )


@pytest.mark.asyncio
async def test_concurrent_refreshes_share_one_call() -> None:
    store = _store()
    refresher = _Refresher(TokenPair(token="fresh"))
    coordinator = RefreshCoordinator(store, refresher)

    results = await asyncio.gather(*(coordinator.refresh("stale") for _ in range(10)))

    assert results == ["fresh"] * 10
    assert refresher.calls == ["refresh-1"]
    assert coordinator.refresh_count == 1
    assert coordinator.state is RefreshState.IDLE
    assert coordinator.pending_count == 0
    assert await store.get(ACCESS_TOKEN_KEY) == "fresh"


@pytest.mark.asyncio
async def test_state_is_refreshing_while_call_in_flight() -> None:
    refresher = _Refresher(TokenPair(token="fresh"))
    coordinator = RefreshCoordinator(_store(), refresher)

    leader = asyncio.ensure_future(coordinator.refresh("stale"))
    await asyncio.sleep(0)
    assert coordinator.state is RefreshState.REFRESHING

    follower = asyncio.ensure_future(coordinator.refresh("stale"))
    await asyncio.sleep(0)
    assert coordinator.pending_count == 1

    assert await leader == "fresh"
    assert await follower == "fresh"
    assert coordinator.state is RefreshState.IDLE


@pytest.mark.asyncio
async def test_failed_refresh_fails_every_waiter_and_clears_store() -> None:
    store = _store()
    refresher = _Refresher(GlobeRemoteError("invalid refresh token", status_code=401, endpoint="/refresh-token"))
    coordinator = RefreshCoordinator(store, refresher)

    results = await asyncio.gather(*(coordinator.refresh("stale") for _ in range(5)), return_exceptions=True)

    assert all(isinstance(r, GlobeAuthExpiredError) for r in results)
    assert len(refresher.calls) == 1
    assert await store.get(ACCESS_TOKEN_KEY) is None
    assert await store.get(REFRESH_TOKEN_KEY) is None
    assert await store.get(USER_ID_KEY) is None
    assert coordinator.state is RefreshState.IDLE


@pytest.mark.asyncio
async def test_network_failure_during_refresh_is_auth_expired() -> None:
    store = _store()
    coordinator = RefreshCoordinator(store, _Refresher(GlobeNetworkError("timed out")))

    with pytest.raises(GlobeAuthExpiredError) as excinfo:
        await coordinator.refresh("stale")

    assert isinstance(excinfo.value.__cause__, GlobeNetworkError)
    assert await store.get(ACCESS_TOKEN_KEY) is None


@pytest.mark.asyncio
async def test_missing_refresh_token_fails_without_calling_service() -> None:
    store = MemoryCredentialStore({ACCESS_TOKEN_KEY: "stale"})
    refresher = _Refresher(TokenPair(token="fresh"))
    coordinator = RefreshCoordinator(store, refresher)

    with pytest.raises(GlobeAuthExpiredError):
        await coordinator.refresh("stale")

    assert refresher.calls == []
    assert await store.get(ACCESS_TOKEN_KEY) is None


@pytest.mark.asyncio
async def test_already_rotated_token_is_returned_without_refresh() -> None:
    store = MemoryCredentialStore({ACCESS_TOKEN_KEY: "newer", REFRESH_TOKEN_KEY: "refresh-1"})
    refresher = _Refresher(TokenPair(token="fresh"))
    coordinator = RefreshCoordinator(store, refresher)

    assert await coordinator.refresh("stale") == "newer"
    assert refresher.calls == []
    assert coordinator.refresh_count == 0


@pytest.mark.asyncio
async def test_rotated_refresh_token_is_stored() -> None:
    store = _store()
    coordinator = RefreshCoordinator(store, _Refresher(TokenPair(token="fresh", refresh_token="refresh-2")))

    await coordinator.refresh("stale")

    assert await store.get(REFRESH_TOKEN_KEY) == "refresh-2"


@pytest.mark.asyncio
async def test_current_token_waits_for_inflight_refresh() -> None:
    coordinator = RefreshCoordinator(_store(), _Refresher(TokenPair(token="fresh")))

    pending = asyncio.ensure_future(coordinator.refresh("stale"))
    await asyncio.sleep(0)
    assert coordinator.state is RefreshState.REFRESHING

    assert await coordinator.current_token() == "fresh"
    await pending


@pytest.mark.asyncio
async def test_current_token_after_failed_refresh_is_none() -> None:
    coordinator = RefreshCoordinator(_store(), _Refresher(GlobeNetworkError("down")))

    pending = asyncio.ensure_future(coordinator.refresh("stale"))
    await asyncio.sleep(0)

    assert await coordinator.current_token() is None
    with pytest.raises(GlobeAuthExpiredError):
        await pending


@pytest.mark.asyncio
async def test_coordinator_is_reusable_after_failure() -> None:
    store = _store()
    refresher = _Refresher(GlobeNetworkError("down"))
    coordinator = RefreshCoordinator(store, refresher)

    with pytest.raises(GlobeAuthExpiredError):
        await coordinator.refresh("stale")

    await store.set(ACCESS_TOKEN_KEY, "stale-2")
    await store.set(REFRESH_TOKEN_KEY, "refresh-2")
    refresher.result = TokenPair(token="fresh-2")

    assert await coordinator.refresh("stale-2") == "fresh-2"
    assert refresher.calls == ["refresh-1", "refresh-2"]


@pytest.mark.asyncio
async def test_cancelled_waiter_does_not_cancel_shared_refresh() -> None:
    store = _store()
    coordinator = RefreshCoordinator(store, _Refresher(TokenPair(token="fresh"), delay=0.05))

    leader = asyncio.ensure_future(coordinator.refresh("stale"))
    follower = asyncio.ensure_future(coordinator.refresh("stale"))
    await asyncio.sleep(0.01)
    follower.cancel()

    assert await leader == "fresh"
    assert follower.cancelled()
    assert await store.get(ACCESS_TOKEN_KEY) == "fresh"


@pytest.mark.asyncio
async def test_any_client_error_from_refresher_expires_session() -> None:
    store = _store()
    coordinator = RefreshCoordinator(store, _Refresher(GlobeError("Client not initialized")))

    with pytest.raises(GlobeAuthExpiredError):
        await coordinator.refresh("stale")

    assert await store.get(ACCESS_TOKEN_KEY) is None
    assert await store.get(REFRESH_TOKEN_KEY) is None


@pytest.mark.asyncio
async def test_failed_refresh_after_cancelled_leader_is_not_reported_unhandled() -> None:
    loop = asyncio.get_running_loop()
    reported: list[dict[str, object]] = []
    loop.set_exception_handler(lambda _loop, context: reported.append(context))
    try:
        coordinator = RefreshCoordinator(_store(), _Refresher(GlobeNetworkError("down")))
        leader = asyncio.ensure_future(coordinator.refresh("stale"))
        await asyncio.sleep(0)
        task = coordinator._inflight
        assert task is not None

        leader.cancel()
        with pytest.raises(asyncio.CancelledError):
            await leader
        await asyncio.wait([task])
        await asyncio.sleep(0)
        del task
        gc.collect()
    finally:
        loop.set_exception_handler(None)

    assert reported == []
