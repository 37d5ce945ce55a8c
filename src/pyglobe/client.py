"""High-level async client for the travel-sharing services."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import aiohttp

from pyglobe._api import auth as _auth_api
from pyglobe._api import globes as _globes_api
from pyglobe._api import likes as _likes_api
from pyglobe._api import media as _media_api
from pyglobe._api import profiles as _profiles_api
from pyglobe._transport import HttpTransport, Transport, UploadFile
from pyglobe.authenticated import AuthenticatedClient
from pyglobe.config import GlobeConfig, Service
from pyglobe.credentials import (
    ACCESS_TOKEN_KEY,
    USER_ID_KEY,
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)
from pyglobe.exceptions import GlobeError
from pyglobe.models._base import Visibility
from pyglobe.models.auth import AuthResponse, Credentials, CurrentUser, PasswordReset, PasswordUpdate, TokenPair
from pyglobe.models.globe import Globe, GlobeInput, GlobeWithTrips
from pyglobe.models.likes import FavoriteStatus, LikeStatus
from pyglobe.models.profile import FollowList, Profile, ProfileInput
from pyglobe.models.trip import Location, MediaItem, MediaMetadata, Trip, TripInput, TripWithMedia
from pyglobe.refresh import RefreshCoordinator

_logger = logging.getLogger(__name__)


def _default_store(config: GlobeConfig) -> CredentialStore:
    if config.credentials_path:
        return FileCredentialStore(config.credentials_path)
    return MemoryCredentialStore()


class GlobeClient:
    """Async client for the auth, profile, media, globes and likes services.

    Usage::

        async with GlobeClient(config) as client:
            await client.login({"email": "a@b.com", "password": "secret123"})
            profile = await client.get_profile_by_id("42")

    Parameters
    ----------
    config : GlobeConfig
        Service URLs, timeout and credential attachment style.
    session : aiohttp.ClientSession, optional
        Externally owned HTTP session; left open on exit.
    store : CredentialStore, optional
        Token storage.  Defaults to a file store when
        ``config.credentials_path`` is set, otherwise memory.
    coordinator : RefreshCoordinator, optional
        Shared refresh state.  Pass the same coordinator to several clients
        to make them refresh as one.  Its store wins over *store*.  Refresh
        calls go through the client that created the coordinator; once that
        client is closed a 401 on any sharing client ends the session with
        :class:`~pyglobe.exceptions.GlobeAuthExpiredError`.
    transport : Transport, optional
        Replaces the aiohttp transport.  When given, the client is usable
        without ``async with``.
    """

    def __init__(
        self,
        config: GlobeConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        store: CredentialStore | None = None,
        coordinator: RefreshCoordinator | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport: Transport | None = None
        if coordinator is None:
            coordinator = RefreshCoordinator(store or _default_store(config), self._refresh_tokens)
        self._coordinator = coordinator
        self._apis: dict[Service, AuthenticatedClient] = {}
        if transport is not None:
            self._wire(transport)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> GlobeClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._wire(HttpTransport(self._config, self._http_session))
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._external_transport:
            return
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None
        self._apis = {}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _wire(self, transport: Transport) -> None:
        self._transport = transport
        self._apis = {
            service: AuthenticatedClient(
                self._config.service_url(service),
                transport,
                self._coordinator,
                credential_style=self._config.credential_style,
                cookie_name=self._config.cookie_name,
            )
            for service in Service
        }

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise GlobeError("Client not initialized. Use 'async with GlobeClient(...) as client:'")
        return self._transport

    def _api(self, service: Service) -> AuthenticatedClient:
        self._require_transport()
        return self._apis[service]

    async def _refresh_tokens(self, refresh_token: str) -> TokenPair:
        return await _auth_api.refresh_access_token(self._require_transport(), self._config.auth_url, refresh_token)

    @property
    def config(self) -> GlobeConfig:
        return self._config

    @property
    def store(self) -> CredentialStore:
        return self._coordinator.store

    @property
    def coordinator(self) -> RefreshCoordinator:
        return self._coordinator

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    async def login(self, credentials: Credentials | dict[str, Any]) -> AuthResponse:
        """Log in and store the returned tokens and user id."""
        return await _auth_api.login(
            self._api(Service.AUTH),
            self.store,
            credentials,
            cookie_name=self._config.cookie_name,
        )

    async def signup(self, credentials: Credentials | dict[str, Any]) -> AuthResponse:
        return await _auth_api.signup(
            self._api(Service.AUTH),
            self.store,
            credentials,
            cookie_name=self._config.cookie_name,
        )

    async def logout(self) -> None:
        await _auth_api.logout(self._api(Service.AUTH), self.store)

    async def refresh_access_token(self) -> str:
        """Force a refresh of the stored access token and return the new one."""
        self._require_transport()
        stale = await self.store.get(ACCESS_TOKEN_KEY)
        return await self._coordinator.refresh(stale)

    async def validate_token(self) -> bool:
        return await _auth_api.validate_token(self._api(Service.AUTH))

    async def request_password_reset(self, email: str) -> None:
        await _auth_api.request_password_reset(self._api(Service.AUTH), email)

    async def reset_password(self, reset: PasswordReset | dict[str, Any]) -> None:
        await _auth_api.reset_password(self._api(Service.AUTH), reset)

    async def update_password(self, update: PasswordUpdate | dict[str, Any]) -> None:
        await _auth_api.update_password(self._api(Service.AUTH), update)

    async def get_current_user(self) -> CurrentUser:
        return await _auth_api.get_current_user(self._api(Service.AUTH))

    async def get_stored_user_id(self) -> str | None:
        """User id saved by the last login, if any."""
        return await self.store.get(USER_ID_KEY)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    async def create_profile(self, profile: ProfileInput | dict[str, Any]) -> Profile:
        return await _profiles_api.create_profile(self._api(Service.PROFILE), profile)

    async def update_profile(self, profile: ProfileInput | dict[str, Any]) -> Profile:
        return await _profiles_api.update_profile(self._api(Service.PROFILE), profile)

    async def update_profile_by_id(self, profile_id: str, profile: ProfileInput | dict[str, Any]) -> Profile:
        return await _profiles_api.update_profile_by_id(self._api(Service.PROFILE), profile_id, profile)

    async def delete_profile(self) -> None:
        await _profiles_api.delete_profile(self._api(Service.PROFILE))

    async def get_profile_by_id(self, user_id: str) -> Profile:
        return await _profiles_api.get_profile_by_id(self._api(Service.PROFILE), user_id)

    async def get_profile_by_username(self, username: str) -> Profile:
        return await _profiles_api.get_profile_by_username(self._api(Service.PROFILE), username)

    async def search_profiles(self, query: str) -> list[Profile]:
        return await _profiles_api.search_profiles(self._api(Service.PROFILE), query)

    async def follow_user(self, followed_id: str) -> None:
        await _profiles_api.follow_user(self._api(Service.PROFILE), followed_id)

    async def unfollow_user(self, followed_id: str) -> None:
        await _profiles_api.unfollow_user(self._api(Service.PROFILE), followed_id)

    async def get_followers(self, profile_id: str) -> FollowList:
        return await _profiles_api.get_followers(self._api(Service.PROFILE), profile_id)

    async def get_following(self, profile_id: str) -> FollowList:
        return await _profiles_api.get_following(self._api(Service.PROFILE), profile_id)

    # ------------------------------------------------------------------
    # Media
    # ------------------------------------------------------------------

    async def upload_media_to_trip(self, trip_id: str, upload: UploadFile | str | Path) -> MediaItem:
        return await _media_api.upload_media_to_trip(self._api(Service.MEDIA), trip_id, upload)

    async def get_media_by_id(self, media_id: str) -> MediaItem:
        return await _media_api.get_media_by_id(self._api(Service.MEDIA), media_id)

    async def delete_media(self, media_id: str) -> None:
        await _media_api.delete_media(self._api(Service.MEDIA), media_id)

    async def add_metadata_to_media(self, media_id: str, metadata: MediaMetadata | dict[str, Any]) -> MediaItem:
        return await _media_api.add_metadata_to_media(self._api(Service.MEDIA), media_id, metadata)

    async def change_media_visibility(self, media_id: str, visibility: Visibility | str) -> Location:
        return await _media_api.change_media_visibility(self._api(Service.MEDIA), media_id, visibility)

    async def get_media_visibility(self, media_id: str) -> Visibility:
        return await _media_api.get_media_visibility(self._api(Service.MEDIA), media_id)

    async def get_trip_media(self, trip_id: str) -> list[TripWithMedia]:
        return await _media_api.get_trip_media(self._api(Service.MEDIA), trip_id)

    # ------------------------------------------------------------------
    # Trips
    # ------------------------------------------------------------------

    async def create_trip(self, trip: TripInput | dict[str, Any]) -> Trip:
        return await _media_api.create_trip(self._api(Service.MEDIA), trip)

    async def get_trip(self, trip_id: str) -> TripWithMedia:
        return await _media_api.get_trip(self._api(Service.MEDIA), trip_id)

    async def update_trip(self, trip_id: str, trip: TripInput | dict[str, Any]) -> Trip:
        return await _media_api.update_trip(self._api(Service.MEDIA), trip_id, trip)

    async def delete_trip(self, trip_id: str) -> None:
        await _media_api.delete_trip(self._api(Service.MEDIA), trip_id)

    async def get_trip_locations(self, trip_id: str) -> TripWithMedia:
        return await _media_api.get_trip_locations(self._api(Service.MEDIA), trip_id)

    async def get_my_trips(self) -> list[TripWithMedia]:
        return await _media_api.get_my_trips(self._api(Service.MEDIA))

    async def get_liked_trips(self) -> list[TripWithMedia]:
        return await _media_api.get_liked_trips(self._api(Service.MEDIA))

    async def get_public_trips(self) -> list[TripWithMedia]:
        return await _media_api.get_public_trips(self._api(Service.MEDIA))

    async def get_following_trips(self) -> list[TripWithMedia]:
        return await _media_api.get_following_trips(self._api(Service.MEDIA))

    async def get_trips_by_user_id(self, user_id: str) -> list[TripWithMedia]:
        return await _media_api.get_trips_by_user_id(self._api(Service.MEDIA), user_id)

    async def search_trips(self, query: str) -> list[TripWithMedia]:
        return await _media_api.search_trips(self._api(Service.MEDIA), query)

    # ------------------------------------------------------------------
    # Globes
    # ------------------------------------------------------------------

    async def create_globe(self, globe: GlobeInput | dict[str, Any]) -> Globe:
        return await _globes_api.create_globe(self._api(Service.GLOBES), globe)

    async def update_globe(self, globe_id: str, globe: GlobeInput | dict[str, Any]) -> Globe:
        return await _globes_api.update_globe(self._api(Service.GLOBES), globe_id, globe)

    async def delete_globe(self, globe_id: str) -> None:
        await _globes_api.delete_globe(self._api(Service.GLOBES), globe_id)

    async def change_globe_visibility(self, globe_id: str, visibility: Visibility | str) -> Globe:
        return await _globes_api.change_globe_visibility(self._api(Service.GLOBES), globe_id, visibility)

    async def get_globe_by_id(self, globe_id: str) -> Globe:
        return await _globes_api.get_globe_by_id(self._api(Service.GLOBES), globe_id)

    async def get_globe_with_trips(self, globe_id: str) -> GlobeWithTrips:
        return await _globes_api.get_globe_with_trips(self._api(Service.GLOBES), globe_id)

    async def get_my_globes(self) -> list[Globe]:
        return await _globes_api.get_my_globes(self._api(Service.GLOBES))

    async def get_my_globes_with_trips(self) -> list[GlobeWithTrips]:
        return await _globes_api.get_my_globes_with_trips(self._api(Service.GLOBES))

    async def get_public_globes(self) -> list[Globe]:
        return await _globes_api.get_public_globes(self._api(Service.GLOBES))

    async def get_public_globes_with_trips(self) -> list[GlobeWithTrips]:
        return await _globes_api.get_public_globes_with_trips(self._api(Service.GLOBES))

    async def get_globes_by_user_id(self, user_id: str) -> list[Globe]:
        return await _globes_api.get_globes_by_user_id(self._api(Service.GLOBES), user_id)

    async def get_globes_by_user_id_with_trips(self, user_id: str) -> list[GlobeWithTrips]:
        return await _globes_api.get_globes_by_user_id_with_trips(self._api(Service.GLOBES), user_id)

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    async def get_likes(self, trip_id: str) -> LikeStatus:
        return await _likes_api.get_likes(self._api(Service.LIKES), trip_id)

    async def like_trip(self, trip_id: str) -> LikeStatus:
        return await _likes_api.like_trip(self._api(Service.LIKES), trip_id)

    async def unlike_trip(self, trip_id: str) -> LikeStatus:
        return await _likes_api.unlike_trip(self._api(Service.LIKES), trip_id)

    async def get_media_favorite_status(self, media_id: str) -> FavoriteStatus:
        return await _likes_api.get_media_favorite_status(self._api(Service.LIKES), media_id)

    async def favorite_media(self, media_id: str) -> FavoriteStatus:
        return await _likes_api.favorite_media(self._api(Service.LIKES), media_id)

    async def unfavorite_media(self, media_id: str) -> FavoriteStatus:
        return await _likes_api.unfavorite_media(self._api(Service.LIKES), media_id)
