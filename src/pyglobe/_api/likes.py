"""Likes service endpoints.

Endpoints:
  - /api/likes/trip/{trip_id}           (GET count, POST like, DELETE unlike)
  - /api/favourites/media/{media_id}    (GET status, POST favourite, DELETE unfavourite)

Write calls answer with the updated aggregate, parsed into the same models
as the reads.  An empty body is treated as "no aggregate returned".
"""

from __future__ import annotations

from typing import Any

from pyglobe._api._common import parse_model, require_id
from pyglobe.authenticated import AuthenticatedClient
from pyglobe.models.likes import FavoriteStatus, LikeStatus


def _like_status(data: Any, endpoint: str, **defaults: Any) -> LikeStatus:
    if data is None:
        return LikeStatus(**defaults)
    return parse_model(LikeStatus, data, endpoint=endpoint)


def _favorite_status(data: Any, endpoint: str, **defaults: Any) -> FavoriteStatus:
    if data is None:
        return FavoriteStatus(**defaults)
    return parse_model(FavoriteStatus, data, endpoint=endpoint)


async def get_likes(api: AuthenticatedClient, trip_id: str) -> LikeStatus:
    endpoint = f"/api/likes/trip/{require_id('trip_id', trip_id)}"
    data = await api.request("GET", endpoint)
    return _like_status(data, endpoint)


async def like_trip(api: AuthenticatedClient, trip_id: str) -> LikeStatus:
    endpoint = f"/api/likes/trip/{require_id('trip_id', trip_id)}"
    data = await api.request("POST", endpoint, json_body={})
    return _like_status(data, endpoint, liked=True)


async def unlike_trip(api: AuthenticatedClient, trip_id: str) -> LikeStatus:
    endpoint = f"/api/likes/trip/{require_id('trip_id', trip_id)}"
    data = await api.request("DELETE", endpoint)
    return _like_status(data, endpoint, liked=False)


async def get_media_favorite_status(api: AuthenticatedClient, media_id: str) -> FavoriteStatus:
    endpoint = f"/api/favourites/media/{require_id('media_id', media_id)}"
    data = await api.request("GET", endpoint)
    return _favorite_status(data, endpoint)


async def favorite_media(api: AuthenticatedClient, media_id: str) -> FavoriteStatus:
    endpoint = f"/api/favourites/media/{require_id('media_id', media_id)}"
    data = await api.request("POST", endpoint, json_body={})
    return _favorite_status(data, endpoint, favorited=True)


async def unfavorite_media(api: AuthenticatedClient, media_id: str) -> FavoriteStatus:
    endpoint = f"/api/favourites/media/{require_id('media_id', media_id)}"
    data = await api.request("DELETE", endpoint)
    return _favorite_status(data, endpoint, favorited=False)
