"""Media and trip service endpoints.

Endpoints:
  - /api/media/trip/{trip_id}            (upload, list media of a trip)
  - /api/media/{media_id}                (get, delete)
  - /api/media/{media_id}/metadata       (attach GPS / caption metadata)
  - /api/media/{media_id}/visibility     (get, change)
  - /api/trips                           (create)
  - /api/trips/{trip_id}                 (get, update, delete)
  - /api/trips/{trip_id}/locations
  - /api/trips/myTrips, /api/trips/myLikedTrips, /api/trips/following,
    /api/trips/public, /api/trips/user/{user_id}, /api/trips/search
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pyglobe._api._common import (
    coerce_input,
    parse_list,
    parse_model,
    parse_visibility_body,
    require_id,
    require_text,
    require_visibility,
)
from pyglobe._transport import UploadFile
from pyglobe.authenticated import AuthenticatedClient
from pyglobe.exceptions import GlobeValidationError
from pyglobe.models._base import Visibility
from pyglobe.models.trip import Location, MediaItem, MediaMetadata, Trip, TripInput, TripWithMedia

_logger = logging.getLogger(__name__)

_CONTENT_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".heic": "image/heic",
    ".webp": "image/webp",
}


def upload_from_path(path: str | Path) -> UploadFile:
    """Build an :class:`UploadFile` from a local image path."""
    file_path = Path(path)
    if not file_path.is_file():
        raise GlobeValidationError(f"{file_path} is not a file")
    content_type = _CONTENT_TYPES.get(file_path.suffix.lower(), "application/octet-stream")
    return UploadFile(content=file_path.read_bytes(), filename=file_path.name, content_type=content_type)


# ------------------------------------------------------------------
# Media
# ------------------------------------------------------------------


async def upload_media_to_trip(api: AuthenticatedClient, trip_id: str, upload: UploadFile | str | Path) -> MediaItem:
    """Upload one photo to a trip as ``multipart/form-data``."""
    tid = require_id("trip_id", trip_id)
    part = upload if isinstance(upload, UploadFile) else upload_from_path(upload)
    if not part.content:
        raise GlobeValidationError("upload content must be non-empty")
    endpoint = f"/api/media/trip/{tid}"
    data = await api.request("POST", endpoint, files=[part])
    _logger.debug("Uploaded %s (%d bytes) to trip %s", part.filename, len(part.content), tid)
    return parse_model(MediaItem, data, endpoint=endpoint)


async def get_media_by_id(api: AuthenticatedClient, media_id: str) -> MediaItem:
    mid = require_id("media_id", media_id)
    endpoint = f"/api/media/{mid}"
    data = await api.request("GET", endpoint)
    return parse_model(MediaItem, data, endpoint=endpoint)


async def delete_media(api: AuthenticatedClient, media_id: str) -> None:
    mid = require_id("media_id", media_id)
    await api.request("DELETE", f"/api/media/{mid}")
    _logger.debug("Media %s deleted", mid)


async def add_metadata_to_media(
    api: AuthenticatedClient,
    media_id: str,
    metadata: MediaMetadata | dict[str, Any],
) -> MediaItem:
    mid = require_id("media_id", media_id)
    body = coerce_input(MediaMetadata, metadata)
    endpoint = f"/api/media/{mid}/metadata"
    data = await api.request("POST", endpoint, json_body=body.to_payload())
    return parse_model(MediaItem, data, endpoint=endpoint)


async def change_media_visibility(
    api: AuthenticatedClient,
    media_id: str,
    visibility: Visibility | str,
) -> Location:
    """Change who can see a media item; the service answers with its location."""
    mid = require_id("media_id", media_id)
    vis = require_visibility(visibility)
    endpoint = f"/api/media/{mid}/visibility"
    data = await api.request("PUT", endpoint, json_body={"visibility": vis.value})
    return parse_model(Location, data, endpoint=endpoint)


async def get_media_visibility(api: AuthenticatedClient, media_id: str) -> Visibility:
    mid = require_id("media_id", media_id)
    endpoint = f"/api/media/{mid}/visibility"
    data = await api.request("GET", endpoint)
    return Visibility(parse_visibility_body(data, endpoint=endpoint))


async def get_trip_media(api: AuthenticatedClient, trip_id: str) -> list[TripWithMedia]:
    tid = require_id("trip_id", trip_id)
    endpoint = f"/api/media/trip/{tid}"
    data = await api.request("GET", endpoint)
    return parse_list(TripWithMedia, data, endpoint=endpoint)


# ------------------------------------------------------------------
# Trips
# ------------------------------------------------------------------


async def create_trip(api: AuthenticatedClient, trip: TripInput | dict[str, Any]) -> Trip:
    endpoint = "/api/trips"
    body = coerce_input(TripInput, trip)
    data = await api.request("POST", endpoint, json_body=body.to_payload())
    return parse_model(Trip, data, endpoint=endpoint)


async def get_trip(api: AuthenticatedClient, trip_id: str) -> TripWithMedia:
    tid = require_id("trip_id", trip_id)
    endpoint = f"/api/trips/{tid}"
    data = await api.request("GET", endpoint)
    return parse_model(TripWithMedia, data, endpoint=endpoint)


async def update_trip(api: AuthenticatedClient, trip_id: str, trip: TripInput | dict[str, Any]) -> Trip:
    tid = require_id("trip_id", trip_id)
    body = coerce_input(TripInput, trip)
    endpoint = f"/api/trips/{tid}"
    data = await api.request("PUT", endpoint, json_body=body.to_payload())
    return parse_model(Trip, data, endpoint=endpoint)


async def delete_trip(api: AuthenticatedClient, trip_id: str) -> None:
    tid = require_id("trip_id", trip_id)
    await api.request("DELETE", f"/api/trips/{tid}")
    _logger.debug("Trip %s deleted", tid)


async def get_trip_locations(api: AuthenticatedClient, trip_id: str) -> TripWithMedia:
    tid = require_id("trip_id", trip_id)
    endpoint = f"/api/trips/{tid}/locations"
    data = await api.request("GET", endpoint)
    return parse_model(TripWithMedia, data, endpoint=endpoint)


async def _list_trips(api: AuthenticatedClient, endpoint: str) -> list[TripWithMedia]:
    data = await api.request("GET", endpoint)
    return parse_list(TripWithMedia, data, endpoint=endpoint)


async def get_my_trips(api: AuthenticatedClient) -> list[TripWithMedia]:
    return await _list_trips(api, "/api/trips/myTrips")


async def get_liked_trips(api: AuthenticatedClient) -> list[TripWithMedia]:
    return await _list_trips(api, "/api/trips/myLikedTrips")


async def get_public_trips(api: AuthenticatedClient) -> list[TripWithMedia]:
    return await _list_trips(api, "/api/trips/public")


async def get_following_trips(api: AuthenticatedClient) -> list[TripWithMedia]:
    """Trips of the profiles the signed-in user follows."""
    return await _list_trips(api, "/api/trips/following")


async def get_trips_by_user_id(api: AuthenticatedClient, user_id: str) -> list[TripWithMedia]:
    uid = require_id("user_id", user_id)
    return await _list_trips(api, f"/api/trips/user/{uid}")


async def search_trips(api: AuthenticatedClient, query: str) -> list[TripWithMedia]:
    endpoint = "/api/trips/search"
    data = await api.request("POST", endpoint, json_body={"query": require_text("query", query)})
    return parse_list(TripWithMedia, data, endpoint=endpoint)
