"""Globe (album) service endpoints.

Endpoints:
  - /api/albums                         (create, list own)
  - /api/albums/{id}                    (get, update, delete)
  - /api/albums/{id}/visibility
  - /api/albums/public, /api/albums/user/{user_id}
  - /api/albums/trips[...]              (same listings with trips embedded)
"""

from __future__ import annotations

import logging
from typing import Any

from pyglobe._api._common import coerce_input, parse_list, parse_model, require_id, require_visibility
from pyglobe.authenticated import AuthenticatedClient
from pyglobe.models._base import Visibility
from pyglobe.models.globe import Globe, GlobeInput, GlobeWithTrips

_logger = logging.getLogger(__name__)


async def create_globe(api: AuthenticatedClient, globe: GlobeInput | dict[str, Any]) -> Globe:
    endpoint = "/api/albums"
    body = coerce_input(GlobeInput, globe)
    data = await api.request("POST", endpoint, json_body=body.to_payload())
    return parse_model(Globe, data, endpoint=endpoint)


async def update_globe(api: AuthenticatedClient, globe_id: str, globe: GlobeInput | dict[str, Any]) -> Globe:
    gid = require_id("globe_id", globe_id)
    body = coerce_input(GlobeInput, globe)
    endpoint = f"/api/albums/{gid}"
    data = await api.request("PUT", endpoint, json_body=body.to_payload())
    return parse_model(Globe, data, endpoint=endpoint)


async def delete_globe(api: AuthenticatedClient, globe_id: str) -> None:
    gid = require_id("globe_id", globe_id)
    await api.request("DELETE", f"/api/albums/{gid}")
    _logger.debug("Globe %s deleted", gid)


async def change_globe_visibility(api: AuthenticatedClient, globe_id: str, visibility: Visibility | str) -> Globe:
    gid = require_id("globe_id", globe_id)
    vis = require_visibility(visibility)
    endpoint = f"/api/albums/{gid}/visibility"
    data = await api.request("PUT", endpoint, json_body={"visibility": vis.value})
    return parse_model(Globe, data, endpoint=endpoint)


async def get_globe_by_id(api: AuthenticatedClient, globe_id: str) -> Globe:
    gid = require_id("globe_id", globe_id)
    endpoint = f"/api/albums/{gid}"
    data = await api.request("GET", endpoint)
    return parse_model(Globe, data, endpoint=endpoint)


async def get_globe_with_trips(api: AuthenticatedClient, globe_id: str) -> GlobeWithTrips:
    gid = require_id("globe_id", globe_id)
    endpoint = f"/api/albums/trips/{gid}"
    data = await api.request("GET", endpoint)
    return parse_model(GlobeWithTrips, data, endpoint=endpoint)


async def _list_globes(api: AuthenticatedClient, endpoint: str) -> list[Globe]:
    data = await api.request("GET", endpoint)
    return parse_list(Globe, data, endpoint=endpoint)


async def _list_globes_with_trips(api: AuthenticatedClient, endpoint: str) -> list[GlobeWithTrips]:
    data = await api.request("GET", endpoint)
    return parse_list(GlobeWithTrips, data, endpoint=endpoint)


async def get_my_globes(api: AuthenticatedClient) -> list[Globe]:
    return await _list_globes(api, "/api/albums")


async def get_my_globes_with_trips(api: AuthenticatedClient) -> list[GlobeWithTrips]:
    return await _list_globes_with_trips(api, "/api/albums/trips")


async def get_public_globes(api: AuthenticatedClient) -> list[Globe]:
    return await _list_globes(api, "/api/albums/public")


async def get_public_globes_with_trips(api: AuthenticatedClient) -> list[GlobeWithTrips]:
    return await _list_globes_with_trips(api, "/api/albums/trips/public")


async def get_globes_by_user_id(api: AuthenticatedClient, user_id: str) -> list[Globe]:
    uid = require_id("user_id", user_id)
    return await _list_globes(api, f"/api/albums/user/{uid}")


async def get_globes_by_user_id_with_trips(api: AuthenticatedClient, user_id: str) -> list[GlobeWithTrips]:
    uid = require_id("user_id", user_id)
    return await _list_globes_with_trips(api, f"/api/albums/trips/user/{uid}")
