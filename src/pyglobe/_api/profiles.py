"""Profile service endpoints.

Endpoints:
  - /api/profiles                      (create)
  - /api/profiles/update               (update own profile)
  - /api/profiles/updateProfileByID
  - /api/profiles/delete
  - /api/profiles/user/{user_id}
  - /api/profiles/username/{username}
  - /api/profiles/search
  - /api/follow/{id}, /api/unfollow/{id}
  - /api/{profile_id}/followers, /api/{profile_id}/following
"""

from __future__ import annotations

import logging
from typing import Any

from pyglobe._api._common import coerce_input, parse_list, parse_model, require_id, require_text
from pyglobe.authenticated import AuthenticatedClient
from pyglobe.models.profile import FollowList, Profile, ProfileInput

_logger = logging.getLogger(__name__)


async def create_profile(api: AuthenticatedClient, profile: ProfileInput | dict[str, Any]) -> Profile:
    endpoint = "/api/profiles"
    body = coerce_input(ProfileInput, profile)
    data = await api.request("POST", endpoint, json_body=body.to_payload())
    return parse_model(Profile, data, endpoint=endpoint)


async def update_profile(api: AuthenticatedClient, profile: ProfileInput | dict[str, Any]) -> Profile:
    """Update the signed-in user's profile."""
    endpoint = "/api/profiles/update"
    body = coerce_input(ProfileInput, profile)
    data = await api.request("POST", endpoint, json_body=body.to_payload())
    return parse_model(Profile, data, endpoint=endpoint)


async def update_profile_by_id(
    api: AuthenticatedClient,
    profile_id: str,
    profile: ProfileInput | dict[str, Any],
) -> Profile:
    endpoint = "/api/profiles/updateProfileByID"
    require_id("profile_id", profile_id)
    body = coerce_input(ProfileInput, profile)
    # The id travels in the body here, so it is sent unencoded.
    payload = {"id": str(profile_id).strip(), **body.to_payload()}
    data = await api.request("POST", endpoint, json_body=payload)
    return parse_model(Profile, data, endpoint=endpoint)


async def delete_profile(api: AuthenticatedClient) -> None:
    await api.request("POST", "/api/profiles/delete", json_body={})
    _logger.debug("Profile deleted")


async def get_profile_by_id(api: AuthenticatedClient, user_id: str) -> Profile:
    uid = require_id("user_id", user_id)
    endpoint = f"/api/profiles/user/{uid}"
    data = await api.request("GET", endpoint)
    return parse_model(Profile, data, endpoint=endpoint)


async def get_profile_by_username(api: AuthenticatedClient, username: str) -> Profile:
    name = require_id("username", username)
    endpoint = f"/api/profiles/username/{name}"
    data = await api.request("GET", endpoint)
    return parse_model(Profile, data, endpoint=endpoint)


async def search_profiles(api: AuthenticatedClient, query: str) -> list[Profile]:
    """Substring search over usernames."""
    endpoint = "/api/profiles/search"
    data = await api.request("POST", endpoint, json_body={"query": require_text("query", query)})
    return parse_list(Profile, data, endpoint=endpoint)


async def follow_user(api: AuthenticatedClient, followed_id: str) -> None:
    fid = require_id("followed_id", followed_id)
    await api.request("POST", f"/api/follow/{fid}", json_body={})


async def unfollow_user(api: AuthenticatedClient, followed_id: str) -> None:
    fid = require_id("followed_id", followed_id)
    await api.request("POST", f"/api/unfollow/{fid}", json_body={})


async def get_followers(api: AuthenticatedClient, profile_id: str) -> FollowList:
    pid = require_id("profile_id", profile_id)
    endpoint = f"/api/{pid}/followers"
    data = await api.request("GET", endpoint)
    return parse_model(FollowList, data, endpoint=endpoint)


async def get_following(api: AuthenticatedClient, profile_id: str) -> FollowList:
    pid = require_id("profile_id", profile_id)
    endpoint = f"/api/{pid}/following"
    data = await api.request("GET", endpoint)
    return parse_model(FollowList, data, endpoint=endpoint)
