"""Data models for travel-sharing API requests and responses."""

from pyglobe.models._base import GlobeBaseModel, GlobeRequestModel, Identifier, Visibility, VisibilityValue
from pyglobe.models.auth import (
    AuthResponse,
    AuthUser,
    Credentials,
    CurrentUser,
    PasswordReset,
    PasswordResetRequest,
    PasswordUpdate,
    TokenPair,
)
from pyglobe.models.globe import Globe, GlobeInput, GlobeWithTrips
from pyglobe.models.likes import FavoriteStatus, LikeStatus
from pyglobe.models.profile import FollowList, Profile, ProfileInput, ProfileSummary
from pyglobe.models.trip import Location, MediaItem, MediaMetadata, Trip, TripInput, TripMedia, TripWithMedia

__all__ = [
    "AuthResponse",
    "AuthUser",
    "Credentials",
    "CurrentUser",
    "FavoriteStatus",
    "FollowList",
    "Globe",
    "GlobeBaseModel",
    "GlobeInput",
    "GlobeRequestModel",
    "GlobeWithTrips",
    "Identifier",
    "LikeStatus",
    "Location",
    "MediaItem",
    "MediaMetadata",
    "PasswordReset",
    "PasswordResetRequest",
    "PasswordUpdate",
    "Profile",
    "ProfileInput",
    "ProfileSummary",
    "TokenPair",
    "Trip",
    "TripInput",
    "TripMedia",
    "TripWithMedia",
    "Visibility",
    "VisibilityValue",
]
