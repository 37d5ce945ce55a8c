"""Trip and media models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator

from pyglobe.models._base import GlobeBaseModel, GlobeRequestModel, Identifier, Visibility, VisibilityValue


class Trip(GlobeBaseModel):
    """A trip owned by a user."""

    trip_id: Identifier = Field(validation_alias=AliasChoices("TripID", "trip_id", "tripId", "id"))
    user_id: Identifier | None = Field(default=None, validation_alias=AliasChoices("user_id", "UserID", "userId"))
    name: str = ""
    description: str = ""
    start_date: str | None = Field(default=None, validation_alias=AliasChoices("start_date", "startDate"))
    end_date: str | None = Field(default=None, validation_alias=AliasChoices("end_date", "endDate"))
    visibility: VisibilityValue = Visibility.UNKNOWN
    album_id: Identifier | None = Field(default=None, validation_alias=AliasChoices("album_id", "AlbumID", "albumId"))


class TripMedia(GlobeBaseModel):
    """A photo attached to a trip, with its GPS position."""

    media_id: Identifier = Field(validation_alias=AliasChoices("mediaId", "media_id", "MediaID"))
    url: str = ""
    latitude: float | None = Field(default=None, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float | None = Field(default=None, validation_alias=AliasChoices("longitude", "lng", "lon"))
    visibility: VisibilityValue = Visibility.UNKNOWN


class TripWithMedia(GlobeBaseModel):
    """A trip together with its media and a display location."""

    trip: Trip
    media: list[TripMedia] = Field(default_factory=list)
    location: str = ""

    @field_validator("media", mode="before")
    @classmethod
    def _null_media(cls, value: Any) -> Any:
        # The service sends ``null`` for trips without photos.
        return [] if value is None else value


class Location(GlobeBaseModel):
    """Country and city resolved for a media item."""

    country: str = Field(default="", validation_alias=AliasChoices("Country", "country"))
    city: str = Field(default="", validation_alias=AliasChoices("City", "city"))


class MediaItem(GlobeBaseModel):
    """A single uploaded media item."""

    media_id: Identifier = Field(validation_alias=AliasChoices("media_id", "mediaId", "MediaID", "id"))
    trip_id: Identifier | None = Field(default=None, validation_alias=AliasChoices("trip_id", "tripId", "TripID"))
    url: str = ""
    type: str = ""
    visibility: VisibilityValue = Visibility.UNKNOWN
    created_at: str | None = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_metadata(cls, value: Any) -> Any:
        return {} if value is None else value


class MediaMetadata(GlobeRequestModel):
    """Metadata attached to a media item (GPS position and optional captions)."""

    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    altitude: float | None = None
    location: str | None = None
    caption: str | None = None
    tags: list[str] | None = None
    date: str | None = None

    @model_validator(mode="after")
    def _coordinates_paired(self) -> MediaMetadata:
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self


class TripInput(GlobeRequestModel):
    """Payload for creating or updating a trip."""

    name: str
    description: str = ""
    visibility: VisibilityValue = Visibility.PUBLIC
    start_date: str
    end_date: str
    album_id: str | None = None

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("name must be non-empty")
        return value

    @field_validator("visibility")
    @classmethod
    def _known_visibility(cls, value: Visibility) -> Visibility:
        if value is Visibility.UNKNOWN:
            raise ValueError("visibility must be PUBLIC, PRIVATE, FRIENDS or FOLLOWERS")
        return value
