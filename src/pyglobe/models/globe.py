"""Globe (album) models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyglobe.models._base import GlobeBaseModel, GlobeRequestModel, Identifier, Visibility, VisibilityValue
from pyglobe.models.trip import TripWithMedia


class Globe(GlobeBaseModel):
    """An album grouping trips, shown as a globe in the app."""

    album_id: Identifier = Field(validation_alias=AliasChoices("AlbumID", "album_id", "albumId", "id"))
    user_id: Identifier | None = Field(default=None, validation_alias=AliasChoices("user_id", "UserID", "userId"))
    name: str = ""
    description: str = ""
    creation_date: str | None = Field(default=None, validation_alias=AliasChoices("creation_date", "creationDate"))
    visibility: VisibilityValue = Visibility.UNKNOWN


class GlobeWithTrips(GlobeBaseModel):
    globe: Globe
    trips: list[TripWithMedia] = Field(default_factory=list)

    @field_validator("trips", mode="before")
    @classmethod
    def _null_trips(cls, value: Any) -> Any:
        return [] if value is None else value


class GlobeInput(GlobeRequestModel):
    """Payload for creating or updating a globe."""

    name: str
    description: str = ""
    visibility: VisibilityValue = Visibility.PUBLIC

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
