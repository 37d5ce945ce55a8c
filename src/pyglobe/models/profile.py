"""Profile and follow models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, model_validator

from pyglobe.models._base import GlobeBaseModel, GlobeRequestModel, Identifier


class Profile(GlobeBaseModel):
    """A user's public profile, keyed by user id.

    Fields follow the profile service's PascalCase payload documented for
    ``/api/profiles/user/{id}``.  ``user_id`` is required: a body without it
    is not a profile.
    """

    user_id: Identifier = Field(validation_alias=AliasChoices("UserID", "user_id", "userId"))
    profile_id: Identifier | None = Field(
        default=None,
        validation_alias=AliasChoices("ProfileID", "profile_id", "profileId"),
    )
    username: str = Field(default="", validation_alias=AliasChoices("Username", "username"))
    bio: str = Field(default="", validation_alias=AliasChoices("Bio", "bio"))
    profile_picture: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ProfilePicture", "profile_picture", "profilePicture"),
    )
    theme: str = Field(default="", validation_alias=AliasChoices("Theme", "theme"))
    location: str = Field(default="", validation_alias=AliasChoices("Location", "location"))
    website: str = Field(default="", validation_alias=AliasChoices("Website", "website"))
    followers: int = Field(default=0, validation_alias=AliasChoices("Followers", "followers"))
    """Follower count."""
    following: int = Field(default=0, validation_alias=AliasChoices("Following", "following"))
    """Count of profiles this user follows."""
    birthdate: str | None = Field(default=None, validation_alias=AliasChoices("Birthdate", "birthdate"))
    language: str = Field(default="", validation_alias=AliasChoices("Language", "language"))
    email: str | None = None
    """Account email, lifted from the embedded ``User`` object when present."""
    created_at: str | None = Field(default=None, validation_alias=AliasChoices("CreatedAt", "created_at"))
    updated_at: str | None = Field(default=None, validation_alias=AliasChoices("UpdatedAt", "updated_at"))

    @model_validator(mode="before")
    @classmethod
    def _lift_embedded_user(cls, values: Any) -> Any:
        # The embedded User carries the password hash; only the email and id
        # are kept, the rest stays in ``raw``.
        if not isinstance(values, dict):
            return values
        user = values.get("User")
        if not isinstance(user, dict):
            return values
        merged = dict(values)
        merged.setdefault("email", user.get("email"))
        if "UserID" not in merged and user.get("user_id") is not None:
            merged["UserID"] = user["user_id"]
        return merged


class ProfileSummary(GlobeBaseModel):
    """Entry in a followers / following list."""

    profile_id: Identifier | None = Field(
        default=None,
        validation_alias=AliasChoices("profileId", "ProfileID", "profile_id"),
    )
    username: str = Field(default="", validation_alias=AliasChoices("username", "Username"))
    profile_picture: str | None = Field(
        default=None,
        validation_alias=AliasChoices("profilePicture", "ProfilePicture", "profile_picture"),
    )


class FollowList(GlobeBaseModel):
    """Followers or following of a profile.

    The service wraps the list as ``{"Follow": {"count", "profiles"}}``.
    """

    count: int = 0
    profiles: list[ProfileSummary] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _unwrap_follow(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        inner = values.get("Follow")
        if not isinstance(inner, dict):
            return values
        merged = dict(inner)
        merged["raw"] = values.get("raw", values)
        return merged

    @model_validator(mode="after")
    def _default_count(self) -> FollowList:
        if not self.count and self.profiles:
            object.__setattr__(self, "count", len(self.profiles))
        return self


class ProfileInput(GlobeRequestModel):
    """Editable profile fields for create / update calls.

    Unset fields are omitted from the request body.
    """

    username: str | None = Field(default=None, serialization_alias="Username")
    bio: str | None = Field(default=None, serialization_alias="Bio")
    profile_picture: str | None = Field(default=None, serialization_alias="ProfilePicture")
    theme: str | None = Field(default=None, serialization_alias="Theme")
    location: str | None = Field(default=None, serialization_alias="Location")
    website: str | None = Field(default=None, serialization_alias="Website")
    birthdate: str | None = Field(default=None, serialization_alias="Birthdate")
    language: str | None = Field(default=None, serialization_alias="Language")
