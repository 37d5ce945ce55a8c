"""Like and favourite models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, model_validator

from pyglobe.models._base import GlobeBaseModel


class LikeStatus(GlobeBaseModel):
    """Aggregate likes of a trip and whether the current user liked it.

    The likes service has answered with a bare count, ``{"count"}``,
    ``{"likes"}`` and ``{"likeCount", "liked"}`` over time; all are accepted.
    """

    count: int = Field(default=0, validation_alias=AliasChoices("count", "likes", "likeCount", "like_count"))
    liked: bool = Field(default=False, validation_alias=AliasChoices("liked", "isLiked", "is_liked", "hasLiked"))

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_count(cls, values: Any) -> Any:
        if isinstance(values, int) and not isinstance(values, bool):
            return {"count": values, "raw": {"count": values}}
        return values


class FavoriteStatus(GlobeBaseModel):
    """Whether the current user marked a media item as favourite."""

    favorited: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "favorited",
            "favourited",
            "isFavorite",
            "isFavourite",
            "is_favorite",
            "is_favourite",
            "favorite",
            "favourite",
        ),
    )
    count: int = Field(default=0, validation_alias=AliasChoices("count", "favourites", "favorites"))

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_flag(cls, values: Any) -> Any:
        if isinstance(values, bool):
            return {"favorited": values, "raw": {"favorited": values}}
        return values
