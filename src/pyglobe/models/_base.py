"""Base model and enums shared by the response models.

The backends were written by different people and disagree on key style:
the profile service answers in PascalCase (``ProfileID``), the trip service
mixes PascalCase ids with snake_case fields (``TripID``, ``start_date``) and
the media endpoints use camelCase (``mediaId``).  Models therefore declare
their accepted spellings explicitly with ``AliasChoices`` and keep the
original payload in ``raw``.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


class Visibility(enum.StrEnum):
    """Who can see a trip, media item or globe.

    Backends send upper- or lower-case spellings; parsing is
    case-insensitive and unrecognised values map to ``UNKNOWN``.
    """

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    FRIENDS = "FRIENDS"
    FOLLOWERS = "FOLLOWERS"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> Visibility:
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return cls.UNKNOWN


def _to_identifier(value: Any) -> Any:
    # Ids arrive as ints from some services and strings from others.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


Identifier = Annotated[str, BeforeValidator(_to_identifier)]
"""A resource id normalised to ``str``."""


def _to_visibility(value: Any) -> Any:
    if isinstance(value, Visibility):
        return value
    if value is None:
        return Visibility.UNKNOWN
    return Visibility(str(value))


VisibilityValue = Annotated[Visibility, BeforeValidator(_to_visibility)]
"""Visibility parsed leniently: any casing, unknown strings become ``UNKNOWN``."""


class GlobeBaseModel(BaseModel):
    """Base for response models.

    * ``extra="ignore"`` so new server fields never break parsing
    * ``populate_by_name`` so models can also be built from snake_case kwargs
    * the original dict is stashed in ``raw`` unless one is passed explicitly
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        if "raw" in values:
            return values
        merged = dict(values)
        merged["raw"] = dict(values)
        return merged


class GlobeRequestModel(BaseModel):
    """Base for request payload models built by callers."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialise to the JSON body the backend expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
