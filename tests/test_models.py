"""Tests for pydantic model parsing with GlobeBaseModel + Visibility."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyglobe.models import (
    AuthResponse,
    Credentials,
    CurrentUser,
    FavoriteStatus,
    FollowList,
    Globe,
    GlobeInput,
    GlobeWithTrips,
    LikeStatus,
    MediaItem,
    MediaMetadata,
    PasswordUpdate,
    Profile,
    ProfileInput,
    TokenPair,
    Trip,
    TripInput,
    TripWithMedia,
    Visibility,
)

# ------------------------------------------------------------------
# Visibility
# ------------------------------------------------------------------


class TestVisibility:
    def test_case_insensitive(self) -> None:
        assert Visibility("public") is Visibility.PUBLIC
        assert Visibility(" Private ") is Visibility.PRIVATE

    def test_unknown_value_falls_back(self) -> None:
        assert Visibility("secret") is Visibility.UNKNOWN

    def test_lenient_in_models(self) -> None:
        trip = Trip.model_validate({"TripID": 1, "visibility": "friends"})
        assert trip.visibility is Visibility.FRIENDS
        assert Trip.model_validate({"TripID": 1, "visibility": None}).visibility is Visibility.UNKNOWN


# ------------------------------------------------------------------
# Auth
# ------------------------------------------------------------------


class TestAuthModels:
    def test_token_pair_aliases(self) -> None:
        pair = TokenPair.model_validate({"accessToken": "a", "refreshToken": "r"})
        assert pair.token == "a"
        assert pair.refresh_token == "r"

    def test_token_pair_requires_token(self) -> None:
        with pytest.raises(ValidationError):
            TokenPair.model_validate({"token": "  "})
        with pytest.raises(ValidationError):
            TokenPair.model_validate({"refreshToken": "r"})

    def test_auth_response_lifts_nested_user_id(self) -> None:
        auth = AuthResponse.model_validate({"token": "t", "user": {"id": 42, "email": "a@b.com"}})
        assert auth.user_id == "42"
        assert auth.user is not None
        assert auth.user.email == "a@b.com"

    def test_auth_response_flat(self) -> None:
        auth = AuthResponse.model_validate({"token": "t", "refreshToken": "r", "user_id": "7"})
        assert (auth.token, auth.refresh_token, auth.user_id) == ("t", "r", "7")

    def test_current_user_wrapped_and_flat(self) -> None:
        wrapped = CurrentUser.model_validate({"user": {"id": 3, "email": "x@y.io"}})
        flat = CurrentUser.model_validate({"id": 3, "email": "x@y.io"})
        assert wrapped.user_id == flat.user_id == "3"
        assert flat.raw == {"id": 3, "email": "x@y.io"}

    def test_credentials_validate_email_and_password(self) -> None:
        creds = Credentials.model_validate({"email": " a@b.com ", "password": "secret123"})
        assert creds.to_payload() == {"email": "a@b.com", "password": "secret123"}
        assert "secret123" not in repr(creds)

        with pytest.raises(ValidationError):
            Credentials.model_validate({"email": "not-an-email", "password": "x"})
        with pytest.raises(ValidationError):
            Credentials.model_validate({"email": "a@b.com", "password": ""})

    def test_password_update_payload(self) -> None:
        update = PasswordUpdate(old_password="old", new_password="new")
        assert update.to_payload() == {"oldPassword": "old", "newPassword": "new"}


# ------------------------------------------------------------------
# Profiles
# ------------------------------------------------------------------


class TestProfile:
    def test_pascal_case_payload(self) -> None:
        profile = Profile.model_validate(
            {
                "ProfileID": 5,
                "UserID": 42,
                "Username": "ana",
                "Bio": "hi",
                "Followers": 3,
                "Following": 1,
                "User": {"user_id": 42, "email": "ana@example.com", "password_hash": "x"},
            }
        )
        assert profile.user_id == "42"
        assert profile.profile_id == "5"
        assert profile.username == "ana"
        assert profile.followers == 3
        assert profile.email == "ana@example.com"
        assert profile.raw["User"]["password_hash"] == "x"

    def test_user_id_lifted_from_embedded_user(self) -> None:
        profile = Profile.model_validate({"Username": "bo", "User": {"user_id": 9}})
        assert profile.user_id == "9"

    def test_missing_user_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Profile.model_validate({"Username": "ghost"})

    def test_unknown_fields_ignored(self) -> None:
        profile = Profile.model_validate({"UserID": "1", "Shiny": True})
        assert profile.raw["Shiny"] is True

    def test_follow_list_unwraps_follow_envelope(self) -> None:
        follows = FollowList.model_validate(
            {"Follow": {"profiles": [{"profileId": 1, "username": "a"}, {"profileId": 2, "username": "b"}]}}
        )
        assert follows.count == 2
        assert [p.profile_id for p in follows.profiles] == ["1", "2"]
        assert "Follow" in follows.raw

    def test_follow_list_explicit_count(self) -> None:
        follows = FollowList.model_validate({"Follow": {"count": 10, "profiles": []}})
        assert follows.count == 10
        assert follows.profiles == []

    def test_profile_input_payload_omits_unset(self) -> None:
        payload = ProfileInput(username="ana", bio=" traveller ").to_payload()
        assert payload == {"Username": "ana", "Bio": "traveller"}

    def test_profile_input_forbids_unknown_fields(self) -> None:
        with pytest.raises(ValidationError):
            ProfileInput.model_validate({"nickname": "x"})


# ------------------------------------------------------------------
# Trips, media, globes
# ------------------------------------------------------------------


class TestTripAndMedia:
    def test_trip_with_null_media(self) -> None:
        item = TripWithMedia.model_validate(
            {"trip": {"TripID": 7, "name": "Lisbon", "start_date": "2024-05-01"}, "media": None, "location": "PT"}
        )
        assert item.trip.trip_id == "7"
        assert item.trip.start_date == "2024-05-01"
        assert item.media == []
        assert item.location == "PT"

    def test_trip_media_coordinates(self) -> None:
        item = TripWithMedia.model_validate(
            {"trip": {"id": "t1"}, "media": [{"mediaId": 3, "url": "u", "lat": 38.7, "lng": -9.1}]}
        )
        assert item.media[0].media_id == "3"
        assert item.media[0].latitude == pytest.approx(38.7)
        assert item.media[0].longitude == pytest.approx(-9.1)

    def test_media_item_null_metadata(self) -> None:
        media = MediaItem.model_validate({"media_id": "m1", "metadata": None, "visibility": "PRIVATE"})
        assert media.metadata == {}
        assert media.visibility is Visibility.PRIVATE

    def test_media_metadata_requires_paired_coordinates(self) -> None:
        with pytest.raises(ValidationError):
            MediaMetadata(latitude=10.0)
        with pytest.raises(ValidationError):
            MediaMetadata(latitude=91.0, longitude=0.0)
        assert MediaMetadata(latitude=1.5, longitude=2.5, caption="x").to_payload() == {
            "latitude": 1.5,
            "longitude": 2.5,
            "caption": "x",
        }

    def test_trip_input_defaults_and_rejections(self) -> None:
        trip = TripInput(name="Alps", start_date="2024-01-01", end_date="2024-01-05")
        assert trip.to_payload()["visibility"] == "PUBLIC"

        with pytest.raises(ValidationError):
            TripInput(name="", start_date="a", end_date="b")
        with pytest.raises(ValidationError):
            TripInput(name="Alps", start_date="a", end_date="b", visibility="everyone")

    def test_globe_aliases_and_nested_trips(self) -> None:
        globe = Globe.model_validate({"AlbumID": 4, "name": "Europe", "visibility": "public"})
        assert globe.album_id == "4"
        assert globe.visibility is Visibility.PUBLIC

        with_trips = GlobeWithTrips.model_validate({"globe": {"AlbumID": 4}, "trips": None})
        assert with_trips.trips == []

    def test_globe_input_rejects_unknown_visibility(self) -> None:
        with pytest.raises(ValidationError):
            GlobeInput(name="x", visibility="nobody")


# ------------------------------------------------------------------
# Likes
# ------------------------------------------------------------------


class TestLikes:
    def test_like_status_bare_count(self) -> None:
        status = LikeStatus.model_validate(12)
        assert status.count == 12
        assert status.liked is False

    @pytest.mark.parametrize(
        "payload",
        [{"count": 3, "liked": True}, {"likeCount": 3, "isLiked": True}, {"likes": 3, "hasLiked": True}],
    )
    def test_like_status_aliases(self, payload: dict[str, object]) -> None:
        status = LikeStatus.model_validate(payload)
        assert (status.count, status.liked) == (3, True)

    def test_favorite_status_bare_flag(self) -> None:
        assert FavoriteStatus.model_validate(True).favorited is True

    def test_favorite_status_british_spelling(self) -> None:
        status = FavoriteStatus.model_validate({"isFavourite": True, "favourites": 2})
        assert status.favorited is True
        assert status.count == 2
