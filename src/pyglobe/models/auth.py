"""Authentication models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator

from pyglobe.models._base import GlobeBaseModel, GlobeRequestModel, Identifier


class TokenPair(GlobeBaseModel):
    """Tokens returned by ``/refresh-token``.

    ``refresh_token`` is only present when the server rotates it.
    """

    token: str = Field(validation_alias=AliasChoices("token", "accessToken", "access_token"))
    refresh_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("refreshToken", "refresh_token"),
    )

    @field_validator("token")
    @classmethod
    def _token_non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("token must be non-empty")
        return value


class AuthUser(GlobeBaseModel):
    """The ``user`` object embedded in login and ``/profile`` responses."""

    user_id: Identifier | None = Field(default=None, validation_alias=AliasChoices("user_id", "userId", "id"))
    email: str | None = None


class AuthResponse(GlobeBaseModel):
    """Result of login or signup.

    Older auth builds answer ``{"user": {"id", "email"}, "token"}``, newer
    ones ``{"token", "refreshToken", "user_id"}``; both are accepted and
    ``user_id`` is lifted from the nested user when absent at the top level.
    Signup responses may carry no token at all.
    """

    token: str | None = Field(default=None, validation_alias=AliasChoices("token", "accessToken", "access_token"))
    refresh_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("refreshToken", "refresh_token"),
    )
    user_id: Identifier | None = Field(default=None, validation_alias=AliasChoices("user_id", "userId"))
    user: AuthUser | None = None

    @model_validator(mode="after")
    def _lift_user_id(self) -> AuthResponse:
        if self.user_id is None and self.user is not None and self.user.user_id is not None:
            object.__setattr__(self, "user_id", self.user.user_id)
        return self


class CurrentUser(GlobeBaseModel):
    """Response of ``GET /profile`` on the auth service."""

    user: AuthUser | None = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_flat_user(cls, values: Any) -> Any:
        # Some builds return the user object directly instead of {"user": {...}}.
        if not isinstance(values, dict) or "user" in values:
            return values
        flat = {k: v for k, v in values.items() if k != "raw"}
        return {"user": flat, "raw": values.get("raw", flat)}

    @property
    def user_id(self) -> str | None:
        return self.user.user_id if self.user is not None else None


def _check_email(value: str) -> str:
    local, _, domain = value.partition("@")
    if not local or "." not in domain.strip("."):
        raise ValueError("email must look like name@domain.tld")
    return value


class PasswordResetRequest(GlobeRequestModel):
    """Payload for ``/forgot-password``."""

    email: str

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: str) -> str:
        return _check_email(value)


class Credentials(GlobeRequestModel):
    """Email and password used for login and signup."""

    email: str
    password: SecretStr

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def _password_non_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("password must be non-empty")
        return value

    def to_payload(self) -> dict[str, Any]:
        return {"email": self.email, "password": self.password.get_secret_value()}


class PasswordUpdate(GlobeRequestModel):
    old_password: SecretStr = Field(serialization_alias="oldPassword")
    new_password: SecretStr = Field(serialization_alias="newPassword")

    def to_payload(self) -> dict[str, Any]:
        return {
            "oldPassword": self.old_password.get_secret_value(),
            "newPassword": self.new_password.get_secret_value(),
        }


class PasswordReset(GlobeRequestModel):
    token: str
    new_password: SecretStr = Field(serialization_alias="newPassword")

    def to_payload(self) -> dict[str, Any]:
        return {"token": self.token, "newPassword": self.new_password.get_secret_value()}
