"""Custom exception hierarchy for pyglobe."""

from __future__ import annotations


class GlobeError(Exception):
    """Base exception for all pyglobe errors."""


class GlobeConfigError(GlobeError):
    """Invalid or missing configuration."""


class GlobeValidationError(GlobeError, ValueError):
    """Caller passed a malformed identifier or payload.

    Raised before any network call is made.
    """


class GlobeNetworkError(GlobeError):
    """Transport-level failure (connection error, timeout); no response."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class GlobeRemoteError(GlobeError):
    """Server answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"{endpoint} failed: HTTP {status_code}: {message}" if endpoint else message)


class GlobeResponseShapeError(GlobeRemoteError):
    """2xx response whose body does not match the expected result type."""


class GlobeAuthExpiredError(GlobeError):
    """Token refresh failed.

    Stored credentials have already been cleared when this is raised; the
    caller has to log in again.
    """
