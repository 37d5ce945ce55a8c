"""Shared helpers for the service facade modules.

This module centralizes the most repeated patterns:
- validating caller-supplied identifiers before any network call
- parsing a decoded body into a model, mapping shape errors to
  :class:`GlobeResponseShapeError`

It is internal to pyglobe and may change at any time.
"""

from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from pyglobe.exceptions import GlobeResponseShapeError, GlobeValidationError
from pyglobe.models._base import GlobeRequestModel, Visibility

M = TypeVar("M", bound=BaseModel)
R = TypeVar("R", bound=GlobeRequestModel)


def require_id(name: str, value: Any) -> str:
    """Return *value* as a percent-encoded path segment, rejecting empty ids.

    ``?``, ``#`` and ``%`` are encoded so an id can never spill into the
    query string or fragment.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise GlobeValidationError(f"{name} must be a string or integer id, got {type(value).__name__}")
    text = str(value).strip()
    if not text:
        raise GlobeValidationError(f"{name} must be non-empty")
    if "/" in text:
        raise GlobeValidationError(f"{name} must not contain '/'")
    return quote(text, safe="")


def require_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise GlobeValidationError(f"{name} must be a non-empty string")
    return value.strip()


def coerce_input(model: type[R], value: R | dict[str, Any]) -> R:
    """Accept a request model or a plain dict; validation errors become :class:`GlobeValidationError`."""
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        raise GlobeValidationError(f"invalid {model.__name__}: {exc}") from exc


def parse_model(model: type[M], data: Any, *, endpoint: str, status: int = 200) -> M:
    """Validate *data* as *model*."""
    if data is None:
        raise GlobeResponseShapeError(
            f"empty body, expected {model.__name__}",
            status_code=status,
            endpoint=endpoint,
        )
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise GlobeResponseShapeError(
            f"unexpected {model.__name__} shape: {exc.error_count()} error(s)",
            status_code=status,
            endpoint=endpoint,
        ) from exc


def parse_list(model: type[M], data: Any, *, endpoint: str, status: int = 200) -> list[M]:
    """Validate *data* as a list of *model*; ``null`` is an empty list."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise GlobeResponseShapeError(
            f"expected a list of {model.__name__}, got {type(data).__name__}",
            status_code=status,
            endpoint=endpoint,
        )
    return [parse_model(model, item, endpoint=endpoint, status=status) for item in data]


def parse_visibility_body(data: Any, *, endpoint: str) -> str:
    """Extract ``visibility`` from ``{"visibility": ...}``."""
    if isinstance(data, dict) and isinstance(data.get("visibility"), str):
        return data["visibility"]
    if isinstance(data, str):
        return data
    raise GlobeResponseShapeError("missing 'visibility' field", status_code=200, endpoint=endpoint)


def require_visibility(value: Visibility | str) -> Visibility:
    """Parse a caller-supplied visibility, rejecting unknown values."""
    visibility = Visibility(value)
    if visibility is Visibility.UNKNOWN:
        raise GlobeValidationError(f"unsupported visibility {value!r}")
    return visibility
