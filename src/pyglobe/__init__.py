"""pyglobe - Async Python client for the travel-sharing (globes) services."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyglobe")
except PackageNotFoundError:
    __version__ = "0+local"
from pyglobe._transport import HttpTransport, UploadFile
from pyglobe.authenticated import ApiResponse, AuthenticatedClient
from pyglobe.client import GlobeClient
from pyglobe.config import CredentialStyle, GlobeConfig, Service
from pyglobe.credentials import CredentialStore, FileCredentialStore, MemoryCredentialStore
from pyglobe.exceptions import (
    GlobeAuthExpiredError,
    GlobeConfigError,
    GlobeError,
    GlobeNetworkError,
    GlobeRemoteError,
    GlobeResponseShapeError,
    GlobeValidationError,
)
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
    Location,
    MediaItem,
    MediaMetadata,
    Profile,
    ProfileInput,
    TokenPair,
    Trip,
    TripInput,
    TripWithMedia,
    Visibility,
)
from pyglobe.refresh import RefreshCoordinator, RefreshState

__all__ = [
    "__version__",
    "ApiResponse",
    "AuthResponse",
    "AuthenticatedClient",
    "CredentialStore",
    "CredentialStyle",
    "Credentials",
    "CurrentUser",
    "FavoriteStatus",
    "FileCredentialStore",
    "FollowList",
    "Globe",
    "GlobeAuthExpiredError",
    "GlobeClient",
    "GlobeConfig",
    "GlobeConfigError",
    "GlobeError",
    "GlobeInput",
    "GlobeNetworkError",
    "GlobeRemoteError",
    "GlobeResponseShapeError",
    "GlobeValidationError",
    "GlobeWithTrips",
    "HttpTransport",
    "LikeStatus",
    "Location",
    "MediaItem",
    "MediaMetadata",
    "MemoryCredentialStore",
    "Profile",
    "ProfileInput",
    "RefreshCoordinator",
    "RefreshState",
    "Service",
    "TokenPair",
    "Trip",
    "TripInput",
    "TripWithMedia",
    "UploadFile",
    "Visibility",
]
