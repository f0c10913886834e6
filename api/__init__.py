"""SnapMaster API client package"""

from .client import APIError, LoginRequired, TokenExpired, SnapAPIClient, parse_response
from .models import DataResponse, Profile, StatusResponse, ValidationResponse
from .profile import ProfileAPI
from .resources import ACTIVE_SNAP_ACTIONS, ResourceAPI

__all__ = [
    "APIError",
    "LoginRequired",
    "TokenExpired",
    "SnapAPIClient",
    "parse_response",
    "DataResponse",
    "Profile",
    "StatusResponse",
    "ValidationResponse",
    "ProfileAPI",
    "ACTIVE_SNAP_ACTIONS",
    "ResourceAPI",
]
