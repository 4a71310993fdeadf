"""Client side of hazardmap: HTTP wrappers, stored user, map state machine."""

from __future__ import annotations

from hazardmap.client.api_client import ApiClientError, HazardMapClient
from hazardmap.client.map_controller import MapController, MapState
from hazardmap.client.user_storage import StoredUser, UserStorage

__all__ = [
    "ApiClientError",
    "HazardMapClient",
    "MapController",
    "MapState",
    "StoredUser",
    "UserStorage",
]
