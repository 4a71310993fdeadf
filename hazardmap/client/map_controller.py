"""Headless state machine behind the hazard map screen.

Rendering is left to whatever front end drives this controller; it only
tracks which dialog is open, the last fetched hazard list and the current
user, and turns user actions into API calls.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import Any

from hazardmap.client.api_client import ApiClientError, HazardMapClient
from hazardmap.client.user_storage import StoredUser, UserStorage
from hazardmap.core.hazard_policies import STATUS_CLAIMED, STATUS_OPEN

logger = logging.getLogger(__name__)


class MapState(str, enum.Enum):
    no_selection = "no_selection"
    creating_at_point = "creating_at_point"
    viewing_hazard = "viewing_hazard"


def _log_alert(message: str) -> None:
    logger.warning("Alert: %s", message)


class MapController:
    """Map screen: hazards as markers, a create dialog and a detail popup."""

    def __init__(
        self,
        api: HazardMapClient,
        storage: UserStorage | None = None,
        alert: Callable[[str], None] | None = None,
    ) -> None:
        self.api = api
        self.storage = storage or UserStorage()
        self.alert = alert or _log_alert

        self.state = MapState.no_selection
        self.hazards: list[dict[str, Any]] = []
        self.loading = False
        self.current_user: StoredUser | None = None
        self.pending_point: tuple[float, float] | None = None
        self.selected: dict[str, Any] | None = None

    # ---- lifecycle ----

    def mount(self) -> None:
        """Pick up the stored user and load hazards."""
        self.current_user = self.storage.get()
        self.load_hazards()

    def load_hazards(self) -> None:
        self.loading = True
        try:
            self.hazards = self.api.fetch_hazards()
        except ApiClientError as e:
            logger.error("Failed to load hazards: %s", e)
        finally:
            self.loading = False

    def login(self, username: str, email: str) -> StoredUser | None:
        """Register a user and remember it as the current user."""
        try:
            user = self.api.create_user(username, email)
        except ApiClientError as e:
            self.alert(e.message or "Failed to create user")
            return None
        self.current_user = self.storage.set(user)
        return self.current_user

    def logout(self) -> None:
        self.storage.clear()
        self.current_user = None
        self._reset()

    # ---- creating ----

    def click_map(self, lat: float, lng: float) -> bool:
        """Open the create dialog at the clicked point. Ignored without a user or with a dialog open."""
        if self.current_user is None or self.state != MapState.no_selection:
            return False
        self.pending_point = (lat, lng)
        self.state = MapState.creating_at_point
        return True

    def submit_description(self, description: str) -> bool:
        if self.state != MapState.creating_at_point or self.current_user is None:
            return False
        text = description.strip()
        if not text:
            return False

        lat, lng = self.pending_point
        try:
            self.api.create_hazard(lat, lng, text, self.current_user.id)
        except ApiClientError as e:
            logger.error("Failed to create hazard: %s", e)
            self.alert("Failed to create hazard. Please try again.")
            return False

        self._reset()
        self.load_hazards()
        return True

    def cancel(self) -> None:
        self._reset()

    # ---- viewing ----

    def select_hazard(self, hazard: dict[str, Any] | int) -> bool:
        """Open the popup with the last fetched copy of a hazard."""
        if self.state == MapState.creating_at_point:
            return False
        if isinstance(hazard, int):
            hazard = next((h for h in self.hazards if h["id"] == hazard), None)
            if hazard is None:
                return False
        self.selected = hazard
        self.state = MapState.viewing_hazard
        return True

    @property
    def can_claim(self) -> bool:
        return (
            self.selected is not None
            and self.current_user is not None
            and self.selected["status"] == STATUS_OPEN
        )

    @property
    def can_complete(self) -> bool:
        return (
            self.selected is not None
            and self.current_user is not None
            and self.selected["status"] == STATUS_CLAIMED
            and self.selected.get("claimed_by") == self.current_user.id
        )

    def claim(self) -> bool:
        return self._act(self.api.claim_hazard, "Failed to claim hazard")

    def complete(self) -> bool:
        return self._act(self.api.complete_hazard, "Failed to complete hazard")

    def close(self) -> None:
        self._reset()

    def _act(self, call: Callable[[int, int], dict[str, Any]], fallback: str) -> bool:
        if self.state != MapState.viewing_hazard or self.selected is None or self.current_user is None:
            return False
        try:
            call(self.selected["id"], self.current_user.id)
        except ApiClientError as e:
            # popup stays open
            self.alert(e.message or fallback)
            return False
        self._reset()
        self.load_hazards()
        return True

    def _reset(self) -> None:
        self.state = MapState.no_selection
        self.pending_point = None
        self.selected = None
