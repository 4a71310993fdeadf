"""Hazard lifecycle constants."""

from __future__ import annotations

STATUS_OPEN = "open"
STATUS_CLAIMED = "claimed"
STATUS_COMPLETED = "completed"

HAZARD_STATUSES = (STATUS_OPEN, STATUS_CLAIMED, STATUS_COMPLETED)

# Status a hazard must be in before each transition
CLAIMABLE_FROM = STATUS_OPEN
COMPLETABLE_FROM = STATUS_CLAIMED

# Coordinate bounds in decimal degrees
LAT_MIN, LAT_MAX = -90.0, 90.0
LNG_MIN, LNG_MAX = -180.0, 180.0
