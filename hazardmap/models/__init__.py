"""SQLAlchemy models."""

from __future__ import annotations

from hazardmap.models.hazard import Hazard
from hazardmap.models.user import User

__all__ = [
    "User",
    "Hazard",
]
