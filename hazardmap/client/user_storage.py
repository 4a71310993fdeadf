"""Current-user persistence for the map client.

This is the only "login" the app has: whoever is stored here is the current
user. It is not authentication.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from hazardmap.core.config import settings

logger = logging.getLogger(__name__)


class StoredUser(BaseModel):
    id: int
    username: str
    email: str


class UserStorage:
    """Reads and writes the current user as a small JSON file."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else settings.user_storage_path

    def get(self) -> StoredUser | None:
        """Stored user, or None if nothing is stored or the file is unreadable."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            return StoredUser.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError):
            logger.warning("Ignoring corrupt user file %s", self.path)
            return None

    def set(self, user: StoredUser | dict[str, Any]) -> StoredUser:
        stored = user if isinstance(user, StoredUser) else StoredUser.model_validate(user)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(stored.model_dump_json(), encoding="utf-8")
        return stored

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
