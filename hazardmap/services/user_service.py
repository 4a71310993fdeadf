"""User service."""

from __future__ import annotations

import logging

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hazardmap.models.user import User
from hazardmap.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class UserNotFoundError(ValueError):
    """Raised when a user id does not exist."""

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class DuplicateUserError(ValueError):
    """Raised when the username or email is already registered."""

    def __init__(self, message: str = "Username or email already exists") -> None:
        super().__init__(message)


def list_users(db: Session) -> list[User]:
    """All users, newest first."""
    result = db.execute(select(User).order_by(desc(User.created_at), desc(User.id)))
    return list(result.scalars().all())


def get_user(db: Session, user_id: int) -> User | None:
    """Get user by id."""
    return db.get(User, user_id)


def require_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise UserNotFoundError()
    return user


def create_user(db: Session, data: UserCreate) -> User:
    """Register a user. Uniqueness is enforced by the database constraints."""
    user = User(username=data.username, email=str(data.email))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Rejected duplicate user username=%s email=%s", data.username, data.email)
        raise DuplicateUserError() from exc
    db.refresh(user)
    logger.info("User created id=%s username=%s", user.id, user.username)
    return user
