"""Users API."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hazardmap.db.session import get_db
from hazardmap.schemas.user import UserCreate, UserResponse
from hazardmap.services.user_service import DuplicateUserError, create_user, get_user, list_users

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
def list_all(db: Session = Depends(get_db)):
    """All users, newest first."""
    try:
        return list_users(db)
    except SQLAlchemyError:
        logger.exception("Failed to fetch users")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch users")


@router.get("/{user_id}", response_model=UserResponse)
def get_one(user_id: int, db: Session = Depends(get_db)):
    try:
        user = get_user(db, user_id)
    except SQLAlchemyError:
        logger.exception("Failed to fetch user")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch user")
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(data: UserCreate, db: Session = Depends(get_db)):
    """Self-registration with username and email. No password."""
    try:
        return create_user(db, data)
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create user")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create user")
