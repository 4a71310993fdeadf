"""Hazards API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hazardmap.db.session import get_db
from hazardmap.models.hazard import Hazard
from hazardmap.schemas.hazard import HazardAction, HazardCreate, HazardResponse, MessageResponse
from hazardmap.services.hazard_service import (
    HazardForbiddenError,
    HazardNotFoundError,
    HazardStateError,
    claim_hazard,
    complete_hazard,
    create_hazard,
    delete_hazard,
    get_hazard_view,
    list_hazards,
)
from hazardmap.services.user_service import UserNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hazards", tags=["hazards"])


def _enrich_hazard(row: Row) -> HazardResponse:
    """Hazard row plus the usernames joined in by the service."""
    hazard: Hazard = row[0]
    return HazardResponse(
        id=hazard.id,
        user_id=hazard.user_id,
        lat=hazard.lat,
        lng=hazard.lng,
        description=hazard.description,
        status=hazard.status,
        claimed_by=hazard.claimed_by,
        completed_by=hazard.completed_by,
        created_at=hazard.created_at,
        updated_at=hazard.updated_at,
        created_by_username=row.created_by_username,
        claimed_by_username=row.claimed_by_username,
        completed_by_username=row.completed_by_username,
    )


def _view_or_404(db: Session, hazard_id: int) -> HazardResponse:
    row = get_hazard_view(db, hazard_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Hazard not found")
    return _enrich_hazard(row)


def _storage_failure(db: Session, message: str) -> HTTPException:
    db.rollback()
    logger.exception(message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _lifecycle_error(e: ValueError) -> HTTPException:
    if isinstance(e, HazardNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, HazardForbiddenError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=list[HazardResponse])
def list_all(db: Session = Depends(get_db)):
    """All hazards, newest first, with creator/claimer/completer usernames."""
    try:
        return [_enrich_hazard(row) for row in list_hazards(db)]
    except SQLAlchemyError:
        raise _storage_failure(db, "Failed to fetch hazards")


@router.get("/{hazard_id}", response_model=HazardResponse)
def get_one(hazard_id: int, db: Session = Depends(get_db)):
    try:
        return _view_or_404(db, hazard_id)
    except SQLAlchemyError:
        raise _storage_failure(db, "Failed to fetch hazard")


@router.post("", response_model=HazardResponse, status_code=status.HTTP_201_CREATED)
def create(data: HazardCreate, db: Session = Depends(get_db)):
    """Report a hazard. It always starts open."""
    try:
        hazard = create_hazard(db, data)
        return _view_or_404(db, hazard.id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError:
        raise _storage_failure(db, "Failed to create hazard")


@router.patch("/{hazard_id}/claim", response_model=HazardResponse)
def claim(hazard_id: int, data: HazardAction, db: Session = Depends(get_db)):
    """Claim an open hazard."""
    try:
        claim_hazard(db, hazard_id, data.user_id)
        return _view_or_404(db, hazard_id)
    except ValueError as e:
        raise _lifecycle_error(e)
    except SQLAlchemyError:
        raise _storage_failure(db, "Failed to claim hazard")


@router.patch("/{hazard_id}/complete", response_model=HazardResponse)
def complete(hazard_id: int, data: HazardAction, db: Session = Depends(get_db)):
    """Complete a hazard. A claimed hazard can only be completed by its claimer."""
    try:
        complete_hazard(db, hazard_id, data.user_id)
        return _view_or_404(db, hazard_id)
    except ValueError as e:
        raise _lifecycle_error(e)
    except SQLAlchemyError:
        raise _storage_failure(db, "Failed to complete hazard")


@router.delete("/{hazard_id}", response_model=MessageResponse)
def delete(hazard_id: int, db: Session = Depends(get_db)):
    try:
        delete_hazard(db, hazard_id)
    except HazardNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError:
        raise _storage_failure(db, "Failed to delete hazard")
    return MessageResponse(message="Hazard deleted successfully")
