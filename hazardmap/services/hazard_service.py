"""Hazard lifecycle service.

Claim and complete are single conditional UPDATE statements: the status
precondition is part of the WHERE clause, so two concurrent callers cannot
both pass the check. When no row is affected the hazard is re-read to tell
the caller why.
"""

from __future__ import annotations

import logging

from sqlalchemy import Row, Select, and_, desc, func, or_, select, update
from sqlalchemy.orm import Session, aliased

from hazardmap.core.config import settings
from hazardmap.core.hazard_policies import (
    CLAIMABLE_FROM,
    COMPLETABLE_FROM,
    STATUS_CLAIMED,
    STATUS_COMPLETED,
    STATUS_OPEN,
)
from hazardmap.models.hazard import Hazard
from hazardmap.models.user import User
from hazardmap.schemas.hazard import HazardCreate
from hazardmap.services.user_service import require_user

logger = logging.getLogger(__name__)


class HazardNotFoundError(ValueError):
    """Raised when a hazard id does not exist."""

    def __init__(self, message: str = "Hazard not found") -> None:
        super().__init__(message)


class HazardStateError(ValueError):
    """Raised when the hazard's status does not allow the transition."""


class HazardForbiddenError(ValueError):
    """Raised when the caller is not allowed to perform the transition."""


def _hazard_view_stmt() -> Select:
    creator = aliased(User)
    claimer = aliased(User)
    completer = aliased(User)
    return (
        select(
            Hazard,
            creator.username.label("created_by_username"),
            claimer.username.label("claimed_by_username"),
            completer.username.label("completed_by_username"),
        )
        .outerjoin(creator, Hazard.user_id == creator.id)
        .outerjoin(claimer, Hazard.claimed_by == claimer.id)
        .outerjoin(completer, Hazard.completed_by == completer.id)
    )


def list_hazards(db: Session) -> list[Row]:
    """All hazards with creator/claimer/completer usernames, newest first."""
    stmt = _hazard_view_stmt().order_by(desc(Hazard.created_at), desc(Hazard.id))
    return list(db.execute(stmt).all())


def get_hazard_view(db: Session, hazard_id: int) -> Row | None:
    """One hazard with usernames, or None."""
    stmt = _hazard_view_stmt().where(Hazard.id == hazard_id)
    return db.execute(stmt).one_or_none()


def _require_hazard(db: Session, hazard_id: int) -> Hazard:
    hazard = db.get(Hazard, hazard_id, populate_existing=True)
    if not hazard:
        raise HazardNotFoundError()
    return hazard


def create_hazard(db: Session, data: HazardCreate) -> Hazard:
    """Report a new hazard. Always starts open."""
    if data.user_id is not None:
        require_user(db, data.user_id)

    hazard = Hazard(
        user_id=data.user_id,
        lat=data.lat,
        lng=data.lng,
        description=data.description,
        status=STATUS_OPEN,
    )
    db.add(hazard)
    db.commit()
    db.refresh(hazard)
    logger.info("Hazard created id=%s by user=%s at (%s, %s)", hazard.id, hazard.user_id, hazard.lat, hazard.lng)
    return hazard


def claim_hazard(db: Session, hazard_id: int, user_id: int) -> Hazard:
    """Reserve an open hazard for user_id."""
    hazard = _require_hazard(db, hazard_id)
    if hazard.status != CLAIMABLE_FROM:
        raise HazardStateError("Hazard is not available to claim")
    require_user(db, user_id)

    result = db.execute(
        update(Hazard)
        .where(Hazard.id == hazard_id, Hazard.status == CLAIMABLE_FROM)
        .values(status=STATUS_CLAIMED, claimed_by=user_id, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        _require_hazard(db, hazard_id)
        raise HazardStateError("Hazard is not available to claim")

    db.commit()
    logger.info("Hazard claimed id=%s by user=%s", hazard_id, user_id)
    return _require_hazard(db, hazard_id)


def _check_completable(hazard: Hazard, user_id: int, allow_direct: bool) -> None:
    if hazard.status == STATUS_COMPLETED:
        raise HazardStateError("Hazard is already completed")
    if hazard.status == STATUS_CLAIMED and hazard.claimed_by != user_id:
        raise HazardForbiddenError("You can only complete hazards you claimed")
    if hazard.status == STATUS_OPEN and not allow_direct:
        raise HazardStateError("Hazard must be claimed before it can be completed")


def complete_hazard(
    db: Session,
    hazard_id: int,
    user_id: int,
    allow_direct: bool | None = None,
) -> Hazard:
    """Mark a hazard completed.

    A claimed hazard can only be completed by its claimer. An open hazard can
    be completed by anyone unless direct completion is switched off.
    """
    if allow_direct is None:
        allow_direct = settings.allow_direct_complete

    _check_completable(_require_hazard(db, hazard_id), user_id, allow_direct)
    require_user(db, user_id)

    allowed = and_(Hazard.status == COMPLETABLE_FROM, Hazard.claimed_by == user_id)
    if allow_direct:
        allowed = or_(allowed, Hazard.status == STATUS_OPEN)

    result = db.execute(
        update(Hazard)
        .where(Hazard.id == hazard_id, allowed)
        .values(status=STATUS_COMPLETED, completed_by=user_id, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        _check_completable(_require_hazard(db, hazard_id), user_id, allow_direct)
        raise HazardStateError("Hazard changed while it was being completed")

    db.commit()
    logger.info("Hazard completed id=%s by user=%s", hazard_id, user_id)
    return _require_hazard(db, hazard_id)


def delete_hazard(db: Session, hazard_id: int) -> None:
    """Remove a hazard row."""
    hazard = _require_hazard(db, hazard_id)
    db.delete(hazard)
    db.commit()
    logger.info("Hazard deleted id=%s", hazard_id)
