"""Hazard model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from hazardmap.core.hazard_policies import HAZARD_STATUSES, STATUS_OPEN
from hazardmap.db.base import Base

_STATUS_LIST = ", ".join(f"'{s}'" for s in HAZARD_STATUSES)


class Hazard(Base):
    """Environmental hazard pinned at a map coordinate."""

    __tablename__ = "hazards"
    __table_args__ = (
        CheckConstraint(f"status IN ({_STATUS_LIST})", name="status"),
        Index("idx_hazards_location", "lat", "lng"),
        Index("idx_hazards_status", "status"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    lat: Mapped[float] = mapped_column(Numeric(10, 8, asdecimal=False), nullable=False)
    lng: Mapped[float] = mapped_column(Numeric(11, 8, asdecimal=False), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=STATUS_OPEN, server_default=STATUS_OPEN
    )  # open | claimed | completed
    claimed_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    completed_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
