"""Hazard schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hazardmap.core.hazard_policies import LAT_MAX, LAT_MIN, LNG_MAX, LNG_MIN


class HazardCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(ge=LAT_MIN, le=LAT_MAX)
    lng: float = Field(ge=LNG_MIN, le=LNG_MAX)
    description: str
    user_id: int | None = Field(default=None, alias="userId")

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("description must not be empty")
        return v


class HazardAction(BaseModel):
    """Body of claim/complete calls."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")


class HazardResponse(BaseModel):
    id: int
    user_id: int | None
    lat: float
    lng: float
    description: str
    status: str
    claimed_by: int | None
    completed_by: int | None
    created_at: datetime
    updated_at: datetime
    created_by_username: str | None = None
    claimed_by_username: str | None = None
    completed_by_username: str | None = None

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
