from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import reject_none
from app.utils.datetime import ensure_utc

AppointmentType = Literal["online", "in-person"]


class AppointmentRequest(BaseModel):
    client_id: int
    date: datetime
    duration: int = Field(ge=5, description="Minutes, at least 5")
    status: str = "scheduled"
    notes: Optional[str] = None
    type: AppointmentType = "in-person"

    @field_validator("date")
    @classmethod
    def _to_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class AppointmentUpdateRequest(BaseModel):
    date: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=5)
    status: Optional[str] = None
    notes: Optional[str] = None
    type: Optional[AppointmentType] = None

    @field_validator("date")
    @classmethod
    def _to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v) if v else v

    @field_validator("date", "duration", "status", "type")
    @classmethod
    def _not_null(cls, v):
        return reject_none(v)


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    appointment_id: int
    client_id: int
    user_id: int
    date: datetime
    duration: int
    status: str
    notes: Optional[str] = None
    type: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
