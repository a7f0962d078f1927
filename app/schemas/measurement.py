from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import reject_none
from app.utils.datetime import ensure_utc


class MeasurementRequest(BaseModel):
    date: Optional[datetime] = Field(default=None, description="Defaults to now")
    weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    neck: Optional[float] = Field(default=None, ge=0)
    arm: Optional[float] = Field(default=None, ge=0)
    chest: Optional[float] = Field(default=None, ge=0)
    waist: Optional[float] = Field(default=None, ge=0)
    abdomen: Optional[float] = Field(default=None, ge=0)
    hip: Optional[float] = Field(default=None, ge=0)
    thigh: Optional[float] = Field(default=None, ge=0)
    calf: Optional[float] = Field(default=None, ge=0)
    body_fat_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None
    images: List[str] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def _to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v) if v else v


class MeasurementUpdateRequest(BaseModel):
    date: Optional[datetime] = None
    weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    neck: Optional[float] = Field(default=None, ge=0)
    arm: Optional[float] = Field(default=None, ge=0)
    chest: Optional[float] = Field(default=None, ge=0)
    waist: Optional[float] = Field(default=None, ge=0)
    abdomen: Optional[float] = Field(default=None, ge=0)
    hip: Optional[float] = Field(default=None, ge=0)
    thigh: Optional[float] = Field(default=None, ge=0)
    calf: Optional[float] = Field(default=None, ge=0)
    body_fat_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None
    images: Optional[List[str]] = None

    @field_validator("date")
    @classmethod
    def _to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v) if v else v

    @field_validator("date", "images")
    @classmethod
    def _not_null(cls, v):
        return reject_none(v)


class MeasurementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    measurement_id: int
    client_id: int
    date: datetime
    weight: Optional[float] = None
    height: Optional[float] = None
    neck: Optional[float] = None
    arm: Optional[float] = None
    chest: Optional[float] = None
    waist: Optional[float] = None
    abdomen: Optional[float] = None
    hip: Optional[float] = None
    thigh: Optional[float] = None
    calf: Optional[float] = None
    body_fat_percentage: Optional[float] = None
    notes: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
