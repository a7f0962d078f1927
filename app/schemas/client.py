# app/schemas/client.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.common import reject_none

Gender = Literal["male", "female"]
ClientStatus = Literal["active", "inactive"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]


class ClientCreateRequest(BaseModel):
    name: str = Field(min_length=3, max_length=100, description="Full name")
    email: EmailStr
    phone: Optional[str] = None
    birth_date: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    gender: Optional[Gender] = None
    height: Optional[float] = Field(default=None, gt=0)
    starting_weight: Optional[float] = Field(default=None, gt=0)
    target_weight: Optional[float] = Field(default=None, gt=0)
    activity_level: Optional[ActivityLevel] = None
    medical_history: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    notes: Optional[str] = None
    profile_picture: Optional[str] = None
    status: ClientStatus = "active"


class ClientUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    birth_date: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    gender: Optional[Gender] = None
    height: Optional[float] = Field(default=None, gt=0)
    starting_weight: Optional[float] = Field(default=None, gt=0)
    target_weight: Optional[float] = Field(default=None, gt=0)
    activity_level: Optional[ActivityLevel] = None
    medical_history: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    notes: Optional[str] = None
    profile_picture: Optional[str] = None
    status: Optional[ClientStatus] = None

    @field_validator("name", "email", "status")
    @classmethod
    def _not_null(cls, v):
        return reject_none(v)


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    client_id: int
    user_id: int
    name: str
    email: str
    phone: Optional[str] = None
    birth_date: Optional[str] = None
    gender: Optional[str] = None
    height: Optional[float] = None
    starting_weight: Optional[float] = None
    target_weight: Optional[float] = None
    activity_level: Optional[str] = None
    medical_history: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    notes: Optional[str] = None
    profile_picture: Optional[str] = None
    status: str
    telegram_chat_id: Optional[str] = None
    reference_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ClientSummaryResponse(BaseModel):
    """
    Derived body metrics of a client
    """
    client_id: int
    age: Optional[int] = None
    current_weight: Optional[float] = Field(None, description="Latest measured weight, else starting weight")
    target_weight: Optional[float] = None
    weight_change: Optional[float] = Field(None, description="current - starting (kg)")
    progress_percentage: Optional[float] = Field(None, description="0-100 toward the target weight")
    bmi: Optional[float] = None
    bmi_category: Optional[str] = None
    daily_calories: Optional[int] = Field(None, description="Mifflin-St Jeor maintenance estimate")
    body_fat_estimate: Optional[float] = None
