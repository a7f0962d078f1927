from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.common import reject_none


class RegisterRequest(BaseModel):
    """
    Sign-up request
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ayşe Yılmaz",
                "email": "ayse@example.com",
                "password": "secret123"
            }
        }
    )

    name: str = Field(..., min_length=2, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="Login e-mail")
    password: str = Field(..., min_length=6, max_length=100, description="Password (min 6 characters)")
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="Login e-mail")
    password: str = Field(..., min_length=1, description="Password")


class ProfileUpdateRequest(BaseModel):
    """
    Profile update; only the fields that are sent are changed
    """
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name", "email")
    @classmethod
    def _not_null(cls, v):
        return reject_none(v)


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=100)


class UserResponse(BaseModel):
    """
    User as returned by the API; never carries the password hash
    """
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    name: str
    email: str
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    user: UserResponse
    token: str
