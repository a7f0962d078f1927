from typing import Optional

from sqlmodel import Field

from app.models.base import BaseModel


class Client(BaseModel, table=True):
    """
    A person coached by a dietitian.
    reference_code / telegram_chat_id link the client to the Telegram bot.
    """

    __tablename__ = "clients"

    client_id: Optional[int] = Field(
        default=None,
        primary_key=True,
        sa_column_kwargs={"autoincrement": True},
    )

    user_id: int = Field(foreign_key="users.user_id", nullable=False, index=True)

    name: str = Field(max_length=100, nullable=False)
    email: str = Field(max_length=255, nullable=False)
    phone: Optional[str] = Field(default=None, max_length=30)
    birth_date: Optional[str] = Field(default=None, max_length=10, description="YYYY-MM-DD")
    gender: Optional[str] = Field(default=None, max_length=10)

    height: Optional[float] = Field(default=None, description="cm")
    starting_weight: Optional[float] = Field(default=None, description="kg")
    target_weight: Optional[float] = Field(default=None, description="kg")

    activity_level: Optional[str] = Field(default=None, max_length=20)
    medical_history: Optional[str] = Field(default=None)
    dietary_restrictions: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    profile_picture: Optional[str] = Field(default=None, max_length=500)

    status: str = Field(default="active", max_length=20)

    telegram_chat_id: Optional[str] = Field(default=None, max_length=50)
    reference_code: Optional[str] = Field(
        default=None,
        max_length=6,
        sa_column_kwargs={"unique": True},
    )
