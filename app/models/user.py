from typing import Optional

from sqlmodel import Field

from app.models.base import BaseModel
from app.utils.security import get_password_hash


class User(BaseModel, table=True):
    """
    A dietitian account.
    - authenticates with a JWT bearer token
    - password stored as a bcrypt hash
    """

    __tablename__ = "users"

    user_id: Optional[int] = Field(
        default=None,
        primary_key=True,
        sa_column_kwargs={"autoincrement": True}
    )

    name: str = Field(max_length=100, nullable=False)

    email: str = Field(
        max_length=255,
        nullable=False,
        sa_column_kwargs={"unique": True}
    )

    password_hash: str = Field(max_length=255, nullable=False)

    profile_picture: Optional[str] = Field(default=None, max_length=500)
    bio: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None, max_length=30)

    telegram_token: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Bot token saved when the Telegram bot is started"
    )

    @classmethod
    def hash_password(cls, password: str) -> str:
        return get_password_hash(password)

    def __repr__(self) -> str:
        return f"<User(id={self.user_id}, name='{self.name}', email='{self.email}')>"
