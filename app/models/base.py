from datetime import datetime
from typing import Optional

from pydantic import ConfigDict
from sqlalchemy import func
from sqlalchemy.types import TIMESTAMP
from sqlmodel import Field, SQLModel

from app.utils.datetime import utc_now


class BaseModel(SQLModel):
    """
    Columns shared by every table:
    - created_at: insert time (UTC)
    - updated_at: last update time (UTC)
    """
    __abstract__ = True

    model_config = ConfigDict(from_attributes=True)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=TIMESTAMP(timezone=True),
        sa_column_kwargs={
            "nullable": False,
            "server_default": func.now(),
            "comment": "row creation time (UTC)",
        },
    )

    updated_at: Optional[datetime] = Field(
        default=None,
        sa_type=TIMESTAMP(timezone=True),
        sa_column_kwargs={
            "nullable": True,
            "onupdate": func.now(),
            "comment": "row update time (UTC)",
        },
    )
