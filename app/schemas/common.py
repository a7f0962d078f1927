from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def reject_none(value: Any) -> Any:
    """
    Partial updates may leave a field out, but must not clear a required column.
    """
    if value is None:
        raise ValueError("boş bırakılamaz")
    return value


class ErrorResponse(BaseModel):
    """
    Error body returned by every failing endpoint
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"message": "Client not found"}
        }
    )

    message: str = Field(..., description="Human readable error message")
    detail: Optional[list] = Field(None, description="Validation error details")


class MessageResponse(BaseModel):
    message: str
