"""
API schemas

Request/response bodies of the REST API.
"""

from .common import ErrorResponse, MessageResponse
from .user_schema import (AuthResponse, LoginRequest, PasswordChangeRequest,
                          ProfileUpdateRequest, RegisterRequest, UserResponse)

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "PasswordChangeRequest",
    "UserResponse",
    "AuthResponse",
]
