"""
Authentication models.

This module defines:
- Roles
- The stored User record
- Pydantic request/response schemas for the auth endpoints
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator

# bcrypt only consumes the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72
MAX_IDENTIFIER_LENGTH = 128


class Role(str, Enum):
    """Roles a user can hold."""
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class User:
    """User record as held by the credential store."""
    identifier: str
    password_digest: str = field(repr=False)
    role: Role = Role.USER
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _check_password(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class RegisterRequest(BaseModel):
    """Model for user registration."""
    identifier: str = Field(..., min_length=1, max_length=MAX_IDENTIFIER_LENGTH)
    password: str = Field(..., min_length=1)
    role: Role = Role.USER

    @field_validator("password")
    @classmethod
    def password_must_fit(cls, v):
        return _check_password(v)


class LoginRequest(BaseModel):
    """Model for user login."""
    identifier: str = Field(..., min_length=1, max_length=MAX_IDENTIFIER_LENGTH)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_must_fit(cls, v):
        return _check_password(v)


class LoginResponse(BaseModel):
    """Token returned by a successful login."""
    token: str
    token_type: str = "bearer"
    expires_at: int  # Unix timestamp


class UserOut(BaseModel):
    """Model for user information returned to clients."""
    identifier: str
    role: Role
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(identifier=user.identifier, role=user.role, created_at=user.created_at)
