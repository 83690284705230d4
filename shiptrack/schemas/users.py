"""Account request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shiptrack.domain.roles import UserRole


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignupRequest(CamelModel):
    """Request payload for the signup endpoint."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=256)
    role: UserRole
    avatar: str | None = None


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=256)


class ChangePasswordRequest(CamelModel):
    old_password: str = Field(..., min_length=1, max_length=256)
    new_password: str = Field(..., min_length=1, max_length=256)


class UserResponse(CamelModel):
    """Public account fields; the password hash is never serialized."""

    id: str
    name: str
    email: str
    role: UserRole
    avatar: str | None = None


class MessageResponse(BaseModel):
    message: str
