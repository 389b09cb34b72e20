"""
Pydantic schemas for user registration, login and profile responses.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, UUID4, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime

from jobportal.models.user import UserRole


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(
        ...,
        min_length=6,
        max_length=72,  # bcrypt limit
        description="Password must be 6-72 characters"
    )

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserLoginRequest(BaseModel):
    """Request schema for user login."""
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserResponse(BaseModel):
    """User profile response (no password hash)."""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: UUID4
    name: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Token issued by register/login, along with the account it belongs to."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    token: str
    token_type: str = "bearer"
    user: UserResponse
