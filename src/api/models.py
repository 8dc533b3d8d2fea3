"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field

from domain.model.user import User


class SignUpRequest(BaseModel):
    """Request model for user registration."""
    email: str
    password: str
    first_name: Optional[str] = Field(None, validation_alias=AliasChoices("first_name", "firstName"))
    last_name: Optional[str] = Field(None, validation_alias=AliasChoices("last_name", "lastName"))


class SignInRequest(BaseModel):
    """Request model for user login."""
    email: str
    password: str


class UpdateUserRequest(BaseModel):
    """Request model for a partial profile update. Password is not updatable here."""
    email: Optional[str] = None
    first_name: Optional[str] = Field(None, validation_alias=AliasChoices("first_name", "firstName"))
    last_name: Optional[str] = Field(None, validation_alias=AliasChoices("last_name", "lastName"))
    role: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    password: str = Field(..., description="New password")


class UserResponse(BaseModel):
    """Response model for a user. Never carries the password hash."""
    id: str = Field(..., description="User ID")
    email: str
    first_name: str = ""
    last_name: str = ""
    role: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(BaseModel):
    """Response model for authentication."""
    user: UserResponse
    token: str


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
