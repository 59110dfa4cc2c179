"""
Pydantic schemas for user authentication and registration.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
        description="Password must be 5-72 characters"
    )
    first_name: str = Field(..., min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=30, alias="lastName")
    email: EmailStr

    class Config:
        populate_by_name = True
        extra = "forbid"


class UserCreateRequest(UserRegisterRequest):
    """Admin-only user creation; may grant admin rights."""
    is_admin: bool = Field(False, alias="isAdmin")


class UserLoginRequest(BaseModel):
    """Request schema for obtaining a token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)

    class Config:
        extra = "forbid"


class UserUpdateRequest(BaseModel):
    """Partial user update. Admin status is not editable here."""
    password: str = Field(None, min_length=5, max_length=72)
    first_name: str = Field(None, min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(None, min_length=1, max_length=30, alias="lastName")
    email: EmailStr = None

    class Config:
        populate_by_name = True
        extra = "forbid"


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(BaseModel):
    """User profile response (no password)."""
    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    is_admin: bool = Field(False, alias="isAdmin")

    class Config:
        populate_by_name = True
