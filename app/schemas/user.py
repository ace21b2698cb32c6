"""
Pydantic schemas for user signup, profile updates and login.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UserRequest(BaseModel):
    """Request schema for signup (POST /users) and profile update (PUT /users/{id})."""
    email: EmailStr
    password: str = Field(..., min_length=1, description="Plaintext password, stored only as a bcrypt hash")
    name: Optional[str] = None


class UserListQuery(BaseModel):
    """Query parameters accepted by GET /users. Accepted but not applied."""
    page: Optional[str] = None
    limit: Optional[str] = None


class LoginRequest(BaseModel):
    """Request schema for login. Email is normalized the same way as at signup."""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(BaseModel):
    """User profile response (no password hash)."""
    id: str
    email: str
    name: Optional[str] = None
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
