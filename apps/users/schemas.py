"""
Pydantic schemas for the Users API.

Length rules for username/password are checked by the service so that
registration reports a single, stable error message.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    username: str
    name: Optional[str] = Field(None, max_length=200)
    password: str


class BlogSummary(BaseModel):
    """Minimal post projection embedded in user responses."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: Optional[str] = None
    url: str


class UserResponse(BaseModel):
    """Public view of a user. The password hash is never included."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: Optional[str] = None
    blogs: list[BlogSummary] = Field(default_factory=list)


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    token: str
    username: str
    name: Optional[str] = None
