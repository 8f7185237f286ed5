"""
Pydantic schemas for the Blog API.

Request bodies are validated here before anything reaches the store.
Responses expose ``id`` and the owner projection, never internal fields.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class BlogCreate(BaseModel):
    """Schema for creating a blog post. ``likes`` defaults to 0."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=300)
    author: Optional[str] = Field(None, max_length=200)
    url: str = Field(..., min_length=1, max_length=500)
    likes: Optional[int] = Field(None, ge=0)


class BlogUpdate(BaseModel):
    """Schema for updating a blog post. All fields optional."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=300)
    author: Optional[str] = Field(None, max_length=200)
    url: Optional[str] = Field(None, min_length=1, max_length=500)
    likes: Optional[int] = Field(None, ge=0)


class OwnerSummary(BaseModel):
    """Minimal owner projection embedded in blog responses."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: Optional[str] = None


class BlogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: Optional[str] = None
    url: str
    likes: int
    user: Optional[OwnerSummary] = None
