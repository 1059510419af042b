"""
User account models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserProfileUpdate(BaseModel):
    """Create or update the caller's profile."""

    email: Optional[str] = Field(None, max_length=255)
    given_name: Optional[str] = Field(None, max_length=100)
    family_name: Optional[str] = Field(None, max_length=100)
    image: Optional[str] = Field(None, max_length=500)


class UserAccount(BaseModel):
    """User account stored in the database."""

    id: str
    email: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
