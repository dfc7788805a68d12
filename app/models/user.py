import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserBase(SQLModel):
    """Base fields shared across all user schemas"""
    username: str = Field(..., min_length=2, max_length=50)
    full_name: str = Field(..., min_length=2, max_length=100)
    email: Optional[str] = Field(None)
    bio: Optional[str] = Field(
        None,
        max_length=500,
        description="Short profile introduction"
    )


class User(UserBase, table=True):
    """Forum user as seen by the follow service; owned by the user store"""
    id: str = Field(default_factory=generate_uuid, primary_key=True)
    username: str = Field(..., min_length=2, max_length=50, unique=True, index=True)

    profile_image_url: Optional[str] = Field(default=None, index=False)
    profile_image_uploaded_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    is_verified: bool = Field(default=False)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
