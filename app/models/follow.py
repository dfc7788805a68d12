from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, UniqueConstraint
from sqlmodel import SQLModel, Field, Index

from app.models.user import utcnow
from app.schemas.enums import FollowingType


class Follow(SQLModel, table=True):
    """Directed follow edge from a user to a user, tag or article"""

    __table_args__ = (
        UniqueConstraint(
            "follower_id", "following_id", "following_type",
            name="uq_follow_edge"
        ),
        Index("ix_follow_follower_type", "follower_id", "following_type"),
        Index("ix_follow_following_type", "following_id", "following_type"),
    )

    # Auto-increment id doubles as creation order
    id: Optional[int] = Field(default=None, primary_key=True)
    follower_id: str = Field(max_length=64)
    following_id: str = Field(max_length=64)
    following_type: FollowingType = Field(default=FollowingType.USER)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
