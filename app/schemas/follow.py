from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.enums import FollowingType


class FollowFilter(BaseModel):
    """AND of property filters over follow edges; unset properties are not filtered"""
    follower_id: Optional[str] = None
    following_id: Optional[str] = None
    following_type: Optional[FollowingType] = None


class FollowQuery(BaseModel):
    """Filtered, id-sorted, 1-based page of follow edges"""
    filter: FollowFilter
    page_num: int = Field(1, ge=1)
    page_size: int = Field(20, ge=1)
    newest_first: bool = True

    @property
    def offset(self) -> int:
        return (self.page_num - 1) * self.page_size


class FollowUserRead(BaseModel):
    """User hydrated from a follow edge, with display fields filled in.

    Stored users are read back as-is; input constraints from UserBase are not re-checked.
    """
    id: str
    username: str
    full_name: str
    email: Optional[str] = None
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    profile_image_uploaded_at: Optional[datetime] = None
    is_verified: bool = False
    thumbnail_url: Optional[str] = None
    avatar_text: Optional[str] = Field(default=None, description="Fallback initials or avatar text")
    avatar_color: Optional[str] = Field(default=None, description="Fallback avatar color hex")

    class Config:
        from_attributes = True


class FollowRead(BaseModel):
    id: int
    follower_id: str
    following_id: str
    following_type: FollowingType
    created_at: datetime

    class Config:
        from_attributes = True
        use_enum_values = True


class FollowUserPage(BaseModel):
    users: List[FollowUserRead]
    page_num: int
    page_size: int
    total: int
    page_count: int


class FollowEdgePage(BaseModel):
    follows: List[FollowRead]
    page_num: int
    page_size: int
    total: int
    page_count: int


class FollowStatus(BaseModel):
    follower_id: str
    following_id: str
    following_type: FollowingType
    is_following: bool
