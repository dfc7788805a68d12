"""
Display-field enrichment for users returned by follow queries
"""

import hashlib
from datetime import datetime
from typing import Optional

from app.core.config import settings
from app.crud.user import generate_avatar_fallback
from app.schemas.follow import FollowUserRead


def build_thumbnail_url(
    profile_image_url: Optional[str],
    uploaded_at: Optional[datetime],
    email: Optional[str],
    size: int = None
) -> Optional[str]:
    """
    Resolve the thumbnail for a user:
    - uploaded profile image, versioned by upload time
    - otherwise the Gravatar image for the email address
    """
    if profile_image_url:
        if uploaded_at:
            return f"{profile_image_url}?v={int(uploaded_at.timestamp())}"
        return profile_image_url

    if email:
        digest = hashlib.md5(email.strip().lower().encode()).hexdigest()
        return f"{settings.GRAVATAR_BASE_URL}/{digest}?s={size or settings.THUMBNAIL_SIZE}&d=identicon"

    return None


def fill_user_thumbnail_url(user: FollowUserRead) -> FollowUserRead:
    """Fill thumbnail and avatar fallback fields in place; safe to repeat"""
    user.thumbnail_url = build_thumbnail_url(
        user.profile_image_url,
        user.profile_image_uploaded_at,
        user.email
    )
    user.avatar_text, user.avatar_color = generate_avatar_fallback(user)
    return user
