"""
User store reads used by the follow service
"""
import hashlib
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import StorageError
from app.models.user import User


async def get_user_by_id(db: AsyncSession, user_id: str) -> Optional[User]:
    """Get a user by primary key, None if it does not exist"""
    try:
        return await db.get(User, user_id)
    except SQLAlchemyError as e:
        raise StorageError("get_user_by_id", str(e)) from e


def generate_avatar_fallback(user) -> tuple[str, str]:
    name = user.full_name or user.username
    initials = "".join([n[0] for n in name.split() if n][:2]).upper()

    # Deterministic color based on user ID
    hash_digest = hashlib.md5(str(user.id).encode()).hexdigest()
    color_palette = [
        "#F44336", "#E91E63", "#9C27B0", "#673AB7",
        "#3F51B5", "#2196F3", "#03A9F4", "#009688",
        "#4CAF50", "#FF9800", "#795548"
    ]
    color = color_palette[int(hash_digest, 16) % len(color_palette)]

    return initials, color
