"""
Follow edge store: filtered, paginated reads over follow edges plus the
minimal create/remove helpers used to maintain them.
Every database failure surfaces as StorageError.
"""
import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import StorageError
from app.models.follow import Follow
from app.schemas.enums import FollowingType
from app.schemas.follow import FollowFilter, FollowQuery

logger = logging.getLogger(__name__)


def _where(statement, follow_filter: FollowFilter):
    if follow_filter.follower_id is not None:
        statement = statement.where(Follow.follower_id == follow_filter.follower_id)
    if follow_filter.following_id is not None:
        statement = statement.where(Follow.following_id == follow_filter.following_id)
    if follow_filter.following_type is not None:
        statement = statement.where(Follow.following_type == follow_filter.following_type)
    return statement


async def query_follows(db: AsyncSession, query: FollowQuery) -> List[Follow]:
    """Get one page of edges matching the query's filters, sorted by id"""
    order = Follow.id.desc() if query.newest_first else Follow.id.asc()
    statement = (
        _where(select(Follow), query.filter)
        .order_by(order)
        .offset(query.offset)
        .limit(query.page_size)
    )
    try:
        result = await db.exec(statement)
        return list(result.all())
    except SQLAlchemyError as e:
        raise StorageError("query_follows", str(e)) from e


async def count_follows(db: AsyncSession, follow_filter: FollowFilter) -> int:
    """Count edges matching the filter"""
    statement = _where(select(func.count()).select_from(Follow), follow_filter)
    try:
        result = await db.exec(statement)
        return result.one()
    except SQLAlchemyError as e:
        raise StorageError("count_follows", str(e)) from e


async def follow_exists(
    db: AsyncSession,
    follower_id: str,
    following_id: str,
    following_type: FollowingType = FollowingType.USER
) -> bool:
    """Check if the follower has an edge to the following entity"""
    statement = select(Follow.id).where(
        Follow.follower_id == follower_id,
        Follow.following_id == following_id,
        Follow.following_type == following_type
    ).limit(1)
    try:
        result = await db.exec(statement)
        return result.first() is not None
    except SQLAlchemyError as e:
        raise StorageError("follow_exists", str(e)) from e


async def _get_follow(
    db: AsyncSession,
    follower_id: str,
    following_id: str,
    following_type: FollowingType
):
    result = await db.exec(
        select(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
            Follow.following_type == following_type
        )
    )
    return result.first()


async def follow_entity(
    db: AsyncSession,
    follower_id: str,
    following_id: str,
    following_type: FollowingType = FollowingType.USER
) -> Follow:
    """Create a follow edge, or return the existing one for the same triple"""
    try:
        existing = await _get_follow(db, follower_id, following_id, following_type)
        if existing:
            return existing

        follow_entry = Follow(
            follower_id=follower_id,
            following_id=following_id,
            following_type=following_type
        )
        db.add(follow_entry)
        await db.commit()
        await db.refresh(follow_entry)
        return follow_entry
    except IntegrityError:
        # Lost a race against a concurrent follow of the same triple
        await db.rollback()
        logger.warning(
            f"Concurrent follow [follower_id={follower_id}, following_id={following_id}, "
            f"following_type={following_type.value}] hit the unique constraint"
        )
        try:
            existing = await _get_follow(db, follower_id, following_id, following_type)
        except SQLAlchemyError as e:
            raise StorageError("follow_entity", str(e)) from e
        if existing is None:
            raise StorageError("follow_entity", "edge vanished after unique conflict")
        return existing
    except SQLAlchemyError as e:
        await db.rollback()
        raise StorageError("follow_entity", str(e)) from e


async def unfollow_entity(
    db: AsyncSession,
    follower_id: str,
    following_id: str,
    following_type: FollowingType = FollowingType.USER
) -> bool:
    """Remove a follow edge; returns False when there was none"""
    try:
        follow_entry = await _get_follow(db, follower_id, following_id, following_type)
        if not follow_entry:
            return False

        await db.delete(follow_entry)
        await db.commit()
        return True
    except SQLAlchemyError as e:
        await db.rollback()
        raise StorageError("unfollow_entity", str(e)) from e
