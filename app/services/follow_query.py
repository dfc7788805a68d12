"""
Follow query service.

Resolves follow edges into paginated, hydrated user lists. This is a
best-effort read path: storage failures are logged and degrade to an empty
list, zero, or False so a page render never fails because of it.
"""

import logging
from typing import Callable, List, TypeVar

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.result import Result, capture
from app.crud.follow import count_follows, follow_exists, query_follows
from app.crud.user import get_user_by_id
from app.models.follow import Follow
from app.schemas.enums import FollowingType
from app.schemas.follow import FollowFilter, FollowQuery, FollowUserRead
from app.utils.filler import fill_user_thumbnail_url

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FollowQueryService:
    def __init__(
        self,
        db: AsyncSession,
        filler: Callable[[FollowUserRead], FollowUserRead] = fill_user_thumbnail_url
    ):
        self.db = db
        self.filler = filler

    def _recover(self, result: Result[T], default: T, context: str) -> T:
        if not result.ok:
            logger.error(f"{context} failed: {result.error}", exc_info=result.error)
        return result.unwrap_or(default)

    async def is_following(
        self,
        follower_id: str,
        following_id: str,
        following_type: FollowingType = FollowingType.USER
    ) -> bool:
        """Check if a follow edge exists; False when it cannot be determined"""
        result = await capture(follow_exists(self.db, follower_id, following_id, following_type))
        return self._recover(
            result, False,
            f"Determines following [follower_id={follower_id}, following_id={following_id}, "
            f"following_type={following_type.value}]"
        )

    async def get_following_users(self, follower_id: str, page_num: int, page_size: int) -> List[FollowUserRead]:
        """Users followed by `follower_id`, most recently followed first"""
        if not self._valid_page(page_num, page_size):
            return []
        query = self._page(FollowFilter(follower_id=follower_id, following_type=FollowingType.USER), page_num, page_size)
        result = await capture(self._hydrate(query, "following_id"))
        return self._recover(result, [], f"Gets following users of follower [id={follower_id}]")

    async def get_follower_users(self, following_id: str, page_num: int, page_size: int) -> List[FollowUserRead]:
        """Users following `following_id`, most recent follower first"""
        if not self._valid_page(page_num, page_size):
            return []
        query = self._page(FollowFilter(following_id=following_id, following_type=FollowingType.USER), page_num, page_size)
        result = await capture(self._hydrate(query, "follower_id"))
        return self._recover(result, [], f"Gets follower users of following user [id={following_id}]")

    async def get_followings(
        self,
        follower_id: str,
        following_type: FollowingType,
        page_num: int,
        page_size: int
    ) -> List[Follow]:
        """Raw edges from `follower_id` to entities of any type, e.g. followed tags"""
        if not self._valid_page(page_num, page_size):
            return []
        query = self._page(FollowFilter(follower_id=follower_id, following_type=following_type), page_num, page_size)
        result = await capture(query_follows(self.db, query))
        return self._recover(
            result, [],
            f"Gets followings of follower [id={follower_id}, following_type={following_type.value}]"
        )

    async def count_following(self, follower_id: str, following_type: FollowingType = FollowingType.USER) -> int:
        result = await capture(count_follows(
            self.db, FollowFilter(follower_id=follower_id, following_type=following_type)
        ))
        return self._recover(result, 0, f"Counts followings of follower [id={follower_id}]")

    async def count_followers(self, following_id: str, following_type: FollowingType = FollowingType.USER) -> int:
        result = await capture(count_follows(
            self.db, FollowFilter(following_id=following_id, following_type=following_type)
        ))
        return self._recover(result, 0, f"Counts followers of following [id={following_id}]")

    @staticmethod
    def _valid_page(page_num: int, page_size: int) -> bool:
        if page_num < 1 or page_size < 1:
            logger.warning(f"Ignoring invalid page [page_num={page_num}, page_size={page_size}]")
            return False
        return True

    @staticmethod
    def _page(follow_filter: FollowFilter, page_num: int, page_size: int) -> FollowQuery:
        return FollowQuery(filter=follow_filter, page_num=page_num, page_size=page_size, newest_first=True)

    async def _hydrate(self, query: FollowQuery, user_id_field: str) -> List[FollowUserRead]:
        """Resolve the user on `user_id_field` of each edge, skipping users that no longer exist"""
        users: List[FollowUserRead] = []
        for follow in await query_follows(self.db, query):
            user_id: str = getattr(follow, user_id_field)
            user = await get_user_by_id(self.db, user_id)
            if user is None:
                logger.warning(f"Not found user [id={user_id}]")
                continue

            users.append(self.filler(FollowUserRead.model_validate(user, from_attributes=True)))
        return users


def page_count(total: int, page_size: int) -> int:
    """Number of pages needed for `total` records"""
    if page_size < 1:
        return 0
    return (total + page_size - 1) // page_size
