from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.error_codes import PAGE_SIZE_EXCEEDED
from app.core.exceptions import CustomHTTPException
from app.db.database import get_db
from app.schemas.enums import FollowingType
from app.schemas.follow import (
    FollowEdgePage,
    FollowRead,
    FollowStatus,
    FollowUserPage,
)
from app.services.follow_query import FollowQueryService, page_count

router = APIRouter(prefix="/users", tags=["follow"])


def get_follow_query_service(db: AsyncSession = Depends(get_db)) -> FollowQueryService:
    return FollowQueryService(db)


def validate_page_size(size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1)) -> int:
    """Reject page sizes above the configured maximum"""
    if size > settings.MAX_PAGE_SIZE:
        raise CustomHTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Page size cannot exceed {settings.MAX_PAGE_SIZE}",
            error_code=PAGE_SIZE_EXCEEDED
        )
    return size


@router.get("/{user_id}/following", response_model=FollowUserPage)
async def get_following(
    user_id: str,
    page: int = Query(1, ge=1),
    size: int = Depends(validate_page_size),
    service: FollowQueryService = Depends(get_follow_query_service)
):
    users = await service.get_following_users(user_id, page, size)
    total = await service.count_following(user_id)
    return FollowUserPage(
        users=users,
        page_num=page,
        page_size=size,
        total=total,
        page_count=page_count(total, size)
    )


@router.get("/{user_id}/followers", response_model=FollowUserPage)
async def get_followers(
    user_id: str,
    page: int = Query(1, ge=1),
    size: int = Depends(validate_page_size),
    service: FollowQueryService = Depends(get_follow_query_service)
):
    users = await service.get_follower_users(user_id, page, size)
    total = await service.count_followers(user_id)
    return FollowUserPage(
        users=users,
        page_num=page,
        page_size=size,
        total=total,
        page_count=page_count(total, size)
    )


@router.get("/{user_id}/followings", response_model=FollowEdgePage)
async def get_followings(
    user_id: str,
    following_type: FollowingType = Query(FollowingType.TAG, alias="type"),
    page: int = Query(1, ge=1),
    size: int = Depends(validate_page_size),
    service: FollowQueryService = Depends(get_follow_query_service)
):
    follows = await service.get_followings(user_id, following_type, page, size)
    total = await service.count_following(user_id, following_type)
    return FollowEdgePage(
        follows=[FollowRead.model_validate(follow) for follow in follows],
        page_num=page,
        page_size=size,
        total=total,
        page_count=page_count(total, size)
    )


@router.get("/{follower_id}/follows/{following_id}", response_model=FollowStatus)
async def check_following(
    follower_id: str,
    following_id: str,
    following_type: FollowingType = Query(FollowingType.USER, alias="type"),
    service: FollowQueryService = Depends(get_follow_query_service)
):
    return FollowStatus(
        follower_id=follower_id,
        following_id=following_id,
        following_type=following_type,
        is_following=await service.is_following(follower_id, following_id, following_type)
    )
