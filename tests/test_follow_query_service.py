import logging

import pytest
from unittest.mock import AsyncMock, patch

from app.core.exceptions import StorageError
from app.schemas.enums import FollowingType
from app.services.follow_query import FollowQueryService, page_count


@pytest.mark.asyncio
async def test_following_users_skips_deleted_user(db_session, make_user, make_follow):
    u1 = await make_user("user1")
    u2 = await make_user("user2")
    u3 = await make_user("user3")
    await make_follow(u1.id, u2.id, id=5)
    await make_follow(u1.id, u3.id, id=7)

    await db_session.delete(u3)
    await db_session.commit()

    users = await FollowQueryService(db_session).get_following_users(u1.id, 1, 10)

    assert [u.id for u in users] == [u2.id]


@pytest.mark.asyncio
async def test_following_users_newest_first_and_paged(db_session, make_user, make_follow):
    owner = await make_user("owner")
    followed = []
    for i in range(5):
        user = await make_user(f"followed{i}")
        await make_follow(owner.id, user.id)
        followed.append(user.id)

    service = FollowQueryService(db_session)
    page_1 = await service.get_following_users(owner.id, 1, 2)
    page_2 = await service.get_following_users(owner.id, 2, 2)

    newest_first = list(reversed(followed))
    assert [u.id for u in page_1] == newest_first[0:2]
    assert [u.id for u in page_2] == newest_first[2:4]


@pytest.mark.asyncio
async def test_following_users_ignores_other_types_and_directions(db_session, make_user, make_follow):
    alice = await make_user("alice")
    bob = await make_user("bob")
    carol = await make_user("carol")
    await make_follow(alice.id, bob.id)
    await make_follow(carol.id, alice.id)
    await make_follow(alice.id, carol.id, FollowingType.ARTICLE)

    users = await FollowQueryService(db_session).get_following_users(alice.id, 1, 10)

    assert [u.username for u in users] == ["bob"]


@pytest.mark.asyncio
async def test_follower_users_mirror_following_users(db_session, make_user, make_follow):
    alice = await make_user("alice")
    bob = await make_user("bob")
    carol = await make_user("carol")
    await make_follow(alice.id, bob.id)
    await make_follow(carol.id, bob.id)

    service = FollowQueryService(db_session)
    followers_of_bob = await service.get_follower_users(bob.id, 1, 10)

    assert [u.username for u in followers_of_bob] == ["carol", "alice"]
    for follower in followers_of_bob:
        following = await service.get_following_users(follower.id, 1, 10)
        assert [u.id for u in following] == [bob.id]


@pytest.mark.asyncio
async def test_users_are_annotated_with_thumbnail(db_session, make_user, make_follow):
    alice = await make_user("alice")
    bob = await make_user("bob", full_name="Bob Builder", profile_image_url="https://cdn.example.com/bob.png")
    await make_follow(alice.id, bob.id)

    users = await FollowQueryService(db_session).get_following_users(alice.id, 1, 10)

    assert users[0].thumbnail_url == "https://cdn.example.com/bob.png"
    assert users[0].avatar_text == "BB"


@pytest.mark.asyncio
async def test_custom_filler_is_applied(db_session, make_user, make_follow):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await make_follow(bob.id, alice.id)

    def filler(user):
        user.thumbnail_url = f"thumb://{user.username}"
        return user

    users = await FollowQueryService(db_session, filler=filler).get_follower_users(alice.id, 1, 10)

    assert users[0].thumbnail_url == "thumb://bob"


@pytest.mark.asyncio
async def test_is_following(db_session, make_follow):
    await make_follow("u1", "u2")
    await make_follow("u1", "python", FollowingType.TAG)
    service = FollowQueryService(db_session)

    assert await service.is_following("u1", "u2") is True
    assert await service.is_following("u2", "u1") is False
    assert await service.is_following("u1", "python") is False
    assert await service.is_following("u1", "python", FollowingType.TAG) is True


@pytest.mark.asyncio
async def test_is_following_storage_failure_returns_false(db_session, caplog):
    with patch(
        "app.services.follow_query.follow_exists",
        new=AsyncMock(side_effect=StorageError("follow_exists", "connection reset"))
    ):
        with caplog.at_level(logging.ERROR, logger="app.services.follow_query"):
            result = await FollowQueryService(db_session).is_following("u1", "u2")

    assert result is False
    assert "follower_id=u1" in caplog.text
    assert "following_id=u2" in caplog.text


@pytest.mark.asyncio
async def test_list_storage_failure_returns_empty(db_session, make_user, make_follow):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await make_follow(alice.id, bob.id)
    service = FollowQueryService(db_session)

    with patch(
        "app.services.follow_query.query_follows",
        new=AsyncMock(side_effect=StorageError("query_follows", "timeout"))
    ):
        assert await service.get_following_users(alice.id, 1, 10) == []
        assert await service.get_follower_users(bob.id, 1, 10) == []
        assert await service.get_followings(alice.id, FollowingType.TAG, 1, 10) == []


@pytest.mark.asyncio
async def test_user_lookup_failure_returns_empty(db_session, make_user, make_follow):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await make_follow(alice.id, bob.id)

    with patch(
        "app.services.follow_query.get_user_by_id",
        new=AsyncMock(side_effect=StorageError("get_user_by_id", "timeout"))
    ):
        users = await FollowQueryService(db_session).get_following_users(alice.id, 1, 10)

    assert users == []


@pytest.mark.asyncio
async def test_count_failure_returns_zero(db_session):
    with patch(
        "app.services.follow_query.count_follows",
        new=AsyncMock(side_effect=StorageError("count_follows", "timeout"))
    ):
        service = FollowQueryService(db_session)
        assert await service.count_following("u1") == 0
        assert await service.count_followers("u1") == 0


@pytest.mark.asyncio
async def test_invalid_page_returns_empty(db_session, make_user, make_follow):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await make_follow(alice.id, bob.id)
    service = FollowQueryService(db_session)

    assert await service.get_following_users(alice.id, 0, 10) == []
    assert await service.get_follower_users(bob.id, 1, 0) == []


@pytest.mark.asyncio
async def test_followings_of_other_types(db_session, make_follow):
    await make_follow("u1", "python", FollowingType.TAG)
    await make_follow("u1", "fastapi", FollowingType.TAG)
    await make_follow("u1", "u2")
    service = FollowQueryService(db_session)

    tags = await service.get_followings("u1", FollowingType.TAG, 1, 10)

    assert [f.following_id for f in tags] == ["fastapi", "python"]
    assert await service.count_following("u1", FollowingType.TAG) == 2
    assert await service.count_following("u1") == 1


def test_page_count():
    assert page_count(0, 10) == 0
    assert page_count(10, 10) == 1
    assert page_count(11, 10) == 2
    assert page_count(5, 0) == 0


@pytest.mark.asyncio
async def test_stored_users_are_returned_without_revalidation(db_session, make_user, make_follow):
    alice = await make_user("alice")
    short = await make_user("b", full_name="B")
    await make_follow(alice.id, short.id)
    await make_follow(short.id, alice.id)
    service = FollowQueryService(db_session)

    following = await service.get_following_users(alice.id, 1, 10)
    followers = await service.get_follower_users(alice.id, 1, 10)

    assert [u.username for u in following] == ["b"]
    assert [u.username for u in followers] == ["b"]
    assert following[0].avatar_text == "B"
