"""
Tests for posts, likes and comments.
"""
from datetime import datetime, timedelta
import pytest
from bson import ObjectId
from devconnector.exceptions import (
    AlreadyLiked,
    InvalidCredential,
    NotFound,
    NotYetLiked,
    Unauthorized,
    ValidationError,
)
from devconnector.models.post import Post


@pytest.mark.asyncio
async def test_like_unlike_scenario(post_service, register):
    _, ann = await register("Ann", "ann@x.com")
    _, bob = await register("Bob", "bob@x.com")

    post = await post_service.create_post(ann, "hello")
    assert post.likes == []
    assert post.comments == []

    likes = await post_service.like_post(bob, str(post.id))
    assert [str(like.user) for like in likes] == [bob]

    with pytest.raises(AlreadyLiked):
        await post_service.like_post(bob, str(post.id))

    stored = await post_service.get_post(str(post.id))
    assert len(stored.likes) == 1

    likes = await post_service.unlike_post(bob, str(post.id))
    assert likes == []
    assert (await post_service.get_post(str(post.id))).likes == []


@pytest.mark.asyncio
async def test_unlike_without_like_is_not_yet_liked(post_service, register):
    _, ann = await register("Ann", "ann@x.com")
    post = await post_service.create_post(ann, "hello")

    with pytest.raises(NotYetLiked):
        await post_service.unlike_post(ann, str(post.id))


@pytest.mark.asyncio
async def test_like_round_trip_keeps_other_likes_in_order(post_service, register):
    _, ann = await register("Ann", "ann@x.com")
    _, bob = await register("Bob", "bob@x.com")
    _, cat = await register("Cat", "cat@x.com")
    post = await post_service.create_post(ann, "hello")
    await post_service.like_post(ann, str(post.id))
    before = await post_service.like_post(cat, str(post.id))

    await post_service.like_post(bob, str(post.id))
    after = await post_service.unlike_post(bob, str(post.id))

    assert [like.id for like in after] == [like.id for like in before]


@pytest.mark.asyncio
async def test_like_missing_post(post_service, register):
    _, ann = await register("Ann", "ann@x.com")

    with pytest.raises(NotFound):
        await post_service.like_post(ann, str(ObjectId()))


@pytest.mark.asyncio
async def test_create_post_snapshots_author(post_service, users, register):
    _, ann = await register("Ann", "ann@x.com")

    post = await post_service.create_post(ann, "  hello  ")

    user = await users.find_by_id(ObjectId(ann))
    assert post.text == "hello"
    assert post.name == "Ann"
    assert post.avatar == user.avatar

    user.name = "Ann Renamed"
    await users.save(user)
    stored = await post_service.get_post(str(post.id))
    assert stored.name == "Ann"


@pytest.mark.asyncio
async def test_create_post_requires_text(post_service, register):
    _, ann = await register("Ann", "ann@x.com")

    with pytest.raises(ValidationError) as exc_info:
        await post_service.create_post(ann, "   ")

    assert exc_info.value.details == [{"field": "text", "message": "Text is required"}]


@pytest.mark.asyncio
async def test_get_post_with_malformed_id_is_not_found(post_service):
    with pytest.raises(NotFound):
        await post_service.get_post("12345")


@pytest.mark.asyncio
async def test_list_posts_newest_first(post_service, posts):
    author = ObjectId()
    now = datetime.utcnow()
    older = Post(user=author, text="older", date=now - timedelta(days=1))
    newer = Post(user=author, text="newer", date=now)
    await posts.create(older)
    await posts.create(newer)

    listed = await post_service.list_posts()

    assert [post.text for post in listed] == ["newer", "older"]


@pytest.mark.asyncio
async def test_delete_post_by_author(post_service, register):
    _, ann = await register("Ann", "ann@x.com")
    post = await post_service.create_post(ann, "hello")

    await post_service.delete_post(ann, str(post.id))

    with pytest.raises(NotFound):
        await post_service.get_post(str(post.id))


@pytest.mark.asyncio
async def test_delete_post_by_someone_else_is_unauthorized(post_service, register):
    _, ann = await register("Ann", "ann@x.com")
    _, bob = await register("Bob", "bob@x.com")
    post = await post_service.create_post(ann, "hello")

    with pytest.raises(Unauthorized):
        await post_service.delete_post(bob, str(post.id))

    assert await post_service.get_post(str(post.id))


@pytest.mark.asyncio
async def test_delete_missing_post(post_service, register):
    _, ann = await register("Ann", "ann@x.com")

    with pytest.raises(NotFound):
        await post_service.delete_post(ann, str(ObjectId()))


@pytest.mark.asyncio
async def test_comments_are_added_newest_first(post_service, register):
    _, ann = await register("Ann", "ann@x.com")
    _, bob = await register("Bob", "bob@x.com")
    post = await post_service.create_post(ann, "hello")

    await post_service.add_comment(ann, str(post.id), "first")
    comments = await post_service.add_comment(bob, str(post.id), "second")

    assert [comment.text for comment in comments] == ["second", "first"]
    assert comments[0].name == "Bob"
    assert str(comments[0].user) == bob


@pytest.mark.asyncio
async def test_add_comment_validation_and_missing_post(post_service, register):
    _, ann = await register("Ann", "ann@x.com")

    with pytest.raises(ValidationError):
        await post_service.add_comment(ann, str(ObjectId()), "")

    with pytest.raises(NotFound):
        await post_service.add_comment(ann, str(ObjectId()), "hi")


@pytest.mark.asyncio
async def test_delete_comment_by_non_author_leaves_comments_unchanged(post_service, register):
    _, ann = await register("Ann", "ann@x.com")
    _, bob = await register("Bob", "bob@x.com")
    post = await post_service.create_post(ann, "hello")
    comments = await post_service.add_comment(ann, str(post.id), "mine")

    with pytest.raises(Unauthorized):
        await post_service.delete_comment(bob, str(post.id), str(comments[0].id))

    stored = await post_service.get_post(str(post.id))
    assert [comment.id for comment in stored.comments] == [comment.id for comment in comments]


@pytest.mark.asyncio
async def test_delete_comment_removes_only_that_comment(post_service, register):
    _, ann = await register("Ann", "ann@x.com")
    _, bob = await register("Bob", "bob@x.com")
    post = await post_service.create_post(ann, "hello")
    await post_service.add_comment(bob, str(post.id), "bob's")
    await post_service.add_comment(ann, str(post.id), "ann's first")
    comments = await post_service.add_comment(ann, str(post.id), "ann's second")

    target = comments[2]
    assert target.text == "bob's"
    remaining = await post_service.delete_comment(bob, str(post.id), str(target.id))

    assert [comment.text for comment in remaining] == ["ann's second", "ann's first"]


@pytest.mark.asyncio
async def test_delete_missing_comment(post_service, register):
    _, ann = await register("Ann", "ann@x.com")
    post = await post_service.create_post(ann, "hello")

    with pytest.raises(NotFound):
        await post_service.delete_comment(ann, str(post.id), str(ObjectId()))


@pytest.mark.asyncio
async def test_delete_post_with_malformed_actor_is_rejected(post_service, register):
    _, ann = await register("Ann", "ann@x.com")
    post = await post_service.create_post(ann, "hello")

    with pytest.raises(InvalidCredential):
        await post_service.delete_post("not-an-object-id", str(post.id))

    assert await post_service.get_post(str(post.id))
