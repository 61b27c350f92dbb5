"""
Service for posts, likes and comments.

Likes and comments are embedded in the post document; every mutation here is
load, change the list, save the whole post.
"""
import logging
from typing import List, Optional
from devconnector.exceptions import (
    AlreadyExists,
    AlreadyLiked,
    NotFound,
    NotYetLiked,
    Unauthorized,
    ValidationError,
)
from devconnector.models.common import parse_object_id
from devconnector.models.post import Comment, Like, Post
from devconnector.models.user import User
from devconnector.repositories.post_repository import PostRepository
from devconnector.repositories.user_repository import UserRepository
from devconnector.services import collection_mutator
from devconnector.services.token_service import actor_object_id

logger = logging.getLogger(__name__)


def _require_text(text: Optional[str]) -> str:
    if text is None or not text.strip():
        raise ValidationError.from_fields([{"field": "text", "message": "Text is required"}])
    return text.strip()


class PostService:
    """Service for post business logic."""

    def __init__(self, posts: PostRepository, users: UserRepository):
        self.posts = posts
        self.users = users

    async def _author(self, actor: str) -> User:
        user = await self.users.find_by_id(actor_object_id(actor))
        if not user:
            raise NotFound("User not found")
        return user

    async def get_post(self, post_id: str) -> Post:
        """Load a post; malformed ids are treated as missing posts."""
        object_id = parse_object_id(post_id)
        post = await self.posts.find_by_id(object_id) if object_id else None
        if not post:
            raise NotFound("Post not found")
        return post

    async def list_posts(self) -> List[Post]:
        return await self.posts.find_recent()

    async def create_post(self, actor: str, text: Optional[str]) -> Post:
        """Create a post carrying a snapshot of the author's name and avatar."""
        text = _require_text(text)
        author = await self._author(actor)
        post = Post(user=author.id, text=text, name=author.name, avatar=author.avatar)
        await self.posts.create(post)
        logger.info(f"User {actor} created post {post.id}")
        return post

    async def delete_post(self, actor: str, post_id: str) -> None:
        post = await self.get_post(post_id)
        if post.user != actor_object_id(actor):
            raise Unauthorized("User not authorized")
        await self.posts.delete_by_id(post.id)
        logger.info(f"User {actor} deleted post {post.id}")

    async def like_post(self, actor: str, post_id: str) -> List[Like]:
        """
        Record the caller's like.

        Raises:
            NotFound: no such post
            AlreadyLiked: the caller already likes this post
        """
        post = await self.get_post(post_id)
        user_id = actor_object_id(actor)
        try:
            post.likes = collection_mutator.toggle_add(
                post.likes, user_id, lambda: Like(user=user_id)
            )
        except AlreadyExists:
            raise AlreadyLiked("Post already liked")
        await self.posts.save(post)
        return post.likes

    async def unlike_post(self, actor: str, post_id: str) -> List[Like]:
        """
        Withdraw the caller's like.

        Raises:
            NotFound: no such post
            NotYetLiked: the caller does not like this post
        """
        post = await self.get_post(post_id)
        try:
            post.likes = collection_mutator.toggle_remove(post.likes, actor_object_id(actor))
        except NotFound:
            raise NotYetLiked("Post has not yet been liked")
        await self.posts.save(post)
        return post.likes

    async def add_comment(self, actor: str, post_id: str, text: Optional[str]) -> List[Comment]:
        text = _require_text(text)
        post = await self.get_post(post_id)
        author = await self._author(actor)
        comment = Comment(user=author.id, text=text, name=author.name, avatar=author.avatar)
        post.comments = collection_mutator.append_front(post.comments, comment)
        await self.posts.save(post)
        return post.comments

    async def delete_comment(self, actor: str, post_id: str, comment_id: str) -> List[Comment]:
        """
        Remove a comment written by the caller.

        Raises:
            NotFound: no such post or comment
            Unauthorized: the comment was written by someone else
        """
        post = await self.get_post(post_id)
        try:
            post.comments = collection_mutator.remove_by_owner_and_id(
                post.comments, actor_object_id(actor), parse_object_id(comment_id)
            )
        except NotFound:
            raise NotFound("Comment not found")
        await self.posts.save(post)
        return post.comments
