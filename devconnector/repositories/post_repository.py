"""
Repository for Post database operations.
"""
from typing import List
from bson import ObjectId
from devconnector.models.post import Post
from .base_repository import DocumentRepository


class PostRepository(DocumentRepository[Post]):
    """Repository for Post CRUD operations."""

    collection_name = "posts"
    model = Post

    async def find_recent(self) -> List[Post]:
        """All posts, newest first."""
        return await self.find_all(sort_field="date", direction=-1)

    async def delete_by_user(self, user_id: ObjectId) -> int:
        """Delete all posts authored by ``user_id``."""
        return await self.delete_many_by("user", user_id)
