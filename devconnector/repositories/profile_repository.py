"""
Repository for Profile database operations.
"""
from typing import Optional
from bson import ObjectId
from devconnector.models.profile import Profile
from .base_repository import DocumentRepository


class ProfileRepository(DocumentRepository[Profile]):
    """Repository for Profile CRUD operations."""

    collection_name = "profiles"
    model = Profile

    async def find_by_user(self, user_id: ObjectId) -> Optional[Profile]:
        """Find the profile owned by ``user_id``."""
        return await self.find_one_by("user", user_id)

    async def delete_by_user(self, user_id: ObjectId) -> int:
        """Delete the profile owned by ``user_id``."""
        return await self.delete_many_by("user", user_id)
