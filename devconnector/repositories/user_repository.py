"""
Repository for User database operations.
"""
from typing import Optional
from devconnector.models.user import User
from .base_repository import DocumentRepository


class UserRepository(DocumentRepository[User]):
    """Repository for User CRUD operations."""

    collection_name = "users"
    model = User

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find user by (normalized) email."""
        return await self.find_one_by("email", email)
