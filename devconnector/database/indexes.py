"""
Database indexes.

The unique indexes back the one-account-per-email and one-profile-per-user
rules; the service checks both before writing, the indexes catch races.
"""
import logging
from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


async def create_indexes(database: AsyncIOMotorDatabase):
    """
    Create database indexes.
    This should be called during application startup.
    """
    if database is None:
        logger.warning("Database not initialized. Skipping index creation.")
        return

    try:
        await database.users.create_index("email", unique=True, name="user_email_unique")
        logger.info("Created indexes for 'users' collection")

        await database.profiles.create_index("user", unique=True, name="profile_user_unique")
        logger.info("Created indexes for 'profiles' collection")

        # Author lookup for account deletion
        await database.posts.create_index("user", name="post_user_idx")

        # Newest-first listing
        await database.posts.create_index("date", name="post_date_idx")
        logger.info("Created indexes for 'posts' collection")

    except Exception as e:
        logger.error(f"Failed to create indexes: {e}")
        # Indexes can be created manually later
