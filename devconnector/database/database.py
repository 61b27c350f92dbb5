"""
Database connection and configuration.
"""
import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from config import Settings
from devconnector.database.indexes import create_indexes

logger = logging.getLogger(__name__)


class Database:
    """MongoDB connection owned by one application instance."""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self, settings: Settings):
        """Create database connection with connection pooling."""
        try:
            self.client = AsyncIOMotorClient(
                settings.mongodb_url,
                maxPoolSize=50,  # Maximum connections in pool
                minPoolSize=10,  # Minimum connections to maintain
                maxIdleTimeMS=45000,  # Close idle connections after 45s
                serverSelectionTimeoutMS=5000,  # Timeout for server selection
                connectTimeoutMS=10000,  # Connection timeout
                socketTimeoutMS=20000,  # Socket timeout
            )
            self.database = self.client[settings.mongodb_db_name]
            # Test connection
            await self.client.admin.command('ping')
            logger.info("Connected to MongoDB database '%s'", settings.mongodb_db_name)

            await create_indexes(self.database)

        except Exception as e:
            logger.warning(f"Failed to connect to MongoDB: {e}")
            logger.warning("Application will continue but database operations will fail")

    async def close(self):
        """Close database connection."""
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB")

    def get_database(self) -> Optional[AsyncIOMotorDatabase]:
        """Get database instance."""
        return self.database
