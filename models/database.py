"""Database models and connection setup."""

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from typing import Any, Optional
from config.settings import Settings
from utils.logger import setup_logger

logger = setup_logger(__name__)


class Database:
    """Database connection manager.

    One instance is created per application and passed to whatever needs
    collection access; nothing reaches for a module-level connection.
    """

    def __init__(self, client: Any, name: str):
        self.client = client
        self.name = name

    def get_database(self):
        """Get database instance."""
        return self.client[self.name]

    def get_users_collection(self):
        """Get users collection."""
        return self.get_database()["users"]

    def get_exercises_collection(self):
        """Get exercises collection."""
        return self.get_database()["exercises"]


async def connect_to_mongo(settings: Settings) -> Database:
    """Create database connection."""
    client = AsyncIOMotorClient(settings.mongodb_url)
    logger.info(f"Connected to MongoDB database: {settings.db_name}")
    return Database(client, settings.db_name)


async def close_mongo_connection(database: Optional[Database]):
    """Close database connection."""
    if database and database.client:
        database.client.close()
        logger.info("Disconnected from MongoDB")


async def init_mongo(settings: Settings) -> Database:
    """Initialize MongoDB connection and collection indexes."""
    database = await connect_to_mongo(settings)

    # Log queries filter on owner and date range
    exercises_collection = database.get_exercises_collection()
    await exercises_collection.create_index([("userId", ASCENDING), ("date", ASCENDING)])

    logger.info("MongoDB initialized: exercise indexes created")
    return database
