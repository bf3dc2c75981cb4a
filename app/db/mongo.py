"""
app/db/mongo.py

Purpose: MongoDB connection setup

- Initializes Motor client with connection pooling
- Single collection: users
- Health checks and retry logic
- Proper connection lifecycle management
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
from typing import Optional
import asyncio
from app.core.config import settings
from app.core.exceptions import StorageError
from app.core.logging import get_logger

logger = get_logger(__name__)

# Global MongoDB client
_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


async def connect_to_mongo() -> bool:
    """
    Establishes connection to MongoDB with retry logic.
    Called during application startup.

    Returns:
        True if the server answered a ping, False if it stayed unreachable
        and MONGODB_FAIL_FAST is off (requests then fail with StorageError
        until the server comes back).

    Raises:
        ConnectionError: If unreachable after all retries and MONGODB_FAIL_FAST is set
    """
    global _client, _database

    if _client is not None:
        logger.warning("MongoDB client already initialized")
        return True

    max_retries = settings.MONGODB_CONNECT_RETRIES
    retry_delay = 2

    # Motor connects lazily, so the client is usable even if the ping fails
    _client = AsyncIOMotorClient(
        settings.MONGODB_URL,
        maxPoolSize=50,
        minPoolSize=0,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=10000,
        retryWrites=True,
        retryReads=True,
    )
    _database = _client[settings.MONGODB_DB_NAME]

    for attempt in range(1, max_retries + 1):
        try:
            logger.info(
                f"Attempting to connect to MongoDB (attempt {attempt}/{max_retries})"
            )

            await _client.admin.command("ping")

            logger.info(
                f"✅ Successfully connected to MongoDB: {settings.MONGODB_DB_NAME}"
            )
            return True

        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(
                f"Failed to connect to MongoDB (attempt {attempt}/{max_retries}): {e}"
            )

            if attempt < max_retries:
                logger.info(f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
                retry_delay *= 2  # Exponential backoff
            elif settings.MONGODB_FAIL_FAST:
                logger.critical("Failed to connect to MongoDB after all retries")
                await close_mongo_connection()
                raise ConnectionError("Could not establish MongoDB connection") from e

    logger.error("❌ MongoDB unreachable, serving requests anyway")
    return False


async def close_mongo_connection():
    """
    Closes the MongoDB connection.
    Called during application shutdown.
    """
    global _client, _database

    if _client:
        logger.info("Closing MongoDB connection")
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


async def check_database_health() -> bool:
    """
    Checks if the database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    if _client is None:
        logger.error("MongoDB client not initialized")
        return False

    try:
        await _client.admin.command("ping")
        return True
    except (ConnectionFailure, ServerSelectionTimeoutError) as e:
        logger.error(f"Database health check failed: {str(e)}")
        return False


def get_database() -> AsyncIOMotorDatabase:
    """
    Returns the MongoDB database instance.

    Raises:
        StorageError: If database is not initialized
    """
    if _database is None:
        raise StorageError(
            "Database not initialized. Call connect_to_mongo() during startup."
        )
    return _database


def get_users_collection() -> AsyncIOMotorCollection:
    """
    Returns the users collection.

    Document fields:
    - _id: ObjectId (assigned on insert)
    - name: str
    - age: int
    - city: str
    - email: str
    - hobbies: list[str]
    """
    return get_database()[settings.USERS_COLLECTION]
