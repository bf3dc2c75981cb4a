"""
app/db/indexes.py

Purpose: Database index management

- Creates lookup indexes on the users collection
- Idempotent, safe to run on every startup
"""

from app.db.mongo import get_users_collection
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes():
    """
    Creates the users collection indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = get_users_collection()

        logger.info("Creating database indexes...")

        # Email is not unique: duplicates are accepted by the API
        await users.create_index("email", name="email_idx")
        logger.debug("Created index on users.email")

        await users.create_index("name", name="name_idx")
        logger.debug("Created index on users.name")

        user_indexes = await users.index_information()
        logger.info(f"✅ Database indexes ready: Users={len(user_indexes)}")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise


if __name__ == "__main__":
    """
    Run this script directly to create indexes manually.
    """
    import asyncio
    from app.db.mongo import connect_to_mongo, close_mongo_connection

    async def main():
        await connect_to_mongo()
        await create_indexes()
        await close_mongo_connection()

    asyncio.run(main())
