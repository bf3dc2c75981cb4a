"""
Database initialization script

Run once to create the users collection and its indexes:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path
import os
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.errors import CollectionInvalid
import logging

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "PracticeDB")
USERS_COLLECTION = os.getenv("USERS_COLLECTION", "users")


async def init_db():
    """Create the users collection and its indexes"""

    logger.info(f"🔌 Connecting to MongoDB: {MONGODB_DB_NAME}")
    client = AsyncIOMotorClient(MONGODB_URL, serverSelectionTimeoutMS=5000)
    db = client[MONGODB_DB_NAME]

    try:
        await client.admin.command('ping')
        logger.info("✅ Connected successfully\n")

        logger.info(f"📋 Creating '{USERS_COLLECTION}' collection...")
        try:
            await db.create_collection(USERS_COLLECTION)
            logger.info("  ✅ Collection created")
        except CollectionInvalid:
            logger.info("  ℹ️ Collection already exists")

        users = db[USERS_COLLECTION]

        await users.create_index([("email", ASCENDING)], name="email_idx")
        logger.info("  ✅ Email index created (non-unique)")

        await users.create_index([("name", ASCENDING)], name="name_idx")
        logger.info("  ✅ Name index created")

        indexes = await users.index_information()
        logger.info(f"\n🎉 Done. Indexes: {list(indexes.keys())}")

    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(init_db())
