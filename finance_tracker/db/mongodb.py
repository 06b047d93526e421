import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from finance_tracker.core.config import Settings, settings

logger = logging.getLogger(__name__)


class MongoDB:
    client: AsyncIOMotorClient = None

mongodb = MongoDB()


# 🔹 Return database object
def get_database(config: Settings = settings) -> AsyncIOMotorDatabase:
    return get_client()[config.MONGO_DB_NAME]


# 🔹 Connect MongoDB (called on startup)
async def connect_to_mongo(config: Settings = settings):
    mongodb.client = AsyncIOMotorClient(config.MONGO_URI)
    logger.info("Connected to MongoDB at %s", config.MONGO_URI)


# 🔹 Close connection (shutdown)
async def close_mongo_connection():
    if mongodb.client is None:
        return
    mongodb.client.close()
    mongodb.client = None
    logger.info("MongoDB connection closed")


def get_client():
    """Return raw MongoDB client"""
    return mongodb.client
