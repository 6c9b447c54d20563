"""
Database module for the Desteli Studio site backend
Handles MongoDB client initialization for the "mongo" store backend
"""
import logging
from motor.motor_asyncio import AsyncIOMotorClient
from config import MONGO_URI, MONGO_DB_NAME

logger = logging.getLogger(__name__)

KV_COLLECTION_NAME = "kv"


def create_client(uri: str = MONGO_URI) -> AsyncIOMotorClient:
    """Create a Motor client. Connections are opened lazily on first use."""
    logger.info(f"Creating MongoDB client for database '{MONGO_DB_NAME}'")
    return AsyncIOMotorClient(uri)


def get_kv_collection(client: AsyncIOMotorClient):
    """Collection holding one document per whole-collection key."""
    return client[MONGO_DB_NAME][KV_COLLECTION_NAME]


async def ping(client: AsyncIOMotorClient) -> bool:
    try:
        await client.admin.command("ping")
        return True
    except Exception as e:
        logger.error(f"MongoDB ping failed: {e}")
        return False
