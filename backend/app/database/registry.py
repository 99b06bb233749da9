"""
Index management.
Ensures the uniqueness constraints on accounts exist on startup.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorClient

from app.database.databases import accounts_db

logger = logging.getLogger(__name__)


async def create_indexes(client: AsyncIOMotorClient) -> None:
    """Create necessary indexes for the accounts database."""
    db = client[accounts_db.DB_NAME]
    for collection, field, options in accounts_db.INDEXES:
        await db[collection].create_index(field, **options)
        logger.debug(f"Index ensured on {collection}.{field} {options}")
