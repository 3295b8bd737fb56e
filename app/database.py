"""MongoDB connection lifecycle management.

Uses a module-level singleton client. Call connect_db() before using
get_database() — the API does it in its lifespan, the scripts at the top
of their run.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.config import settings

client: Optional[AsyncIOMotorClient] = None


def get_database() -> AsyncIOMotorDatabase:
    if client is None:
        raise RuntimeError("Database client is not initialized. Call connect_db() first.")
    return client[settings.DATABASE_NAME]


async def connect_db() -> None:
    global client
    client = AsyncIOMotorClient(settings.MONGODB_URI)


async def disconnect_db() -> None:
    global client
    if client:
        client.close()
        client = None


async def ensure_indexes() -> None:
    """Create the indexes the seeded collections rely on.

    The zone coordinates index is unique: two zones landing on the same
    grid cell is a seeding defect and must fail the insert.
    """
    db = get_database()
    await db.zones.create_index("coordinates", unique=True)
    await db.base_loomies.create_index("serial", unique=True)
    await db.items.create_index("serial", unique=True)
    await db.loom_balls.create_index("serial", unique=True)
