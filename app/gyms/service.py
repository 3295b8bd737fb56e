from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId

from app.database import get_database
from app.gyms.models import GymResponse


def parse_object_id(value: str) -> Optional[ObjectId]:
    """Return the ObjectId for a hex string, or None if it isn't one."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


async def get_gym_by_id(gym_id: ObjectId) -> Optional[GymResponse]:
    """Fetch a gym with its reward lists and claim state. None if absent."""
    db = get_database()
    doc = await db.gyms.find_one({"_id": gym_id})
    if not doc:
        return None
    return GymResponse(id=doc["_id"], **{k: v for k, v in doc.items() if k != "_id"})
