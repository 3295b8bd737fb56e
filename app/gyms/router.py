from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import verify_api_key
from app.gyms.models import GymResponse
from app.gyms.service import get_gym_by_id, parse_object_id

# All routes under /api/gyms require a valid API key in the X-API-Key header.
router = APIRouter(prefix="/api/gyms", tags=["gyms"], dependencies=[Depends(verify_api_key)])


@router.get("/{gym_id}", response_model=GymResponse)
async def get_gym(gym_id: str):
    """Inspect a gym after a refresh: both reward lists and who has claimed.

    Flow:
    1. Parse the id → 400 if it isn't a valid ObjectId
    2. Look up the gym → 404 if not found
    """
    object_id = parse_object_id(gym_id)
    if object_id is None:
        raise HTTPException(status_code=400, detail="Invalid gym id")

    gym = await get_gym_by_id(object_id)
    if not gym:
        raise HTTPException(status_code=404, detail="Gym not found")
    return gym
