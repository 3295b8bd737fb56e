from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import verify_api_key
from app.zones.models import ZoneResponse
from app.zones.service import get_zone_by_coordinates

router = APIRouter(prefix="/api/zones", tags=["zones"], dependencies=[Depends(verify_api_key)])


@router.get("/{coordinates}", response_model=ZoneResponse)
async def get_zone(coordinates: str):
    """Look up a zone by its "x,y" grid key, e.g. /api/zones/3,1."""
    zone = await get_zone_by_coordinates(coordinates.strip())
    if not zone:
        raise HTTPException(status_code=404, detail="Zone not found")
    return zone
