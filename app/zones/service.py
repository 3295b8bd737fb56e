import logging
from typing import NamedTuple, Optional, Sequence

from app.database import get_database
from app.loomies.service import create_protector_team
from app.rewards.selector import RandomSource
from app.zones.grid import format_coordinates, plan_zone_grid
from app.zones.models import PlaceRecord, ZoneFrontierRecord, ZoneResponse

logger = logging.getLogger(__name__)

ZONE_FIELDS = ("left_frontier", "right_frontier", "top_frontier", "bottom_frontier", "number")


class GridSeedResult(NamedTuple):
    zones_inserted: int
    gyms_inserted: int


def new_gym_document(place: PlaceRecord, protectors: list) -> dict:
    return {
        "name": place.name,
        "latitude": place.latitude,
        "longitude": place.longitude,
        # Initially the gym has no owner
        "owner": None,
        "protectors": protectors,
        # No rewards until the refresh job runs
        "current_players_rewards": [],
        "current_owners_rewards": [],
        "rewards_claimed_by": [],
    }


def new_zone_document(zone: ZoneFrontierRecord, coordinates: tuple[int, int], gym_id) -> dict:
    doc = zone.model_dump(include=set(ZONE_FIELDS), by_alias=True)
    doc["coordinates"] = format_coordinates(*coordinates)
    doc["gym"] = gym_id
    doc["loomies"] = []
    return doc


async def insert_zones_and_gyms(
    zones: Sequence[ZoneFrontierRecord],
    places: Sequence[PlaceRecord],
    common_loomies: Sequence[dict],
    rng: Optional[RandomSource] = None,
) -> GridSeedResult:
    """Persist one zone per frontier cell and one gym per matched place.

    This is the only code path that creates zones and gyms, and it must run
    before the rewards job. A gym is inserted before its zone so the zone
    can store the gym id. Store errors (e.g. a duplicate coordinates key)
    propagate and abort the seed.
    """
    db = get_database()
    logger.info("Expected zones: %d", len(zones))
    logger.info("Expected gyms: %d", len(places))

    gyms_inserted = 0
    for plan in plan_zone_grid(zones, places):
        gym_id = None
        if plan.place is not None:
            protectors = await create_protector_team(common_loomies, rng=rng)
            result = await db.gyms.insert_one(new_gym_document(plan.place, protectors))
            gym_id = result.inserted_id
            gyms_inserted += 1

        await db.zones.insert_one(new_zone_document(plan.zone, plan.coordinates, gym_id))

    return GridSeedResult(zones_inserted=len(zones), gyms_inserted=gyms_inserted)


async def get_zone_by_coordinates(coordinates: str) -> Optional[ZoneResponse]:
    """Fetch a zone by its "x,y" grid key. Returns None if there is none."""
    db = get_database()
    doc = await db.zones.find_one({"coordinates": coordinates})
    if not doc:
        return None
    return ZoneResponse(
        id=str(doc["_id"]),
        gym=str(doc["gym"]) if doc.get("gym") else None,
        loomies=[str(loomie_id) for loomie_id in doc.get("loomies", [])],
        **{k: v for k, v in doc.items() if k not in ("_id", "gym", "loomies")},
    )
