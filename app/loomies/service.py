import logging
import time
from typing import Any, Optional, Sequence

from app.config import settings
from app.database import get_database
from app.rewards.selector import RandomSource, resolve_rng

logger = logging.getLogger(__name__)


def caught_loomie_from_base(base: dict, owner: Any = None) -> dict:
    """Build a level-1 caught loomie document copying a species' base stats.

    Gym protectors have no owner; debug grants set the receiving user.
    """
    return {
        "serial": base["serial"],
        "name": base["name"],
        "types": list(base.get("types", [])),
        "rarity": base.get("rarity"),
        "hp": base["base_hp"],
        "attack": base["base_attack"],
        "defense": base["base_defense"],
        "level": 1,
        "experience": 0,
        "is_busy": False,
        "owner": owner,
    }


async def create_protector_team(
    common_loomies: Sequence[dict],
    size: Optional[int] = None,
    rng: Optional[RandomSource] = None,
) -> list:
    """Insert a default gym team drawn from the common species.

    Species are picked uniformly with replacement, so a team may hold the
    same species twice. Returns the inserted caught_loomies ids.
    """
    size = settings.GYM_PROTECTORS_COUNT if size is None else size
    if not common_loomies:
        logger.warning("No common loomies available; gym gets no protectors")
        return []
    if size == 0:
        return []

    picks = resolve_rng(rng).choices(list(common_loomies), k=size)
    db = get_database()
    result = await db.caught_loomies.insert_many([caught_loomie_from_base(p) for p in picks])
    return list(result.inserted_ids)


async def remove_all_wild_loomies() -> int:
    """Detach every wild loomie from its zone and delete them all."""
    db = get_database()
    await db.zones.update_many({}, {"$set": {"loomies": []}})
    result = await db.wild_loomies.delete_many({})
    return result.deleted_count


async def remove_outdated_wild_loomies(
    timeout_minutes: Optional[int] = None, now: Optional[float] = None
) -> int:
    """Delete wild loomies generated more than `timeout_minutes` ago.

    Their ids are pulled from the zones first, so zones never point at a
    deleted loomie. `now` is a unix timestamp, defaulting to the clock.
    """
    timeout = settings.OUTDATED_LOOMIES_TIMEOUT if timeout_minutes is None else timeout_minutes
    current = int(time.time() if now is None else now)
    cutoff = current - timeout * 60

    db = get_database()
    outdated = await db.wild_loomies.find(
        {"generated_at": {"$lt": cutoff}}, {"_id": 1}
    ).to_list(length=None)
    loomie_ids = [doc["_id"] for doc in outdated]
    logger.info("Loomies to remove: %d", len(loomie_ids))
    if not loomie_ids:
        return 0

    await db.zones.update_many({}, {"$pullAll": {"loomies": loomie_ids}})
    result = await db.wild_loomies.delete_many({"_id": {"$in": loomie_ids}})
    return result.deleted_count


async def give_all_loomies(owner_id: Any) -> int:
    """Debug helper: give a user one caught copy of every base species.

    Raises LookupError when the user doesn't exist. Returns how many
    loomies were granted.
    """
    db = get_database()
    owner = await db.users.find_one({"_id": owner_id}, {"_id": 1})
    if not owner:
        raise LookupError(f"User {owner_id} not found")

    base_loomies = await db.base_loomies.find({}).to_list(length=None)
    logger.info("Found %d base loomies", len(base_loomies))
    if not base_loomies:
        return 0

    result = await db.caught_loomies.insert_many(
        [caught_loomie_from_base(base, owner=owner_id) for base in base_loomies]
    )
    inserted = list(result.inserted_ids)
    await db.users.update_one({"_id": owner_id}, {"$push": {"loomies": {"$each": inserted}}})
    return len(inserted)
