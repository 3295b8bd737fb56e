"""Seeding the static catalog: loomie types, rarities, species, items, loom balls.

Fixtures reference each other by name (a species lists its type names and
its rarity name). Names are resolved through lookup tables built from the
ids returned by the inserts:

- a duplicate name keeps the first id and logs a warning;
- an unknown name logs a warning and the reference is skipped.

Fixture data is expected to be mostly correct, so neither case aborts the run.
"""

import logging
from typing import Any, Iterable, Optional, Sequence

from app.catalog.models import (
    ItemRecord,
    LoomBallRecord,
    LoomieRarityRecord,
    LoomieRecord,
    LoomieTypeRecord,
)
from app.database import get_database

logger = logging.getLogger(__name__)

# Every species starts from these and adds its extra_* bonuses
BASE_ATTRIBUTES = {"hp": 100, "attack": 20, "defense": 10}

# Protector teams are drawn from species of this rarity
COMMON_RARITY = "Common"


def build_lookup(names: Iterable[str], ids: Iterable[Any], kind: str) -> dict[str, Any]:
    """Map natural key -> inserted id, first occurrence wins."""
    lookup: dict[str, Any] = {}
    for name, inserted_id in zip(names, ids):
        if name in lookup:
            logger.warning("Duplicate %s name %r; keeping the first one", kind, name)
            continue
        lookup[name] = inserted_id
    return lookup


def resolve_names(
    names: Iterable[str], lookup: dict[str, Any], kind: str, context: str
) -> list[Any]:
    """Translate names to ids, warning about and dropping the unknown ones."""
    resolved = []
    for name in names:
        if name not in lookup:
            logger.warning("%s was not found: %s --> %s", kind, context, name)
            continue
        resolved.append(lookup[name])
    return resolved


async def insert_loomie_types(types: Sequence[LoomieTypeRecord]) -> dict[str, Any]:
    """Insert types in two phases and return name -> id.

    strong_against points at other types of the same collection, so every
    type has to exist before those references can be resolved.
    """
    if not types:
        return {}
    db = get_database()

    # 1. Names only
    result = await db.loomie_types.insert_many(
        [{"name": t.name, "strong_against": []} for t in types]
    )
    lookup = build_lookup([t.name for t in types], result.inserted_ids, "loomie type")

    # 2. Resolve strong_against now that every id is known
    seen = set()
    for loomie_type in types:
        if loomie_type.name in seen:
            continue
        seen.add(loomie_type.name)
        strong_against = resolve_names(
            loomie_type.strong_against, lookup, "Strong against type", loomie_type.name
        )
        await db.loomie_types.update_one(
            {"_id": lookup[loomie_type.name]},
            {"$set": {"strong_against": strong_against}},
        )

    return lookup


async def insert_loomie_rarities(rarities: Sequence[LoomieRarityRecord]) -> dict[str, Any]:
    if not rarities:
        return {}
    db = get_database()
    result = await db.loomie_rarities.insert_many([r.model_dump() for r in rarities])
    return build_lookup([r.name for r in rarities], result.inserted_ids, "loomie rarity")


def base_loomie_document(
    loomie: LoomieRecord, type_ids: dict[str, Any], rarity_ids: dict[str, Any]
) -> Optional[dict]:
    """Build the base_loomies document, or None when the rarity is unknown."""
    rarity_id = rarity_ids.get(loomie.rarity)
    if rarity_id is None:
        logger.warning("Loomie rarity was not found: %s --> %s", loomie.name, loomie.rarity)
        return None

    return {
        "serial": loomie.serial,
        "name": loomie.name,
        "types": resolve_names(loomie.types, type_ids, "Loomie type", loomie.name),
        "rarity": rarity_id,
        "base_hp": BASE_ATTRIBUTES["hp"] + loomie.extra_hp,
        "base_attack": BASE_ATTRIBUTES["attack"] + loomie.extra_atk,
        "base_defense": BASE_ATTRIBUTES["defense"] + loomie.extra_def,
    }


async def insert_base_loomies(
    loomies: Sequence[LoomieRecord],
    type_ids: dict[str, Any],
    rarity_ids: dict[str, Any],
) -> list[dict]:
    """Insert every species whose rarity resolves. Returns the common ones.

    The returned documents carry their _id, ready to be copied into gym
    protector teams.
    """
    pending = []
    for loomie in loomies:
        doc = base_loomie_document(loomie, type_ids, rarity_ids)
        if doc is not None:
            pending.append((loomie.rarity, doc))

    if not pending:
        return []

    db = get_database()
    docs = [doc for _, doc in pending]
    result = await db.base_loomies.insert_many(docs)

    common = []
    for (rarity, doc), inserted_id in zip(pending, result.inserted_ids):
        if rarity == COMMON_RARITY:
            common.append({**doc, "_id": inserted_id})
    return common


async def insert_items(items: Sequence[ItemRecord]) -> int:
    if not items:
        return 0
    db = get_database()
    result = await db.items.insert_many([item.model_dump() for item in items])
    return len(result.inserted_ids)


async def insert_loom_balls(loom_balls: Sequence[LoomBallRecord]) -> int:
    if not loom_balls:
        return 0
    db = get_database()
    result = await db.loom_balls.insert_many([ball.model_dump() for ball in loom_balls])
    return len(result.inserted_ids)
