"""Seed the loomies database from the JSON fixtures in data/.

Reads every fixture first; a missing or malformed one aborts before any
write. Then inserts, in order: loomie types, rarities, base loomies, gyms
and zones (gyms get a protector team of common loomies), items and loom
balls. Indexes, including the unique zone coordinates one, go in first.

Not idempotent — run it against an empty database.

Usage: python -m scripts.seed_db
"""

import asyncio
import logging
import sys

from app.catalog.service import (
    insert_base_loomies,
    insert_items,
    insert_loom_balls,
    insert_loomie_rarities,
    insert_loomie_types,
)
from app.config import settings
from app.database import connect_db, disconnect_db, ensure_indexes
from app.logs import configure_logging
from app.reference_data import ReferenceDataError, load_reference_data
from app.zones.service import insert_zones_and_gyms

logger = logging.getLogger("scripts.seed_db")


async def seed() -> None:
    data = load_reference_data()

    await connect_db()
    try:
        # The unique coordinates index has to exist before zones go in
        await ensure_indexes()

        print("Inserting loomie types...")
        type_ids = await insert_loomie_types(data.loomie_types)
        print(f"Inserted loomie types: {len(type_ids)}")

        print("Inserting loomie rarities...")
        rarity_ids = await insert_loomie_rarities(data.loomie_rarities)
        print(f"Inserted loomie rarities: {len(rarity_ids)}")

        print("Inserting loomies...")
        common_loomies = await insert_base_loomies(data.loomies, type_ids, rarity_ids)
        print(f"Inserted loomies ({len(common_loomies)} common)")

        print("Inserting gyms and zones...")
        grid = await insert_zones_and_gyms(data.zones, data.places, common_loomies)
        print(f"Zones inserted: {grid.zones_inserted}")
        print(f"Gyms inserted: {grid.gyms_inserted}")

        print("Inserting items...")
        print(f"Inserted items: {await insert_items(data.items)}")

        print("Inserting loom balls...")
        print(f"Inserted loom balls: {await insert_loom_balls(data.loomballs)}")

        print(f"Seeded '{settings.DATABASE_NAME}'")
    finally:
        await disconnect_db()


def main() -> None:
    configure_logging()
    try:
        asyncio.run(seed())
    except ReferenceDataError as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
