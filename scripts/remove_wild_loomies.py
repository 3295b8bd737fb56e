"""Remove wild loomies and detach them from their zones.

Usage:
    python -m scripts.remove_wild_loomies --all        # every wild loomie
    python -m scripts.remove_wild_loomies --outdated   # older than OUTDATED_LOOMIES_TIMEOUT minutes
"""

import argparse
import asyncio

from app.config import settings
from app.database import connect_db, disconnect_db, get_database
from app.logs import configure_logging
from app.loomies.service import remove_all_wild_loomies, remove_outdated_wild_loomies


async def run(remove_all: bool, outdated: bool) -> None:
    await connect_db()
    try:
        db = get_database()
        before = await db.wild_loomies.count_documents({})

        if remove_all:
            print("Removing all loomies from database...")
            await remove_all_wild_loomies()
            print("Done!")

        if outdated:
            print(
                "Removing loomies older than "
                f"{settings.OUTDATED_LOOMIES_TIMEOUT} minutes from database..."
            )
            await remove_outdated_wild_loomies()
            print("Done!")

        after = await db.wild_loomies.count_documents({})
        print(f"\nInfo: {before - after} wild loomies removed.")
    finally:
        await disconnect_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Remove wild loomies from the database")
    parser.add_argument("--all", action="store_true", help="Remove every wild loomie")
    parser.add_argument(
        "--outdated",
        action="store_true",
        help="Remove wild loomies older than OUTDATED_LOOMIES_TIMEOUT minutes",
    )
    args = parser.parse_args()
    if not (args.all or args.outdated):
        parser.error("choose --all or --outdated")

    configure_logging()
    asyncio.run(run(args.all, args.outdated))
