"""Debug helper: give a user one caught copy of every base loomie.

Usage: python -m scripts.give_all_loomies <user_id>
"""

import argparse
import asyncio
import sys

from app.database import connect_db, disconnect_db
from app.gyms.service import parse_object_id
from app.logs import configure_logging
from app.loomies.service import give_all_loomies


async def run(owner_id) -> int:
    await connect_db()
    try:
        print(f"Inserting to user {owner_id}...")
        granted = await give_all_loomies(owner_id)
    finally:
        await disconnect_db()
    print(f"Finished: {granted} loomies granted")
    return granted


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Give a user every base loomie")
    parser.add_argument("user_id", help="ObjectId of the receiving user")
    args = parser.parse_args()

    owner_id = parse_object_id(args.user_id)
    if owner_id is None:
        parser.error(f"invalid user id: {args.user_id}")

    configure_logging()
    try:
        asyncio.run(run(owner_id))
    except LookupError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
