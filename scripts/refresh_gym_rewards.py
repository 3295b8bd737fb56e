"""Regenerate the loot of every gym. Meant to run from cron.

Clears both reward lists and the claimers on all gyms, then draws fresh
player and owner rewards per gym and prints how much of each reward was
handed out.

Don't run two of these at once against the same database: the reset and
generate phases aren't transactional.

Usage: python -m scripts.refresh_gym_rewards
"""

import asyncio

from app.database import connect_db, disconnect_db
from app.logs import configure_logging
from app.rewards.report import render_summary_table
from app.rewards.service import refresh_gym_rewards


async def run() -> None:
    await connect_db()
    try:
        summary = await refresh_gym_rewards()
    finally:
        await disconnect_db()
    print(render_summary_table(summary))


if __name__ == "__main__":
    configure_logging()
    asyncio.run(run())
