import logging
from typing import Optional

from app.config import settings
from app.database import get_database
from app.rewards.models import RewardAudience, RewardCandidate, RewardSummary
from app.rewards.selector import (
    RandomSource,
    build_reward_pool,
    draw_reward_count,
    select_rewards,
)

logger = logging.getLogger(__name__)


def reward_count_range(audience: RewardAudience) -> tuple[int, int]:
    """Configured inclusive [min, max] number of rewards per gym for an audience."""
    if audience is RewardAudience.PLAYER:
        return settings.PLAYER_REWARDS_MIN, settings.PLAYER_REWARDS_MAX
    return settings.OWNER_REWARDS_MIN, settings.OWNER_REWARDS_MAX


async def reset_gym_rewards() -> int:
    """Empty both reward lists and the claimers of every gym.

    Runs as its own phase before generation: if generation dies halfway,
    gyms are left with no rewards rather than last cycle's stale ones.
    Returns the number of gyms touched.
    """
    db = get_database()
    result = await db.gyms.update_many(
        {},
        {
            "$set": {
                RewardAudience.PLAYER.gym_field: [],
                RewardAudience.OWNER.gym_field: [],
                "rewards_claimed_by": [],
            }
        },
    )
    return result.modified_count


async def load_reward_pools() -> dict[RewardAudience, list[RewardCandidate]]:
    """Read the catalogs once and build one pool per audience."""
    db = get_database()
    items = await db.items.find({}).to_list(length=None)
    loom_balls = await db.loom_balls.find({}).to_list(length=None)
    return {
        audience: build_reward_pool(items, loom_balls, audience)
        for audience in RewardAudience
    }


async def generate_gym_rewards(
    pools: dict[RewardAudience, list[RewardCandidate]],
    rng: Optional[RandomSource] = None,
) -> RewardSummary:
    """Draw and store fresh player and owner rewards for every gym.

    Each gym gets its own draw per audience; the shared pools are never
    mutated. Both lists are written with a single update so a gym is never
    left with one audience refreshed and the other not.
    """
    db = get_database()
    summary = RewardSummary()
    names = {
        audience: {candidate.id: candidate.name for candidate in pool}
        for audience, pool in pools.items()
    }

    gyms = await db.gyms.find({}, {"_id": 1}).to_list(length=None)
    for gym in gyms:
        update: dict = {}
        for audience, pool in pools.items():
            low, high = reward_count_range(audience)
            rewards = select_rewards(pool, draw_reward_count(low, high, rng), rng)
            update[audience.gym_field] = [reward.model_dump() for reward in rewards]
            for reward in rewards:
                summary.add(audience, names[audience][reward.reward_id], reward.reward_quantity)

        await db.gyms.update_one({"_id": gym["_id"]}, {"$set": update})
        summary.gyms_updated += 1

    return summary


async def refresh_gym_rewards(rng: Optional[RandomSource] = None) -> RewardSummary:
    """The recurring job: reset every gym, then draw new rewards for all of them."""
    reset = await reset_gym_rewards()
    logger.info("Cleared rewards and claimers on %d gyms", reset)

    pools = await load_reward_pools()
    for audience, pool in pools.items():
        if not pool:
            logger.warning("The %s reward pool is empty; gyms will get no rewards", audience.value)

    summary = await generate_gym_rewards(pools, rng)
    logger.info("Generated rewards for %d gyms", summary.gyms_updated)
    return summary
