"""Weighted, non-repeating reward selection for gym loot tables.

A pool is built once per audience from the item and loom ball catalogs.
Each gym then draws its own rewards from a private copy of that pool:

1. The number of rewards is drawn uniformly from the audience's range.
2. Each draw picks one candidate with probability proportional to its
   weight (cumulative prefix sums + binary search over a uniform real).
3. The quantity is drawn uniformly from the candidate's own
   [min_quantity, max_quantity] range.
4. The candidate is removed from the working copy so it can't repeat.

Zero weights are legal. If every remaining candidate weighs zero, the draw
falls back to a uniform pick among them instead of failing.
"""

import bisect
import random
from itertools import accumulate
from typing import Iterable, Optional, Sequence

from app.rewards.models import (
    GeneratedReward,
    RewardAudience,
    RewardCandidate,
    RewardCollection,
)

# random.Random and the random module share the methods used here
RandomSource = random.Random


def resolve_rng(rng: Optional[RandomSource]):
    return rng if rng is not None else random


def reward_collection_for(reward_id, item_ids: set) -> RewardCollection:
    """Anything not found in the items catalog is assumed to be a loom ball."""
    return "items" if reward_id in item_ids else "loom_balls"


def build_reward_pool(
    items: Iterable[dict],
    loom_balls: Iterable[dict],
    audience: RewardAudience,
) -> list[RewardCandidate]:
    """Turn catalog documents into candidates weighted for one audience.

    Items come first, then loom balls, matching catalog order. The pool is
    read-only from here on: select_rewards() always works on a copy.
    """
    items = list(items)
    item_ids = {doc["_id"] for doc in items}

    pool = []
    for doc in [*items, *loom_balls]:
        pool.append(
            RewardCandidate(
                id=doc["_id"],
                collection=reward_collection_for(doc["_id"], item_ids),
                name=doc["name"],
                weight=doc.get(audience.chance_field) or 0.0,
                min_quantity=doc["min_reward_quantity"],
                max_quantity=doc["max_reward_quantity"],
            )
        )
    return pool


def draw_reward_count(
    min_count: int, max_count: int, rng: Optional[RandomSource] = None
) -> int:
    """Uniform integer in [min_count, max_count], both inclusive."""
    return resolve_rng(rng).randint(min_count, max_count)


def draw_quantity(candidate: RewardCandidate, rng: Optional[RandomSource] = None) -> int:
    return resolve_rng(rng).randint(candidate.min_quantity, candidate.max_quantity)


def weighted_index(weights: Sequence[float], rng: Optional[RandomSource] = None) -> int:
    """Pick an index with probability proportional to its weight.

    Draws a uniform real in [0, total) and finds the first cumulative sum
    strictly greater than it, so zero-weight entries are never hit. When
    the total is zero every index is equally likely.
    """
    if not weights:
        raise ValueError("cannot pick from an empty sequence")

    source = resolve_rng(rng)
    cumulative = list(accumulate(weights))
    total = cumulative[-1]
    if total <= 0:
        return source.randrange(len(weights))

    target = source.random() * total
    index = bisect.bisect_right(cumulative, target)
    if index == len(weights):
        # Float rounding put target on the total; fall back to the last
        # entry that can actually be drawn
        index = max(i for i, weight in enumerate(weights) if weight > 0)
    return index


def select_rewards(
    pool: Sequence[RewardCandidate],
    count: int,
    rng: Optional[RandomSource] = None,
) -> list[GeneratedReward]:
    """Draw up to `count` distinct rewards from `pool`.

    Stops early when the pool runs out, so the result may be shorter than
    `count` (and is empty for an empty pool). `pool` itself is not modified.
    """
    working = list(pool)
    rewards: list[GeneratedReward] = []

    while len(rewards) < count and working:
        selected = working[weighted_index([c.weight for c in working], rng)]
        rewards.append(
            GeneratedReward(
                reward_collection=selected.collection,
                reward_id=selected.id,
                reward_quantity=draw_quantity(selected, rng),
            )
        )
        # Remove by id so a candidate listed twice can't be drawn twice either
        working = [c for c in working if c.id != selected.id]

    return rewards
