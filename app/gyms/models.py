from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator

from app.rewards.models import RewardCollection

# Mongo ObjectIds are exposed as their hex string
ObjectIdStr = Annotated[str, BeforeValidator(str)]


def _none_or_str(v):
    return None if v is None else str(v)


class GymRewardResponse(BaseModel):
    reward_collection: RewardCollection  # "items" or "loom_balls"
    reward_id: ObjectIdStr
    reward_quantity: int


class GymResponse(BaseModel):
    """A gym as shown to operators: location, team and this cycle's rewards."""

    id: ObjectIdStr
    name: str
    latitude: float
    longitude: float
    owner: Annotated[Optional[str], BeforeValidator(_none_or_str)] = None
    protectors: list[ObjectIdStr] = []
    current_players_rewards: list[GymRewardResponse] = []
    current_owners_rewards: list[GymRewardResponse] = []
    rewards_claimed_by: list[ObjectIdStr] = []  # Users who claimed this cycle
