from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

RewardCollection = Literal["items", "loom_balls"]


class RewardAudience(str, Enum):
    """Who a gym reward list is for. Each audience has its own chance field."""

    PLAYER = "player"
    OWNER = "owner"

    @property
    def chance_field(self) -> str:
        # Catalog field holding this audience's selection weight
        return f"gym_reward_chance_{self.value}"

    @property
    def gym_field(self) -> str:
        # Gym field holding this audience's current reward list
        return f"current_{self.value}s_rewards"


class RewardCandidate(BaseModel):
    """One entry of a reward pool: an item or loom ball with its draw weight."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    id: Any  # ObjectId of the catalog document
    collection: RewardCollection
    name: str
    weight: float = Field(..., ge=0)  # Relative, not normalized; 0 = never drawn unless alone
    min_quantity: int = Field(..., ge=0)
    max_quantity: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_quantity_bounds(self):
        if self.min_quantity > self.max_quantity:
            raise ValueError("min_quantity must not exceed max_quantity")
        return self


class GeneratedReward(BaseModel):
    """A reward stored on a gym. This is the persisted document shape."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    reward_collection: RewardCollection
    reward_id: Any
    reward_quantity: int


class RewardSummary(BaseModel):
    """Total quantity generated per reward name, per audience, for one refresh run."""

    players: dict[str, int] = {}
    owners: dict[str, int] = {}
    gyms_updated: int = 0

    def totals_for(self, audience: RewardAudience) -> dict[str, int]:
        return self.players if audience is RewardAudience.PLAYER else self.owners

    def add(self, audience: RewardAudience, name: str, quantity: int) -> None:
        totals = self.totals_for(audience)
        totals[name] = totals.get(name, 0) + quantity
