from pydantic import BaseModel, Field, model_validator


class LoomieTypeRecord(BaseModel):
    """A creature type as it appears in data/loomies_types.json.

    strong_against holds type *names*; the catalog seeder resolves them to
    ids once every type has been inserted.
    """

    name: str  # e.g. "Fire"
    strong_against: list[str] = []  # Names of the types this one beats


class LoomieRarityRecord(BaseModel):
    name: str  # e.g. "Common"
    spawn_chance: float = Field(..., ge=0, le=1)


class LoomieRecord(BaseModel):
    """A base species. Stats are bonuses over the shared base attributes."""

    serial: int  # Pokedex-like number, unique across species
    name: str
    types: list[str]  # Type names, resolved to ids at seed time
    rarity: str  # Rarity name, resolved to an id at seed time
    extra_hp: int = 0
    extra_def: int = 0
    extra_atk: int = 0


class _RewardableRecord(BaseModel):
    """Shared gym-reward fields of items and loom balls."""

    gym_reward_chance_player: float = Field(..., ge=0, le=1)
    gym_reward_chance_owner: float = Field(..., ge=0, le=1)
    min_reward_quantity: int = Field(..., ge=0)
    max_reward_quantity: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_quantity_bounds(self):
        if self.min_reward_quantity > self.max_reward_quantity:
            raise ValueError("min_reward_quantity must not exceed max_reward_quantity")
        return self


class ItemRecord(_RewardableRecord):
    name: str
    serial: int
    description: str = ""
    target: str = "Loomie"  # Currently items only target loomies
    is_combat_item: bool = False


class LoomBallRecord(_RewardableRecord):
    name: str
    serial: int
    effective_until: float  # Distance where the ball catches at full strength
    decay_until: float  # Distance where the ball reaches minimum_probability
    minimum_probability: float = Field(..., ge=0, le=1)
