import warnings
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    MONGODB_URI: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "loomies"
    DATA_DIR: Path = DEFAULT_DATA_DIR
    API_KEY: str = "changeme"
    DOCS_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"

    # Minutes a wild loomie lives before the remover treats it as outdated
    OUTDATED_LOOMIES_TIMEOUT: int = 30

    # Inclusive ranges for the number of rewards each gym offers per audience
    PLAYER_REWARDS_MIN: int = 4
    PLAYER_REWARDS_MAX: int = 6
    OWNER_REWARDS_MIN: int = 5
    OWNER_REWARDS_MAX: int = 7

    GYM_PROTECTORS_COUNT: int = 6

    model_config = {"env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_ranges(self):
        for audience in ("PLAYER", "OWNER"):
            low = getattr(self, f"{audience}_REWARDS_MIN")
            high = getattr(self, f"{audience}_REWARDS_MAX")
            if low < 0 or low > high:
                raise ValueError(
                    f"{audience}_REWARDS_MIN/MAX must satisfy 0 <= min <= max, got {low}/{high}"
                )
        if self.GYM_PROTECTORS_COUNT < 0:
            raise ValueError("GYM_PROTECTORS_COUNT must not be negative")
        return self


settings = Settings()

if settings.API_KEY == "changeme":
    warnings.warn(
        "API_KEY is set to the default value 'changeme'. "
        "Set a strong API_KEY in your .env file for production.",
        stacklevel=1,
    )
