"""Reading the JSON fixtures that describe the game world.

Every fixture is read and validated before the seeder touches the database:
a missing or malformed file raises ReferenceDataError, and callers abort the
run instead of seeding a partial grid.
"""

import json
import logging
from pathlib import Path
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from app.catalog.models import (
    ItemRecord,
    LoomBallRecord,
    LoomieRarityRecord,
    LoomieRecord,
    LoomieTypeRecord,
)
from app.config import settings
from app.zones.models import PlaceRecord, ZoneFrontierRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class ReferenceDataError(Exception):
    """A fixture could not be read, parsed or validated."""


class ReferenceData(BaseModel):
    zones: list[ZoneFrontierRecord]
    places: list[PlaceRecord]
    loomie_types: list[LoomieTypeRecord]
    loomie_rarities: list[LoomieRarityRecord]
    loomies: list[LoomieRecord]
    items: list[ItemRecord]
    loomballs: list[LoomBallRecord]


# ReferenceData field -> (fixture file name without .json, record model)
FIXTURES: dict[str, tuple[str, type[BaseModel]]] = {
    "zones": ("zones", ZoneFrontierRecord),
    "places": ("places", PlaceRecord),
    "loomie_types": ("loomies_types", LoomieTypeRecord),
    "loomie_rarities": ("loomies_rarities", LoomieRarityRecord),
    "loomies": ("loomies", LoomieRecord),
    "items": ("items", ItemRecord),
    "loomballs": ("loomballs", LoomBallRecord),
}


def read_fixture(name: str, data_dir: Optional[Path] = None) -> list[dict]:
    """Read data/<name>.json and return its top-level array."""
    path = Path(data_dir or settings.DATA_DIR) / f"{name}.json"
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        # ValueError covers both JSONDecodeError and UnicodeDecodeError
        raise ReferenceDataError(f"Error reading {path}: {exc}") from exc

    if not isinstance(data, list):
        raise ReferenceDataError(f"Error reading {path}: expected a JSON array")
    return data


def parse_records(name: str, raw: list[dict], model: type[RecordT]) -> list[RecordT]:
    try:
        return [model.model_validate(entry) for entry in raw]
    except ValidationError as exc:
        raise ReferenceDataError(f"Invalid record in {name}.json: {exc}") from exc


def load_reference_data(data_dir: Optional[Path] = None) -> ReferenceData:
    """Read and validate every fixture. Raises ReferenceDataError on the first failure."""
    parsed = {}
    for field, (fixture, model) in FIXTURES.items():
        parsed[field] = parse_records(fixture, read_fixture(fixture, data_dir), model)
        logger.debug("Read %d records from %s.json", len(parsed[field]), fixture)
    return ReferenceData(**parsed)
