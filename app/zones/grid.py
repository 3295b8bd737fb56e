"""Grid coordinates and gym matching for the zone frontier cells.

The frontier generator emits cells row by row. A row ends when the
bottomFrontier changes, so coordinates are derived from that alone:

    bottomFrontier: 10, 10, 20  ->  (0,0), (1,0), (0,1)

x counts cells within the current row, y counts rows in encounter order.
The resulting "x,y" keys are grid positions, not geographic coordinates.
"""

import logging
from typing import Iterable, NamedTuple, Optional, Sequence

from app.zones.models import PlaceRecord, ZoneFrontierRecord, ZoneIdentifier

logger = logging.getLogger(__name__)


class ZonePlan(NamedTuple):
    """What the seeder will persist for one frontier cell."""

    zone: ZoneFrontierRecord
    coordinates: tuple[int, int]
    place: Optional[PlaceRecord]  # The gym to create for this zone, if any


def format_coordinates(x: int, y: int) -> str:
    return f"{x},{y}"


def assign_grid_coordinates(zones: Sequence[ZoneFrontierRecord]) -> list[tuple[int, int]]:
    """Return one (x, y) pair per zone, in input order."""
    coordinates = []
    x, y = 0, 0
    previous_bottom = None

    for zone in zones:
        # The first zone opens row 0; every bottomFrontier change opens a new row
        if previous_bottom is not None and zone.bottom_frontier != previous_bottom:
            x = 0
            y += 1
        previous_bottom = zone.bottom_frontier

        coordinates.append((x, y))
        x += 1

    return coordinates


def build_gym_lookup(places: Iterable[PlaceRecord]) -> dict[ZoneIdentifier, PlaceRecord]:
    """Map zone identifier -> place. The first place listed for a zone wins.

    A second place claiming the same zone is a data problem in places.json;
    it is reported and ignored rather than failing the seed.
    """
    lookup: dict[ZoneIdentifier, PlaceRecord] = {}
    for place in places:
        if place.zone_identifier in lookup:
            logger.warning(
                "Zone %s already has gym %r; ignoring duplicate gym %r",
                place.zone_identifier,
                lookup[place.zone_identifier].name,
                place.name,
            )
            continue
        lookup[place.zone_identifier] = place
    return lookup


def plan_zone_grid(
    zones: Sequence[ZoneFrontierRecord], places: Iterable[PlaceRecord]
) -> list[ZonePlan]:
    """Pair every zone with its grid coordinates and its gym place (or None)."""
    lookup = build_gym_lookup(places)

    plans = [
        ZonePlan(zone, coords, lookup.get(zone.identifier))
        for zone, coords in zip(zones, assign_grid_coordinates(zones))
    ]

    known = {zone.identifier for zone in zones}
    for identifier, place in lookup.items():
        if identifier not in known:
            logger.warning("Gym %r points to unknown zone %s; skipping it", place.name, identifier)

    return plans
