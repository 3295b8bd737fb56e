from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Zone identifiers come from the grid generator and may be numeric or strings
ZoneIdentifier = Union[int, str]


class ZoneFrontierRecord(BaseModel):
    """A frontier cell from data/zones.json, in generator order.

    Fields keep their camelCase names on the wire and in the zones
    collection; the game API reads them that way.
    """

    model_config = ConfigDict(populate_by_name=True)

    identifier: ZoneIdentifier
    left_frontier: float = Field(..., alias="leftFrontier")
    right_frontier: float = Field(..., alias="rightFrontier")
    top_frontier: float = Field(..., alias="topFrontier")
    bottom_frontier: float = Field(..., alias="bottomFrontier")  # Constant along a grid row
    number: int  # Sequential number assigned by the generator


class PlaceRecord(BaseModel):
    """A gym location from data/places.json, tagged with its owning zone."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    latitude: float
    longitude: float
    zone_identifier: ZoneIdentifier = Field(..., alias="zoneIdentifier")


class ZoneResponse(BaseModel):
    """A persisted zone as returned by the operator API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    left_frontier: float = Field(..., alias="leftFrontier")
    right_frontier: float = Field(..., alias="rightFrontier")
    top_frontier: float = Field(..., alias="topFrontier")
    bottom_frontier: float = Field(..., alias="bottomFrontier")
    number: int
    coordinates: str  # "x,y" grid key, unique across zones
    gym: Optional[str] = None  # Id of the zone's gym, if it has one
    loomies: list[str] = []  # Ids of the wild loomies currently in the zone
