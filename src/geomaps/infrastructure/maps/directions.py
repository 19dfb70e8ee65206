"""Directions API.

See https://developers.google.com/maps/documentation/directions/
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from geomaps.domain.models.constants import Avoid, TravelMode, Units, enum_value
from geomaps.domain.models.directions import Route
from geomaps.domain.models.location import Location, encode_location, encode_locations
from geomaps.infrastructure.maps.client import MapsClient
from geomaps.infrastructure.maps.params import Timestamp, join, unix_time


@dataclass
class DirectionsOptions:
    """Options for directions requests

    ``mode=TRANSIT`` needs either ``departure_time`` or ``arrival_time``.
    Waypoints are only supported for driving, walking and bicycling.
    """

    waypoints: Optional[List[Location]] = None
    optimize_waypoints: bool = False  # let the API reorder waypoints
    alternatives: bool = False
    avoid: List[Avoid] = field(default_factory=list)
    mode: Optional[TravelMode] = None
    language: Optional[str] = None
    units: Optional[Units] = None
    region: Optional[str] = None  # ccTLD two-character code
    departure_time: Optional[Timestamp] = None
    arrival_time: Optional[Timestamp] = None

    def __post_init__(self):
        if self.departure_time is not None and self.arrival_time is not None:
            raise ValueError("departure_time and arrival_time are mutually exclusive")

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.mode:
            params["mode"] = enum_value(self.mode)
        if self.waypoints is not None:
            prefix = "optimize:true|" if self.optimize_waypoints else ""
            params["waypoints"] = prefix + encode_locations(self.waypoints)
        if self.alternatives:
            params["alternatives"] = "true"
        if self.avoid:
            params["avoid"] = join(enum_value(a) for a in self.avoid)
        if self.language:
            params["language"] = self.language
        if self.units:
            params["units"] = enum_value(self.units)
        if self.region:
            params["region"] = self.region
        if self.departure_time is not None:
            params["departure_time"] = unix_time(self.departure_time)
        if self.arrival_time is not None:
            params["arrival_time"] = unix_time(self.arrival_time)
        return params


def directions_params(
    origin: Location, destination: Location, options: Optional[DirectionsOptions] = None
) -> Dict[str, str]:
    params = {
        "origin": encode_location(origin),
        "destination": encode_location(destination),
    }
    if options is not None:
        params.update(options.to_params())
    return params


def directions(
    client: MapsClient,
    origin: Location,
    destination: Location,
    options: Optional[DirectionsOptions] = None,
) -> List[Route]:
    """Request routes between origin and destination

    Raises:
        APIError: If the response status is not OK (e.g. ZERO_RESULTS)
    """
    payload = client.do_status(client.base_url + "directions/json", directions_params(origin, destination, options))
    return [Route.model_validate(route) for route in payload.get("routes", [])]
