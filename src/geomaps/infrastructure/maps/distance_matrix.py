"""Distance Matrix API.

See https://developers.google.com/maps/documentation/distancematrix/
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from geomaps.domain.models.constants import Avoid, TravelMode, Units, enum_value
from geomaps.domain.models.distance_matrix import DistanceMatrixResult
from geomaps.domain.models.location import Location, encode_locations
from geomaps.infrastructure.maps.client import MapsClient
from geomaps.infrastructure.maps.params import Timestamp, unix_time


@dataclass
class DistanceMatrixOptions:
    language: Optional[str] = None
    units: Optional[Units] = None
    mode: Optional[TravelMode] = None  # transit is not supported here
    avoid: Optional[Avoid] = None
    departure_time: Optional[Timestamp] = None

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.mode:
            params["mode"] = enum_value(self.mode)
        if self.language:
            params["language"] = self.language
        if self.avoid:
            params["avoid"] = enum_value(self.avoid)
        if self.units:
            params["units"] = enum_value(self.units)
        if self.departure_time is not None:
            params["departure_time"] = unix_time(self.departure_time)
        return params


def distance_matrix_params(
    origins: List[Location], destinations: List[Location], options: Optional[DistanceMatrixOptions] = None
) -> Dict[str, str]:
    if not origins or not destinations:
        raise ValueError("At least one origin and one destination are required")
    params = {
        "origins": encode_locations(origins),
        "destinations": encode_locations(destinations),
    }
    if options is not None:
        params.update(options.to_params())
    return params


def distance_matrix(
    client: MapsClient,
    origins: List[Location],
    destinations: List[Location],
    options: Optional[DistanceMatrixOptions] = None,
) -> DistanceMatrixResult:
    """Request travel distance and time for every origin/destination pair"""
    payload = client.do_status(
        client.base_url + "distancematrix/json", distance_matrix_params(origins, destinations, options)
    )
    return DistanceMatrixResult.model_validate(payload)
