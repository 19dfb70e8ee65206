"""Roads API: snap GPS points to the most likely roads travelled."""

from typing import Dict, List

from geomaps.domain.models.location import LatLng, encode_locations
from geomaps.domain.models.roads import SnappedPoint
from geomaps.infrastructure.maps.client import MapsClient

MAX_PATH_POINTS = 100


def snap_to_roads_params(path: List[LatLng], interpolate: bool = False) -> Dict[str, str]:
    if not path:
        raise ValueError("path must contain at least one point")
    if len(path) > MAX_PATH_POINTS:
        raise ValueError(f"path must contain at most {MAX_PATH_POINTS} points")
    params = {"path": encode_locations(path)}
    if interpolate:
        params["interpolate"] = "true"
    return params


def snap_to_roads(client: MapsClient, path: List[LatLng], interpolate: bool = False) -> List[SnappedPoint]:
    """Snap a path to roads. The Roads API has no ``status`` field"""
    payload = client.do_decode(client.roads_base_url + "snapToRoads", snap_to_roads_params(path, interpolate))
    return [SnappedPoint.model_validate(point) for point in payload.get("snappedPoints", [])]
