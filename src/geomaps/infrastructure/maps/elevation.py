"""Elevation API.

See https://developers.google.com/maps/documentation/elevation/
"""

from typing import Dict, List

from geomaps.domain.models.elevation import ElevationResult
from geomaps.domain.models.location import LatLng, encode_locations
from geomaps.infrastructure.maps.client import MapsClient


def _samples(samples: int) -> str:
    if samples < 1:
        raise ValueError("samples must be >= 1")
    return str(samples)


def elevation_params(locations: List[LatLng]) -> Dict[str, str]:
    return {"locations": encode_locations(locations)}


def elevation_polyline_params(polyline: str) -> Dict[str, str]:
    return {"locations": "enc:" + polyline}


def elevation_path_params(path: List[LatLng], samples: int) -> Dict[str, str]:
    return {"path": encode_locations(path), "samples": _samples(samples)}


def elevation_path_polyline_params(polyline: str, samples: int) -> Dict[str, str]:
    return {"path": "enc:" + polyline, "samples": _samples(samples)}


def _request(client: MapsClient, params: Dict[str, str]) -> List[ElevationResult]:
    payload = client.do_status(client.base_url + "elevation/json", params)
    return [ElevationResult.model_validate(result) for result in payload.get("results", [])]


def elevation(client: MapsClient, locations: List[LatLng]) -> List[ElevationResult]:
    """Elevation at each of the given locations"""
    return _request(client, elevation_params(locations))


def elevation_polyline(client: MapsClient, polyline: str) -> List[ElevationResult]:
    """Elevation at each point of an encoded polyline"""
    return _request(client, elevation_polyline_params(polyline))


def elevation_path(client: MapsClient, path: List[LatLng], samples: int) -> List[ElevationResult]:
    """Elevation at ``samples`` equidistant points along a path"""
    return _request(client, elevation_path_params(path, samples))


def elevation_path_polyline(client: MapsClient, polyline: str, samples: int) -> List[ElevationResult]:
    """Elevation at ``samples`` equidistant points along an encoded polyline"""
    return _request(client, elevation_path_polyline_params(polyline, samples))
