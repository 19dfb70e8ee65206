"""Maps web service endpoints"""

from geomaps.infrastructure.maps.client import MapsClient, check_status
from geomaps.infrastructure.maps.directions import DirectionsOptions, directions
from geomaps.infrastructure.maps.distance_matrix import DistanceMatrixOptions, distance_matrix
from geomaps.infrastructure.maps.elevation import (
    elevation,
    elevation_path,
    elevation_path_polyline,
    elevation_polyline,
)
from geomaps.infrastructure.maps.geocoding import (
    Component,
    GeocodeOptions,
    ReverseGeocodeOptions,
    geocode,
    reverse_geocode,
)
from geomaps.infrastructure.maps.roads import snap_to_roads
from geomaps.infrastructure.maps.static_map import Markers, Path, StaticMapOptions, Style, StyleRule, static_map
from geomaps.infrastructure.maps.street_view import StreetViewOptions, street_view
from geomaps.infrastructure.maps.timezone import timezone

__all__ = [
    "Component",
    "DirectionsOptions",
    "DistanceMatrixOptions",
    "GeocodeOptions",
    "MapsClient",
    "Markers",
    "Path",
    "ReverseGeocodeOptions",
    "StaticMapOptions",
    "StreetViewOptions",
    "Style",
    "StyleRule",
    "check_status",
    "directions",
    "distance_matrix",
    "elevation",
    "elevation_path",
    "elevation_path_polyline",
    "elevation_polyline",
    "geocode",
    "reverse_geocode",
    "snap_to_roads",
    "static_map",
    "street_view",
    "timezone",
]
