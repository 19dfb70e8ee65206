"""Enumerated values accepted or returned by the web services"""

from enum import Enum
from typing import Any


class Status(str, Enum):
    """Top-level ``status`` values of a JSON response"""

    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    ZERO_RESULTS = "ZERO_RESULTS"
    MAX_WAYPOINTS_EXCEEDED = "MAX_WAYPOINTS_EXCEEDED"
    INVALID_REQUEST = "INVALID_REQUEST"
    REQUEST_DENIED = "REQUEST_DENIED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"


class TravelMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    TRANSIT = "transit"
    BICYCLING = "bicycling"


class Avoid(str, Enum):
    TOLLS = "tolls"
    HIGHWAYS = "highways"
    FERRIES = "ferries"


class Units(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class ComponentType(str, Enum):
    """Component filter keys for geocoding"""

    ROUTE = "route"
    LOCALITY = "locality"
    ADMINISTRATIVE_AREA = "administrative_area"
    POSTAL_CODE = "postal_code"
    COUNTRY = "country"


class LocationType(str, Enum):
    ROOFTOP = "ROOFTOP"
    RANGE_INTERPOLATED = "RANGE_INTERPOLATED"
    GEOMETRIC_CENTER = "GEOMETRIC_CENTER"
    APPROXIMATE = "APPROXIMATE"


class MapFormat(str, Enum):
    PNG = "png"
    PNG32 = "png32"
    GIF = "gif"
    JPG = "jpg"
    JPG_BASELINE = "jpg-baseline"


class MapType(str, Enum):
    ROADMAP = "roadmap"
    SATELLITE = "satellite"
    TERRAIN = "terrain"
    HYBRID = "hybrid"


class MarkerSize(str, Enum):
    TINY = "tiny"
    SMALL = "small"
    MID = "mid"
    LARGE = "large"


class Visibility(str, Enum):
    ON = "on"
    OFF = "off"
    SIMPLIFIED = "simplified"


def enum_value(value: Any) -> str:
    """Plain string for an enum member or a raw string"""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
