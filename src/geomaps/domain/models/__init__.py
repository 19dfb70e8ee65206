"""Domain models: request value types and decoded responses."""

from geomaps.domain.models.directions import Distance, Duration, Leg, Polyline, Route, Step
from geomaps.domain.models.distance_matrix import DistanceMatrixResult
from geomaps.domain.models.elevation import ElevationResult
from geomaps.domain.models.geocoding import GeocodeResult
from geomaps.domain.models.location import Bounds, LatLng, Location, Size
from geomaps.domain.models.roads import SnappedLocation, SnappedPoint
from geomaps.domain.models.timezone import TimeZoneResult

__all__ = [
    "Bounds",
    "Distance",
    "DistanceMatrixResult",
    "Duration",
    "ElevationResult",
    "GeocodeResult",
    "LatLng",
    "Leg",
    "Location",
    "Polyline",
    "Route",
    "Size",
    "SnappedLocation",
    "SnappedPoint",
    "Step",
    "TimeZoneResult",
]
