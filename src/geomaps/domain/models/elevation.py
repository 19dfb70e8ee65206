"""Elevation API response model"""

from geomaps.domain.models.base import ApiModel
from geomaps.domain.models.location import LatLng


class ElevationResult(ApiModel):
    """Elevation in meters at ``location``.

    ``resolution`` is the maximum distance (meters) between the data points
    the elevation was interpolated from; 0 when unknown.
    """

    elevation: float
    location: LatLng
    resolution: float = 0.0
