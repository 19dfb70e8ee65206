"""Roads API response models"""

from typing import Optional

from pydantic import Field

from geomaps.domain.models.base import ApiModel
from geomaps.domain.models.location import LatLng


class SnappedLocation(ApiModel):
    latitude: float
    longitude: float

    def to_latlng(self) -> LatLng:
        return LatLng(self.latitude, self.longitude)


class SnappedPoint(ApiModel):
    """A point snapped to the road network.

    ``original_index`` is None for points added by interpolation.
    """

    location: SnappedLocation
    original_index: Optional[int] = Field(None, alias="originalIndex")
    place_id: str = Field("", alias="placeId")
