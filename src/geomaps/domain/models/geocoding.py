"""Geocoding API response models"""

from typing import List, Optional

from pydantic import Field

from geomaps.domain.models.base import ApiModel
from geomaps.domain.models.location import Bounds, LatLng


class AddressComponent(ApiModel):
    long_name: str = ""
    short_name: str = ""
    types: List[str] = Field(default_factory=list)


class Geometry(ApiModel):
    location: LatLng
    location_type: str = ""
    viewport: Optional[Bounds] = None
    bounds: Optional[Bounds] = None


class GeocodeResult(ApiModel):
    """A geocoded (or reverse geocoded) result"""

    address_components: List[AddressComponent] = Field(default_factory=list)
    postcode_localities: List[str] = Field(default_factory=list)
    formatted_address: str = ""
    geometry: Geometry
    types: List[str] = Field(default_factory=list)
    partial_match: bool = False
    place_id: str = ""
