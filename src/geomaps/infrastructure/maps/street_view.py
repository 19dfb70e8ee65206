"""Street View Image API"""

from dataclasses import dataclass
from typing import Dict, Optional

from geomaps.domain.models.location import Location, Size, encode_location
from geomaps.infrastructure.maps.client import MapsClient


@dataclass
class StreetViewOptions:
    """Options for street view images

    Attributes:
        location: Where the image is taken from
        pano: Specific panorama ID (used instead of location)
        heading: Compass heading of the camera (0-360, 90 = East)
        fov: Horizontal field of view (0-120, default 90)
        pitch: Up/down angle relative to the vehicle (-90..90)
    """

    location: Optional[Location] = None
    pano: Optional[str] = None
    heading: Optional[float] = None
    fov: Optional[float] = None
    pitch: float = 0.0

    def __post_init__(self):
        if self.heading is not None and not (0 <= self.heading <= 360):
            raise ValueError("heading must be between 0 and 360")
        if self.fov is not None and not (0 <= self.fov <= 120):
            raise ValueError("fov must be between 0 and 120")
        if not (-90 <= self.pitch <= 90):
            raise ValueError("pitch must be between -90 and 90")

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.location is not None:
            params["location"] = encode_location(self.location)
        if self.pano:
            params["pano"] = self.pano
        if self.heading is not None:
            params["heading"] = f"{self.heading:f}"
        if self.fov is not None:
            params["fov"] = f"{self.fov:f}"
        if self.pitch != 0:
            params["pitch"] = f"{self.pitch:f}"
        return params


def street_view_params(size: Size, options: Optional[StreetViewOptions] = None) -> Dict[str, str]:
    params = {"size": str(size)}
    if options is not None:
        params.update(options.to_params())
    return params


def street_view(client: MapsClient, size: Size, options: Optional[StreetViewOptions] = None) -> bytes:
    """Fetch a street view image; returns the raw image bytes"""
    return client.fetch_image(client.base_url + "streetview", street_view_params(size, options))
