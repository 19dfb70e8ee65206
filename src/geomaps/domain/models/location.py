"""Location value types shared by all endpoints"""

from dataclasses import dataclass
from typing import Iterable, Union


@dataclass(frozen=True)
class LatLng:
    """A location identified by latitude and longitude"""

    lat: float
    lng: float

    def location(self) -> str:
        """Latitude/longitude pair as a comma-separated string"""
        return f"{self.lat:f},{self.lng:f}"

    def __str__(self) -> str:
        return self.location()


@dataclass(frozen=True)
class Bounds:
    """Viewport bounding box"""

    northeast: LatLng
    southwest: LatLng

    def __str__(self) -> str:
        return f"{self.northeast}|{self.southwest}"


@dataclass(frozen=True)
class Size:
    """Image size in pixels"""

    width: int
    height: int

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError("Image width and height must be >= 1")

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


# A location is either a LatLng or a free-form address ("111 8th Ave, NYC")
Location = Union[LatLng, str]


def encode_location(location: Location) -> str:
    if isinstance(location, LatLng):
        return location.location()
    return str(location)


def encode_locations(locations: Iterable[Location]) -> str:
    return "|".join(encode_location(location) for location in locations)
