"""Geocoding and reverse geocoding.

See https://developers.google.com/maps/documentation/geocoding/
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from geomaps.domain.models.constants import ComponentType, LocationType, enum_value
from geomaps.domain.models.geocoding import GeocodeResult
from geomaps.domain.models.location import Bounds, LatLng
from geomaps.infrastructure.maps.client import MapsClient
from geomaps.infrastructure.maps.params import join


@dataclass(frozen=True)
class Component:
    """A single component filter, e.g. Component(ComponentType.COUNTRY, "ES")"""

    key: ComponentType
    value: str

    def encode(self) -> str:
        return f"{enum_value(self.key)}:{self.value}"


@dataclass
class GeocodeOptions:
    """Options for geocoding an address

    ``region`` and ``bounds`` bias results, they do not restrict them.
    """

    address: Optional[str] = None
    components: List[Component] = field(default_factory=list)
    language: Optional[str] = None
    region: Optional[str] = None
    bounds: Optional[Bounds] = None

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.address:
            params["address"] = self.address
        if self.components:
            params["components"] = join(c.encode() for c in self.components)
        if self.language:
            params["language"] = self.language
        if self.region:
            params["region"] = self.region
        if self.bounds is not None:
            params["bounds"] = str(self.bounds)
        return params


@dataclass
class ReverseGeocodeOptions:
    language: Optional[str] = None
    result_types: List[str] = field(default_factory=list)  # e.g. "country", "street_address"
    location_types: List[LocationType] = field(default_factory=list)

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.language:
            params["language"] = self.language
        if self.result_types:
            params["result_type"] = join(self.result_types)
        if self.location_types:
            params["location_type"] = join(enum_value(t) for t in self.location_types)
        return params


def geocode_params(options: GeocodeOptions) -> Dict[str, str]:
    if not options.address and not options.components:
        raise ValueError("Geocoding needs an address or at least one component filter")
    return options.to_params()


def reverse_geocode_params(latlng: LatLng, options: Optional[ReverseGeocodeOptions] = None) -> Dict[str, str]:
    params = {"latlng": latlng.location()}
    if options is not None:
        params.update(options.to_params())
    return params


def _results(payload) -> List[GeocodeResult]:
    return [GeocodeResult.model_validate(result) for result in payload.get("results", [])]


def geocode(client: MapsClient, options: GeocodeOptions) -> List[GeocodeResult]:
    """Convert an address (or component filters) to coordinates"""
    return _results(client.do_status(client.base_url + "geocode/json", geocode_params(options)))


def reverse_geocode(
    client: MapsClient, latlng: LatLng, options: Optional[ReverseGeocodeOptions] = None
) -> List[GeocodeResult]:
    """Convert coordinates to the nearest addresses"""
    return _results(client.do_status(client.base_url + "geocode/json", reverse_geocode_params(latlng, options)))
