"""Static Maps API.

See https://developers.google.com/maps/documentation/staticmaps/
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from geomaps.domain.models.constants import MapFormat, MapType, MarkerSize, Visibility, enum_value
from geomaps.domain.models.location import Location, Size, encode_location, encode_locations
from geomaps.infrastructure.maps.client import MapsClient

# (r, g, b) or (r, g, b, a), 0-255 each
Color = Union[Tuple[int, int, int], Tuple[int, int, int, int]]


def _channels(color: Color) -> Tuple[int, int, int, int]:
    if len(color) == 3:
        r, g, b = color
        a = 255
    elif len(color) == 4:
        r, g, b, a = color
    else:
        raise ValueError(f"Color must have 3 or 4 channels, got {color!r}")
    for channel in (r, g, b, a):
        if not 0 <= channel <= 255:
            raise ValueError(f"Color channel out of range: {color!r}")
    return r, g, b, a


def rgb(color: Color) -> str:
    """0xRRGGBB; alpha is ignored"""
    r, g, b, _ = _channels(color)
    return f"0x{r:02X}{g:02X}{b:02X}"


def rgba(color: Color) -> str:
    r, g, b, a = _channels(color)
    return f"0x{r:02X}{g:02X}{b:02X}{a:02X}"


def _descriptor(parts: List[str], tail: str) -> str:
    style = "|".join(parts)
    if style:
        style += "|"
    return style + tail


@dataclass
class Markers:
    """A group of markers sharing one style"""

    locations: List[Location]
    size: Optional[MarkerSize] = None
    color: Optional[Color] = None
    label: Optional[str] = None  # single uppercase alphanumeric character
    icon_url: Optional[str] = None
    hide_shadow: bool = False

    def encode(self) -> str:
        parts = []
        if self.size:
            parts.append("size:" + enum_value(self.size))
        if self.color is not None:
            parts.append("color:" + rgb(self.color))
        if self.label:
            parts.append("label:" + self.label)
        if self.icon_url:
            parts.append("icon:" + self.icon_url)
        if self.hide_shadow:
            parts.append("shadow:false")
        return _descriptor(parts, encode_locations(self.locations))


@dataclass
class Path:
    """A path drawn through locations, or along an encoded polyline"""

    locations: List[Location] = field(default_factory=list)
    polyline: Optional[str] = None
    weight: Optional[int] = None  # pixels, API default 5
    color: Optional[Color] = None
    fill_color: Optional[Color] = None
    geodesic: bool = False

    def encode(self) -> str:
        parts = []
        if self.weight:
            parts.append(f"weight:{self.weight}")
        if self.color is not None:
            parts.append("color:" + rgba(self.color))
        if self.fill_color is not None:
            parts.append("fillcolor:" + rgba(self.fill_color))
        if self.geodesic:
            parts.append("geodesic:true")
        if self.polyline:
            return _descriptor(parts, "enc:" + self.polyline)
        return _descriptor(parts, encode_locations(self.locations))


@dataclass
class StyleRule:
    """Style rule; lightness and saturation are -100..100, gamma 0.01..10"""

    hue: Optional[Color] = None
    lightness: float = 0.0
    saturation: float = 0.0
    gamma: Optional[float] = None
    invert_lightness: bool = False
    visibility: Optional[Visibility] = None

    def encode(self) -> str:
        parts = []
        if self.hue is not None:
            parts.append("hue:" + rgb(self.hue))
        if self.lightness:
            parts.append(f"lightness:{self.lightness:f}")
        if self.saturation:
            parts.append(f"saturation:{self.saturation:f}")
        if self.gamma is not None:
            parts.append(f"gamma:{self.gamma:f}")
        if self.invert_lightness:
            parts.append("invert_lightness:true")
        if self.visibility:
            parts.append("visibility:" + enum_value(self.visibility))
        return "|".join(parts)


@dataclass
class Style:
    """Custom styling of a feature type, e.g. Style("water", "geometry.fill", [...])"""

    feature: Optional[str] = None
    element: Optional[str] = None
    rules: List[StyleRule] = field(default_factory=list)

    def encode(self) -> str:
        parts = []
        if self.feature:
            parts.append("feature:" + self.feature)
        if self.element:
            parts.append("element:" + self.element)
        parts.extend(rule.encode() for rule in self.rules)
        return "|".join(parts)


@dataclass
class StaticMapOptions:
    center: Optional[Location] = None
    zoom: Optional[int] = None  # 0 (world) .. 21+ (buildings)
    scale: Optional[int] = None  # 1, 2 (4 for enterprise clients)
    format: Optional[MapFormat] = None
    map_type: Optional[MapType] = None
    language: Optional[str] = None
    region: Optional[str] = None
    markers: List[Markers] = field(default_factory=list)
    paths: List[Path] = field(default_factory=list)
    visible: List[Location] = field(default_factory=list)
    styles: List[Style] = field(default_factory=list)

    def to_params(self) -> Dict[str, Union[str, List[str]]]:
        params: Dict[str, Union[str, List[str]]] = {}
        if self.center is not None:
            params["center"] = encode_location(self.center)
        if self.zoom is not None:
            params["zoom"] = str(self.zoom)
        if self.scale is not None:
            params["scale"] = str(self.scale)
        if self.format:
            params["format"] = enum_value(self.format)
        if self.map_type:
            params["maptype"] = enum_value(self.map_type)
        if self.language:
            params["language"] = self.language
        if self.region:
            params["region"] = self.region
        if self.markers:
            params["markers"] = [m.encode() for m in self.markers]
        if self.paths:
            params["path"] = [p.encode() for p in self.paths]
        if self.visible:
            params["visible"] = encode_locations(self.visible)
        if self.styles:
            params["style"] = [s.encode() for s in self.styles]
        return params


def static_map_params(size: Size, options: Optional[StaticMapOptions] = None) -> Dict[str, Union[str, List[str]]]:
    params: Dict[str, Union[str, List[str]]] = {"size": str(size)}
    if options is not None:
        params.update(options.to_params())
    if "center" not in params and "markers" not in params and "path" not in params and "visible" not in params:
        raise ValueError("A static map needs a center, markers, paths or visible locations")
    return params


def static_map(client: MapsClient, size: Size, options: Optional[StaticMapOptions] = None) -> bytes:
    """Fetch a static map image; returns the raw image bytes"""
    return client.fetch_image(client.base_url + "staticmap", static_map_params(size, options))
