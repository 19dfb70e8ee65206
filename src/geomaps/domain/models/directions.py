"""Directions API response models.

See https://developers.google.com/maps/documentation/directions/
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional
from zoneinfo import ZoneInfo

from pydantic import Field

from geomaps.domain.models.base import ApiModel
from geomaps.domain.models.location import Bounds, LatLng


class Duration(ApiModel):
    """Duration of a leg or step; ``value`` is in seconds"""

    value: int = 0
    text: str = ""

    def as_timedelta(self) -> timedelta:
        return timedelta(seconds=self.value)


class Distance(ApiModel):
    """Distance of a leg or step; ``value`` is in meters"""

    value: int = 0
    text: str = ""


class Polyline(ApiModel):
    """Encoded polyline.

    See https://developers.google.com/maps/documentation/utilities/polylinealgorithm
    """

    points: str = ""


class TransitTime(ApiModel):
    """A point in time, displayed in the time zone of the transit stop"""

    value: int = 0
    text: str = ""
    time_zone: str = ""

    def as_datetime(self) -> datetime:
        """Return the time as an aware datetime in ``time_zone`` (UTC if unset)"""
        tz = ZoneInfo(self.time_zone) if self.time_zone else timezone.utc
        return datetime.fromtimestamp(self.value, tz=tz)


class Stop(ApiModel):
    location: Optional[LatLng] = None
    name: str = ""


class TransitAgency(ApiModel):
    name: str = ""
    url: str = ""
    phone: str = ""


class Vehicle(ApiModel):
    name: str = ""
    type: str = ""
    icon_url: str = Field("", alias="icon")


class TransitLine(ApiModel):
    name: str = ""
    short_name: str = ""
    color: str = ""
    agencies: List[TransitAgency] = Field(default_factory=list)
    url: str = ""
    icon_url: str = Field("", alias="icon")
    text_color: str = ""
    vehicle: Optional[Vehicle] = None


class TransitDetails(ApiModel):
    """Transit-specific information, present only for transit steps"""

    arrival_stop: Optional[Stop] = None
    departure_stop: Optional[Stop] = None
    arrival_time: Optional[TransitTime] = None
    departure_time: Optional[TransitTime] = None
    headsign: str = ""
    headway: int = 0  # seconds between departures from the same stop
    num_stops: int = 0
    line: Optional[TransitLine] = None


class Step(ApiModel):
    """One step of a leg.

    Transit directions nest walking/driving ``steps`` inside a step.
    """

    travel_mode: str = ""
    start_location: Optional[LatLng] = None
    end_location: Optional[LatLng] = None
    maneuver: str = ""
    polyline: Optional[Polyline] = None
    duration: Optional[Duration] = None
    distance: Optional[Distance] = None
    html_instructions: str = ""
    steps: List[Step] = Field(default_factory=list)
    transit_details: Optional[TransitDetails] = None


class Leg(ApiModel):
    """Part of a route between two consecutive locations (origin, waypoints, destination)"""

    duration: Optional[Duration] = None
    duration_in_traffic: Optional[Duration] = None
    distance: Optional[Distance] = None
    arrival_time: Optional[TransitTime] = None
    departure_time: Optional[TransitTime] = None
    start_location: Optional[LatLng] = None
    end_location: Optional[LatLng] = None
    start_address: str = ""
    end_address: str = ""
    steps: List[Step] = Field(default_factory=list)


class Route(ApiModel):
    """A possible route between the requested origin and destination"""

    summary: str = ""
    legs: List[Leg] = Field(default_factory=list)
    bounds: Optional[Bounds] = None
    copyrights: str = ""
    overview_polyline: Optional[Polyline] = None
    warnings: List[str] = Field(default_factory=list)
    waypoint_order: List[int] = Field(default_factory=list)
