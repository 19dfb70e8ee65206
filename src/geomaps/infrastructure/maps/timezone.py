"""Time Zone API.

See https://developers.google.com/maps/documentation/timezone/
"""

from typing import Dict, Optional

from geomaps.domain.models.location import LatLng
from geomaps.domain.models.timezone import TimeZoneResult
from geomaps.infrastructure.maps.client import MapsClient
from geomaps.infrastructure.maps.params import Timestamp, unix_time


def timezone_params(location: LatLng, timestamp: Timestamp, language: Optional[str] = None) -> Dict[str, str]:
    params = {
        "location": location.location(),
        "timestamp": unix_time(timestamp),
    }
    if language:
        params["language"] = language
    return params


def timezone(
    client: MapsClient, location: LatLng, timestamp: Timestamp, language: Optional[str] = None
) -> TimeZoneResult:
    """Time zone information for a location at a given time (DST depends on it)"""
    payload = client.do_status(client.base_url + "timezone/json", timezone_params(location, timestamp, language))
    return TimeZoneResult.model_validate(payload)
