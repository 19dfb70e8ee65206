"""Maps web services client: credentials, signing and request dispatch"""

import logging
import os
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode, urlsplit

import requests

from geomaps.domain.models.constants import Status
from geomaps.infrastructure.backoff import BackoffPolicy
from geomaps.infrastructure.errors import APIError, HTTPError, MapsError
from geomaps.infrastructure.http_client import create_session
from geomaps.infrastructure.signing import redact_url, sign_url

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://maps.googleapis.com/maps/api/"
DEFAULT_ROADS_BASE_URL = "https://roads.googleapis.com/v1/"

# Query parameters: repeated keys (markers, path, style) are given as a list
Params = Mapping[str, Union[str, Sequence[str]]]


def _pairs(params: Params) -> Iterable[Tuple[str, str]]:
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                yield key, item
        else:
            yield key, value


class MapsClient:
    """Client for the Maps web services

    Every logical request is one GET through ``session``, whose default
    adapter retries transport errors and 5xx responses with backoff.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        client_id: Optional[str] = None,
        signing_key: Optional[str] = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        roads_base_url: str = DEFAULT_ROADS_BASE_URL,
        timeout: float = 10.0,
        retry_policy: Optional[BackoffPolicy] = None,
        session: Optional[requests.Session] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        """Initialize maps client

        Args:
            api_key: API key (default: from GOOGLE_MAPS_API_KEY env)
            client_id: Enterprise client ID (default: from GOOGLE_MAPS_CLIENT_ID env)
            signing_key: Enterprise signing key (default: from GOOGLE_MAPS_SIGNING_KEY env)
            base_url: Base URL of the maps web services
            roads_base_url: Base URL of the Roads API
            timeout: Per-attempt HTTP timeout in seconds
            retry_policy: Backoff policy for the default session (ignored if session is given)
            session: Pre-built requests session
            cancel_event: When set, in-flight requests stop retrying (default session only)

        Raises:
            ValueError: If neither an API key nor client ID + signing key is available
        """
        self.api_key = api_key or os.getenv("GOOGLE_MAPS_API_KEY")
        self.client_id = client_id or os.getenv("GOOGLE_MAPS_CLIENT_ID")
        self.signing_key = signing_key or os.getenv("GOOGLE_MAPS_SIGNING_KEY")

        if not self.api_key and not (self.client_id and self.signing_key):
            raise ValueError(
                "Maps credentials are required. "
                "Set GOOGLE_MAPS_API_KEY, or GOOGLE_MAPS_CLIENT_ID and GOOGLE_MAPS_SIGNING_KEY."
            )

        self.base_url = base_url
        self.roads_base_url = roads_base_url
        self.timeout = timeout
        self.session = session or create_session(retry_policy, cancel_event=cancel_event)

    def build_url(self, url: str, params: Params) -> str:
        """Add credentials, encode the query (keys sorted) and sign it if needed"""
        pairs: List[Tuple[str, str]] = list(_pairs(params))
        if self.api_key:
            pairs.append(("key", self.api_key))
        if self.client_id:
            pairs.append(("client", self.client_id))

        # Stable sort: repeated keys keep their order
        query = urlencode(sorted(pairs, key=lambda pair: pair[0]))
        if self.signing_key:
            query += "&signature=" + sign_url(self.signing_key, urlsplit(url).path, query)
        return f"{url}?{query}"

    def do(self, url: str, params: Params) -> requests.Response:
        """Perform one logical GET request"""
        full_url = self.build_url(url, params)
        logger.debug(f"HTTP GET {redact_url(full_url)}")
        return self.session.get(full_url, timeout=self.timeout)

    def do_decode(self, url: str, params: Params) -> Dict[str, Any]:
        """GET and decode a JSON body

        Raises:
            HTTPError: If the response status is not 200
            MapsError: If the body is not valid JSON
        """
        response = self.do(url, params)
        if response.status_code != 200:
            raise HTTPError(response)
        try:
            return response.json()
        except ValueError as e:
            raise MapsError(f"Failed to parse response JSON: {e}") from e

    def do_status(self, url: str, params: Params) -> Dict[str, Any]:
        """GET, decode and check the ``status`` field of the payload"""
        payload = self.do_decode(url, params)
        check_status(payload)
        return payload

    def fetch_image(self, url: str, params: Params) -> bytes:
        """GET binary content (static map, street view)"""
        response = self.do(url, params)
        if response.status_code != 200:
            raise HTTPError(response)
        return response.content

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "MapsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def check_status(payload: Mapping[str, Any]) -> None:
    """Raise APIError unless the payload status is OK"""
    status = payload.get("status", "")
    if status != Status.OK.value:
        raise APIError(status, payload.get("error_message", ""))
