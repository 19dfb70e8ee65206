"""Error types raised by the maps client and the retrying transport."""

from __future__ import annotations

import requests


class MapsError(Exception):
    """Base class for errors raised by geomaps itself."""

    pass


class HTTPError(requests.HTTPError):
    """The server answered, but not with the status the caller needed.

    The response is kept on ``.response`` for inspection.
    """

    def __init__(self, response: requests.Response):
        super().__init__(f"http error {response.status_code}", response=response)

    @property
    def status_code(self) -> int:
        return self.response.status_code


class ServerError(HTTPError):
    """The server answered with a 5xx status (retryable)."""

    pass


class APIError(MapsError):
    """HTTP 200, but the payload carries a non-OK ``status`` field."""

    def __init__(self, status: str, message: str = ""):
        self.status = status
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.message:
            return f"API error {self.status!r}: {self.message}"
        return f"API error {self.status!r}"


class RequestCancelled(MapsError):
    """The caller's cancellation signal was set while a request was in flight."""

    pass
