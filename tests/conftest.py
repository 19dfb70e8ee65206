from __future__ import annotations

import json
import random
from typing import Any, List, Optional, Union

import pytest
import requests
from requests.adapters import BaseAdapter

from geomaps.infrastructure.backoff import BackoffAdapter, BackoffPolicy
from geomaps.infrastructure.maps.client import MapsClient


def make_response(
    status_code: int,
    payload: Any = None,
    *,
    content: Optional[bytes] = None,
    request: Optional[requests.PreparedRequest] = None,
) -> requests.Response:
    r = requests.Response()
    r.status_code = status_code
    r.url = request.url if request is not None else "http://example.test"
    r.request = request
    if content is None:
        content = json.dumps(payload if payload is not None else {}).encode("utf-8")
        r.headers["Content-Type"] = "application/json"
    r._content = content  # type: ignore[attr-defined]
    return r


class FakeTransport(BaseAdapter):
    """Adapter that replays a script of responses/exceptions and records requests.

    Script items are status codes, (status, payload) tuples, Response objects
    or exceptions. The last item repeats once the script runs out.
    """

    def __init__(self, script: List[Union[int, tuple, requests.Response, Exception]]):
        super().__init__()
        self.script = list(script)
        self.requests: List[requests.PreparedRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def send(self, request, **kwargs):
        self.requests.append(request)
        index = min(len(self.requests) - 1, len(self.script) - 1)
        item = self.script[index]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, requests.Response):
            item.request = request
            return item
        if isinstance(item, tuple):
            status, payload = item
            if isinstance(payload, bytes):
                return make_response(status, content=payload, request=request)
            return make_response(status, payload, request=request)
        return make_response(item, request=request)

    def close(self):
        pass


class SleepRecorder:
    def __init__(self):
        self.waits: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)

    @property
    def count(self) -> int:
        return len(self.waits)


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def policy_factory(sleeps):
    def _factory(max_tries: int = 5, **kwargs) -> BackoffPolicy:
        kwargs.setdefault("rng", random.Random(1234))
        return BackoffPolicy(max_tries=max_tries, sleep=sleeps, **kwargs)

    return _factory


@pytest.fixture
def session_factory(policy_factory):
    """Build (session, transport) with BackoffAdapter over a FakeTransport"""

    def _factory(script, max_tries: int = 5):
        transport = FakeTransport(script)
        session = requests.Session()
        adapter = BackoffAdapter(transport=transport, policy=policy_factory(max_tries))
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session, transport

    return _factory


@pytest.fixture
def client_factory(session_factory, monkeypatch):
    """Build (MapsClient, transport) with an API key and scripted responses"""
    monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_MAPS_CLIENT_ID", raising=False)
    monkeypatch.delenv("GOOGLE_MAPS_SIGNING_KEY", raising=False)

    def _factory(script, max_tries: int = 5, **client_kwargs):
        session, transport = session_factory(script, max_tries=max_tries)
        client_kwargs.setdefault("api_key", "test-key")
        return MapsClient(session=session, **client_kwargs), transport

    return _factory
