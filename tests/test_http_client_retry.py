from __future__ import annotations

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter

from geomaps.domain.config.retry import RetryConfig
from geomaps.infrastructure.backoff import BackoffAdapter, BackoffPolicy
from geomaps.infrastructure.errors import RequestCancelled, ServerError
from geomaps.infrastructure.http_client import backoff_policy_from_config, backoff_policy_from_dict, create_session

from conftest import FakeTransport


def test_session_retries_on_5xx(session_factory, sleeps):
    session, transport = session_factory([500, (200, {"ok": True})], max_tries=2)

    resp = session.get("https://maps.test/api")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert transport.calls == 2
    assert sleeps.count == 1


def test_session_does_not_retry_on_404(session_factory, sleeps):
    session, transport = session_factory([404, 200], max_tries=3)

    resp = session.get("https://maps.test/api")

    assert resp.status_code == 404
    assert transport.calls == 1
    assert sleeps.count == 0


def test_session_raises_server_error_after_exhaustion(session_factory, sleeps):
    session, transport = session_factory([503], max_tries=10)

    with pytest.raises(ServerError) as exc_info:
        session.get("https://maps.test/api")

    assert exc_info.value.response.status_code == 503
    assert transport.calls == 10
    assert sleeps.count == 9


def test_session_retries_connection_errors(session_factory, sleeps):
    session, transport = session_factory(
        [requests.exceptions.ConnectionError("refused"), (200, {"ok": True})], max_tries=3
    )

    resp = session.get("https://maps.test/api")

    assert resp.status_code == 200
    assert transport.calls == 2
    assert sleeps.count == 1


def test_every_attempt_sends_the_same_request(session_factory):
    session, transport = session_factory([500, 500, 200], max_tries=5)

    session.get("https://maps.test/api?address=x")

    assert transport.calls == 3
    assert {r.url for r in transport.requests} == {"https://maps.test/api?address=x"}


def test_adapter_cancel_event(sleeps):
    event = threading.Event()
    event.set()
    transport = FakeTransport([200])
    session = requests.Session()
    session.mount("https://", BackoffAdapter(transport, BackoffPolicy(sleep=sleeps), cancel_event=event))

    with pytest.raises(RequestCancelled):
        session.get("https://maps.test/api")
    assert transport.calls == 0


class _AlwaysFailingHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"
    hits = 0

    def do_GET(self):
        type(self).hits += 1
        body = b'{"error": "boom"}'
        self.send_response(500)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture
def failing_server():
    _AlwaysFailingHandler.hits = 0
    server = ThreadingHTTPServer(("127.0.0.1", 0), _AlwaysFailingHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}/api"
    server.shutdown()
    server.server_close()


def test_retried_5xx_releases_pooled_connection(failing_server, sleeps):
    """Test every retry gets the single pooled connection back"""
    transport = HTTPAdapter(pool_connections=1, pool_maxsize=1, pool_block=True)
    session = requests.Session()
    session.mount("http://", BackoffAdapter(transport, BackoffPolicy(max_tries=3, sleep=sleeps)))
    outcome = {}

    def worker():
        try:
            session.get(failing_server, timeout=5)
        except ServerError as e:
            outcome["error"] = e

    thread = threading.Thread(target=worker, daemon=True)
    thread.start()
    thread.join(timeout=10)

    assert not thread.is_alive()
    assert _AlwaysFailingHandler.hits == 3
    assert sleeps.count == 2
    assert outcome["error"].response.status_code == 500
    assert outcome["error"].response.json() == {"error": "boom"}
    session.close()


def test_adapter_default_transport():
    adapter = BackoffAdapter()
    assert isinstance(adapter.transport, HTTPAdapter)
    assert adapter.policy.max_tries == 5


def test_create_session_mounts_backoff_adapter():
    policy = BackoffPolicy(max_tries=3)
    session = create_session(policy)

    adapter = session.get_adapter("https://maps.googleapis.com/maps/api/geocode/json")
    assert isinstance(adapter, BackoffAdapter)
    assert adapter.policy is policy
    assert session.get_adapter("http://localhost/") is adapter
    assert session.headers["User-Agent"].startswith("geomaps/")


def test_retry_logging_redacts_credentials(session_factory, caplog):
    caplog.set_level("WARNING", logger="geomaps.infrastructure.backoff")
    session, _ = session_factory([500, 200], max_tries=2)

    session.get("https://maps.test/api?address=x&key=secret-key")

    messages = " ".join(r.getMessage() for r in caplog.records)
    assert "GET https://maps.test/api?address=x&key=REDACTED" in messages
    assert "secret-key" not in messages


class TestBackoffPolicyFromDict:
    """Tests for backoff_policy_from_dict"""

    def test_preferred_keys(self):
        policy = backoff_policy_from_dict({"max_tries": 7, "initial_delay": 0.25, "jitter": 0.1})
        assert policy.max_tries == 7
        assert policy.initial_wait == 0.25
        assert policy.jitter == 0.1

    def test_aliases(self):
        policy = backoff_policy_from_dict({"max_attempts": 4, "retry_delay": 2})
        assert policy.max_tries == 4
        assert policy.initial_wait == 2.0

        policy = backoff_policy_from_dict({"max_retries": 2})
        assert policy.max_tries == 2

    def test_defaults(self):
        policy = backoff_policy_from_dict({})
        assert policy.max_tries == 5
        assert policy.initial_wait == 1.0
        assert policy.jitter == 0.5

    def test_from_config(self):
        policy = backoff_policy_from_config(RetryConfig(max_retries=3, retry_delay=0.2, jitter=0))
        assert (policy.max_tries, policy.initial_wait, policy.jitter) == (3, 0.2, 0.0)

    @pytest.mark.parametrize(
        "config",
        [{"max_tries": 0}, {"initial_delay": -3}, {"jitter": 2}, {"max_tries": "many"}, {"max_tris": 3}],
    )
    def test_invalid_values_rejected(self, config):
        with pytest.raises(ValidationError):
            backoff_policy_from_dict(config)
