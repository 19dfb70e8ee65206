"""Tests for MapsClient request building, signing and error handling"""

from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

import pytest
import requests

from geomaps.infrastructure.backoff import BackoffAdapter
from geomaps.infrastructure.errors import APIError, HTTPError, MapsError, ServerError
from geomaps.infrastructure.maps.client import MapsClient, check_status
from geomaps.infrastructure.signing import redact_url, sign_url

SIGNING_KEY = "vNIXE0xscrmjlyV-12Nj_BvUPaw="


class TestSigning:
    """Tests for URL signing"""

    def test_known_signature(self):
        """Test the documented example signature"""
        sig = sign_url(SIGNING_KEY, "/maps/api/geocode/json", "address=New+York&client=clientID")
        assert sig == "chaRF2hTJKOScPr-RQCEhZbSzIE="

    def test_invalid_key(self):
        with pytest.raises(ValueError, match="base64"):
            sign_url("not base64!", "/maps/api/geocode/json", "address=x")

    def test_redact_url(self):
        url = "https://maps.test/api?address=x&key=abc&signature=def"
        assert redact_url(url) == "https://maps.test/api?address=x&key=REDACTED&signature=REDACTED"


class TestMapsClientInit:
    """Tests for MapsClient initialization"""

    def test_requires_credentials(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_MAPS_CLIENT_ID", raising=False)
        monkeypatch.delenv("GOOGLE_MAPS_SIGNING_KEY", raising=False)
        with pytest.raises(ValueError, match="GOOGLE_MAPS_API_KEY"):
            MapsClient()

    def test_client_id_without_signing_key_is_rejected(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_MAPS_SIGNING_KEY", raising=False)
        with pytest.raises(ValueError):
            MapsClient(client_id="clientID")

    def test_credentials_from_env(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "env-key")
        client = MapsClient()
        assert client.api_key == "env-key"

    def test_default_session_uses_backoff(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "env-key")
        client = MapsClient()
        assert isinstance(client.session.get_adapter(client.base_url), BackoffAdapter)


class TestBuildUrl:
    """Tests for query encoding"""

    def test_keys_sorted_and_key_added(self, client_factory):
        client, _ = client_factory([200])
        url = client.build_url("https://maps.test/api/geocode/json", {"region": "es", "address": "New York"})
        assert url == "https://maps.test/api/geocode/json?address=New+York&key=test-key&region=es"

    def test_repeated_keys_keep_order(self, client_factory):
        client, _ = client_factory([200])
        url = client.build_url("https://maps.test/staticmap", {"size": "1x1", "markers": ["b", "a"]})
        query = urlsplit(url).query
        assert parse_qsl(query) == [("key", "test-key"), ("markers", "b"), ("markers", "a"), ("size", "1x1")]

    def test_special_characters_are_escaped(self, client_factory):
        client, _ = client_factory([200])
        url = client.build_url("https://maps.test/api", {"origins": "1.000000,2.000000|Paris"})
        assert "origins=1.000000%2C2.000000%7CParis" in url

    def test_enterprise_signature(self, client_factory):
        """Test client id + signing key produce the documented signature"""
        client, _ = client_factory([200], api_key=None, client_id="clientID", signing_key=SIGNING_KEY)
        url = client.build_url("https://maps.googleapis.com/maps/api/geocode/json", {"address": "New York"})
        assert url == (
            "https://maps.googleapis.com/maps/api/geocode/json"
            "?address=New+York&client=clientID&signature=chaRF2hTJKOScPr-RQCEhZbSzIE="
        )


class TestDispatch:
    """Tests for do/do_decode/fetch_image"""

    def test_do_decode_returns_payload(self, client_factory):
        client, transport = client_factory([(200, {"status": "OK", "results": []})])
        payload = client.do_decode("https://maps.test/api/geocode/json", {"address": "x"})
        assert payload == {"status": "OK", "results": []}
        assert transport.calls == 1
        assert transport.requests[0].method == "GET"

    def test_signed_url_reaches_transport_unchanged(self, client_factory):
        client, transport = client_factory([(200, {})], api_key=None, client_id="clientID", signing_key=SIGNING_KEY)
        client.do_decode("https://maps.googleapis.com/maps/api/geocode/json", {"address": "New York"})
        assert transport.requests[0].url.endswith("&signature=chaRF2hTJKOScPr-RQCEhZbSzIE=")

    def test_non_200_raises_http_error(self, client_factory, sleeps):
        client, transport = client_factory([(403, {"error_message": "denied"})])
        with pytest.raises(HTTPError) as exc_info:
            client.do_decode("https://maps.test/api", {})
        assert exc_info.value.status_code == 403
        assert transport.calls == 1
        assert sleeps.count == 0

    def test_server_errors_retried_then_raised(self, client_factory, sleeps):
        client, transport = client_factory([500], max_tries=3)
        with pytest.raises(ServerError):
            client.do_decode("https://maps.test/api", {})
        assert transport.calls == 3
        assert sleeps.count == 2

    def test_transient_server_error_recovers(self, client_factory, sleeps):
        client, transport = client_factory([500, 500, (200, {"status": "OK"})], max_tries=5)
        assert client.do_status("https://maps.test/api", {}) == {"status": "OK"}
        assert transport.calls == 3
        assert sleeps.count == 2

    def test_connection_errors_exhausted(self, client_factory):
        client, transport = client_factory([requests.exceptions.ConnectionError("refused")], max_tries=3)
        with pytest.raises(requests.exceptions.ConnectionError):
            client.do("https://maps.test/api", {})
        assert transport.calls == 3

    def test_invalid_json(self, client_factory):
        client, _ = client_factory([(200, b"<html>")])
        with pytest.raises(MapsError, match="JSON"):
            client.do_decode("https://maps.test/api", {})

    def test_fetch_image(self, client_factory):
        client, _ = client_factory([(200, b"\x89PNG")])
        assert client.fetch_image("https://maps.test/staticmap", {"size": "1x1"}) == b"\x89PNG"

    def test_timeout_passed_to_transport(self, client_factory):
        client, transport = client_factory([(200, {})], timeout=3.5)
        seen = {}

        original_send = transport.send

        def send(request, **kwargs):
            seen.update(kwargs)
            return original_send(request, **kwargs)

        transport.send = send
        client.do("https://maps.test/api", {})
        assert seen["timeout"] == 3.5

    def test_context_manager_closes_session(self, client_factory):
        client, _ = client_factory([(200, {})])
        closed = []
        client.session.close = lambda: closed.append(True)
        with client:
            pass
        assert closed == [True]


class TestCheckStatus:
    """Tests for check_status"""

    def test_ok(self):
        check_status({"status": "OK"})

    def test_error_with_message(self):
        with pytest.raises(APIError) as exc_info:
            check_status({"status": "REQUEST_DENIED", "error_message": "The provided API key is invalid."})
        assert exc_info.value.status == "REQUEST_DENIED"
        assert exc_info.value.message == "The provided API key is invalid."
        assert str(exc_info.value) == "API error 'REQUEST_DENIED': The provided API key is invalid."

    def test_error_without_message(self):
        with pytest.raises(APIError, match="ZERO_RESULTS"):
            check_status({"status": "ZERO_RESULTS"})

    def test_missing_status(self):
        with pytest.raises(APIError):
            check_status({})
