"""
Tests for the Event Relay API endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from event_relay.core.config import settings
from event_relay.main import app
from event_relay.models.schemas import MessageEvent, PercentageEvent

SEND_URL = "/events/send"


def error_code(response):
    body = response.json()
    assert "data" not in body
    return body["error"]["code"]


class TestSendEndpoint:
    """Tests for POST /events/send."""

    def test_no_listeners(self, client):
        response = client.post(SEND_URL, json={"percentage": 42})
        assert response.status_code == 202
        assert response.json() == {"data": {"message": "Event accepted, but no listeners"}}

    def test_one_listener(self, client, relay):
        sub = relay.subscribe()

        response = client.post(SEND_URL, json={"percentage": 42})
        assert response.status_code == 200
        assert response.json() == {"data": {"message": "Event sent to 1 listeners!"}}
        assert sub.try_recv() == PercentageEvent(percentage=42)
        sub.close()

    def test_listener_count(self, client, relay):
        subs = [relay.subscribe() for _ in range(3)]

        response = client.post(SEND_URL, json={"percentage": 10})
        assert response.status_code == 200
        assert response.json()["data"]["message"] == "Event sent to 3 listeners!"
        for sub in subs:
            sub.close()

    @pytest.mark.parametrize("value", [0, 0.5, 50, 99.99, 100])
    def test_percentage_in_range(self, client, relay, value):
        sub = relay.subscribe()
        response = client.post(SEND_URL, json={"percentage": value})
        assert response.status_code == 200
        assert sub.try_recv().percentage == value
        sub.close()

    @pytest.mark.parametrize("value", [-1, -0.01, 100.01, 150, 1e9])
    def test_percentage_out_of_range(self, client, relay, value):
        sub = relay.subscribe()
        response = client.post(SEND_URL, json={"percentage": value})
        assert response.status_code == 400
        assert error_code(response) == "RANGE_EXCEEDED_ERROR"
        assert sub.try_recv() is None
        assert relay.published_count == 0
        sub.close()

    def test_range_error_message(self, client):
        response = client.post(SEND_URL, json={"percentage": 150})
        assert response.json() == {
            "error": {
                "code": "RANGE_EXCEEDED_ERROR",
                "message": "Percentage range is exceeded. It should be within 0-100, but got 150",
            }
        }

    def test_missing_content_type(self, client):
        response = client.post(SEND_URL, content=b'{"percentage": 42}')
        assert response.status_code == 400
        assert error_code(response) == "MISSING_JSON_CONTENT_TYPE"

    def test_wrong_content_type(self, client):
        response = client.post(
            SEND_URL,
            content=b'{"percentage": 42}',
            headers={"Content-Type": "text/plain"},
        )
        assert response.status_code == 400
        assert error_code(response) == "MISSING_JSON_CONTENT_TYPE"

    def test_json_suffix_content_type(self, client):
        response = client.post(
            SEND_URL,
            content=b'{"percentage": 42}',
            headers={"Content-Type": "application/merge-patch+json; charset=utf-8"},
        )
        assert response.status_code == 202

    def test_invalid_json(self, client):
        response = client.post(
            SEND_URL,
            content=b'{"percentage": ',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert error_code(response) == "JSON_VALIDITY_ERROR"

    def test_empty_body(self, client):
        response = client.post(SEND_URL, headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert error_code(response) == "JSON_VALIDITY_ERROR"

    @pytest.mark.parametrize("payload", [
        {},
        {"value": 42},
        {"percentage": "forty-two"},
        {"percentage": None},
        {"percentage": "42"},
        {"percentage": True},
        [42],
    ])
    def test_schema_mismatch(self, client, payload):
        response = client.post(SEND_URL, json=payload)
        assert response.status_code == 400
        assert error_code(response) == "JSON_DESERIALIZATION_ERROR"

    def test_body_too_large(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_body_bytes", 8)
        response = client.post(SEND_URL, json={"percentage": 42})
        assert response.status_code == 400
        assert error_code(response) == "BUFFER_ERROR"

    def test_message_payload(self, client, relay, monkeypatch):
        monkeypatch.setattr(settings, "event_payload", "message")
        sub = relay.subscribe()

        response = client.post(SEND_URL, json={"message": "hello"})
        assert response.status_code == 200
        assert sub.try_recv() == MessageEvent(message="hello")

        for payload in ({"percentage": 42}, {"message": 42}, {"message": ["hello"]}):
            response = client.post(SEND_URL, json=payload)
            assert response.status_code == 400
            assert error_code(response) == "JSON_DESERIALIZATION_ERROR"
        assert sub.try_recv() is None
        sub.close()

    def test_unknown_error(self, monkeypatch):
        with TestClient(app, raise_server_exceptions=False) as client:
            relay = client.app.state.relay

            def broken_publish(event):
                raise RuntimeError("boom")

            monkeypatch.setattr(relay, "publish", broken_publish)
            response = client.post(SEND_URL, json={"percentage": 42})

        assert response.status_code == 500
        assert response.json() == {
            "error": {"code": "UNKNOWN_ERROR", "message": "An unexpected error occurred"}
        }


class TestHealthEndpoint:

    def test_health_check(self, client, relay):
        client.post(SEND_URL, json={"percentage": 1})
        sub = relay.subscribe()

        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "event-relay",
            "topic_capacity": 800,
            "published_events": 1,
            "listeners": 1,
            "active_streams": 0,
        }
        sub.close()


class TestAdminEndpoints:

    def test_list_connections(self, client):
        response = client.get("/admin/connections")
        assert response.status_code == 200
        assert response.json() == {"count": 0, "connections": []}


class TestPages:
    """Tests for the landing and fallback pages."""

    def test_index(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "new EventSource(\"/events\")" in response.text

    @pytest.mark.parametrize("path", ["/missing", "/some/nested/page.html"])
    def test_fallback(self, client, path):
        response = client.get(path)
        assert response.status_code == 200
        assert "Nothing here" in response.text

    def test_known_path_with_wrong_method(self, client):
        """A registered path answers 405 instead of the fallback page."""
        response = client.get(SEND_URL)
        assert response.status_code == 405
        assert response.headers["allow"] == "POST"
        assert "Nothing here" not in response.text


class TestCors:

    def test_cors_headers(self, client):
        origin = "http://example.com"
        response = client.post(SEND_URL, json={"percentage": 1}, headers={"Origin": origin})
        assert response.headers["access-control-allow-origin"] in ("*", origin)
