import re

import pytest
import requests
from fastapi.testclient import TestClient

from backend.config import Settings
from backend.core.relay import Relay
from backend.llm.anthropic_client import AnthropicClient
from backend.main import create_app
from tests.conftest import make_response


def _client(settings: Settings, post) -> TestClient:
    relay = Relay(AnthropicClient(settings, post=post))
    return TestClient(create_app(settings=settings, relay=relay))


@pytest.fixture
def client(settings, upstream_post) -> TestClient:
    return _client(settings, upstream_post)


def test_health_is_stable(client):
    first = client.get("/health")
    client.post("/api/messages", json={"content": "hi", "role": "User"})
    second = client.get("/health")

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert set(first.json()) == {"status", "message", "version"}
    assert first.json()["status"] == "ok"
    assert first.json()["message"] == "Relay API is running"


def test_root_points_at_endpoints(client):
    body = client.get("/").json()

    assert body["health"] == "/health"
    assert body["messages"] == "/api/messages"


def test_round_trip(client):
    resp = client.post("/api/messages", json={"content": "hi", "timestamp": "12:00:00", "role": "User"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["role"] == "Assistant"
    assert body["content"] == "Hello there!"
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", body["timestamp"])


def test_messages_path_is_configurable(upstream_post):
    settings = Settings(anthropic_api_key="key-123456", messages_path="/v2/chat")
    client = _client(settings, upstream_post)

    assert client.post("/v2/chat", json={"content": "hi"}).status_code == 200
    assert client.post("/api/messages", json={"content": "hi"}).status_code == 404


@pytest.mark.parametrize("body", [{}, {"content": ""}, {"content": "hi", "role": "Robot"}, ["hi"]])
def test_malformed_body_is_rejected(client, upstream_post, body):
    resp = client.post("/api/messages", json=body)

    assert resp.status_code == 422
    upstream_post.assert_not_called()


def test_non_json_body_is_rejected(client):
    resp = client.post("/api/messages", content=b"not json", headers={"content-type": "application/json"})

    assert resp.status_code == 422


def test_upstream_failure_mapping(client, upstream_post):
    upstream_post.return_value = make_response(503, text="overloaded")

    resp = client.post("/api/messages", json={"content": "hi", "role": "User"})

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "upstream failure"
    assert "503" in body["details"]
    assert "overloaded" in body["details"]


def test_malformed_upstream_shape(client, upstream_post):
    upstream_post.return_value = make_response(200, {})

    resp = client.post("/api/messages", json={"content": "hi", "role": "User"})

    assert resp.status_code == 500
    assert resp.json()["error"] == "failed to extract content"


def test_transport_failure(client, upstream_post):
    upstream_post.side_effect = requests.Timeout("timed out")

    resp = client.post("/api/messages", json={"content": "hi"})

    assert resp.status_code == 500
    assert resp.json()["error"] == "transport failure"
    assert upstream_post.call_count == 1


def test_missing_api_key_is_reported_per_request(upstream_post):
    client = _client(Settings(), upstream_post)

    resp = client.post("/api/messages", json={"content": "hi"})

    assert resp.status_code == 500
    assert resp.json()["error"] == "configuration error"
    assert client.get("/health").status_code == 200


def test_redirect_upstream_status_is_an_upstream_failure(client, upstream_post):
    upstream_post.return_value = make_response(300, ValueError("no json"), text="multiple choices")

    resp = client.post("/api/messages", json={"content": "hi"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "upstream failure", "details": "300: multiple choices"}
