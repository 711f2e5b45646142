from unittest.mock import MagicMock

import pytest
import requests

from backend.config import Settings


def make_response(status_code: int = 200, json_body=None, text: str = "") -> MagicMock:
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.text = text
    if isinstance(json_body, Exception):
        resp.json.side_effect = json_body
    else:
        resp.json.return_value = json_body
    return resp


def anthropic_reply(text: str) -> dict:
    return {
        "id": "msg_01",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
        "stop_reason": "end_turn",
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(anthropic_api_key="sk-ant-REDACTED")


@pytest.fixture
def upstream_post() -> MagicMock:
    post = MagicMock(spec=requests.post)
    post.return_value = make_response(200, anthropic_reply("Hello there!"))
    return post
