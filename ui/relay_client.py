# Role: HTTP client for the relay backend. Posts a Message to the messages endpoint and returns the
# Assistant Message; every failure (network, status, reply shape) surfaces as RelayClientError.

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from backend.config import MESSAGES_PATH
from backend.models.message import Message

# Above the backend's 30s upstream bound, so a slow provider is reported by the relay first.
CLIENT_TIMEOUT_SECONDS = 60.0


class RelayClientError(Exception):
    pass


class RelayClient:
    def __init__(
        self,
        base_url: str,
        messages_path: str = MESSAGES_PATH,
        timeout: float = CLIENT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.messages_path = messages_path
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def messages_endpoint(self) -> str:
        return f"{self.base_url}{self.messages_path}"

    def send(self, message: Message) -> Message:
        try:
            resp = self.session.post(
                self.messages_endpoint,
                json=message.model_dump(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RelayClientError(f"Could not reach the relay at {self.base_url}: {e}") from e

        if not resp.ok:
            raise RelayClientError(f"Relay returned {resp.status_code}: {_describe_error(resp)}")

        try:
            return Message.model_validate(resp.json())
        except ValueError as e:
            raise RelayClientError(f"Malformed reply from relay: {e}") from e

    def health(self) -> Dict[str, Any]:
        try:
            r = self.session.get(f"{self.base_url}/health", timeout=10)
            r.raise_for_status()
            return r.json()
        except (requests.RequestException, ValueError) as e:
            raise RelayClientError(f"Health check failed: {e}") from e


def _describe_error(resp: requests.Response) -> str:
    # Key line: keep the relay's {"error", "details"} pair when present, raw text otherwise.
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and "error" in body:
        details = body.get("details")
        return f"{body['error']} ({details})" if details else str(body["error"])
    return resp.text
