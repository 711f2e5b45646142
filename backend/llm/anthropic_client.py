# Role: Minimal wrapper around the Anthropic Messages API. Centralizes model name, token budget, headers and
# error translation, so the rest of the code calls a single method: generate_text(user_text).

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import requests

from backend.config import Settings
from backend.llm.errors import ConfigurationError, ExtractionError, TransportError, UpstreamError
from backend.logger_config import get_logger

logger = get_logger(__name__)


def extract_text(payload: Any) -> str:
    # Reply text lives at content[0].text; anything else is a shape error.
    if not isinstance(payload, dict):
        raise ExtractionError("response body is not a JSON object")

    content = payload.get("content")
    if not isinstance(content, list) or not content:
        raise ExtractionError("response has no content array")

    first = content[0]
    text = first.get("text") if isinstance(first, dict) else None
    if not isinstance(text, str) or not text.strip():
        raise ExtractionError("content[0].text is missing or empty")

    return text


class AnthropicClient:
    def __init__(self, settings: Settings, post: Optional[Callable[..., requests.Response]] = None) -> None:
        # Key lines:
        # - Settings are read once at startup and passed in.
        # - A missing key is reported per call, not at construction, so the app still boots.
        # - requests.post opens a fresh session per call; no cookie jar outlives a request.
        self.settings = settings
        self.post = post or requests.post

    def build_headers(self) -> Dict[str, str]:
        if not self.settings.anthropic_api_key:
            raise ConfigurationError("ANTHROPIC_API_KEY environment variable not set")
        return {
            "x-api-key": self.settings.anthropic_api_key,
            "content-type": "application/json",
            "anthropic-version": self.settings.anthropic_version,
        }

    def build_payload(self, user_text: str) -> Dict[str, Any]:
        return {
            "model": self.settings.anthropic_model,
            "max_tokens": self.settings.max_tokens,
            "messages": [{"role": "user", "content": user_text}],
        }

    def generate_text(self, user_text: str) -> str:
        # 1) Shape headers + single-turn body
        # 2) POST with a bounded timeout (no retry)
        # 3) Map non-2xx to UpstreamError, then pull content[0].text
        headers = self.build_headers()
        logger.debug("API key loaded: %s...", self.settings.api_key_prefix)

        try:
            resp = self.post(
                self.settings.anthropic_url,
                headers=headers,
                json=self.build_payload(user_text),
                timeout=self.settings.upstream_timeout,
            )
        except requests.Timeout as e:
            raise TransportError(
                f"no response from upstream within {self.settings.upstream_timeout:g}s"
            ) from e
        except requests.RequestException as e:
            raise TransportError(f"upstream request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            logger.error("Anthropic API error - Status: %s, Body: %s", resp.status_code, resp.text)
            raise UpstreamError(resp.status_code, resp.text)

        try:
            payload = resp.json()
        except ValueError as e:
            raise ExtractionError("response body is not valid JSON") from e

        return extract_text(payload)
