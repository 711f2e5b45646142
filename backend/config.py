# Role: Central configuration module. Loads .env into environment variables, computes runtime flags (DEBUG),
# and builds the immutable Settings value that is injected into the app factory.

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

DEBUG: bool = False

VERSION = "0.1.0"

LOCAL_API_URL = "http://127.0.0.1:8000"
PROD_API_URL = "https://api.unscrolled.com"
MESSAGES_PATH = "/api/messages"

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_MODEL = "claude-3-haiku-20240307"
ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS = 1000
UPSTREAM_TIMEOUT_SECONDS = 30.0
DEFAULT_PORT = 8000

_PRODUCTION_ENVS = {"prod", "production"}


def load_env() -> None:
    """
    Load .env into os.environ, then recompute DEBUG.
    This makes DEBUG correct even if load_env() is called after import.
    """
    global DEBUG
    load_dotenv()
    # Key line: accept common truthy values.
    DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}


def api_base_url_for(app_env: str) -> str:
    return PROD_API_URL if app_env.lower() in _PRODUCTION_ENVS else LOCAL_API_URL


def _parse_port(raw: Optional[str]) -> int:
    try:
        port = int(raw) if raw else DEFAULT_PORT
    except ValueError:
        return DEFAULT_PORT
    return port if 0 < port < 65536 else DEFAULT_PORT


@dataclass(frozen=True)
class Settings:
    app_env: str = "development"
    api_base_url: str = LOCAL_API_URL
    port: int = DEFAULT_PORT
    messages_path: str = MESSAGES_PATH
    anthropic_api_key: Optional[str] = None
    anthropic_url: str = ANTHROPIC_URL
    anthropic_model: str = ANTHROPIC_MODEL
    anthropic_version: str = ANTHROPIC_VERSION
    max_tokens: int = MAX_TOKENS
    upstream_timeout: float = UPSTREAM_TIMEOUT_SECONDS
    version: str = VERSION

    @property
    def messages_endpoint(self) -> str:
        return f"{self.api_base_url}{self.messages_path}"

    @property
    def api_key_prefix(self) -> str:
        # Key line: never more than half the key, capped at 10 chars.
        key = self.anthropic_api_key or ""
        return key[: min(10, len(key) // 2)]

    @classmethod
    def from_env(cls) -> "Settings":
        app_env = os.getenv("APP_ENV", "development")
        return cls(
            app_env=app_env,
            api_base_url=api_base_url_for(app_env),
            port=_parse_port(os.getenv("PORT")),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_env()
    return Settings.from_env()
