# Role: FastAPI app bootstrap. Builds Settings once, wires the Relay, registers routers,
# and exposes health/docs endpoints.

from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import backend.config
backend.config.load_env()

from backend.api.messages import build_router
from backend.config import Settings, get_settings
from backend.core.relay import Relay
from backend.llm.anthropic_client import AnthropicClient
from backend.logger_config import get_logger

logger = get_logger(__name__)

HOST = "127.0.0.1"


def create_app(settings: Optional[Settings] = None, relay: Optional[Relay] = None) -> FastAPI:
    settings = settings or get_settings()
    relay = relay or Relay(AnthropicClient(settings))

    app = FastAPI(title="Unscrolled Relay API", version=settings.version)
    app.state.settings = settings
    app.state.relay = relay

    # Browser clients are served from another origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(build_router(settings.messages_path))

    @app.get("/")
    def root() -> dict:
        # Role: quick discoverability for clients (where are docs/health/messages).
        return {
            "message": "Relay API is running",
            "docs": "/docs",
            "health": "/health",
            "messages": settings.messages_path,
        }

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "ok",
            "message": "Relay API is running",
            "version": settings.version,
        }

    if not settings.anthropic_api_key:
        logger.warning("ANTHROPIC_API_KEY is not set; message requests will fail until it is configured")

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logger.info("Starting server on %s:%d (env=%s)", HOST, settings.port, settings.app_env)
    uvicorn.run("backend.main:app", host=HOST, port=settings.port)


if __name__ == "__main__":
    run()
