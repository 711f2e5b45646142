# Role: Thin HTTP adapter for the message-submission endpoint. Validates the Message body, delegates to the
# Relay and turns any RelayError into a 500 with {"error", "details"}.

from typing import Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from backend.api.deps import get_relay
from backend.core.relay import Relay
from backend.llm.errors import RelayError
from backend.models.message import Message


def error_response(exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": exc.tag, "details": str(exc)})


def build_router(messages_path: str) -> APIRouter:
    # Key line: the path comes from settings, so the router is built per app.
    router = APIRouter(tags=["messages"])

    @router.post(messages_path, response_model=Message)
    def receive_message(
        message: Message, relay: Relay = Depends(get_relay)
    ) -> Union[Message, JSONResponse]:
        try:
            return relay.handle(message)
        except RelayError as exc:
            return error_response(exc)

    return router
