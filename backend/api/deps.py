# Role: FastAPI dependencies. The Relay is built once by the app factory and kept on app.state,
# so handlers never construct collaborators or read configuration mid-request.

from fastapi import Request

from backend.core.relay import Relay


def get_relay(request: Request) -> Relay:
    return request.app.state.relay
