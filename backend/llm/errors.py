# Role: Failure taxonomy for the relay path. Each error carries the short machine-readable tag that the
# HTTP layer returns as {"error": tag, "details": str(exc)}.


class RelayError(Exception):
    tag = "relay failure"


class ConfigurationError(RelayError):
    tag = "configuration error"


class TransportError(RelayError):
    """Upstream could not be reached (DNS, refused connection, timeout)."""

    tag = "transport failure"


class UpstreamError(RelayError):
    """Upstream answered with a non-success status; status and body are kept verbatim."""

    tag = "upstream failure"

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"{status}: {body}")
        self.status = status
        self.body = body


class ExtractionError(RelayError):
    """Upstream answered 2xx but the reply text was not where it should be."""

    tag = "failed to extract content"
