# Role: Orchestrator for one relay turn. Takes the inbound user Message, asks the upstream client for a
# reply and wraps the text into a new Assistant Message stamped with server time.

from __future__ import annotations

from backend.llm.anthropic_client import AnthropicClient
from backend.llm.errors import ExtractionError, RelayError
from backend.logger_config import get_logger
from backend.models.message import Message

logger = get_logger(__name__)


class Relay:
    def __init__(self, client: AnthropicClient) -> None:
        # Key line: the upstream client is injectable for testing/mocking.
        self.client = client

    def handle(self, message: Message) -> Message:
        logger.info("Received message: role=%s chars=%d", message.role, len(message.content))

        try:
            reply_text = self.client.generate_text(message.content)
        except ExtractionError as e:
            # Provider reachable, but its reply shape changed.
            logger.error("Failed to extract content from upstream reply: %s", e)
            raise
        except RelayError as e:
            logger.error("Failed to get response from upstream (%s): %s", e.tag, e)
            raise

        logger.info("Upstream replied with %d chars", len(reply_text))
        return Message.assistant(reply_text)
