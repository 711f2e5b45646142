# Role: Client-side conversation state machine. Owns the append-only history, the draft buffer,
# the single-flight `waiting` flag and the per-reply collapse flags. No I/O besides the `send`
# callable handed to submit(), so both front-ends (Streamlit, CLI) and tests drive the same transitions.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from backend.logger_config import get_logger
from backend.models.message import Message
from ui.relay_client import RelayClientError

logger = get_logger(__name__)

COLLAPSED_PLACEHOLDER = "[reply collapsed]"
TYPING_PLACEHOLDER = "Assistant is typing..."

LABELS = {"User": "You", "Assistant": "Assistant"}


@dataclass(frozen=True)
class Entry:
    # Key line: index is assigned at append time and never changes (history is append-only).
    index: int
    message: Message


@dataclass(frozen=True)
class RenderLine:
    label: str
    text: str
    timestamp: str = ""
    index: Optional[int] = None
    collapsible: bool = False
    collapsed: bool = False
    typing: bool = False


@dataclass
class Conversation:
    _history: List[Entry] = field(default_factory=list)
    draft_text: str = ""
    waiting: bool = False
    collapsed: Dict[int, bool] = field(default_factory=dict)
    last_error: Optional[str] = None

    @property
    def history(self) -> Tuple[Entry, ...]:
        return tuple(self._history)

    @property
    def messages(self) -> List[Message]:
        return [entry.message for entry in self._history]

    def set_draft(self, text: str) -> None:
        self.draft_text = text

    def is_collapsed(self, index: int) -> bool:
        return self.collapsed.get(index, False)

    def _append(self, message: Message) -> Entry:
        entry = Entry(index=len(self._history), message=message)
        self._history.append(entry)
        if message.is_assistant:
            self.collapsed[entry.index] = False
        return entry

    # ----------------------------
    # Transitions
    # ----------------------------
    def begin_submit(self) -> Optional[Message]:
        """Idle -> AwaitingReply.

        Returns the optimistic user Message to send, or None when the draft is
        empty or a reply is still outstanding.
        """
        if not self.draft_text.strip() or self.waiting:
            return None

        # 1) Collapse prior replies so the new exchange is the focus
        # 2) Optimistic insert of the user message (never rolled back)
        # 3) Block further submissions until the round trip ends
        for entry in self._history:
            if entry.message.is_assistant:
                self.collapsed[entry.index] = True

        message = Message.user(self.draft_text)
        self._append(message)
        self.waiting = True
        self.draft_text = ""
        self.last_error = None
        return message

    def complete(self, reply: Message) -> None:
        """AwaitingReply -> Idle with the relay's reply appended."""
        if not self.waiting:
            raise RuntimeError("No submission is awaiting a reply.")
        if not reply.is_assistant:
            self.fail(f"unexpected reply role: {reply.role}")
            return
        self._append(reply)
        self.waiting = False

    def fail(self, error: object) -> None:
        """AwaitingReply -> Idle without appending anything."""
        logger.warning("Relay round trip failed: %s", error)
        self.last_error = str(error)
        self.waiting = False

    def submit(self, send: Callable[[Message], Message]) -> bool:
        # Full cycle for synchronous callers; True only when a reply was appended.
        message = self.begin_submit()
        if message is None:
            return False

        try:
            reply = send(message)
        except RelayClientError as e:
            self.fail(e)
            return False

        self.complete(reply)
        return self.last_error is None

    def toggle_collapse(self, index: int) -> bool:
        # Only Assistant entries carry a flag; anything else is ignored.
        if index not in self.collapsed:
            return False
        self.collapsed[index] = not self.collapsed[index]
        return True

    # ----------------------------
    # Derived view
    # ----------------------------
    def view(self) -> List[RenderLine]:
        lines: List[RenderLine] = []
        for entry in self._history:
            msg = entry.message
            collapsed = msg.is_assistant and self.is_collapsed(entry.index)
            lines.append(
                RenderLine(
                    label=LABELS[msg.role],
                    text=COLLAPSED_PLACEHOLDER if collapsed else msg.content,
                    timestamp=msg.timestamp,
                    index=entry.index,
                    collapsible=msg.is_assistant,
                    collapsed=collapsed,
                )
            )

        if self.waiting:
            lines.append(RenderLine(label=LABELS["Assistant"], text=TYPING_PLACEHOLDER, typing=True))

        return lines
