# Role: The single chat message schema exchanged between client and relay (content + timestamp + role).
# Frozen so a Message never changes after construction; pydantic handles (de)serialization.

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Role = Literal["User", "Assistant"]

TIME_FORMAT = "%H:%M:%S"


def current_time() -> str:
    # Local wall-clock time, 24h, zero padded.
    return datetime.now().strftime(TIME_FORMAT)


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    timestamp: str = Field(default_factory=current_time)
    # Key line: bodies from the earlier protocol revision carry no role; they are user submissions.
    role: Role = "User"

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must be non-empty")
        return value

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(content=content, role="User")

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(content=content, role="Assistant")

    @property
    def is_assistant(self) -> bool:
        return self.role == "Assistant"
