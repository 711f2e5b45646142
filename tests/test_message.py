import re

import pytest
from pydantic import ValidationError

from backend.models.message import Message, current_time


def test_current_time_format():
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", current_time())


def test_user_and_assistant_constructors():
    user = Message.user("hi")
    reply = Message.assistant("hello")

    assert user.role == "User" and not user.is_assistant
    assert reply.role == "Assistant" and reply.is_assistant
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", reply.timestamp)


def test_message_is_frozen():
    msg = Message.user("hi")

    with pytest.raises(ValidationError):
        msg.content = "changed"


def test_missing_role_defaults_to_user():
    msg = Message.model_validate({"content": "hi", "timestamp": "10:00:00"})

    assert msg.role == "User"
    assert msg.timestamp == "10:00:00"


def test_timestamp_is_accepted_as_sent():
    assert Message.model_validate({"content": "hi", "timestamp": "whenever"}).timestamp == "whenever"


@pytest.mark.parametrize("body", [{"content": ""}, {"content": "   "}, {"timestamp": "10:00:00"}, {"content": "hi", "role": "System"}])
def test_invalid_messages_are_rejected(body):
    with pytest.raises(ValidationError):
        Message.model_validate(body)


def test_serialized_shape():
    msg = Message(content="hi", timestamp="09:05:01", role="Assistant")

    assert msg.model_dump() == {"content": "hi", "timestamp": "09:05:01", "role": "Assistant"}
