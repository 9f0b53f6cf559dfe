# asyncscribe/types/messages.py
"""Message descriptors and the references that point at them."""
from __future__ import annotations

from pydantic import Field, SerializeAsAny

from .base import StrictBaseModel
from .bindings import MessageBinding
from .schemas import SCHEMAS_REF_PREFIX, MultiFormatSchema

MESSAGES_REF_PREFIX = "#/components/messages/"


class MessageReference(StrictBaseModel):
    ref: str = Field(alias="$ref")

    @classmethod
    def to_component_message(cls, message: MessageObject | str) -> MessageReference:
        message_id = message.message_id if isinstance(message, MessageObject) else message
        return cls(ref=f"{MESSAGES_REF_PREFIX}{message_id}")

    @classmethod
    def to_channel_message(cls, channel_name: str, message: MessageObject | str) -> MessageReference:
        message_id = message.message_id if isinstance(message, MessageObject) else message
        return cls(ref=f"#/channels/{channel_name}/messages/{message_id}")

    @classmethod
    def to_schema(cls, schema_name: str) -> MessageReference:
        return cls(ref=f"{SCHEMAS_REF_PREFIX}{schema_name}")


class MessagePayload(StrictBaseModel):
    multi_format_schema: MultiFormatSchema

    @classmethod
    def of(cls, schema: MultiFormatSchema) -> MessagePayload:
        return cls(multi_format_schema=schema)


class MessageHeaders(StrictBaseModel):
    reference: MessageReference

    @classmethod
    def of(cls, reference: MessageReference) -> MessageHeaders:
        return cls(reference=reference)


class MessageObject(StrictBaseModel):
    """A documented message. Identity is ``message_id`` (the payload's dotted type name)."""

    message_id: str = Field(alias="messageId")
    name: str
    title: str
    description: str | None = None
    payload: MessagePayload
    headers: MessageHeaders
    bindings: dict[str, SerializeAsAny[MessageBinding]] = Field(default_factory=dict)


__all__ = [
    "MESSAGES_REF_PREFIX",
    "MessageReference",
    "MessagePayload",
    "MessageHeaders",
    "MessageObject",
]
