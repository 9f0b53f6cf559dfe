# asyncscribe/scanners/messages.py
"""Build message descriptors and the reference maps that point at them."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from asyncscribe.bindings import BindingFactory
from asyncscribe.headers import AsyncHeadersBuilder, AsyncHeadersNotDocumentedBuilder
from asyncscribe.markers import MarkerConfig
from asyncscribe.payload import PayloadTypeExtractor
from asyncscribe.registry import ComponentsService
from asyncscribe.schemas import type_name
from asyncscribe.types import (
    MessageHeaders,
    MessageObject,
    MessagePayload,
    MessageReference,
    MultiFormatSchema,
    SchemaReference,
)

from .capabilities import OperationDescriptor

logger = logging.getLogger(__name__)

__all__ = ["MessageBuilder", "to_messages_map", "to_operation_messages_map", "unique_messages"]


class MessageBuilder:
    """Compose, register and return the message for one payload type."""

    def __init__(
        self,
        *,
        binding_factory: BindingFactory,
        components: ComponentsService,
        payload_extractor: PayloadTypeExtractor | None = None,
        headers_builder: AsyncHeadersBuilder | None = None,
    ) -> None:
        self.binding_factory = binding_factory
        self.components = components
        self.payload_extractor = payload_extractor or PayloadTypeExtractor()
        self.headers_builder = headers_builder or AsyncHeadersNotDocumentedBuilder()

    def build_message(self, config: MarkerConfig, payload_type: Any) -> MessageObject:
        """Register schemas for ``payload_type`` and its headers, then the message itself.

        The returned descriptor is the one stored in the registry: a message id
        seen before yields the earlier descriptor.
        """
        message_bindings = self.binding_factory.build_message_binding(config)
        schema_name = self.components.register_schema(payload_type)
        headers_name = self.components.register_schema(self.headers_builder.build_headers(payload_type))

        payload = MessagePayload.of(MultiFormatSchema.of(SchemaReference.from_schema(schema_name)))
        message_id = type_name(payload_type)
        message = MessageObject(
            message_id=message_id,
            name=message_id,
            title=type_name(payload_type, qualified=False),
            description=config.description,
            payload=payload,
            headers=MessageHeaders.of(MessageReference.to_schema(headers_name)),
            bindings=message_bindings,
        )
        return self.components.register_message(message)

    def build_for(self, operation: OperationDescriptor, config: MarkerConfig | None = None) -> MessageObject:
        """Resolve the operation's payload and build its message with ``config`` (default: its own)."""
        payload_type = self.payload_extractor.extract_from(operation)
        return self.build_message(config if config is not None else operation.config, payload_type)


def unique_messages(messages: Iterable[MessageObject]) -> list[MessageObject]:
    """Drop repeated message ids, keeping the first occurrence."""
    unique: dict[str, MessageObject] = {}
    for message in messages:
        unique.setdefault(message.message_id, message)
    return list(unique.values())


def to_messages_map(messages: Iterable[MessageObject]) -> dict[str, MessageReference]:
    return {m.message_id: MessageReference.to_component_message(m) for m in messages}


def to_operation_messages_map(channel_name: str, messages: Iterable[MessageObject]) -> dict[str, MessageReference]:
    return {m.message_id: MessageReference.to_channel_message(channel_name, m) for m in messages}
