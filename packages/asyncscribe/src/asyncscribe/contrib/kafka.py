# asyncscribe/contrib/kafka.py
"""Kafka listener markers and bindings.

    from asyncscribe.contrib.kafka import kafka_handler, kafka_listener

    @kafka_listener(topics=["{env}.orders"], group_id="billing")
    class OrderListener:
        @kafka_handler
        def on_created(self, event: OrderCreated) -> None: ...

        @kafka_handler
        def on_cancelled(self, event: OrderCancelled) -> None: ...

``kafka_listener`` can also sit on a single method, which is then scanned on
its own by the method-level scanners.
"""
from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from asyncscribe.app import ProtocolPlugin
from asyncscribe.bindings import BindingFactory
from asyncscribe.exceptions import BindingResolutionError
from asyncscribe.headers import AsyncHeaders, AsyncHeadersBuilder, HeaderSchema
from asyncscribe.markers import Marker, MarkerConfig
from asyncscribe.schemas import type_name
from asyncscribe.types import ChannelBinding, MessageBinding, OperationBinding, OperationAction

__all__ = [
    "KAFKA_BINDING_VERSION",
    "KafkaListenerConfig",
    "KafkaChannelBinding",
    "KafkaOperationBinding",
    "KafkaMessageBinding",
    "KafkaBindingFactory",
    "KafkaTypeIdHeadersBuilder",
    "kafka_listener",
    "kafka_handler",
    "kafka_plugin",
]

PROTOCOL = "kafka"
KAFKA_BINDING_VERSION = "0.5.0"
TYPE_ID_HEADER = "__TypeId__"


class KafkaListenerConfig(MarkerConfig):
    topics: tuple[str, ...] = ()
    group_id: str | None = None
    client_id: str | None = None

    @field_validator("topics", mode="before")
    @classmethod
    def _single_topic(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value


class KafkaChannelBinding(ChannelBinding):
    binding_version: str | None = Field(default=KAFKA_BINDING_VERSION, alias="bindingVersion")
    topic: str | None = None
    partitions: int | None = None
    replicas: int | None = None


class KafkaOperationBinding(OperationBinding):
    binding_version: str | None = Field(default=KAFKA_BINDING_VERSION, alias="bindingVersion")
    group_id: dict[str, Any] | None = Field(default=None, alias="groupId")
    client_id: dict[str, Any] | None = Field(default=None, alias="clientId")


class KafkaMessageBinding(MessageBinding):
    binding_version: str | None = Field(default=KAFKA_BINDING_VERSION, alias="bindingVersion")
    key: dict[str, Any] | None = None


def _string_enum(value: str | None) -> dict[str, Any] | None:
    if value is None:
        return None
    return {"type": "string", "enum": [value]}


class KafkaBindingFactory(BindingFactory[KafkaListenerConfig]):
    """Channel name is the first topic, after placeholder rendering."""

    protocol = PROTOCOL
    config_class = KafkaListenerConfig

    def channel_name(self, config: KafkaListenerConfig) -> str:
        if not config.topics:
            raise BindingResolutionError("kafka listener declares no topics")
        return self.render(config.topics[0])

    def channel_bindings(self, config: KafkaListenerConfig) -> dict[str, ChannelBinding]:
        return {PROTOCOL: KafkaChannelBinding(topic=self.channel_name(config))}

    def operation_bindings(self, config: KafkaListenerConfig) -> dict[str, OperationBinding]:
        group_id = self.render(config.group_id) if config.group_id else None
        client_id = self.render(config.client_id) if config.client_id else None
        return {PROTOCOL: KafkaOperationBinding(group_id=_string_enum(group_id), client_id=_string_enum(client_id))}

    def message_bindings(self, config: KafkaListenerConfig) -> dict[str, MessageBinding]:
        return {PROTOCOL: KafkaMessageBinding()}


class KafkaTypeIdHeadersBuilder:
    """Documents the ``__TypeId__`` header JSON serializers put on each record."""

    def build_headers(self, payload_type: type[Any]) -> AsyncHeaders:
        fqn = type_name(payload_type)
        return AsyncHeaders(
            schema_name=f"KafkaTypeIdHeaders-{fqn}",
            headers={
                TYPE_ID_HEADER: HeaderSchema(
                    title=TYPE_ID_HEADER,
                    description="Type ID",
                    enum=(fqn,),
                    example=fqn,
                )
            },
        )


kafka_listener = Marker("kafka-listener", config_class=KafkaListenerConfig)
kafka_handler = Marker("kafka-handler", on_classes=False)


def kafka_plugin(
    *,
    placeholders: dict[str, str] | None = None,
    headers_builder: AsyncHeadersBuilder | None = None,
    action: OperationAction = OperationAction.RECEIVE,
) -> ProtocolPlugin:
    plugin = ProtocolPlugin(
        protocol=PROTOCOL,
        binding_factory=KafkaBindingFactory(placeholders=placeholders),
        class_marker=kafka_listener,
        method_marker=kafka_handler,
        action=action,
    )
    if headers_builder is not None:
        plugin.headers_builder = headers_builder
    return plugin
