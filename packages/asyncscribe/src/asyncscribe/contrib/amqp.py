# asyncscribe/contrib/amqp.py
"""RabbitMQ (AMQP 0-9-1) listener markers and bindings.

The channel is the first queue a listener names. A listener bound only to an
exchange (``exchange="orders", routing_key="order.*"``) is documented on the
exchange instead.
"""
from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator

from asyncscribe.app import ProtocolPlugin
from asyncscribe.bindings import BindingFactory
from asyncscribe.exceptions import BindingResolutionError
from asyncscribe.headers import AsyncHeadersBuilder
from asyncscribe.markers import Marker, MarkerConfig
from asyncscribe.types import ChannelBinding, MessageBinding, OperationAction, OperationBinding, StrictBaseModel

__all__ = [
    "AMQP_BINDING_VERSION",
    "RabbitListenerConfig",
    "AMQPQueue",
    "AMQPExchange",
    "AMQPChannelBinding",
    "AMQPOperationBinding",
    "AMQPMessageBinding",
    "AMQPBindingFactory",
    "rabbit_listener",
    "rabbit_handler",
    "amqp_plugin",
]

PROTOCOL = "amqp"
AMQP_BINDING_VERSION = "0.3.0"

ExchangeType = Literal["topic", "direct", "fanout", "default", "headers"]


class RabbitListenerConfig(MarkerConfig):
    queues: tuple[str, ...] = ()
    exchange: str | None = None
    exchange_type: ExchangeType = "topic"
    routing_key: str | None = None
    durable: bool = True
    auto_delete: bool = False
    vhost: str = "/"

    @field_validator("queues", mode="before")
    @classmethod
    def _single_queue(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value


class AMQPQueue(StrictBaseModel):
    name: str
    durable: bool = True
    exclusive: bool = False
    auto_delete: bool = Field(default=False, alias="autoDelete")
    vhost: str = "/"


class AMQPExchange(StrictBaseModel):
    name: str
    type: ExchangeType = "topic"
    durable: bool = True
    auto_delete: bool = Field(default=False, alias="autoDelete")
    vhost: str = "/"


class AMQPChannelBinding(ChannelBinding):
    binding_version: str | None = Field(default=AMQP_BINDING_VERSION, alias="bindingVersion")
    is_: Literal["queue", "routingKey"] = Field(default="queue", alias="is")
    queue: AMQPQueue | None = None
    exchange: AMQPExchange | None = None


class AMQPOperationBinding(OperationBinding):
    binding_version: str | None = Field(default=AMQP_BINDING_VERSION, alias="bindingVersion")
    cc: list[str] | None = None
    delivery_mode: int | None = Field(default=None, alias="deliveryMode")


class AMQPMessageBinding(MessageBinding):
    binding_version: str | None = Field(default=AMQP_BINDING_VERSION, alias="bindingVersion")
    content_encoding: str | None = Field(default=None, alias="contentEncoding")
    message_type: str | None = Field(default=None, alias="messageType")


class AMQPBindingFactory(BindingFactory[RabbitListenerConfig]):
    protocol = PROTOCOL
    config_class = RabbitListenerConfig

    def channel_name(self, config: RabbitListenerConfig) -> str:
        if config.queues:
            return self.render(config.queues[0])
        if config.exchange:
            return self.render(config.exchange)
        raise BindingResolutionError("rabbit listener declares neither queues nor an exchange")

    def channel_bindings(self, config: RabbitListenerConfig) -> dict[str, ChannelBinding]:
        exchange = None
        if config.exchange:
            exchange = AMQPExchange(
                name=self.render(config.exchange),
                type=config.exchange_type,
                durable=config.durable,
                auto_delete=config.auto_delete,
                vhost=config.vhost,
            )
        if config.queues:
            queue = AMQPQueue(
                name=self.render(config.queues[0]),
                durable=config.durable,
                auto_delete=config.auto_delete,
                vhost=config.vhost,
            )
            return {PROTOCOL: AMQPChannelBinding(is_="queue", queue=queue, exchange=exchange)}
        return {PROTOCOL: AMQPChannelBinding(is_="routingKey", exchange=exchange)}

    def operation_bindings(self, config: RabbitListenerConfig) -> dict[str, OperationBinding]:
        cc = [self.render(config.routing_key)] if config.routing_key else None
        return {PROTOCOL: AMQPOperationBinding(cc=cc)}

    def message_bindings(self, config: RabbitListenerConfig) -> dict[str, MessageBinding]:
        return {PROTOCOL: AMQPMessageBinding()}


rabbit_listener = Marker("rabbit-listener", config_class=RabbitListenerConfig)
rabbit_handler = Marker("rabbit-handler", on_classes=False)


def amqp_plugin(
    *,
    placeholders: dict[str, str] | None = None,
    headers_builder: AsyncHeadersBuilder | None = None,
    action: OperationAction = OperationAction.RECEIVE,
) -> ProtocolPlugin:
    plugin = ProtocolPlugin(
        protocol=PROTOCOL,
        binding_factory=AMQPBindingFactory(placeholders=placeholders),
        class_marker=rabbit_listener,
        method_marker=rabbit_handler,
        action=action,
    )
    if headers_builder is not None:
        plugin.headers_builder = headers_builder
    return plugin
