from __future__ import annotations

import pytest

from asyncscribe.contrib.amqp import AMQPBindingFactory, RabbitListenerConfig, rabbit_handler, rabbit_listener
from asyncscribe.exceptions import BindingResolutionError
from asyncscribe.registry import ComponentsService
from asyncscribe.scanners import ClassLevelScanner, MessageBuilder, MethodLevelScanner

from support import Cancellation, Order, fqn


@rabbit_listener(queues=["billing.orders"], exchange="orders", routing_key="order.*")
class BillingQueue:
    @rabbit_handler
    def on_order(self, order: Order) -> None: ...


class ExchangeOnly:
    @rabbit_listener(exchange="cancellations", exchange_type="fanout")
    def on_cancel(self, cancellation: Cancellation) -> None: ...


def test_channel_is_first_queue():
    factory = AMQPBindingFactory()
    config = RabbitListenerConfig(queues=["a", "b"])
    assert factory.get_channel_name(config) == "a"


def test_channel_falls_back_to_exchange():
    factory = AMQPBindingFactory()
    config = RabbitListenerConfig(exchange="events")

    assert factory.get_channel_name(config) == "events"
    assert factory.build_channel_binding(config)["amqp"].to_document() == {
        "bindingVersion": "0.3.0",
        "is": "routingKey",
        "exchange": {"name": "events", "type": "topic", "durable": True, "autoDelete": False, "vhost": "/"},
    }


def test_listener_without_queue_or_exchange_is_a_binding_error():
    with pytest.raises(BindingResolutionError):
        AMQPBindingFactory().get_channel_name(RabbitListenerConfig())


def test_invalid_exchange_type_rejected_at_decoration():
    with pytest.raises(ValueError):
        rabbit_listener(exchange="x", exchange_type="broadcast")(type("Component", (), {}))


def test_class_and_method_scans():
    components = ComponentsService()
    factory = AMQPBindingFactory()
    builder = MessageBuilder(binding_factory=factory, components=components)
    class_scanner = ClassLevelScanner(
        class_marker=rabbit_listener,
        method_marker=rabbit_handler,
        binding_factory=factory,
        message_builder=builder,
    )
    method_scanner = MethodLevelScanner(
        method_marker=rabbit_listener,
        binding_factory=factory,
        message_builder=builder,
    )

    [(queue_name, queue_channel)] = class_scanner.scan(BillingQueue)
    [(exchange_name, exchange_channel)] = method_scanner.scan(ExchangeOnly)

    assert queue_name == "billing.orders"
    binding = queue_channel.to_document()["bindings"]["amqp"]
    assert binding["is"] == "queue"
    assert binding["queue"]["name"] == "billing.orders"
    assert binding["exchange"]["name"] == "orders"

    assert exchange_name == "cancellations"
    assert exchange_channel.to_document()["bindings"]["amqp"]["exchange"]["type"] == "fanout"
    assert set(components.get_messages()) == {fqn(Order), fqn(Cancellation)}


def test_routing_key_goes_to_operation_binding():
    factory = AMQPBindingFactory(placeholders={"env": "prod"})
    config = RabbitListenerConfig(queues=["q"], routing_key="{env}.order.*")

    assert factory.build_operation_binding(config)["amqp"].to_document() == {
        "bindingVersion": "0.3.0",
        "cc": ["prod.order.*"],
    }
