from __future__ import annotations

import pytest
from pydantic import create_model

from asyncscribe.contrib.kafka import (
    KafkaBindingFactory,
    KafkaChannelBinding,
    KafkaListenerConfig,
    KafkaTypeIdHeadersBuilder,
    kafka_handler,
    kafka_listener,
)
from asyncscribe.exceptions import BindingResolutionError
from asyncscribe.markers import find_marker
from asyncscribe.registry import ComponentsService
from asyncscribe.scanners import ClassLevelScanner, MessageBuilder

from support import Order, fqn


@kafka_listener(topics=["{env}.orders"], group_id="billing-{env}")
class OrderEvents:
    @kafka_handler
    def on_created(self, order: Order) -> None: ...


def test_listener_config_accepts_single_topic_string():
    assert KafkaListenerConfig(topics="orders").topics == ("orders",)


def test_channel_name_renders_first_topic():
    factory = KafkaBindingFactory(placeholders={"env": "prod"})
    config = find_marker(OrderEvents, kafka_listener)

    assert factory.get_channel_name(config) == "prod.orders"
    assert factory.build_channel_binding(config)["kafka"].to_document() == {
        "bindingVersion": "0.5.0",
        "topic": "prod.orders",
    }


def test_operation_binding_documents_group_id():
    factory = KafkaBindingFactory(placeholders={"env": "prod"})
    binding = factory.build_operation_binding(find_marker(OrderEvents, kafka_listener))["kafka"]

    assert binding.to_document() == {
        "bindingVersion": "0.5.0",
        "groupId": {"type": "string", "enum": ["billing-prod"]},
    }


def test_missing_topics_or_placeholders_are_binding_errors():
    with pytest.raises(BindingResolutionError, match="no topics"):
        KafkaBindingFactory().get_channel_name(KafkaListenerConfig())
    with pytest.raises(BindingResolutionError, match="unknown placeholder 'env'"):
        KafkaBindingFactory().get_channel_name(KafkaListenerConfig(topics=["{env}.orders"]))


def test_handler_marker_is_method_only():
    with pytest.raises(TypeError):
        kafka_handler(type("Component", (), {}))


def test_type_id_headers():
    headers = KafkaTypeIdHeadersBuilder().build_headers(Order)

    assert headers.schema_name == f"KafkaTypeIdHeaders-{fqn(Order)}"
    schema = headers.to_schema()
    assert schema["properties"]["__TypeId__"]["enum"] == (fqn(Order),)
    assert schema["properties"]["__TypeId__"]["type"] == "string"


def test_type_id_headers_of_same_named_types_do_not_clash():
    billing_order = create_model("Order", __module__="billing", invoice_no=(str, ...))
    components = ComponentsService()
    builder = KafkaTypeIdHeadersBuilder()

    ours = components.register_schema(builder.build_headers(Order))
    theirs = components.register_schema(builder.build_headers(billing_order))

    assert ours != theirs
    schemas = components.get_schemas()
    assert schemas[theirs]["properties"]["__TypeId__"]["enum"] == ("billing.Order",)
    assert schemas[ours]["properties"]["__TypeId__"]["enum"] == (fqn(Order),)


def test_class_level_scan_with_kafka_bindings():
    components = ComponentsService()
    factory = KafkaBindingFactory(placeholders={"env": "dev"})
    builder = MessageBuilder(
        binding_factory=factory,
        components=components,
        headers_builder=KafkaTypeIdHeadersBuilder(),
    )
    scanner = ClassLevelScanner(
        class_marker=kafka_listener,
        method_marker=kafka_handler,
        binding_factory=factory,
        message_builder=builder,
    )

    [(name, channel)] = scanner.scan(OrderEvents)

    assert name == "dev.orders"
    assert channel.bindings == {"kafka": KafkaChannelBinding(topic="dev.orders")}
    message = components.get_messages()[fqn(Order)]
    assert message.headers.reference.ref == f"#/components/schemas/KafkaTypeIdHeaders-{fqn(Order)}"
    assert message.to_document()["bindings"] == {"kafka": {"bindingVersion": "0.5.0"}}
