from __future__ import annotations

from unittest import mock

import pytest

from asyncscribe.exceptions import BindingResolutionError, SchemaResolutionError
from asyncscribe.headers import AsyncHeaders, HeaderSchema
from asyncscribe.markers import MarkerConfig
from asyncscribe.scanners import MessageBuilder, OperationDescriptor

from support import ChannelConfig, Order, StubMessageBinding, fqn


class Opaque:
    pass


class Component:
    def on_order(self, order: Order) -> None: ...


def test_build_message_composes_descriptor(message_builder, components):
    config = ChannelConfig(channel="orders", description="An order was placed")

    message = message_builder.build_message(config, Order)

    assert message.message_id == fqn(Order)
    assert message.name == fqn(Order)
    assert message.title == "Order"
    assert message.description == "An order was placed"
    assert message.payload.multi_format_schema.schema_.ref == "#/components/schemas/Order"
    assert message.headers.reference.ref == "#/components/schemas/HeadersNotDocumented"
    assert message.bindings == {"test": StubMessageBinding()}
    assert set(components.get_schemas()) == {"Order", "HeadersNotDocumented"}
    assert components.get_messages() == {fqn(Order): message}


def test_build_message_is_idempotent(message_builder, components):
    config = ChannelConfig(channel="orders")

    first = message_builder.build_message(config, Order)
    second = message_builder.build_message(config, Order)

    assert first is second
    assert len(components.get_schemas()) == 2
    assert len(components.get_messages()) == 1


def test_build_for_resolves_payload_from_signature(message_builder):
    operation = OperationDescriptor(
        component=Component,
        name="on_order",
        config=ChannelConfig(channel="orders"),
        function=Component.on_order,
    )
    assert message_builder.build_for(operation).message_id == fqn(Order)


def test_custom_headers_builder(binding_factory, components):
    headers = AsyncHeaders(schema_name="OrderHeaders", headers={"trace-id": HeaderSchema(description="Trace")})
    builder = MessageBuilder(
        binding_factory=binding_factory,
        components=components,
        headers_builder=mock.Mock(build_headers=mock.Mock(return_value=headers)),
    )

    message = builder.build_message(ChannelConfig(channel="orders"), Order)

    builder.headers_builder.build_headers.assert_called_once_with(Order)
    assert message.headers.reference.ref == "#/components/schemas/OrderHeaders"
    assert components.get_schemas()["OrderHeaders"]["properties"]["trace-id"]["title"] == "trace-id"


def test_unschematizable_payload_raises(message_builder, components):
    with pytest.raises(SchemaResolutionError):
        message_builder.build_message(ChannelConfig(channel="orders"), Opaque)
    assert components.get_messages() == {}


def test_foreign_config_is_a_binding_error(message_builder):
    with pytest.raises(BindingResolutionError):
        message_builder.build_message(MarkerConfig(), Order)
