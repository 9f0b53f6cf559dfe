from __future__ import annotations

import pytest

from asyncscribe.exceptions import BindingResolutionError
from asyncscribe.scanners import MethodLevelScanner, ScanMode, ScanReport
from asyncscribe.types import ChannelObject, MessageReference, OperationAction

from support import Cancellation, Order, StubChannelBinding, StubOperationBinding, fqn, listener


class WithOneListener:
    @listener(channel="orders")
    def method_with_annotation(self, payload: str) -> None: ...

    def method_without_annotation(self) -> None: ...


class WithTwoListenersOnOneChannel:
    @listener(channel="orders")
    def method_with_annotation(self, payload: str) -> None: ...

    @listener(channel="orders")
    def another_method_with_annotation(self, payload: Order) -> None: ...


class WithTwoChannels:
    @listener(channel="ch1")
    def on_order(self, order: Order) -> None: ...

    @listener(channel="ch2")
    def on_cancel(self, cancellation: Cancellation) -> None: ...


class WithBatches:
    @listener(channel="orders")
    def on_orders(self, orders: list[Order]) -> None: ...

    @listener(channel="cancellations")
    def on_cancellations(self, items: list[Cancellation]) -> None: ...


class WithBrokenBinding:
    @listener
    def no_channel(self, order: Order) -> None: ...

    @listener(channel="orders")
    def on_order(self, order: Order) -> None: ...


@pytest.fixture
def scanner(binding_factory, message_builder):
    return MethodLevelScanner(
        method_marker=listener,
        binding_factory=binding_factory,
        message_builder=message_builder,
    )


@pytest.fixture
def operation_scanner(binding_factory, message_builder):
    return MethodLevelScanner(
        method_marker=listener,
        binding_factory=binding_factory,
        message_builder=message_builder,
        mode=ScanMode.OPERATION,
        action=OperationAction.SEND,
    )


def test_component_with_one_listener_method(scanner):
    entries = scanner.scan(WithOneListener)

    expected = ChannelObject(
        bindings={"test": StubChannelBinding(channel="orders")},
        messages={"str": MessageReference.to_component_message("str")},
    )
    assert entries == [("orders", expected)]


def test_same_channel_methods_are_separate_entries(scanner):
    entries = scanner.scan(WithTwoListenersOnOneChannel)

    assert [name for name, _ in entries] == ["orders", "orders"]
    assert [list(channel.messages) for _, channel in entries] == [["str"], [fqn(Order)]]


def test_each_method_resolves_its_own_channel(scanner, components):
    entries = scanner.scan(WithTwoChannels)

    assert [name for name, _ in entries] == ["ch1", "ch2"]
    assert list(entries[0][1].messages) == [fqn(Order)]
    assert list(entries[1][1].messages) == [fqn(Cancellation)]
    assert entries[1][1].bindings == {"test": StubChannelBinding(channel="ch2")}
    assert set(components.get_messages()) == {fqn(Order), fqn(Cancellation)}


def test_generic_payloads_get_distinct_messages_and_schemas(scanner, components):
    entries = scanner.scan(WithBatches)

    order_batch, cancellation_batch = f"list[{fqn(Order)}]", f"list[{fqn(Cancellation)}]"
    assert list(entries[0][1].messages) == [order_batch]
    assert list(entries[1][1].messages) == [cancellation_batch]
    assert set(components.get_messages()) == {order_batch, cancellation_batch}

    schemas = components.get_schemas()
    assert schemas["list[Order]"]["items"] == {"$ref": "#/components/schemas/Order"}
    assert schemas["list[Cancellation]"]["items"] == {"$ref": "#/components/schemas/Cancellation"}
    assert {"Order", "Cancellation"} <= set(schemas)


def test_operation_ids_keep_sibling_methods_apart(operation_scanner):
    entries = operation_scanner.scan(WithTwoListenersOnOneChannel)

    assert [key for key, _ in entries] == [
        "orders_send_method_with_annotation",
        "orders_send_another_method_with_annotation",
    ]
    _, operation = entries[1]
    assert operation.action is OperationAction.SEND
    assert operation.channel.ref == "#/channels/orders"
    assert operation.bindings == {"test": StubOperationBinding(channel="orders")}
    assert operation.messages[fqn(Order)].ref == f"#/channels/orders/messages/{fqn(Order)}"


def test_class_without_listener_methods_yields_nothing(scanner):
    class Plain:
        def on_order(self, order: Order) -> None: ...

    assert scanner.scan(Plain) == []


def test_binding_failure_is_fatal_for_that_method_only(scanner):
    report = ScanReport()

    entries = scanner.scan(WithBrokenBinding, report=report)

    assert [name for name, _ in entries] == ["orders"]
    [failure] = report.failures
    assert failure.method == "no_channel"
    assert isinstance(failure.error, BindingResolutionError)
    assert failure.location.endswith("WithBrokenBinding.no_channel")
