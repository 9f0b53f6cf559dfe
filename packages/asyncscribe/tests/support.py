"""Payload types, markers and a binding factory shared by the scanner tests."""

from __future__ import annotations

from pydantic import BaseModel

from asyncscribe.bindings import BindingFactory
from asyncscribe.exceptions import BindingResolutionError
from asyncscribe.markers import Marker, MarkerConfig
from asyncscribe.types import ChannelBinding, MessageBinding, OperationBinding


class Order(BaseModel):
    order_id: str
    amount: float


class Cancellation(BaseModel):
    order_id: str
    reason: str | None = None


class Address(BaseModel):
    street: str
    city: str


class Customer(BaseModel):
    name: str
    address: Address


class ChannelConfig(MarkerConfig):
    channel: str | None = None


class StubChannelBinding(ChannelBinding):
    channel: str


class StubOperationBinding(OperationBinding):
    channel: str


class StubMessageBinding(MessageBinding):
    pass


class StubBindingFactory(BindingFactory[ChannelConfig]):
    protocol = "test"
    config_class = ChannelConfig

    def channel_name(self, config: ChannelConfig) -> str:
        if not config.channel:
            raise BindingResolutionError("no channel configured")
        return self.render(config.channel)

    def channel_bindings(self, config: ChannelConfig) -> dict[str, ChannelBinding]:
        return {self.protocol: StubChannelBinding(channel=self.channel_name(config))}

    def operation_bindings(self, config: ChannelConfig) -> dict[str, OperationBinding]:
        return {self.protocol: StubOperationBinding(channel=self.channel_name(config))}

    def message_bindings(self, config: ChannelConfig) -> dict[str, MessageBinding]:
        return {self.protocol: StubMessageBinding()}


listener = Marker("test-listener", config_class=ChannelConfig)
handler = Marker("test-handler", on_classes=False)


def fqn(tp: type) -> str:
    return f"{tp.__module__}.{tp.__qualname__}"
