# asyncscribe/scanners/class_level.py
"""Whole-class scanning: one channel (or operation) per marked component.

The class-level marker names the channel; every method carrying the
method-level marker contributes one message to it.
"""
from __future__ import annotations

import logging
from typing import Any

from asyncscribe.bindings import BindingFactory
from asyncscribe.markers import Marker
from asyncscribe.tracing import scan_span
from asyncscribe.types import (
    ChannelObject,
    ChannelReference,
    MessageObject,
    OperationAction,
    OperationObject,
    operation_id,
)

from .base import ScanEntry, ScanMode
from .capabilities import ChannelGroupDescriptor, describe_channel_group
from .messages import MessageBuilder, to_messages_map, to_operation_messages_map, unique_messages
from .report import ScanReport, failure_scope

logger = logging.getLogger(__name__)

__all__ = ["ClassLevelScanner"]


class ClassLevelScanner:
    """Groups a marked component's operations under the channel its class marker names."""

    def __init__(
        self,
        *,
        class_marker: Marker,
        method_marker: Marker,
        binding_factory: BindingFactory,
        message_builder: MessageBuilder,
        mode: ScanMode = ScanMode.CHANNEL,
        action: OperationAction = OperationAction.RECEIVE,
    ) -> None:
        self.class_marker = class_marker
        self.method_marker = method_marker
        self.binding_factory = binding_factory
        self.message_builder = message_builder
        self.mode = mode
        self.action = action

    @property
    def name(self) -> str:
        return f"class-{self.mode.value}"

    def scan(self, component: type[Any], *, report: ScanReport | None = None) -> list[ScanEntry]:
        group = describe_channel_group(component, self.class_marker, self.method_marker)
        if group is None:
            return []

        with scan_span(
            f"asyncscribe.scan.{self.name}",
            attributes={
                "asyncscribe.component": component,
                "asyncscribe.marker": self.class_marker.key,
                "asyncscribe.operations": len(group.operations),
            },
        ):
            messages = self._build_messages(group, report)
            if not messages:
                logger.debug("%s: no messages for %s; nothing emitted", self.name, component.__qualname__)
                return []

            with failure_scope(report, component=component):
                channel_name = self.binding_factory.get_channel_name(group.config)
                if self.mode is ScanMode.OPERATION:
                    entry = self._operation(channel_name, group, messages)
                else:
                    entry = self._channel(channel_name, group, messages)
                logger.info(
                    "[%s] discovered `%s` on %s (%d messages)",
                    self.name.upper(),
                    entry[0],
                    component.__qualname__,
                    len(messages),
                )
                return [entry]
        return []

    def _build_messages(self, group: ChannelGroupDescriptor, report: ScanReport | None) -> list[MessageObject]:
        messages: list[MessageObject] = []
        for operation in group.operations:
            with failure_scope(report, component=group.component, method=operation.name):
                # message bindings come from the class marker, not the method's
                messages.append(self.message_builder.build_for(operation, group.config))
        return unique_messages(messages)

    def _channel(self, channel_name: str, group: ChannelGroupDescriptor, messages: list[MessageObject]) -> ScanEntry:
        channel = ChannelObject(
            bindings=self.binding_factory.build_channel_binding(group.config),
            messages=to_messages_map(messages),
        )
        return channel_name, channel

    def _operation(self, channel_name: str, group: ChannelGroupDescriptor, messages: list[MessageObject]) -> ScanEntry:
        operation = OperationObject(
            action=self.action,
            channel=ChannelReference.from_channel(channel_name),
            bindings=self.binding_factory.build_operation_binding(group.config),
            messages=to_operation_messages_map(channel_name, messages),
        )
        return operation_id(channel_name, self.action), operation
