# asyncscribe/scanners/method_level.py
"""Per-method scanning: every marked method stands on its own.

Two methods resolving to the same channel name produce two entries. Merging
them (or rejecting the clash) is left to whoever assembles the document.
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
from .capabilities import OperationDescriptor, describe_operations
from .messages import MessageBuilder, to_messages_map, to_operation_messages_map
from .report import ScanReport, failure_scope

logger = logging.getLogger(__name__)

__all__ = ["MethodLevelScanner"]


class MethodLevelScanner:
    def __init__(
        self,
        *,
        method_marker: Marker,
        binding_factory: BindingFactory,
        message_builder: MessageBuilder,
        mode: ScanMode = ScanMode.CHANNEL,
        action: OperationAction = OperationAction.RECEIVE,
    ) -> None:
        self.method_marker = method_marker
        self.binding_factory = binding_factory
        self.message_builder = message_builder
        self.mode = mode
        self.action = action

    @property
    def name(self) -> str:
        return f"method-{self.mode.value}"

    def scan(self, component: type[Any], *, report: ScanReport | None = None) -> list[ScanEntry]:
        operations = describe_operations(component, self.method_marker)
        if not operations:
            return []

        entries: list[ScanEntry] = []
        with scan_span(
            f"asyncscribe.scan.{self.name}",
            attributes={
                "asyncscribe.component": component,
                "asyncscribe.marker": self.method_marker.key,
                "asyncscribe.operations": len(operations),
            },
        ):
            for operation in operations:
                with failure_scope(report, component=component, method=operation.name):
                    entries.append(self._scan_operation(operation))

        for key, _ in entries:
            logger.info("[%s] discovered `%s` on %s", self.name.upper(), key, component.__qualname__)
        return entries

    def _scan_operation(self, operation: OperationDescriptor) -> ScanEntry:
        message = self.message_builder.build_for(operation)
        channel_name = self.binding_factory.get_channel_name(operation.config)
        if self.mode is ScanMode.OPERATION:
            return self._operation(channel_name, operation, message)
        return self._channel(channel_name, operation, message)

    def _channel(self, channel_name: str, operation: OperationDescriptor, message: MessageObject) -> ScanEntry:
        channel = ChannelObject(
            bindings=self.binding_factory.build_channel_binding(operation.config),
            messages=to_messages_map([message]),
        )
        return channel_name, channel

    def _operation(self, channel_name: str, operation: OperationDescriptor, message: MessageObject) -> ScanEntry:
        entry = OperationObject(
            action=self.action,
            channel=ChannelReference.from_channel(channel_name),
            bindings=self.binding_factory.build_operation_binding(operation.config),
            messages=to_operation_messages_map(channel_name, [message]),
        )
        # method name keeps sibling handlers on one channel apart
        return operation_id(channel_name, self.action, operation.name), entry
