# asyncscribe/scanners/capabilities.py
"""What a scanner needs to know about a component, independent of how it is found.

Scanners never inspect markers directly. They ask for a channel group or for a
list of operations; components can answer themselves by implementing
``DescribesChannelGroup`` / ``DescribesOperation``, and marker-decorated
classes are adapted by the two ``describe_*`` functions below.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Protocol, runtime_checkable

from asyncscribe.markers import Marker, MarkerConfig, annotated_methods, find_marker

__all__ = [
    "OperationDescriptor",
    "ChannelGroupDescriptor",
    "DescribesChannelGroup",
    "DescribesOperation",
    "describe_channel_group",
    "describe_operations",
]


@dataclass(frozen=True)
class OperationDescriptor:
    """One producing/consuming method of a component."""

    component: type[Any]
    name: str
    config: MarkerConfig
    function: Callable[..., Any] | None = None
    payload_type: Any = None


@dataclass(frozen=True)
class ChannelGroupDescriptor:
    """A component whose operations share the channel named by ``config``."""

    component: type[Any]
    config: MarkerConfig
    operations: tuple[OperationDescriptor, ...] = field(default_factory=tuple)


@runtime_checkable
class DescribesChannelGroup(Protocol):
    @classmethod
    def describe_channel_group(
        cls, class_marker: Marker, method_marker: Marker
    ) -> ChannelGroupDescriptor | None: ...


@runtime_checkable
class DescribesOperation(Protocol):
    @classmethod
    def describe_operations(cls, method_marker: Marker) -> Iterable[OperationDescriptor]: ...


def _marked_operations(component: type[Any], method_marker: Marker) -> tuple[OperationDescriptor, ...]:
    return tuple(
        OperationDescriptor(component=component, name=m.name, config=m.config, function=m.function)
        for m in annotated_methods(component, method_marker)
    )


def describe_channel_group(
    component: type[Any], class_marker: Marker, method_marker: Marker
) -> ChannelGroupDescriptor | None:
    """Channel group for ``component``, or None when it is not a class-level component."""
    if isinstance(component, DescribesChannelGroup):
        return component.describe_channel_group(class_marker, method_marker)

    config = find_marker(component, class_marker)
    if config is None:
        return None
    return ChannelGroupDescriptor(
        component=component,
        config=config,
        operations=_marked_operations(component, method_marker),
    )


def describe_operations(component: type[Any], method_marker: Marker) -> tuple[OperationDescriptor, ...]:
    """Independently marked operations of ``component``; no class marker is consulted."""
    if isinstance(component, DescribesOperation):
        return tuple(component.describe_operations(method_marker))
    return _marked_operations(component, method_marker)
