# asyncscribe/scanners/base.py
from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, Union, runtime_checkable

from asyncscribe.types import ChannelObject, OperationObject

from .report import ScanReport

__all__ = ["ScanMode", "ScanEntry", "Scanner"]


class ScanMode(str, Enum):
    CHANNEL = "channels"
    OPERATION = "operations"


ScanEntry = tuple[str, Union[ChannelObject, OperationObject]]


@runtime_checkable
class Scanner(Protocol):
    """One scanning strategy. Emits ``(key, descriptor)`` pairs for a component."""

    name: str
    mode: ScanMode

    def scan(self, component: type[Any], *, report: ScanReport | None = None) -> list[ScanEntry]: ...
