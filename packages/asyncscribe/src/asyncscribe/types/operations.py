# asyncscribe/types/operations.py
from __future__ import annotations

from enum import Enum

from pydantic import Field, SerializeAsAny

from .base import StrictBaseModel
from .bindings import OperationBinding
from .channels import ChannelReference
from .messages import MessageReference


class OperationAction(str, Enum):
    SEND = "send"        # producer
    RECEIVE = "receive"  # consumer


def operation_id(channel_name: str, action: OperationAction, *suffix: str) -> str:
    """Composite operation key: ``{channel}_{action}[_{suffix}...]``."""
    return "_".join((channel_name, action.value, *(s for s in suffix if s)))


class OperationObject(StrictBaseModel):
    action: OperationAction
    channel: ChannelReference
    title: str | None = None
    bindings: dict[str, SerializeAsAny[OperationBinding]] = Field(default_factory=dict)
    messages: dict[str, MessageReference] = Field(default_factory=dict)


__all__ = ["OperationAction", "OperationObject", "operation_id"]
