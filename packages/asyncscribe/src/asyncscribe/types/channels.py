# asyncscribe/types/channels.py
from __future__ import annotations

from pydantic import Field, SerializeAsAny

from .base import StrictBaseModel
from .bindings import ChannelBinding
from .messages import MessageReference


class ChannelReference(StrictBaseModel):
    ref: str = Field(alias="$ref")

    @classmethod
    def from_channel(cls, channel_name: str) -> ChannelReference:
        return cls(ref=f"#/channels/{channel_name}")


class ChannelObject(StrictBaseModel):
    """A channel entry. The channel name is the key it is emitted under."""

    bindings: dict[str, SerializeAsAny[ChannelBinding]] = Field(default_factory=dict)
    messages: dict[str, MessageReference] = Field(default_factory=dict)


__all__ = ["ChannelReference", "ChannelObject"]
