# asyncscribe/types/bindings.py
"""Protocol binding base models.

Binding factories return mappings of protocol key -> binding, e.g.
``{"kafka": KafkaChannelBinding(...)}``. Concrete protocols subclass these.
"""
from __future__ import annotations

from pydantic import Field

from .base import StrictBaseModel


class Binding(StrictBaseModel):
    binding_version: str | None = Field(default=None, alias="bindingVersion")


class ChannelBinding(Binding):
    pass


class OperationBinding(Binding):
    pass


class MessageBinding(Binding):
    pass


__all__ = ["Binding", "ChannelBinding", "OperationBinding", "MessageBinding"]
