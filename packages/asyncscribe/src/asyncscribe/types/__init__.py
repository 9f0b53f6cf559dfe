# asyncscribe/types/__init__.py
from .base import StrictBaseModel
from .bindings import Binding, ChannelBinding, MessageBinding, OperationBinding
from .channels import ChannelObject, ChannelReference
from .messages import MessageHeaders, MessageObject, MessagePayload, MessageReference
from .operations import OperationAction, OperationObject, operation_id
from .schemas import MultiFormatSchema, SchemaReference

__all__ = [
    "StrictBaseModel",

    "Binding",
    "ChannelBinding",
    "OperationBinding",
    "MessageBinding",

    "SchemaReference",
    "MultiFormatSchema",

    "MessageReference",
    "MessagePayload",
    "MessageHeaders",
    "MessageObject",

    "ChannelReference",
    "ChannelObject",

    "OperationAction",
    "OperationObject",
    "operation_id",
]
