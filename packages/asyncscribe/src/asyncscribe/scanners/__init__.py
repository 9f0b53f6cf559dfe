from .base import ScanEntry, ScanMode, Scanner
from .capabilities import (
    ChannelGroupDescriptor,
    DescribesChannelGroup,
    DescribesOperation,
    OperationDescriptor,
    describe_channel_group,
    describe_operations,
)
from .class_level import ClassLevelScanner
from .messages import MessageBuilder, to_messages_map, to_operation_messages_map
from .method_level import MethodLevelScanner
from .report import ScanFailedError, ScanFailure, ScanReport, failure_scope

__all__ = [
    "Scanner",
    "ScanMode",
    "ScanEntry",
    "ClassLevelScanner",
    "MethodLevelScanner",
    "MessageBuilder",
    "to_messages_map",
    "to_operation_messages_map",
    "OperationDescriptor",
    "ChannelGroupDescriptor",
    "DescribesChannelGroup",
    "DescribesOperation",
    "describe_channel_group",
    "describe_operations",
    "ScanReport",
    "ScanFailure",
    "ScanFailedError",
    "failure_scope",
]
