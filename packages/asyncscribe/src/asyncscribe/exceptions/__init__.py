from .base import (
    AsyncScribeError,
    BindingResolutionError,
    PayloadResolutionError,
    ScanError,
    SchemaResolutionError,
)

__all__ = [
    "AsyncScribeError",
    "ScanError",
    "SchemaResolutionError",
    "PayloadResolutionError",
    "BindingResolutionError",
]
