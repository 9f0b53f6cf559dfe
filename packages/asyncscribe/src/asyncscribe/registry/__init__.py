"""Shared, deduplicating component registries."""

from .base import BaseRegistry
from .components import ComponentsService
from .exceptions import (
    RegistryError,
    RegistryFrozenError,
    RegistryLookupError,
)

__all__ = [
    "BaseRegistry",
    "ComponentsService",
    "RegistryError",
    "RegistryLookupError",
    "RegistryFrozenError",
]
