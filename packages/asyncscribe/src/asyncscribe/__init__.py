"""
asyncscribe: async API contract extraction for message-driven applications.

Scans marked component classes, without running them, and emits the channels,
operations, messages and schemas they produce or consume:

- Markers for classes and handler methods (`asyncscribe.markers`)
- Pluggable protocol binding factories (`asyncscribe.bindings`, `asyncscribe.contrib`)
- Class-level and method-level scanning strategies (`asyncscribe.scanners`)
- A deduplicating schema/message registry (`asyncscribe.registry`)

Rendering the final document is left to the caller; every descriptor is a
pydantic model with `to_document()`.
"""
from importlib.metadata import PackageNotFoundError, version

from .app import AsyncScribe, ProtocolPlugin
from .markers import Marker, MarkerConfig
from .payload import Payload
from .runner import ScanRunner

try:
    __version__ = version("asyncscribe")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "AsyncScribe",
    "ProtocolPlugin",
    "Marker",
    "MarkerConfig",
    "Payload",
    "ScanRunner",
]
