from .base import BaseLoader, DiscoveryError
from .default import DefaultLoader

__all__ = ["BaseLoader", "DefaultLoader", "DiscoveryError"]
