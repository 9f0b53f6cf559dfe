from .base import MARKERS_ATTR, Marker, MarkerConfig, MarkerConfigError
from .helpers import MarkedMethod, annotated_methods, find_marker, is_marked

__all__ = [
    "MARKERS_ATTR",
    "Marker",
    "MarkerConfig",
    "MarkerConfigError",
    "MarkedMethod",
    "annotated_methods",
    "find_marker",
    "is_marked",
]
