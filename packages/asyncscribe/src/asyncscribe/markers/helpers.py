# asyncscribe/markers/helpers.py
"""Marker lookup shared by both scanning strategies."""
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

from .base import MARKERS_ATTR, Marker, MarkerConfig, unwrap_descriptor

logger = logging.getLogger(__name__)

__all__ = ["MarkedMethod", "find_marker", "is_marked", "annotated_methods"]


@dataclass(frozen=True)
class MarkedMethod:
    """A declared method together with the config its marker carries."""

    name: str
    function: Callable[..., Any]
    config: MarkerConfig


def _own_markers(holder: Any) -> dict[str, MarkerConfig]:
    try:
        return vars(holder).get(MARKERS_ATTR) or {}
    except TypeError:  # objects without __dict__
        return {}


def find_marker(target: Any, marker: Marker) -> MarkerConfig | None:
    """Return the config ``marker`` stamped on ``target``, or None.

    Classes are searched along their MRO, so a subclass of a marked component
    is marked too. Functions are searched along their ``__wrapped__`` chain.
    """
    target = unwrap_descriptor(target)
    if isinstance(target, type):
        for klass in target.__mro__:
            config = _own_markers(klass).get(marker.key)
            if config is not None:
                return config
        return None

    seen: set[int] = set()
    current = target
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        config = _own_markers(current).get(marker.key)
        if config is not None:
            return config
        current = getattr(current, "__wrapped__", None)
    return None


def is_marked(target: Any, marker: Marker) -> bool:
    return find_marker(target, marker) is not None


def _is_synthetic(cls: type, name: str, function: Any) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return True
    # `handle = on_order` re-exposes a method already declared under its own name
    real_name = getattr(function, "__name__", name)
    if real_name != name:
        original = unwrap_descriptor(vars(cls).get(real_name))
        if original is function:
            return True
    return False


def annotated_methods(cls: type, marker: Marker) -> list[MarkedMethod]:
    """Methods declared directly on ``cls`` that carry ``marker``.

    Inherited methods are not included; dunder members and alias attributes are
    skipped. Order follows declaration order.
    """
    logger.debug("Scanning class %r for @%s marked methods", cls.__qualname__, marker.key)

    found: list[MarkedMethod] = []
    for name, raw in vars(cls).items():
        function = unwrap_descriptor(raw)
        if not (inspect.isfunction(function) or inspect.ismethod(function)):
            continue
        if _is_synthetic(cls, name, function):
            continue
        config = find_marker(function, marker)
        if config is not None:
            found.append(MarkedMethod(name=name, function=function, config=config))
    return found
