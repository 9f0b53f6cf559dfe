# asyncscribe/markers/base.py


"""
Class-based marker decorator.

A ``Marker`` tags a component class or a method as part of the async API and
attaches an explicit configuration object to it. Nothing is registered at
decoration time; scanners find the markers later.

Usage
-----
    kafka_listener = Marker("kafka-listener", config_class=KafkaListenerConfig)

    @kafka_listener(topics=["orders"])
    class OrderListener:
        @kafka_handler
        def on_create(self, order: Order) -> None: ...

Key behaviors
-------------
- Options passed to the decorator are validated into ``config_class`` (a
  pydantic model). A bare ``@marker`` stores the config defaults.
- The config is stamped into a per-target ``__asyncscribe_markers__`` dict keyed
  by the marker key, so one target may carry several markers.
- ``staticmethod``/``classmethod`` wrappers are unwrapped before stamping and
  returned unchanged.
"""

import logging
from typing import Any, Callable, Optional, TypeVar, cast

from pydantic import Field, ValidationError

from asyncscribe.exceptions import AsyncScribeError
from asyncscribe.types import StrictBaseModel

logger = logging.getLogger(__name__)

MARKERS_ATTR = "__asyncscribe_markers__"

T = TypeVar("T")


class MarkerConfigError(AsyncScribeError, ValueError):
    """Raised when decorator options do not validate against the marker's config model."""


class MarkerConfig(StrictBaseModel):
    """Options shared by every marker.

    ``payload_type`` short-circuits signature inspection when the handler's
    parameters do not name the payload directly.
    """

    description: str | None = None
    payload_type: Any = Field(default=None)


def unwrap_descriptor(target: Any) -> Any:
    if isinstance(target, (staticmethod, classmethod)):
        return target.__func__
    return target


class Marker:
    """Dual-form decorator stamping a validated config on a class or function."""

    def __init__(
        self,
        key: str,
        *,
        config_class: type[MarkerConfig] = MarkerConfig,
        on_classes: bool = True,
        on_methods: bool = True,
    ) -> None:
        key = str(key).strip()
        if not key:
            raise ValueError("marker key must be a non-empty string")
        self.key = key
        self.config_class = config_class
        self.on_classes = on_classes
        self.on_methods = on_methods

    def __repr__(self) -> str:
        return f"Marker({self.key!r})"

    def __call__(self, _target: Optional[T] = None, **options: Any) -> T | Callable[[T], T]:
        """Support both forms:

            @marker
            def handle(self, payload: Order): ...

            @marker(channel="orders")
            def handle(self, payload: Order): ...
        """

        def _apply(target: T) -> T:
            config = self.build_config(options)
            self.stamp(target, config)
            return target

        if _target is not None:
            return _apply(cast(T, _target))
        return _apply

    # ---------------- hooks ----------------
    def build_config(self, options: dict[str, Any]) -> MarkerConfig:
        try:
            return self.config_class(**options)
        except ValidationError as exc:
            raise MarkerConfigError(f"invalid options for @{self.key}: {exc}") from exc

    def stamp(self, target: Any, config: MarkerConfig) -> None:
        holder = unwrap_descriptor(target)
        if isinstance(holder, type):
            if not self.on_classes:
                raise TypeError(f"@{self.key} cannot be applied to classes ({holder.__qualname__})")
        elif callable(holder):
            if not self.on_methods:
                raise TypeError(f"@{self.key} cannot be applied to functions ({holder.__qualname__})")
        else:
            raise TypeError(f"@{self.key} expects a class or a function, got {type(target)!r}")

        # vars(), not getattr(): a subclass must not write into its parent's dict
        markers = vars(holder).get(MARKERS_ATTR)
        if markers is None:
            markers = {}
            setattr(holder, MARKERS_ATTR, markers)
        markers[self.key] = config
        logger.debug("marked %s with @%s", getattr(holder, "__qualname__", holder), self.key)
