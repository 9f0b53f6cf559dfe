# asyncscribe/bindings/factory.py
"""Protocol binding factories.

A factory turns a marker configuration into a channel name and the
protocol-specific bindings for channels, operations and messages. Scanners
call only the four public methods; protocol plugins implement the protected
hooks.
"""
from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Generic, Mapping, TypeVar

from asyncscribe.exceptions import BindingResolutionError
from asyncscribe.markers import MarkerConfig
from asyncscribe.types import ChannelBinding, MessageBinding, OperationBinding

logger = logging.getLogger(__name__)

__all__ = ["BindingFactory", "render_channel_template"]

C = TypeVar("C", bound=MarkerConfig)
R = TypeVar("R")


class _StrictPlaceholders(dict):
    def __missing__(self, key: str) -> str:
        raise KeyError(key)


def render_channel_template(template: str, placeholders: Mapping[str, str]) -> str:
    """Fill ``{name}`` placeholders; ``{{``/``}}`` are literal braces.

    :raises BindingResolutionError: On unknown placeholders or malformed templates.
    """
    try:
        rendered = template.format_map(_StrictPlaceholders(placeholders))
    except KeyError as exc:
        raise BindingResolutionError(
            f"channel template {template!r} references unknown placeholder {exc.args[0]!r}"
        ) from exc
    except (ValueError, IndexError, AttributeError) as exc:
        raise BindingResolutionError(f"malformed channel template {template!r}: {exc}") from exc
    if not rendered.strip():
        raise BindingResolutionError(f"channel template {template!r} rendered an empty name")
    return rendered


class BindingFactory(ABC, Generic[C]):
    """Base class for one protocol's binding factory."""

    protocol: ClassVar[str]
    config_class: ClassVar[type[MarkerConfig]] = MarkerConfig

    def __init__(self, *, placeholders: Mapping[str, str] | None = None) -> None:
        self.placeholders: dict[str, str] = dict(placeholders or {})

    def with_placeholders(self, placeholders: Mapping[str, str]) -> BindingFactory[C]:
        """Copy of this factory; placeholders set on the factory win over ``placeholders``."""
        clone = copy.copy(self)
        clone.placeholders = {**placeholders, **self.placeholders}
        return clone

    # ---------------- public API ----------------
    def get_channel_name(self, config: C) -> str:
        return self._call("channel name", self.channel_name, config)

    def build_channel_binding(self, config: C) -> dict[str, ChannelBinding]:
        return self._call("channel binding", self.channel_bindings, config)

    def build_operation_binding(self, config: C) -> dict[str, OperationBinding]:
        return self._call("operation binding", self.operation_bindings, config)

    def build_message_binding(self, config: C) -> dict[str, MessageBinding]:
        return self._call("message binding", self.message_bindings, config)

    # ---------------- hooks ----------------
    @abstractmethod
    def channel_name(self, config: C) -> str: ...

    @abstractmethod
    def channel_bindings(self, config: C) -> dict[str, ChannelBinding]: ...

    @abstractmethod
    def operation_bindings(self, config: C) -> dict[str, OperationBinding]: ...

    @abstractmethod
    def message_bindings(self, config: C) -> dict[str, MessageBinding]: ...

    def render(self, template: str) -> str:
        return render_channel_template(template, self.placeholders)

    # ---------------- internals ----------------
    def _call(self, what: str, hook: Callable[[C], R], config: Any) -> R:
        if not isinstance(config, self.config_class):
            raise BindingResolutionError(
                f"{self.protocol} factory cannot build a {what} from {type(config).__name__}; "
                f"expected {self.config_class.__name__}"
            )
        try:
            return hook(config)
        except BindingResolutionError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise BindingResolutionError(f"{self.protocol} {what} failed: {exc}") from exc
