# asyncscribe/exceptions/base.py
"""Base exceptions shared by every asyncscribe subpackage."""

from __future__ import annotations

from typing import Any


class AsyncScribeError(Exception):
    """Base for all asyncscribe exceptions."""


# ----------------------------------------------------------------------------
# Scan errors
# ----------------------------------------------------------------------------
class ScanError(AsyncScribeError):
    """A failure scoped to one component class and, when known, one method.

    Scanners fill in ``component``/``method`` as the error crosses the
    method or class boundary, so an aggregated report can always name the
    unit that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        component: type[Any] | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(message)
        self.component = component
        self.method = method

    def bind(self, *, component: type[Any] | None = None, method: str | None = None) -> ScanError:
        """Attach location info without overwriting what is already known."""
        if self.component is None and component is not None:
            self.component = component
        if self.method is None and method is not None:
            self.method = method
        return self

    @property
    def location(self) -> str:
        if self.component is None:
            return "<unknown>"
        label = f"{self.component.__module__}.{self.component.__qualname__}"
        return f"{label}.{self.method}" if self.method else label


class SchemaResolutionError(ScanError):
    """Raised when a payload or header type cannot be turned into a schema."""


class PayloadResolutionError(ScanError):
    """Raised when an operation does not expose a determinable payload type."""


class BindingResolutionError(ScanError):
    """Raised when a binding factory cannot interpret a marker configuration."""
