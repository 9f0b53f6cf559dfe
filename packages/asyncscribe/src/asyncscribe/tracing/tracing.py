import logging
from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

logger = logging.getLogger(__name__)

TRACER_NAME = "asyncscribe"

# OpenTelemetry accepts only these scalars (or homogeneous sequences of them).
_SCALARS = (bool, str, bytes, int, float)


def get_tracer(name: str | None = None) -> Tracer:
    return trace.get_tracer(name or TRACER_NAME)


def _coerce(value: Any) -> Any:
    """OTel-safe form of ``value``, or None when it cannot be recorded."""
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        items = [item for item in value if isinstance(item, _SCALARS)]
        return items or None
    return None


@contextmanager
def scan_span(name: str, *, attributes: Mapping[str, Any] | None = None) -> Iterator[Span]:
    """Span around one unit of scan work.

    Classes passed as attribute values are recorded by dotted name; values OTel
    cannot hold are dropped. Exceptions mark the span as failed and propagate.

        with scan_span("asyncscribe.scan.class-channels", attributes={"asyncscribe.component": cls}):
            ...
    """
    with get_tracer().start_as_current_span(
        name,
        kind=SpanKind.INTERNAL,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        for key, value in (attributes or {}).items():
            coerced = _coerce(value)
            if coerced is not None:
                span.set_attribute(key, coerced)
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, description=f"{type(exc).__name__}: {exc}"))
            span.set_attribute("asyncscribe.ok", False)
            raise
        span.set_attribute("asyncscribe.ok", True)


__all__ = ["TRACER_NAME", "get_tracer", "scan_span"]
