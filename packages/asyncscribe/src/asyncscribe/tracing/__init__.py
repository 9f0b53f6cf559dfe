# asyncscribe/tracing/__init__.py
from .tracing import TRACER_NAME, get_tracer, scan_span

__all__ = [
    "TRACER_NAME",
    "get_tracer",
    "scan_span",
]
