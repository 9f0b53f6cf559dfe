# asyncscribe/payload/extractor.py
"""Find the payload type an operation consumes or produces."""
from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Annotated, Any, Iterable, get_args, get_origin, get_type_hints

from asyncscribe.exceptions import PayloadResolutionError

if TYPE_CHECKING:
    from asyncscribe.scanners.capabilities import OperationDescriptor

logger = logging.getLogger(__name__)

__all__ = ["Payload", "PayloadTypeExtractor"]

_IMPLICIT = ("self", "cls")
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class Payload:
    """Marks the payload parameter of a multi-parameter handler.

        def on_order(self, order: Annotated[Order, Payload()], key: str): ...
    """

    def __repr__(self) -> str:
        return "Payload()"


def _is_payload(hint: Any) -> bool:
    if get_origin(hint) is not Annotated:
        return False
    return any(meta is Payload or isinstance(meta, Payload) for meta in hint.__metadata__)


def _strip_annotated(hint: Any) -> Any:
    while get_origin(hint) is Annotated:
        hint = get_args(hint)[0]
    return hint


class PayloadTypeExtractor:
    """Resolve payload types from explicit config or handler signatures.

    Order: explicit ``payload_type`` (descriptor, then marker config), the one
    parameter marked ``Annotated[T, Payload()]``, then the single parameter
    left after ``self``/``cls``. Generic envelopes listed in ``envelopes``
    (``Message[Order]``) are unwrapped to their first type argument.
    """

    def __init__(self, *, envelopes: Iterable[Any] = ()) -> None:
        self.envelopes = tuple(envelopes)

    def extract_from(self, operation: OperationDescriptor) -> Any:
        explicit = operation.payload_type or operation.config.payload_type
        if explicit is not None:
            return self.unwrap(explicit)

        function = operation.function
        if function is None:
            raise PayloadResolutionError(
                "operation has neither a function nor an explicit payload_type",
                component=operation.component,
                method=operation.name,
            )
        payload = self._from_signature(function, operation)
        logger.debug("payload of %s.%s -> %r", operation.component.__qualname__, operation.name, payload)
        return payload

    def unwrap(self, tp: Any) -> Any:
        tp = _strip_annotated(tp)
        origin, args = get_origin(tp), get_args(tp)
        if origin is None:
            # parametrized pydantic models are real subclasses, not typing aliases
            metadata = getattr(tp, "__pydantic_generic_metadata__", None) or {}
            origin, args = metadata.get("origin"), metadata.get("args", ())
        if origin is not None and origin in self.envelopes and args:
            return self.unwrap(args[0])
        return tp

    def _from_signature(self, function: Any, operation: OperationDescriptor) -> Any:
        def fail(reason: str) -> PayloadResolutionError:
            return PayloadResolutionError(reason, component=operation.component, method=operation.name)

        try:
            hints = get_type_hints(function, include_extras=True)
            signature = inspect.signature(function)
        except (NameError, TypeError, ValueError) as exc:
            raise fail(f"cannot read the signature: {exc}") from exc

        params = [p for p in signature.parameters.values() if p.kind not in _VARIADIC]
        if params and params[0].name in _IMPLICIT and params[0].name not in hints:
            params = params[1:]

        marked = [p for p in params if _is_payload(hints.get(p.name))]
        if len(marked) > 1:
            names = ", ".join(p.name for p in marked)
            raise fail(f"more than one parameter is marked as Payload ({names})")
        if marked:
            return self.unwrap(hints[marked[0].name])

        if not params:
            raise fail("handler takes no payload parameter")
        if len(params) > 1:
            raise fail(
                f"handler takes {len(params)} parameters; mark the payload with Annotated[T, Payload()]"
            )
        param = params[0]
        if param.name not in hints:
            raise fail(f"payload parameter {param.name!r} has no type annotation")
        return self.unwrap(hints[param.name])
