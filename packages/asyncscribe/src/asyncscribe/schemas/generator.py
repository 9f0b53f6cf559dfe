# asyncscribe/schemas/generator.py
"""Turn runtime payload types into JSON schemas.

Pydantic's ``TypeAdapter`` does the introspection, so anything it accepts works
as a payload: ``BaseModel`` subclasses, dataclasses, ``TypedDict``, primitives
and containers of those.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, get_args, get_origin

from pydantic import PydanticUserError, TypeAdapter

from asyncscribe.exceptions import SchemaResolutionError
from asyncscribe.types.schemas import SCHEMAS_REF_PREFIX

logger = logging.getLogger(__name__)

REF_TEMPLATE = SCHEMAS_REF_PREFIX + "{model}"


def type_name(tp: Any, *, qualified: bool = True) -> str:
    """Dotted name of a payload type (``shop.models.Order``) or its simple name.

    Parametrized generics are named by origin and arguments:
    ``list[shop.models.Order]`` / ``list[Order]``.
    """
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]

    origin = get_origin(tp)
    if origin is not None:
        args = ", ".join(_argument_name(arg, qualified) for arg in get_args(tp))
        return f"{_origin_name(origin, qualified)}[{args}]"

    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", None) or getattr(tp, "__name__", None)
    if qualname is None:
        qualname = repr(tp).removeprefix("typing.")
    if not qualified:
        return getattr(tp, "__name__", qualname)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


def _origin_name(origin: Any, qualified: bool) -> str:
    if isinstance(origin, type):
        return type_name(origin, qualified=qualified)
    # typing special forms: Union, Literal, ...
    return getattr(origin, "_name", None) or repr(origin).removeprefix("typing.")


def _argument_name(arg: Any, qualified: bool) -> str:
    if arg is Ellipsis:
        return "..."
    if isinstance(arg, type) or get_origin(arg) is not None:
        return type_name(arg, qualified=qualified)
    return repr(arg)


def _rewrite_refs(node: Any, old: str, new: str) -> Any:
    if isinstance(node, dict):
        return {
            key: (new if key == "$ref" and value == old else _rewrite_refs(value, old, new))
            for key, value in node.items()
        }
    if isinstance(node, list):
        return [_rewrite_refs(item, old, new) for item in node]
    return node


@dataclass(frozen=True)
class GeneratedSchema:
    name: str
    schema: dict[str, Any]
    definitions: dict[str, dict[str, Any]] = field(default_factory=dict)


class SchemaGenerator:
    """Generate component schemas named by simple or fully-qualified type name."""

    def __init__(self, *, use_fqn: bool = False) -> None:
        self.use_fqn = use_fqn

    def schema_name(self, tp: Any) -> str:
        return type_name(tp, qualified=self.use_fqn)

    def generate(self, tp: Any, *, name: str | None = None) -> GeneratedSchema:
        """Schema for ``tp`` stored as ``name`` (default: ``schema_name(tp)``)."""
        name = name or self.schema_name(tp)
        try:
            schema = TypeAdapter(tp).json_schema(ref_template=REF_TEMPLATE)
        except (PydanticUserError, TypeError, ValueError) as exc:
            raise SchemaResolutionError(
                f"Cannot build a schema for payload type {type_name(tp)!r}: {exc}"
            ) from exc

        definitions: dict[str, dict[str, Any]] = schema.pop("$defs", {})

        # Self-referencing models come back as a bare $ref into $defs; the
        # definition becomes the top-level schema and its refs follow the name.
        ref = schema.get("$ref")
        if ref and set(schema) == {"$ref"}:
            def_name = ref.removeprefix(SCHEMAS_REF_PREFIX)
            schema = definitions.pop(def_name, schema)
            if def_name != name:
                own_ref = REF_TEMPLATE.format(model=name)
                schema = _rewrite_refs(schema, ref, own_ref)
                definitions = _rewrite_refs(definitions, ref, own_ref)

        schema.setdefault("title", type_name(tp, qualified=False))
        logger.debug("generated schema %s (%d nested definitions)", name, len(definitions))
        return GeneratedSchema(name=name, schema=schema, definitions=definitions)
