# asyncscribe/registry/components.py
"""Deduplicated store of component schemas and messages.

This is the only long-lived, shared state of a scan. Scanners of different
classes may call into it concurrently; every write is an insert-if-absent keyed
by a stable identity (schema name, payload type, message id).
"""
from __future__ import annotations

import logging
from typing import Any

from asgiref.sync import sync_to_async

from asyncscribe.exceptions import SchemaResolutionError
from asyncscribe.headers import AsyncHeaders
from asyncscribe.schemas import SchemaGenerator, type_name
from asyncscribe.tracing import scan_span
from asyncscribe.types import MessageObject

from .base import BaseRegistry

logger = logging.getLogger(__name__)

__all__ = ["ComponentsService"]


class ComponentsService:
    """Registers payload/header schemas and messages exactly once per identity."""

    def __init__(self, *, schema_generator: SchemaGenerator | None = None) -> None:
        self.schema_generator = schema_generator or SchemaGenerator()
        self.schemas: BaseRegistry[str, dict[str, Any]] = BaseRegistry(name="schemas")
        self.messages: BaseRegistry[str, MessageObject] = BaseRegistry(name="messages")
        # payload type -> schema name, so repeat registrations skip generation
        self._type_names: BaseRegistry[Any, str] = BaseRegistry(name="schema-types")
        # schema name -> the payload type it was generated for
        self._schema_owners: BaseRegistry[str, Any] = BaseRegistry(name="schema-owners")

    # ------------------------------------------------------------------
    # Schemas
    # ------------------------------------------------------------------
    def register_schema(self, target: type[Any] | AsyncHeaders) -> str:
        """Register a payload type or header set and return its schema name.

        Idempotent: the same target always yields the same name and a single
        stored entry. A payload type whose preferred name already belongs to a
        different type is registered under its fully-qualified name instead.

        :raises SchemaResolutionError: If the payload type cannot be introspected,
            or no free name is left for it.
        """
        if isinstance(target, AsyncHeaders):
            schema = target.to_schema()
            stored = self.schemas.put_if_absent(target.schema_name, schema)
            if stored != schema:
                raise SchemaResolutionError(
                    f"header schema {target.schema_name!r} is already registered with a different body"
                )
            return target.schema_name

        name, _ = self._type_names.upsert(target, lambda: self._generate(target))
        return name

    async def aregister_schema(self, target: type[Any] | AsyncHeaders) -> str:
        return await sync_to_async(self.register_schema)(target)

    def _generate(self, tp: Any) -> str:
        # runs under the _type_names lock, so name claims are serialized
        with scan_span(
            "asyncscribe.registry.schema",
            attributes={"asyncscribe.payload_type": type_name(tp)},
        ):
            generated = self.schema_generator.generate(tp)
            if not self._claim(generated.name, tp, generated.schema):
                qualified = type_name(tp)
                if qualified == generated.name:
                    raise SchemaResolutionError(
                        f"schema name {qualified!r} is already registered for a different type"
                    )
                logger.warning(
                    "schema name %r already belongs to another type; registering %s under its qualified name",
                    generated.name,
                    qualified,
                )
                generated = self.schema_generator.generate(tp, name=qualified)
                if not self._claim(qualified, tp, generated.schema):
                    raise SchemaResolutionError(
                        f"schema name {qualified!r} is already registered for a different type"
                    )
            for def_name, definition in generated.definitions.items():
                self._store_schema(def_name, definition)
            self._store_schema(generated.name, generated.schema, source=tp)
        return generated.name

    def _claim(self, name: str, tp: Any, schema: dict[str, Any]) -> bool:
        """Record ``tp`` as the owner of ``name`` unless another type or body holds it."""
        owner = self._schema_owners.try_get(name)
        if owner is not None:
            return owner == tp
        stored = self.schemas.try_get(name)
        if stored is not None and stored != schema:
            return False
        self._schema_owners.put_if_absent(name, tp)
        return True

    def _store_schema(self, name: str, schema: dict[str, Any], *, source: Any = None) -> None:
        stored = self.schemas.put_if_absent(name, schema)
        if stored is not schema and stored != schema:
            logger.warning(
                "schema name %r already registered with a different body; keeping the first (source=%s)",
                name,
                type_name(source) if source is not None else "-",
            )

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def register_message(self, message: MessageObject) -> MessageObject:
        """Register ``message`` by id; return the descriptor stored for that id."""
        stored, created = self.messages.upsert(message.message_id, lambda: message)
        if not created and stored != message:
            logger.warning(
                "message %r already registered with different content; keeping the first",
                message.message_id,
            )
        return stored

    async def aregister_message(self, message: MessageObject) -> MessageObject:
        return await sync_to_async(self.register_message)(message)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def get_schemas(self) -> dict[str, dict[str, Any]]:
        return self.schemas.snapshot()

    def get_messages(self) -> dict[str, MessageObject]:
        return self.messages.snapshot()

    def freeze(self) -> None:
        for registry in (self.schemas, self.messages, self._type_names, self._schema_owners):
            registry.freeze()
