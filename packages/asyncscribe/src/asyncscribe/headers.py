# asyncscribe/headers.py
"""Header schemas derived from payload types.

Every message references a header schema. When a protocol has nothing to say
about headers, ``AsyncHeaders.NOT_DOCUMENTED`` is registered so the reference
still resolves.
"""
from __future__ import annotations

from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import Field

from asyncscribe.types import StrictBaseModel

__all__ = [
    "HeaderSchema",
    "AsyncHeaders",
    "AsyncHeadersBuilder",
    "AsyncHeadersNotDocumentedBuilder",
]


class HeaderSchema(StrictBaseModel):
    type: str = "string"
    title: str | None = None
    description: str | None = None
    enum: tuple[str, ...] | None = None
    example: Any = None


class AsyncHeaders(StrictBaseModel):
    """Named set of headers, registered as one object schema."""

    schema_name: str
    description: str | None = None
    headers: dict[str, HeaderSchema] = Field(default_factory=dict)

    NOT_DOCUMENTED: ClassVar[AsyncHeaders]
    NOT_USED: ClassVar[AsyncHeaders]

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "title": self.schema_name,
            "properties": {
                key: header.model_dump(exclude_none=True) | {"title": header.title or key}
                for key, header in self.headers.items()
            },
        }
        if self.description:
            schema["description"] = self.description
        return schema


AsyncHeaders.NOT_DOCUMENTED = AsyncHeaders(
    schema_name="HeadersNotDocumented",
    description="There can be headers, but they are not explicitly documented.",
)
AsyncHeaders.NOT_USED = AsyncHeaders(
    schema_name="HeadersNotUsed",
    description="No headers are present.",
)


@runtime_checkable
class AsyncHeadersBuilder(Protocol):
    def build_headers(self, payload_type: type[Any]) -> AsyncHeaders: ...


class AsyncHeadersNotDocumentedBuilder:
    """Default builder: every payload gets the undocumented-headers schema."""

    def build_headers(self, payload_type: type[Any]) -> AsyncHeaders:
        return AsyncHeaders.NOT_DOCUMENTED
