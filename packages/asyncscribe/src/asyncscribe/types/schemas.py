# asyncscribe/types/schemas.py
from __future__ import annotations

from pydantic import Field

from .base import StrictBaseModel

SCHEMAS_REF_PREFIX = "#/components/schemas/"


class SchemaReference(StrictBaseModel):
    """Pointer to a schema registered in the components section."""

    ref: str = Field(alias="$ref")

    @classmethod
    def from_schema(cls, schema_name: str) -> SchemaReference:
        return cls(ref=f"{SCHEMAS_REF_PREFIX}{schema_name}")

    @property
    def schema_name(self) -> str:
        return self.ref.removeprefix(SCHEMAS_REF_PREFIX)


class MultiFormatSchema(StrictBaseModel):
    schema_format: str | None = Field(default=None, alias="schemaFormat")
    schema_: SchemaReference = Field(alias="schema")

    @classmethod
    def of(cls, reference: SchemaReference) -> MultiFormatSchema:
        return cls(schema_=reference)


__all__ = ["SCHEMAS_REF_PREFIX", "SchemaReference", "MultiFormatSchema"]
