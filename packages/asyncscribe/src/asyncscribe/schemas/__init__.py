from .generator import REF_TEMPLATE, GeneratedSchema, SchemaGenerator, type_name

__all__ = ["REF_TEMPLATE", "GeneratedSchema", "SchemaGenerator", "type_name"]
