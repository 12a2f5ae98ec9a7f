"""
Schema Introspection Module

Reads what the type contract cannot tell:
- Schema field types and field categories (reflector.py)
- Output fields of rendering views (field_map.py)
"""

from .field_map import FieldMapExtractor, SchemaFieldMap, SchemaRef, rendered_view
from .reflector import ClassSchemaReflector, FieldCategories, SchemaReflector, StaticSchemaReflector

__all__ = [
    "FieldMapExtractor",
    "SchemaFieldMap",
    "SchemaRef",
    "rendered_view",
    "ClassSchemaReflector",
    "FieldCategories",
    "SchemaReflector",
    "StaticSchemaReflector",
]
