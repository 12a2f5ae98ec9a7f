from .collector import TypeCollector
from .resolver import SchemaResolver, find_schema
from .type_registry import TypeRegistry

__all__ = ["TypeCollector", "SchemaResolver", "find_schema", "TypeRegistry"]
