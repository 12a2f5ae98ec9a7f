"""
schemadoc - API documentation from type contracts.

Resolves the schemas behind response views, builds request body tables from
handler annotations and renders both as Markdown/HTML tables, without
executing the handlers.
"""

from .builder import ParamRow, ParamSpecBuilder, TableRenderer
from .introspection import ClassSchemaReflector, FieldMapExtractor, SchemaRef
from .recorder import ChannelEvent, ChannelEventKind, Interaction, Recorder
from .registry import SchemaResolver, TypeCollector, TypeRegistry
from .typespec import AnnotationSpecSource, Cents, Encrypted, normalize_type

__version__ = "0.1.0"

__all__ = [
    "ParamRow",
    "ParamSpecBuilder",
    "TableRenderer",
    "ClassSchemaReflector",
    "FieldMapExtractor",
    "SchemaRef",
    "ChannelEvent",
    "ChannelEventKind",
    "Interaction",
    "Recorder",
    "SchemaResolver",
    "TypeCollector",
    "TypeRegistry",
    "AnnotationSpecSource",
    "Cents",
    "Encrypted",
    "normalize_type",
]
