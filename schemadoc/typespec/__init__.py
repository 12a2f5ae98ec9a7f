"""
Type Contract Module

Static representation of handler/view type contracts:
- Closed set of contract nodes (nodes.py)
- Annotation based and static spec sources (source.py)
- Display names for raw field types (type_names.py)
"""

from .nodes import (
    ContractEntry,
    ListOf,
    ListOfNodes,
    LocalAlias,
    MapField,
    MapShape,
    ParameterizedPrimitive,
    Primitive,
    RemoteStructField,
    RemoteType,
    Requiredness,
    TypeNode,
)
from .source import AnnotationSpecSource, SpecSource, StaticSpecSource, is_schema_class
from .type_names import Cents, Encrypted, normalize_type, qualified_name, short_name

__all__ = [
    "ContractEntry",
    "ListOf",
    "ListOfNodes",
    "LocalAlias",
    "MapField",
    "MapShape",
    "ParameterizedPrimitive",
    "Primitive",
    "RemoteStructField",
    "RemoteType",
    "Requiredness",
    "TypeNode",
    "AnnotationSpecSource",
    "SpecSource",
    "StaticSpecSource",
    "is_schema_class",
    "Cents",
    "Encrypted",
    "normalize_type",
    "qualified_name",
    "short_name",
]
