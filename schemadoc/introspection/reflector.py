"""
Schema Reflector - Runtime knowledge of a schema definition.

A schema owns the authoritative field names and field types. The reflector
answers two questions about it:
- declared type of one field
- field names grouped into required/optional/allowed/update categories
"""

import dataclasses
import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Dict, List, Optional, get_type_hints

logger = logging.getLogger(__name__)


@dataclass
class FieldCategories:
    """Schema field names grouped by how requests may use them"""
    required: List[str] = dataclass_field(default_factory=list)
    optional: List[str] = dataclass_field(default_factory=list)
    allowed: List[str] = dataclass_field(default_factory=list)
    update: List[str] = dataclass_field(default_factory=list)

    def writable(self) -> List[str]:
        """Fields accepted on create (required + optional + allowed)"""
        return self.required + self.optional + self.allowed

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to dictionary representation"""
        return {
            "required": self.required,
            "optional": self.optional,
            "allowed": self.allowed,
            "update": self.update,
        }


class SchemaReflector(ABC):
    """Reflection boundary into schema definitions"""

    @abstractmethod
    def field_type(self, schema: Any, key: str) -> Any:
        """Declared raw type of `key` (Any when the schema has no such field)"""

    @abstractmethod
    def field_categories(self, schema: Any) -> FieldCategories:
        """Field names grouped into categories (empty for unknown schemas)"""


class ClassSchemaReflector(SchemaReflector):
    """
    Reflects schema classes

    Field types come from the class annotations. Categories come from the
    `required_fields`, `optional_fields`, `allowed_fields` and `update_fields`
    class attributes; a dataclass that declares none of them falls back to
    "no default -> required, default -> optional".
    """

    def __init__(self):
        self._hints_cache: Dict[Any, Dict[str, Any]] = {}

    def field_type(self, schema: Any, key: str) -> Any:
        return self._hints(schema).get(key, Any)

    def field_categories(self, schema: Any) -> FieldCategories:
        if not inspect.isclass(schema):
            return FieldCategories()

        declared = {
            category: list(getattr(schema, f"{category}_fields", None) or [])
            for category in ("required", "optional", "allowed", "update")
        }
        if any(declared.values()) or not dataclasses.is_dataclass(schema):
            return FieldCategories(**declared)

        required, optional = [], []
        for item in dataclasses.fields(schema):
            has_default = (
                item.default is not dataclasses.MISSING
                or item.default_factory is not dataclasses.MISSING
            )
            (optional if has_default else required).append(item.name)

        return FieldCategories(required=required, optional=optional)

    def _hints(self, schema: Any) -> Dict[str, Any]:
        if schema in self._hints_cache:
            return self._hints_cache[schema]

        hints: Dict[str, Any] = {}
        if inspect.isclass(schema):
            try:
                hints = get_type_hints(schema, include_extras=True)
            except Exception as e:
                logger.warning(f"Could not read annotations of {schema!r}: {e}")

        self._hints_cache[schema] = hints
        return hints


class StaticSchemaReflector(SchemaReflector):
    """Reflector over schemas described as plain dictionaries"""

    def __init__(self, schemas: Optional[Dict[Any, Dict[str, Any]]] = None):
        """
        Args:
            schemas: {schema: {"types": {field: raw_type}, "required": [...],
                     "optional": [...], "allowed": [...], "update": [...]}}
        """
        self.schemas = schemas or {}

    def add_schema(self, schema: Any, types: Dict[str, Any], **categories: List[str]) -> None:
        self.schemas[schema] = {"types": dict(types), **categories}

    def field_type(self, schema: Any, key: str) -> Any:
        return self.schemas.get(schema, {}).get("types", {}).get(key, Any)

    def field_categories(self, schema: Any) -> FieldCategories:
        definition = self.schemas.get(schema, {})
        return FieldCategories(
            required=list(definition.get("required", [])),
            optional=list(definition.get("optional", [])),
            allowed=list(definition.get("allowed", [])),
            update=list(definition.get("update", [])),
        )
