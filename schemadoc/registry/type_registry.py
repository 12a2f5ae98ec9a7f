"""Process-wide store of resolved schemas and views."""
import logging
import threading
from typing import Any, Dict, Optional

from ..introspection.field_map import SchemaFieldMap, rendered_view
from ..typespec.type_names import short_name

logger = logging.getLogger(__name__)


class TypeRegistry:
    """
    Registry of resolved types

    schemas: schema -> field map (added at most once, never removed)
    modules: view short name -> schema it renders
    """

    def __init__(self):
        self.schemas: Dict[Any, SchemaFieldMap] = {}
        self.modules: Dict[str, Any] = {}
        self.lock = threading.RLock()

    def has_schema(self, schema: Any) -> bool:
        with self.lock:
            return schema in self.schemas

    def add(self, module: Any, schema: Any, field_map: SchemaFieldMap) -> bool:
        """
        Register the field map of `schema` as rendered by `module`

        Returns:
            False if the schema was already registered (first writer wins)
        """
        name = short_name(module)
        with self.lock:
            if schema in self.schemas:
                return False

            known = self.modules.get(name)
            if known is not None and known is not schema:
                logger.warning(
                    f"View name {name} already maps to {short_name(known)}, "
                    f"now mapped to {short_name(schema)}"
                )

            self.modules[name] = schema
            self.schemas[schema] = dict(field_map)
            logger.debug(f"Registered {name} -> {short_name(schema)} ({len(field_map)} fields)")
            return True

    def schema_for(self, module: Any) -> Optional[Any]:
        """Schema rendered by a view (looked up by its short name)"""
        with self.lock:
            return self.modules.get(short_name(rendered_view(module)))

    def snapshot(self) -> Dict[str, Dict[Any, Any]]:
        """Copy of the current state"""
        with self.lock:
            return {
                "schemas": {schema: dict(types) for schema, types in self.schemas.items()},
                "modules": dict(self.modules),
            }

    def clear(self) -> None:
        with self.lock:
            self.schemas.clear()
            self.modules.clear()
