"""
Schema Resolver - Registers the schema behind a view and every nested view.

The backing schema of a view is the first struct marker found in its type
contract. Its field map is registered once; nested views referenced by the
field map are resolved in turn.
"""

import logging
from typing import Any, Iterator, Mapping, Optional, Set

from ..introspection.field_map import FieldMapExtractor, SchemaFieldMap, SchemaRef, rendered_view
from ..typespec.nodes import (
    ContractEntry,
    ListOf,
    ListOfNodes,
    MapShape,
    RemoteStructField,
)
from ..typespec.source import SpecSource
from ..typespec.type_names import short_name
from .type_registry import TypeRegistry

logger = logging.getLogger(__name__)


def find_schema(ast: Any) -> Optional[Any]:
    """First schema referenced by a contract, or None"""
    for schema in iter_schemas(ast):
        return schema
    return None


def iter_schemas(ast: Any) -> Iterator[Any]:
    """Depth-first walk yielding the owner of every struct marker"""
    if isinstance(ast, (list, tuple)):
        for node in ast:
            yield from iter_schemas(node)
    elif isinstance(ast, ContractEntry):
        yield from iter_schemas(ast.params)
        if ast.returns is not None:
            yield from iter_schemas(ast.returns)
    elif isinstance(ast, RemoteStructField):
        yield ast.owner
    elif isinstance(ast, ListOfNodes):
        yield from iter_schemas(ast.children)
    elif isinstance(ast, ListOf):
        yield from iter_schemas(ast.item)
    elif isinstance(ast, MapShape):
        for field in ast.fields:
            yield from iter_schemas(field.value)
    # any other node is a leaf without a schema


class SchemaResolver:
    """Resolves views into the shared TypeRegistry"""

    def __init__(self, registry: TypeRegistry, spec_source: SpecSource, extractor: FieldMapExtractor):
        self.registry = registry
        self.spec_source = spec_source
        self.extractor = extractor

    def resolve(self, module: Any) -> None:
        """
        Register the schema rendered by `module` and its nested views

        Idempotent. Never raises: a view that cannot be resolved is skipped.
        """
        if isinstance(module, Mapping):
            for value in module.values():
                self.resolve(value)
            return

        with self.registry.lock:
            self._resolve(module, set())

    def _resolve(self, module: Any, resolving: Set[int]) -> None:
        view = rendered_view(module)
        if id(view) in resolving:
            logger.debug(f"{short_name(view)} is already being resolved")
            return
        resolving.add(id(view))

        try:
            specs = self.spec_source.fetch_specs(view)
        except Exception as e:
            logger.debug(f"No type contract for {short_name(view)}: {e}")
            return

        if not specs:
            return

        try:
            field_map = self._register(module, view, specs)
        except Exception as e:
            logger.warning(f"Could not resolve types of {short_name(view)}: {e}")
            return

        # Nested views, each resolved on its own
        for key in sorted(field_map):
            value = field_map[key]
            if isinstance(value, SchemaRef):
                self._resolve(value.module, resolving)

    def _register(self, module: Any, view: Any, specs: Any) -> SchemaFieldMap:
        """Field map registered for the view, empty when there is nothing new"""
        schema = find_schema(specs)
        if schema is None:
            logger.debug(f"No schema found in the contract of {short_name(view)}")
            return {}

        if self.registry.has_schema(schema):
            return {}

        field_map = self.extractor.extract(module, schema)
        self.registry.add(view, schema, field_map)
        return field_map
