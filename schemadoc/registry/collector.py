"""
Type Collector - Public query surface over the type registry.

Resolves views as interactions are recorded, then answers documentation
queries at report time:
- request fields of a view's schema (per action)
- request body table of a handler action
- response table of a view
- catalogue of every registered schema
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..builder.param_spec import DEFAULT_REQUEST_CONTEXT_TYPES, ParamSpecBuilder
from ..builder.table import ParamRow, TableRenderer
from ..introspection.field_map import FieldMapExtractor, rendered_view
from ..introspection.reflector import ClassSchemaReflector, SchemaReflector
from ..typespec.source import AnnotationSpecSource, SpecSource
from ..typespec.type_names import normalize_type, short_name
from .resolver import SchemaResolver
from .type_registry import TypeRegistry

logger = logging.getLogger(__name__)


class TypeCollector:
    """
    Collects schema types for API documentation

    Usage:
    ```python
    collector = TypeCollector()
    collector.register_types(UserView)
    print(collector.get_response_types(UserView))
    print(collector.param_spec_table(UserController, "create"))
    print(collector.get_all_types())
    ```
    """

    def __init__(
        self,
        spec_source: Optional[SpecSource] = None,
        reflector: Optional[SchemaReflector] = None,
        registry: Optional[TypeRegistry] = None,
        renderer: Optional[TableRenderer] = None,
        labels: Optional[Mapping[str, str]] = None,
        request_context_types: Sequence[str] = DEFAULT_REQUEST_CONTEXT_TYPES,
    ):
        self.spec_source = spec_source or AnnotationSpecSource()
        self.reflector = reflector or ClassSchemaReflector()
        self.registry = registry or TypeRegistry()
        self.renderer = renderer or TableRenderer()
        self.labels = dict(labels or {})

        self.extractor = FieldMapExtractor(self.reflector, self.labels)
        self.resolver = SchemaResolver(self.registry, self.spec_source, self.extractor)
        self.param_builder = ParamSpecBuilder(self.spec_source, request_context_types, self.labels)

    @classmethod
    def from_config(cls, render_config) -> "TypeCollector":
        """Build a collector from a RenderConfig"""
        return cls(
            renderer=TableRenderer(render_config.strip_namespaces),
            labels=render_config.type_labels,
            request_context_types=render_config.request_context_types,
        )

    def register_types(self, modules: Any) -> None:
        """Resolve a view (or a {format: view} table) into the registry"""
        self.resolver.resolve(modules)

    resolve_types = register_types

    def request_fields(self, module: Any, excluded: Iterable[str] = (), action: str = "show") -> List[str]:
        """
        Names of the request fields accepted by the schema behind a view

        Args:
            module: View whose schema is documented
            excluded: Field names to leave out
            action: "update" uses the update field list, anything else the
                    required + optional + allowed lists

        Returns:
            Sorted, deduplicated field names
        """
        schema = self.registry.schema_for(module)
        if schema is None:
            return []

        categories = self.reflector.field_categories(schema)
        names = categories.update if action == "update" else categories.writable()
        excluded = set(excluded)
        return sorted({name for name in names if name not in excluded})

    def get_request_types(self, module: Any, excluded: Iterable[str] = (), action: str = "show") -> str:
        """Markdown bullet list of request fields, required ones flagged"""
        schema = self.registry.schema_for(module)
        if schema is None:
            return ""

        required_fields = set(self.reflector.field_categories(schema).required)
        lines = []
        for key in self.request_fields(module, excluded, action):
            field_type = normalize_type(self.reflector.field_type(schema, key), self.labels)
            required = "**required**" if key in required_fields else ""
            lines.append(f"    * {key}: {field_type} {required} \n\n")
        return "".join(lines)

    def get_response_types(self, module: Any, excluded: Iterable[str] = ()) -> str:
        """Response table of a view, empty if its schema was never resolved"""
        view = rendered_view(module)
        with self.registry.lock:
            schema = self.registry.schema_for(view)
            modules = dict(self.registry.modules)

        if schema is None:
            return ""

        try:
            field_map = self.extractor.extract(view, schema)
        except Exception as e:
            logger.warning(f"Could not extract response fields of {short_name(view)}: {e}")
            return ""

        excluded = set(excluded)
        field_map = {key: value for key, value in field_map.items() if key not in excluded}
        return self.renderer.render(field_map, modules)

    def param_spec(self, handler: Any, action: Optional[str] = None) -> List[ParamRow]:
        return self.param_builder.build(handler, action)

    def param_spec_table(self, handler: Any, action: Optional[str] = None) -> str:
        """Request body table of a handler action"""
        return self.renderer.render_rows(self.param_spec(handler, action))

    def get_all_types(self) -> str:
        """Catalogue of every registered schema, one anchored section each"""
        with self.registry.lock:
            schemas = list(self.registry.schemas.items())
            modules = dict(self.registry.modules)

        sections = []
        for schema, field_map in schemas:
            name = short_name(schema)
            sections.append(f"### <a id={name}></a>{name}\n\n{self.renderer.render(field_map, modules)}\n\n")
        return "".join(sections)
