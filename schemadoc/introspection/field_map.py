"""
Field Map Extractor - Output fields of a rendering module.

A view declares its output with an `attributes` directive list:

    attributes = [
        "id",                                           # schema field
        ("owner", (OwnerView, "show")),                 # nested view
        ("posts", (PostView, "index", "articles")),     # nested view, renamed
    ]

Schema fields are reflected and normalized to a display type; nested views
become SchemaRef values that the resolver follows.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..typespec.type_names import normalize_type, short_name
from .reflector import SchemaReflector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaRef:
    """Field rendered by another view"""
    module: Any

    @property
    def name(self) -> str:
        return short_name(rendered_view(self.module))


FieldValue = Union[str, SchemaRef]
SchemaFieldMap = Dict[str, FieldValue]

DISPATCH_KEYS = ("_", "json")


def rendered_view(module: Any) -> Any:
    """Unwrap a dispatch table such as {"_": UserView} or {"json": UserView}"""
    if isinstance(module, Mapping):
        for key in DISPATCH_KEYS:
            if key in module:
                return module[key]
    return module


class FieldMapExtractor:
    """Builds the field map of a view from its attribute directives"""

    def __init__(self, reflector: SchemaReflector, labels: Optional[Mapping[str, str]] = None):
        self.reflector = reflector
        self.labels = dict(labels or {})

    def extract(self, module: Any, schema: Any) -> SchemaFieldMap:
        """
        Extract the output field map of a view

        Args:
            module: View (or dispatch table holding the view)
            schema: Schema the view renders

        Returns:
            {field name: display type or SchemaRef}, empty if the view
            declares no attributes
        """
        view = rendered_view(module)
        directives = getattr(view, "attributes", None)
        if not directives:
            return {}

        if isinstance(directives, Mapping):
            directives = list(directives.items())

        fields: SchemaFieldMap = {}
        for directive in directives:
            if isinstance(directive, (tuple, list)):
                ref = nested_field(directive)
                if ref is None:
                    logger.warning(f"Ignoring malformed directive {directive!r} on {short_name(view)}")
                else:
                    fields[ref[0]] = ref[1]
                continue

            key = str(directive)
            fields[key] = normalize_type(self.reflector.field_type(schema, key), self.labels)

        return fields


def nested_field(directive: Any) -> Optional[Tuple[str, SchemaRef]]:
    """(field name, SchemaRef) of a nested view directive, None when malformed"""
    if len(directive) != 2:
        return None

    key, target = directive
    if not isinstance(target, (tuple, list)):
        return None
    if len(target) == 2:
        return str(key), SchemaRef(target[0])
    if len(target) == 3:
        return str(target[2]), SchemaRef(target[0])
    return None
