"""
Param Spec Builder - Request body shape of a handler action.

Reads the parameters declared by the action's contract, expands aliases
(TypedDicts of the handler's module or imported from other modules) into
nested rows, and normalizes every leaf type to its display name.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Union

from ..typespec.nodes import (
    ContractEntry,
    ListOf,
    ListOfNodes,
    LocalAlias,
    MapShape,
    RemoteStructField,
    RemoteType,
    TypeNode,
)
from ..typespec.source import SpecSource
from ..typespec.type_names import normalize_type, qualified_name, short_name, unique
from .table import ParamRow

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_CONTEXT_TYPES = ("Request", "HttpRequest", "PreparedRequest", "Conn")

ResolvedType = Union[str, List[ParamRow]]


class ParamSpecBuilder:
    """Builds ParamRow lists from handler contracts"""

    def __init__(
        self,
        spec_source: SpecSource,
        request_context_types: Sequence[str] = DEFAULT_REQUEST_CONTEXT_TYPES,
        labels: Optional[Mapping[str, str]] = None,
    ):
        self.spec_source = spec_source
        self.request_context_types = set(request_context_types)
        self.labels = dict(labels or {})

    def build(self, module: Any, action: Optional[str] = None) -> List[ParamRow]:
        """
        Build the request body rows of a handler action

        Args:
            module: Handler class or module
            action: Action name; None uses every contract entry

        Returns:
            List of ParamRow (empty when there is no matching contract)
        """
        try:
            specs = self.spec_source.fetch_specs(module) or []
            aliases = self.spec_source.fetch_types(module) or {}
        except Exception as e:
            logger.warning(f"Could not read the contract of {short_name(module)}: {e}")
            return []

        entries = [entry for entry in specs if action is None or entry.name == action]
        if not entries:
            logger.debug(f"No contract entry {action} on {short_name(module)}")
            return []

        rows: List[ParamRow] = []
        for node in self._param_nodes(entries):
            shape = self._collect(node, aliases)
            if shape is not None:
                rows.extend(self._rows(shape, aliases, set()))
        return rows

    def _param_nodes(self, entries: List[ContractEntry]) -> List[TypeNode]:
        nodes = []
        for entry in entries:
            for node in entry.params:
                if self.is_request_context(node):
                    continue
                nodes.append(node)
        return nodes

    def is_request_context(self, node: TypeNode) -> bool:
        """Check if a parameter is the ambient request object"""
        return isinstance(node, RemoteType) and short_name(node.name) in self.request_context_types

    def _collect(
        self, node: TypeNode, aliases: Dict[str, TypeNode], seen: frozenset = frozenset()
    ) -> Optional[MapShape]:
        """Map shape behind a parameter, None when it does not describe a body"""
        key = alias_key(node)
        if key is not None:
            if key in seen or key not in aliases:
                return None
            return self._collect(aliases[key], aliases, seen | {key})

        if isinstance(node, MapShape):
            return node

        return None

    def _rows(self, shape: MapShape, aliases: Dict[str, TypeNode], seen: Set[str]) -> List[ParamRow]:
        return [
            ParamRow(field.key, self.resolve(field.value, aliases, seen), field.required)
            for field in shape.fields
        ]

    def resolve(self, node: TypeNode, aliases: Dict[str, TypeNode], seen: Set[str]) -> ResolvedType:
        """Resolve a field type: nested rows for map shapes, display name otherwise"""
        key = alias_key(node)
        if key in aliases and key not in seen:
            return self.resolve(aliases[key], aliases, seen | {key})

        if isinstance(node, LocalAlias):
            return node.name

        if isinstance(node, MapShape):
            return self._rows(node, aliases, seen)

        if isinstance(node, ListOf):
            item = self.resolve(node.item, aliases, seen)
            return item if isinstance(item, list) else f"list of {item}"

        return self.leaf_type(node, aliases, seen)

    def leaf_type(self, node: TypeNode, aliases: Dict[str, TypeNode], seen: Set[str]) -> str:
        if isinstance(node, RemoteType):
            return node.qualified_name

        if isinstance(node, RemoteStructField):
            return qualified_name(node.owner)

        if isinstance(node, ListOfNodes):
            names = []
            for child in node.children:
                resolved = self.resolve(child, aliases, seen)
                names.append("map" if isinstance(resolved, list) else resolved)
            return " | ".join(unique(names))

        return normalize_type(node, self.labels)


def alias_key(node: TypeNode) -> Optional[str]:
    """Key of the alias a node refers to (TypedDicts of other modules by qualified name)"""
    if isinstance(node, LocalAlias):
        return node.name
    if isinstance(node, RemoteType):
        return node.qualified_name
    return None
