"""
Spec Sources - Fetch the type contract of a handler or view.

AnnotationSpecSource reads it from Python annotations:
- public functions/methods become ContractEntry values
- TypedDicts become aliases (local by name, imported by qualified name)
- dataclasses (schemas) become RemoteStructField markers
- Enum / Literal become ParameterizedPrimitive
StaticSpecSource serves contracts that were registered by hand.
"""

import collections.abc
import dataclasses
import inspect
import logging
import sys
from abc import ABC, abstractmethod
from enum import Enum
from types import UnionType
from typing import (
    Any,
    Callable,
    Dict,
    ForwardRef,
    Iterable,
    Iterator,
    List,
    Literal,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    is_typeddict,
)

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
from .type_names import PRIMITIVE_NAMES, SEQUENCE_ORIGINS, WRAPPER_ORIGINS

logger = logging.getLogger(__name__)

FIELD_CATEGORIES = ("required_fields", "optional_fields", "allowed_fields", "update_fields")


def is_schema_class(obj: Any) -> bool:
    """Check if a class is a schema (dataclass or declares field categories)"""
    if not inspect.isclass(obj):
        return False
    if dataclasses.is_dataclass(obj):
        return True
    return any(attr in vars(obj) for attr in FIELD_CATEGORIES)


class SpecSource(ABC):
    """Contract-fetch capability used by the resolver and builders"""

    @abstractmethod
    def fetch_specs(self, module: Any) -> Optional[List[ContractEntry]]:
        """
        Fetch the declared function contracts of a module

        Returns:
            List of ContractEntry, or None when the module has no contract
        """

    @abstractmethod
    def fetch_types(self, module: Any) -> Dict[str, TypeNode]:
        """Fetch the type aliases a module can refer to, by alias key"""


class StaticSpecSource(SpecSource):
    """Spec source backed by explicitly registered contracts"""

    def __init__(self):
        self._specs: Dict[Any, List[ContractEntry]] = {}
        self._types: Dict[Any, Dict[str, TypeNode]] = {}

    def register(
        self,
        module: Any,
        specs: List[ContractEntry],
        types: Optional[Dict[str, TypeNode]] = None,
    ) -> None:
        self._specs[module] = list(specs)
        self._types[module] = dict(types or {})

    def fetch_specs(self, module: Any) -> Optional[List[ContractEntry]]:
        return self._specs.get(module)

    def fetch_types(self, module: Any) -> Dict[str, TypeNode]:
        return self._types.get(module, {})


class AnnotationSpecSource(SpecSource):
    """
    Derives type contracts from Python annotations

    Usage:
    ```python
    source = AnnotationSpecSource()
    specs = source.fetch_specs(UserView)     # [ContractEntry("render", ...)]
    aliases = source.fetch_types(UserController)
    ```
    """

    def __init__(self, is_schema: Callable[[Any], bool] = is_schema_class):
        self.is_schema = is_schema

    def fetch_specs(self, module: Any) -> Optional[List[ContractEntry]]:
        owner = owner_module_name(module)
        if owner is None:
            return None

        entries = []
        for name, function in self._contract_functions(module):
            try:
                hints = get_type_hints(function, include_extras=True)
            except Exception as e:
                logger.debug(f"Skipping {owner}.{name}, annotations not resolvable: {e}")
                continue

            if not hints:
                continue

            params = tuple(
                self.to_node(hints[param], owner)
                for param in inspect.signature(function).parameters
                if param in hints
            )
            returns = self.to_node(hints["return"], owner) if "return" in hints else None
            entries.append(ContractEntry(name=name, params=params, returns=returns))

        return entries or None

    def fetch_types(self, module: Any) -> Dict[str, TypeNode]:
        """
        Fetch the TypedDicts a handler can use as request bodies

        TypedDicts declared in the handler's own module are keyed by name.
        TypedDicts of other modules, reached from the handler's annotations,
        are keyed by their qualified name (see RemoteType.qualified_name).
        """
        owner = owner_module_name(module)
        if owner is None:
            return {}

        namespaces = [vars(sys.modules[owner])] if owner in sys.modules else []
        if inspect.isclass(module):
            namespaces.append(vars(module))

        pending = [
            value
            for namespace in namespaces
            for value in list(namespace.values())
            if is_typeddict(value) and value.__module__ == owner
        ]
        for name, function in self._contract_functions(module):
            try:
                hints = get_type_hints(function, include_extras=True)
            except Exception as e:
                logger.debug(f"Skipping aliases of {owner}.{name}: {e}")
                continue
            pending.extend(referenced_typeddicts(hints.values()))

        types: Dict[str, TypeNode] = {}
        while pending:
            typeddict = pending.pop(0)
            key = alias_key(typeddict, owner)
            if key in types:
                continue

            types[key] = self.typeddict_shape(typeddict, owner)
            hints = get_type_hints(typeddict, include_extras=True)
            pending.extend(referenced_typeddicts(hints.values()))

        return types

    def typeddict_shape(self, typeddict: Any, owner: str) -> MapShape:
        """Expand a TypedDict into a MapShape"""
        hints = get_type_hints(typeddict, include_extras=True)
        required_keys = getattr(typeddict, "__required_keys__", frozenset())

        return MapShape(
            fields=tuple(
                MapField(
                    key=key,
                    value=self.to_node(hint, owner),
                    requiredness=Requiredness.EXACT if key in required_keys else Requiredness.OPTIONAL,
                )
                for key, hint in hints.items()
            )
        )

    def to_node(self, tp: Any, owner: str) -> TypeNode:
        """
        Convert one annotation into a contract node

        Args:
            tp: Annotation as returned by get_type_hints
            owner: Module name the annotation belongs to (for local aliases)
        """
        if tp is None:
            return Primitive("null")

        origin = get_origin(tp)
        args = get_args(tp)

        if origin in WRAPPER_ORIGINS:
            return self.to_node(args[0], owner)

        if origin is Literal:
            return ParameterizedPrimitive("literal", tuple(args))

        if origin is Union or origin is UnionType:
            return ListOfNodes(tuple(self.to_node(arg, owner) for arg in args))

        if origin in SEQUENCE_ORIGINS:
            return ListOf(self.to_node(args[0], owner) if args else Primitive("any"))

        if origin in (dict, collections.abc.Mapping, collections.abc.MutableMapping):
            return Primitive("map")

        if is_typeddict(tp):
            if tp.__module__ == owner:
                return LocalAlias(tp.__name__)
            return RemoteType(tp.__module__, tp.__qualname__)

        if inspect.isclass(tp) and issubclass(tp, Enum):
            return ParameterizedPrimitive(tp.__name__, tuple(member.value for member in tp))

        if self.is_schema(tp):
            return RemoteStructField(tp)

        try:
            if tp in PRIMITIVE_NAMES:
                return Primitive(PRIMITIVE_NAMES[tp])
        except TypeError:
            pass

        if hasattr(tp, "__supertype__"):
            # NewType
            return Primitive(tp.__name__)

        if inspect.isclass(tp):
            return RemoteType(tp.__module__, tp.__qualname__)

        if isinstance(tp, ForwardRef):
            return LocalAlias(tp.__forward_arg__)
        if isinstance(tp, str):
            return LocalAlias(tp)

        return Primitive(str(tp))

    def _contract_functions(self, module: Any):
        """Public functions of a class (declaration order, MRO aware) or module"""
        if inspect.ismodule(module):
            for name, value in vars(module).items():
                if (
                    inspect.isfunction(value)
                    and not name.startswith("_")
                    and value.__module__ == module.__name__
                ):
                    yield name, value
            return

        seen = set()
        for klass in module.__mro__:
            if klass is object:
                continue
            for name, value in vars(klass).items():
                if name.startswith("_") or name in seen:
                    continue
                if isinstance(value, (staticmethod, classmethod)):
                    value = value.__func__
                if inspect.isfunction(value):
                    seen.add(name)
                    yield name, value


def alias_key(typeddict: Any, owner: str) -> str:
    """Alias name of a TypedDict as seen from the `owner` module"""
    if typeddict.__module__ == owner:
        return typeddict.__name__
    return f"{typeddict.__module__}.{typeddict.__qualname__}"


def referenced_typeddicts(annotations: Iterable[Any]) -> Iterator[Any]:
    """TypedDicts used anywhere inside the given annotations"""
    for tp in annotations:
        if is_typeddict(tp):
            yield tp
        else:
            yield from referenced_typeddicts(get_args(tp))


def owner_module_name(module: Any) -> Optional[str]:
    """Name of the Python module a handler/view is declared in"""
    if inspect.ismodule(module):
        return module.__name__
    if inspect.isclass(module):
        return module.__module__
    return None
