"""
Type contract nodes - the static shape of a handler/view type contract.

Every contract fetched by a SpecSource is expressed with these variants:
- Primitive / ParameterizedPrimitive (leaf types, enumerations)
- LocalAlias (alias declared next to the handler)
- RemoteType (type declared in another module)
- RemoteStructField (backing schema of a view)
- ListOfNodes (union), ListOf (sequence), MapShape (typed mapping)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union


class Requiredness(str, Enum):
    """Constraint of a key inside a MapShape"""
    EXACT = "map_field_exact"
    OPTIONAL = "map_field_assoc"


@dataclass(frozen=True)
class Primitive:
    name: str


@dataclass(frozen=True)
class ParameterizedPrimitive:
    """Primitive restricted to a closed set of literal values"""
    name: str
    values: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class LocalAlias:
    name: str


@dataclass(frozen=True)
class RemoteType:
    module: str
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.module}.{self.name}" if self.module else self.name


@dataclass(frozen=True)
class RemoteStructField:
    """The struct type of `owner`, i.e. the schema a contract is built on"""
    owner: Any


@dataclass(frozen=True)
class ListOfNodes:
    children: Tuple["TypeNode", ...] = ()


@dataclass(frozen=True)
class ListOf:
    item: "TypeNode"


@dataclass(frozen=True)
class MapField:
    key: str
    value: "TypeNode"
    requiredness: Requiredness = Requiredness.OPTIONAL

    @property
    def required(self) -> bool:
        return self.requiredness == Requiredness.EXACT


@dataclass(frozen=True)
class MapShape:
    fields: Tuple[MapField, ...] = ()


TypeNode = Union[
    Primitive,
    ParameterizedPrimitive,
    LocalAlias,
    RemoteType,
    RemoteStructField,
    ListOfNodes,
    ListOf,
    MapShape,
]


@dataclass(frozen=True)
class ContractEntry:
    """Declared contract of one function: its parameters and return type"""
    name: str
    params: Tuple[TypeNode, ...] = ()
    returns: Optional[TypeNode] = None
