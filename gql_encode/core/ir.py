"""Intermediate Representation (IR) for GraphQL graph descriptions.

Callers describe a query with plain Python lists, tuples, dicts and
scalars (see ``parser``). That surface syntax is parsed once into the
dataclasses below, which the encoder then renders without having to
guess at shapes again.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Union


class Tag(str, Enum):
    """Reserved markers recognised inside a graph description.

    The members are ``str`` so that the plain strings (``":arguments"``,
    ``"$"``, ...) work too, e.g. in graphs loaded from JSON.
    """
    OPERATION_NAME = ":operation-name"
    OPERATION_PARAMS = ":operation-params"
    ARGUMENTS = ":arguments"
    VARIABLE = "$"


# Tags that introduce a metadata pair on a graph node
METADATA_TAGS = frozenset({
    Tag.OPERATION_NAME.value,
    Tag.OPERATION_PARAMS.value,
    Tag.ARGUMENTS.value,
})


@dataclass(frozen=True)
class Token:
    """A bare, unquoted token such as an enum value (``ASC``)."""
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Variable:
    """A reference to an operation variable, rendered as ``$name``."""
    name: str


@dataclass(frozen=True)
class StringLiteral:
    """A string argument value, rendered between double quotes."""
    value: str


@dataclass(frozen=True)
class NumberLiteral:
    """A numeric argument value, rendered as decimal text."""
    value: Union[int, float, Decimal]


@dataclass
class NestedObject:
    """An input object argument: ordered ``name -> value`` entries."""
    entries: list["Argument"] = field(default_factory=list)


@dataclass
class SubQuery:
    """A graph node used as an argument value.

    Callers wrap a raw graph in ``SubQuery`` to embed it; after parsing,
    ``graph`` always holds a ``Node``.
    """
    graph: Any


ArgumentValue = Union[Token, Variable, NestedObject, StringLiteral, NumberLiteral, SubQuery]


@dataclass
class Argument:
    """A ``key:value`` pair, used for field arguments and input objects."""
    name: str
    value: ArgumentValue


@dataclass(frozen=True)
class Alias:
    """An aliased object identifier.

    Only ``field`` is rendered; ``alias`` is kept but not emitted.
    """
    field: Any
    alias: Any


@dataclass
class ParameterSpec:
    """Declaration of an operation variable: ``$name:Type!=default``.

    ``has_default`` distinguishes "no default" from a default of ``null``.
    """
    name: str
    type: str
    required: bool = False
    default: ArgumentValue | None = None
    has_default: bool = False


@dataclass
class Node:
    """One object or field of a query, with its metadata and children."""
    object: Any  # str, int, float, Decimal, Token or Alias
    name: str | None = None
    arguments: list[Argument] = field(default_factory=list)
    parameters: list[ParameterSpec] = field(default_factory=list)
    fields: list["Node"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        """Return True if the node has no child fields."""
        return not self.fields
