"""Parser for the list-based graph description syntax.

A graph node is either an atom (a field name or number) or a sequence
whose head is the object identifier and whose remaining items are child
nodes. Metadata pairs (a reserved tag followed by its value) may be
interleaved anywhere in the sequence:

    [ARGUMENTS, {"login": "octocat"}, "user", "name", ["repositories", "totalCount"]]

The parser pulls the metadata out, classifies every argument value, and
returns an ``ir.Node`` tree ready for encoding.
"""

import math
from decimal import Decimal
from enum import Enum
from typing import Any

from .errors import EncodeError
from .ir import (
    METADATA_TAGS,
    Alias,
    Argument,
    NestedObject,
    Node,
    NumberLiteral,
    ParameterSpec,
    StringLiteral,
    SubQuery,
    Tag,
    Token,
    Variable,
)

_NUMBER_TYPES = (int, float, Decimal)


def is_compound(value: Any) -> bool:
    """Check if a value is a sequence in the graph syntax."""
    return isinstance(value, (list, tuple))


def _is_number(value: Any) -> bool:
    return isinstance(value, _NUMBER_TYPES) and not isinstance(value, bool)


def _finite(value: Any) -> Any:
    """Return a number unchanged, rejecting NaN and infinities."""
    if isinstance(value, Decimal):
        finite = value.is_finite()
    else:
        finite = not isinstance(value, float) or math.isfinite(value)
    if not finite:
        raise EncodeError(f"Cannot encode non-finite number {value!r}", value)
    return value


def _tag_text(value: Any) -> str | None:
    """Return the tag string for a reserved tag, or None for anything else."""
    if isinstance(value, Tag):
        return value.value
    if isinstance(value, str):
        return value
    return None


def _text(value: Any) -> str:
    """Textual form of a name: a string, token, enum member or number."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (str, Token)):
        return str(value)
    if _is_number(value):
        return str(value)
    raise EncodeError(f"Expected a name, got {value!r}", value)


def extract_metadata(graph: Any) -> tuple[dict[Tag, Any], list]:
    """Split a graph node into its metadata and its positional items.

    Returns ``(metadata, positional)``. An atom yields no metadata and a
    single positional item. Positional items keep their relative order
    however the metadata pairs are interleaved; a tag given twice keeps
    its last value.
    """
    if not is_compound(graph):
        return {}, [graph]

    metadata: dict[Tag, Any] = {}
    positional = []
    items = iter(graph)
    for item in items:
        tag = _tag_text(item)
        if tag in METADATA_TAGS:
            try:
                metadata[Tag(tag)] = next(items)
            except StopIteration:
                raise EncodeError(f"Metadata tag {tag} has no value", graph) from None
        else:
            positional.append(item)
    return metadata, positional


def parse_object(obj: Any) -> Any:
    """Parse the object identifier at the head of a graph node."""
    if isinstance(obj, Enum):
        return Token(obj.name)
    if isinstance(obj, (str, Token, Alias)):
        return obj
    if _is_number(obj):
        return _finite(obj)
    # (field, alias) pair; the second element must not be a sequence
    if isinstance(obj, tuple) and len(obj) == 2 and not is_compound(obj[1]):
        return Alias(field=parse_object(obj[0]), alias=obj[1])
    raise EncodeError(f"Cannot use {obj!r} as an object identifier", obj)


def parse_node(graph: Any) -> Node:
    """Parse a graph description into a ``Node`` tree."""
    if isinstance(graph, Node):
        return graph

    metadata, positional = extract_metadata(graph)
    if not positional:
        raise EncodeError(f"Graph node {graph!r} has no object identifier", graph)

    name = metadata.get(Tag.OPERATION_NAME)
    return Node(
        object=parse_object(positional[0]),
        name=_text(name) if name is not None else None,
        arguments=parse_arguments(metadata.get(Tag.ARGUMENTS)),
        parameters=parse_parameters(metadata.get(Tag.OPERATION_PARAMS)),
        fields=[parse_node(child) for child in positional[1:]],
    )


def _parse_entries(value: Any) -> list[Argument]:
    """Parse a dict or a sequence of ``(key, value)`` pairs into arguments."""
    pairs = value.items() if isinstance(value, dict) else value
    entries = []
    seen: set[str] = set()
    for pair in pairs:
        if not (is_compound(pair) and len(pair) == 2):
            raise EncodeError(f"Expected a (key, value) pair, got {pair!r}", pair)
        key = _text(pair[0])
        if key in seen:
            raise EncodeError(f"Duplicate key {key!r} in input object", value)
        seen.add(key)
        entries.append(Argument(name=key, value=parse_argument_value(pair[1])))
    return entries


def parse_arguments(value: Any) -> list[Argument]:
    """Parse the value of an ``ARGUMENTS`` tag."""
    if not value:
        return []
    if isinstance(value, NestedObject):
        return list(value.entries)
    if not (isinstance(value, dict) or is_compound(value)):
        raise EncodeError(f"Arguments must be a mapping or pairs, got {value!r}", value)
    return _parse_entries(value)


def parse_argument_value(value: Any):
    """Classify an argument value into one of the IR value variants.

    Shapes are tested in a fixed order since several of them are
    sequences: tokens, then variable references, then input objects,
    then strings and numbers. Anything left is parsed as a sub-query.
    """
    # Already parsed
    if isinstance(value, (Token, Variable, NestedObject, StringLiteral, NumberLiteral)):
        return value
    if isinstance(value, SubQuery):
        return SubQuery(graph=parse_node(value.graph))
    if isinstance(value, Node):
        return SubQuery(graph=value)

    # Bare tokens
    if isinstance(value, bool):
        return Token("true" if value else "false")
    if value is None:
        return Token("null")
    if isinstance(value, Enum):
        return Token(value.name)

    # ($ name) must win over the input object form
    if is_compound(value) and len(value) == 2 and _tag_text(value[0]) == Tag.VARIABLE.value:
        return Variable(name=_text(value[1]))

    if isinstance(value, dict) or is_compound(value):
        return NestedObject(entries=_parse_entries(value))

    if isinstance(value, str):
        return StringLiteral(value)

    if _is_number(value):
        return NumberLiteral(_finite(value))

    return SubQuery(graph=parse_node(value))


def parse_parameter_spec(spec: Any) -> ParameterSpec:
    """Parse an operation variable declaration.

    The shape decides the meaning, never the values:

        (name, type)                  no flag, no default
        (name, type, required)        "!" when required is truthy
        (name, type, _, default)      default, the third slot is ignored
        (name, type, _, d1, d2, ...)  default is the tuple (d1, d2, ...)
    """
    if isinstance(spec, ParameterSpec):
        if spec.has_default:
            return ParameterSpec(
                name=spec.name,
                type=spec.type,
                required=spec.required,
                default=parse_argument_value(spec.default),
                has_default=True,
            )
        return spec

    if not is_compound(spec) or len(spec) < 2:
        raise EncodeError(f"Malformed parameter spec {spec!r}", spec)

    name, type_name = _text(spec[0]), _text(spec[1])
    if len(spec) == 2:
        return ParameterSpec(name=name, type=type_name)
    if len(spec) == 3:
        return ParameterSpec(name=name, type=type_name, required=bool(spec[2]))

    default = spec[3] if len(spec) == 4 else tuple(spec[3:])
    return ParameterSpec(
        name=name,
        type=type_name,
        default=parse_argument_value(default),
        has_default=True,
    )


def parse_parameters(value: Any) -> list[ParameterSpec]:
    """Parse the value of an ``OPERATION_PARAMS`` tag."""
    if not value:
        return []
    if not is_compound(value):
        raise EncodeError(f"Operation parameters must be a sequence, got {value!r}", value)
    return [parse_parameter_spec(spec) for spec in value]
