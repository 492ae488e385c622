"""Encoder turning graph descriptions into GraphQL text.

The output is compact: no whitespace except the single space before an
operation name and between sibling fields.

    >>> encode([ARGUMENTS, {"id": 1}, "user", "name"])
    'user(id:1){name}'
"""

import logging
from typing import Any

from .errors import EncodeError
from .ir import (
    Alias,
    Argument,
    NestedObject,
    Node,
    NumberLiteral,
    StringLiteral,
    SubQuery,
    Token,
    Variable,
)
from .parser import parse_argument_value, parse_node, parse_object, parse_parameter_spec

logger = logging.getLogger(__name__)


def encode(graph: Any) -> str:
    """Encode a graph node (raw description or parsed ``Node``) as GraphQL.

    Segments are emitted in a fixed order, each only when present:
    object, operation name, arguments, operation parameters, child fields.

    Raises:
        EncodeError: If part of the graph has no textual form
    """
    text = _encode_node(parse_node(graph))
    logger.debug("Encoded graph into %d characters", len(text))
    return text


def _encode_node(node: Node) -> str:
    parts = [encode_object(node.object)]

    if node.name is not None:
        parts.append(f' "{node.name}"')
    if node.arguments:
        parts.append(f"({','.join(encode_argument(arg) for arg in node.arguments)})")
    if node.parameters:
        parts.append(f"({','.join(encode_parameter_spec(p) for p in node.parameters)})")
    if not node.is_leaf:
        parts.append(f"{{{' '.join(_encode_node(child) for child in node.fields)}}}")

    return "".join(parts)


def encode_object(obj: Any) -> str:
    """Render an object identifier.

    Strings are not quoted here. For an alias only the field name is
    written; the alias itself is dropped.
    """
    obj = parse_object(obj)
    if isinstance(obj, Alias):
        return encode_object(obj.field)
    return str(obj)


def encode_argument(arg: Argument) -> str:
    """Render a ``key:value`` pair."""
    return f"{arg.name}:{encode_argument_value(arg.value)}"


def encode_argument_value(value: Any) -> str:
    """Render an argument value.

    Raw values are classified first (see ``parser.parse_argument_value``).
    String literals are wrapped in double quotes without any escaping.
    """
    value = parse_argument_value(value)

    if isinstance(value, Token):
        return value.text
    if isinstance(value, Variable):
        return f"${value.name}"
    if isinstance(value, NestedObject):
        return f"{{{','.join(encode_argument(entry) for entry in value.entries)}}}"
    if isinstance(value, StringLiteral):
        return f'"{value.value}"'
    if isinstance(value, NumberLiteral):
        return str(value.value)
    if isinstance(value, SubQuery):
        return _encode_node(value.graph)
    raise EncodeError(f"Cannot encode argument value {value!r}", value)


def encode_parameter_spec(spec: Any) -> str:
    """Render an operation variable declaration, e.g. ``$first:Int=10``."""
    spec = parse_parameter_spec(spec)

    text = f"${spec.name}:{spec.type}"
    if spec.required:
        text += "!"
    if spec.has_default:
        text += f"={encode_argument_value(spec.default)}"
    return text
