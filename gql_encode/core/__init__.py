"""Core modules for encoding GraphQL queries and simplifying responses."""

from .encoder import (
    encode,
    encode_argument,
    encode_argument_value,
    encode_object,
    encode_parameter_spec,
)
from .errors import EncodeError, MalformedOperationError
from .executor import GraphQLError, GraphQLExecutor, anonymous_operation, dump_variables
from .ir import (
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
from .operations import mutation, operation, query
from .parser import (
    extract_metadata,
    parse_argument_value,
    parse_node,
    parse_parameter_spec,
)
from .simplify import simplify_response_edges

# Reserved tags
OPERATION_NAME = Tag.OPERATION_NAME
OPERATION_PARAMS = Tag.OPERATION_PARAMS
ARGUMENTS = Tag.ARGUMENTS
VARIABLE = Tag.VARIABLE

__all__ = [
    # Tags
    "Tag",
    "OPERATION_NAME",
    "OPERATION_PARAMS",
    "ARGUMENTS",
    "VARIABLE",
    # IR types
    "Alias",
    "Argument",
    "NestedObject",
    "Node",
    "NumberLiteral",
    "ParameterSpec",
    "StringLiteral",
    "SubQuery",
    "Token",
    "Variable",
    # Parser
    "extract_metadata",
    "parse_argument_value",
    "parse_node",
    "parse_parameter_spec",
    # Encoder
    "encode",
    "encode_argument",
    "encode_argument_value",
    "encode_object",
    "encode_parameter_spec",
    # Operations
    "operation",
    "query",
    "mutation",
    # Simplifier
    "simplify_response_edges",
    # Errors
    "EncodeError",
    "MalformedOperationError",
    # Executor
    "GraphQLError",
    "GraphQLExecutor",
    "anonymous_operation",
    "dump_variables",
]
