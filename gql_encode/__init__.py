"""Encode list-based graph descriptions as GraphQL and simplify responses."""

from .core import (
    ARGUMENTS,
    OPERATION_NAME,
    OPERATION_PARAMS,
    VARIABLE,
    EncodeError,
    MalformedOperationError,
    SubQuery,
    Token,
    Variable,
    encode,
    mutation,
    query,
    simplify_response_edges,
)

__version__ = "0.1.0"

__all__ = [
    "ARGUMENTS",
    "OPERATION_NAME",
    "OPERATION_PARAMS",
    "VARIABLE",
    "EncodeError",
    "MalformedOperationError",
    "SubQuery",
    "Token",
    "Variable",
    "encode",
    "mutation",
    "query",
    "simplify_response_edges",
]
