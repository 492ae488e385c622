"""``query`` and ``mutation`` constructors.

Each accepts exactly one of three call shapes:

    query(graph)
    query((name,), graph)
    query((name, parameters), graph)

and wraps the graph in an operation node before encoding it:

    >>> query(("Viewer", [("first", "Int", None, 10)]), ["viewer", "login"])
    'query "Viewer"($first:Int=10){viewer{login}}'
"""

from typing import Any

from .encoder import encode
from .errors import MalformedOperationError
from .ir import Tag
from .parser import is_compound


def operation(kind: str, *args: Any) -> str:
    """Build and encode an operation of the given kind."""
    if len(args) == 1:
        return encode([kind, args[0]])

    if len(args) == 2 and is_compound(args[0]) and len(args[0]) in (1, 2):
        header, graph = args
        name = header[0]
        wrapped: list[Any] = [kind, Tag.OPERATION_NAME, name]
        if len(header) == 2:
            wrapped += [Tag.OPERATION_PARAMS, header[1]]
        wrapped.append(graph)
        return encode(wrapped)

    raise MalformedOperationError(f"Bad form for {kind}: {args!r}", args)


def query(*args: Any) -> str:
    """Encode a query operation."""
    return operation("query", *args)


def mutation(*args: Any) -> str:
    """Encode a mutation operation."""
    return operation("mutation", *args)
