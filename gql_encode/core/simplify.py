"""Response post-processing.

GraphQL connections wrap each item of a list in ``{"edges": [{"node": ...}]}``.
``simplify_response_edges`` replaces every such wrapper with the plain
list of nodes:

    >>> simplify_response_edges(
    ...     {"repo": {"edges": [{"node": {"name": "a"}}, {"node": {"name": "b"}}]}}
    ... )
    {'repo': [{'name': 'a'}, {'name': 'b'}]}
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


def _is_connection(value: Any) -> bool:
    """Check if a value is a single-entry ``{"edges": [...]}`` wrapper."""
    return (
        isinstance(value, dict)
        and len(value) == 1
        and "edges" in value
        and isinstance(value["edges"], list)
    )


def _edge_node(edge: Any) -> Any:
    if isinstance(edge, dict):
        return edge.get("node")
    return None


def _simplify_entry(key: Any, value: Any) -> Any:
    """Simplify the value of one mapping entry."""
    if _is_connection(value):
        edges = value["edges"]
        logger.debug("Collapsing %d edges under %r", len(edges), key)
        return [simplify_response_edges(_edge_node(edge)) for edge in edges]
    if not isinstance(value, (dict, list)):
        return value
    return simplify_response_edges(value)


def simplify_response_edges(data: Any) -> Any:
    """Collapse every ``edges``/``node`` wrapper in a response tree.

    Returns a new tree; the input is left untouched. Scalars are returned
    as-is. Only a wrapper holding nothing but ``edges`` is collapsed, so a
    connection that also selects ``pageInfo`` or ``totalCount`` is kept.
    """
    if isinstance(data, dict):
        return {key: _simplify_entry(key, value) for key, value in data.items()}
    if isinstance(data, list):
        return [simplify_response_edges(item) for item in data]
    return data
