"""Send encoded graphs to a GraphQL endpoint.

Operations built here are always anonymous. ``query``/``mutation`` write the
operation name in double quotes, which no server accepts, so variables are
declared on an unnamed operation instead:

    >>> anonymous_operation("query", ["node", "id"], [("id", "ID", True)])
    'query($id:ID!){node{id}}'
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from .encoder import encode
from .ir import Tag
from .parser import parse_parameters
from .simplify import simplify_response_edges

logger = logging.getLogger(__name__)

_VARIABLES = TypeAdapter(dict[str, Any])


class GraphQLError(Exception):
    """The endpoint answered with a non-empty ``errors`` list.

    ``data`` holds whatever partial data came back alongside the errors.
    """

    def __init__(self, errors: list[Any], data: dict[str, Any] | None = None):
        self.errors = errors
        self.data = data
        self.message = "; ".join(
            str(error.get("message", error)) if isinstance(error, dict) else str(error)
            for error in errors
        )
        super().__init__(self.message)


def anonymous_operation(kind: str, graph: Any, parameters: Any = None) -> str:
    """Encode ``graph`` as an unnamed operation declaring ``parameters``."""
    wrapped: list[Any] = [kind]
    if parameters:
        wrapped += [Tag.OPERATION_PARAMS, parameters]
    wrapped.append(graph)
    return encode(wrapped)


def dump_variables(variables: dict[str, Any]) -> dict[str, Any]:
    """Turn variables into JSON values.

    Unset (``None``) variables are left out. Pydantic models anywhere in the
    values are dumped by alias without their ``None`` fields; dates, UUIDs
    and enums become their JSON forms.
    """
    present = {name: value for name, value in variables.items() if value is not None}
    return _VARIABLES.dump_python(present, mode="json", by_alias=True, exclude_none=True)


class GraphQLExecutor:
    """Posts operations to one endpoint over a shared ``httpx.AsyncClient``.

    Examples:
        async with GraphQLExecutor(url, {"Authorization": f"bearer {token}"}) as executor:
            repos = await executor.execute_graph(
                ["viewer", [ARGUMENTS, {"first": Variable("n")}, "repositories", ["edges", ["node", "name"]]]],
                {"n": 10},
                parameters=[("n", "Int", True)],
            )
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._client = httpx.AsyncClient(
            headers={"Content-Type": "application/json", **(headers or {})},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GraphQLExecutor":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def close(self) -> None:
        """Release the HTTP client. Safe to call more than once."""
        await self._client.aclose()

    async def execute(self, document: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Post an operation document and return its ``data``.

        Raises:
            GraphQLError: If the response carries errors
            httpx.HTTPStatusError: If the endpoint answers with an error status
        """
        payload: dict[str, Any] = {"query": document}
        if variables:
            payload["variables"] = dump_variables(variables)

        logger.debug("POST %s: %s", self.url, document)
        response = await self._client.post(self.url, json=payload)
        response.raise_for_status()
        try:
            body = response.json()
        except ValueError as e:
            raise GraphQLError([f"Response is not JSON: {e}"]) from e
        return _read_data(body)

    async def execute_graph(
        self,
        graph: Any,
        variables: dict[str, Any] | None = None,
        *,
        kind: str = "query",
        parameters: Any = None,
        simplify: bool = True,
    ) -> Any:
        """Encode ``graph`` as an anonymous operation and execute it.

        Every key of ``variables`` must be declared in ``parameters``; the
        response data is passed through ``simplify_response_edges`` unless
        ``simplify`` is False.
        """
        declared = {spec.name for spec in parse_parameters(parameters)}
        undeclared = sorted(set(variables or {}) - declared)
        if undeclared:
            raise ValueError(f"Undeclared variables: {', '.join(undeclared)}")

        data = await self.execute(anonymous_operation(kind, graph, parameters), variables)
        return simplify_response_edges(data) if simplify else data


def _read_data(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise GraphQLError([f"Unexpected response body: {body!r}"])
    if body.get("errors"):
        raise GraphQLError(body["errors"], body.get("data"))
    return body.get("data") or {}
