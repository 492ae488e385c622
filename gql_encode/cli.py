"""Command-line interface for gql-encode."""

import asyncio
import json
import logging

import click
import httpx

from .core.encoder import encode
from .core.errors import EncodeError
from .core.executor import GraphQLError, GraphQLExecutor
from .core.operations import operation
from .core.simplify import simplify_response_edges


def load_json(source) -> object:
    """Load a JSON document from an open file, reporting errors to click."""
    try:
        return json.load(source)
    except json.JSONDecodeError as e:
        name = getattr(source, "name", "input")
        raise click.ClickException(f"Invalid JSON in {name}: {e}") from e


def parse_param(text: str) -> tuple:
    """Parse ``NAME:TYPE[!][=DEFAULT_JSON]`` into a parameter spec tuple."""
    spec, has_default, default = text, False, None
    if "=" in text:
        spec, raw_default = text.split("=", 1)
        has_default = True
        try:
            default = json.loads(raw_default)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"Default of {text!r} is not valid JSON") from e

    name, sep, type_name = spec.partition(":")
    if not sep or not name or not type_name:
        raise click.BadParameter(f"Expected NAME:TYPE, got {text!r}")

    required = type_name.endswith("!")
    type_name = type_name.rstrip("!")
    # a parameter tuple with a default has no required flag
    if required and has_default:
        raise click.BadParameter(f"{text!r} cannot be both required (!) and defaulted (=)")
    if has_default:
        return (name, type_name, None, default)
    return (name, type_name, required)


def parse_header(text: str) -> tuple[str, str]:
    """Parse a ``NAME:VALUE`` header option."""
    name, sep, value = text.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"Expected NAME:VALUE, got {text!r}")
    return name.strip(), value.strip()


def build_operation(kind: str, graph, name: str | None, params: tuple[str, ...]) -> str:
    """Encode ``graph`` as an operation, wrapping errors for the CLI."""
    parameters = [parse_param(p) for p in params]
    if parameters and not name:
        raise click.UsageError("--param requires --name")
    try:
        if name:
            header = (name, parameters) if parameters else (name,)
            return operation(kind, header, graph)
        return operation(kind, graph)
    except EncodeError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(package_name="gql-encode")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging.",
)
def main(verbose: bool):
    """Encode list-based graph descriptions as GraphQL.

    Graphs are read as JSON: a node is a field name or a list whose head is
    the object and whose tail are child fields. Metadata is given inline
    with the ":arguments", ":operation-name" and ":operation-params" tags.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@main.command("encode")
@click.argument("graph_file", type=click.File("r"), default="-")
def encode_command(graph_file):
    """Encode a JSON graph node.

    Examples:

        echo '[":arguments", {"id": 1}, "user", "name"]' | gql-encode encode
    """
    graph = load_json(graph_file)
    try:
        click.echo(encode(graph))
    except EncodeError as e:
        raise click.ClickException(str(e)) from e


def _operation_command(kind: str):
    @click.argument("graph_file", type=click.File("r"), default="-")
    @click.option("--name", "-n", default=None, help="Operation name.")
    @click.option(
        "--param",
        "-p",
        "params",
        multiple=True,
        help="Operation variable as NAME:TYPE[!][=DEFAULT_JSON]. Repeatable.",
    )
    def command(graph_file, name: str | None, params: tuple[str, ...]):
        graph = load_json(graph_file)
        click.echo(build_operation(kind, graph, name, params))

    command.__doc__ = f"""Encode a JSON graph as a {kind}.

    Examples:

        gql-encode {kind} graph.json --name Viewer -p 'first:Int=10'
    """
    return main.command(kind)(command)


query_command = _operation_command("query")
mutation_command = _operation_command("mutation")


@main.command("simplify")
@click.argument("response_file", type=click.File("r"), default="-")
@click.option("--indent", default=2, show_default=True, help="JSON indentation.")
def simplify_command(response_file, indent: int):
    """Collapse edges/node wrappers in a JSON response."""
    data = load_json(response_file)
    click.echo(json.dumps(simplify_response_edges(data), indent=indent))


@main.command("execute")
@click.argument("graph_file", type=click.File("r"), default="-")
@click.option(
    "--url",
    "-u",
    required=True,
    envvar="GQL_ENCODE_URL",
    help="GraphQL endpoint URL (or GQL_ENCODE_URL).",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Extra request header as NAME:VALUE. Repeatable.",
)
@click.option("--mutation", "is_mutation", is_flag=True, help="Send a mutation instead of a query.")
@click.option(
    "--param",
    "-p",
    "params",
    multiple=True,
    help="Declared variable as NAME:TYPE[!][=DEFAULT_JSON]. Repeatable.",
)
@click.option("--variables", default=None, help="Variables as a JSON object.")
@click.option("--timeout", default=30.0, show_default=True, help="Request timeout in seconds.")
@click.option("--raw", is_flag=True, help="Do not collapse edges/node wrappers.")
def execute_command(
    graph_file,
    url: str,
    headers: tuple[str, ...],
    is_mutation: bool,
    params: tuple[str, ...],
    variables: str | None,
    timeout: float,
    raw: bool,
):
    """Send a JSON graph to an endpoint as an anonymous operation.

    Examples:

        gql-encode execute graph.json -u https://api.github.com/graphql -H "Authorization:bearer $TOKEN"

        gql-encode execute node.json -p 'id:ID!' --variables '{"id": "MDQ6"}'
    """
    graph = load_json(graph_file)
    kind = "mutation" if is_mutation else "query"
    parameters = [parse_param(p) for p in params]

    try:
        variables_obj = json.loads(variables) if variables else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"--variables is not valid JSON: {e}") from e
    if variables_obj is not None and not isinstance(variables_obj, dict):
        raise click.BadParameter("--variables must be a JSON object")

    header_map = dict(parse_header(h) for h in headers)

    async def run():
        async with GraphQLExecutor(url, header_map, timeout=timeout) as executor:
            return await executor.execute_graph(
                graph,
                variables_obj,
                kind=kind,
                parameters=parameters,
                simplify=not raw,
            )

    try:
        data = asyncio.run(run())
    except EncodeError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    except GraphQLError as e:
        raise click.ClickException(e.message) from e
    except httpx.HTTPError as e:
        raise click.ClickException(f"Request failed: {e}") from e

    click.echo(json.dumps(data, indent=2))


if __name__ == "__main__":
    main()
