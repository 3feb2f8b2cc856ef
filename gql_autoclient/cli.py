"""Command-line interface for gql-autoclient."""

import asyncio
import json
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

import click

from .core.client import create, new_graphql_client
from .core.schema import SchemaLoader
from .core.synthesizer import Operation, synthesize_operations


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            tar_ref.extractall(temp_dir)
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


def parse_headers(values: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated ``Name: value`` options into a header dict."""
    headers = {}
    for value in values:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected 'Name: value', got {value!r}", param_hint="--header")
        headers[name.strip()] = content.strip()
    return headers


def parse_json_option(value: str | None, option: str) -> dict | None:
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint=option) from e
    if not isinstance(parsed, dict):
        raise click.BadParameter("Expected a JSON object", param_hint=option)
    return parsed


def http_config(url: str, headers: dict[str, str]) -> dict:
    return {"http_options": {"url": url, "headers": headers}}


async def introspect_operations(url: str, headers: dict[str, str]) -> dict[str, Operation]:
    client = await create(http_config(url, headers))
    try:
        return client.operations
    finally:
        await client.close()


async def call_operation(
    url: str,
    headers: dict[str, str],
    name: str,
    variables: dict | None,
    projection: dict | None,
):
    async with await new_graphql_client(http_config(url, headers)) as client:
        return await client.get_operation(name)(variables, projection)


@click.group()
@click.version_option(package_name="gql-autoclient")
def main():
    """Dynamic GraphQL client.

    Every query and mutation of a schema becomes a callable operation.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    type=click.Path(exists=True),
    help="Path to schema file, directory, or archive (.zip, .tar.gz, .tgz).",
)
@click.option("--url", "-u", help="GraphQL endpoint to introspect.")
@click.option("--header", "-H", "header", multiple=True, help="Request header, 'Name: value'.")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def operations(schema: str | None, url: str | None, header: tuple[str, ...], verbose: bool):
    """List the operations of a schema with their default documents.

    Examples:

        gql-autoclient operations --schema ./schema.graphql

        gql-autoclient operations --url https://api.example.com/graphql
    """
    if bool(schema) == bool(url):
        raise click.UsageError("Pass exactly one of --schema or --url.")

    temp_dir = None
    try:
        if url:
            click.echo(f"Introspecting {url}...")
            ops = asyncio.run(introspect_operations(url, parse_headers(header)))
        else:
            schema_path = Path(schema).resolve()
            actual_schema_path = schema_path
            if schema_path.is_file() and schema_path.name.lower().endswith(
                (".zip", ".tar.gz", ".tgz")
            ):
                click.echo(f"Extracting archive {schema_path.name}...")
                temp_dir = extract_archive(schema_path)
                actual_schema_path = Path(temp_dir)
                if verbose:
                    click.echo(f"  Extracted to: {temp_dir}")

            click.echo("Loading schema...")
            ops = synthesize_operations(SchemaLoader(str(actual_schema_path)).load())

        if verbose:
            click.echo(f"  Queries: {sum(op.kind == 'query' for op in ops.values())}")
            click.echo(f"  Mutations: {sum(op.kind == 'mutation' for op in ops.values())}")

        for name, op in ops.items():
            click.echo(f"\n{name} ({op.kind})")
            if verbose and op.description:
                click.echo(f"  {op.description}")
            click.echo(f"  {op.build()}")
    finally:
        # Clean up temp directory
        if temp_dir:
            shutil.rmtree(temp_dir)


@main.command()
@click.argument("name")
@click.option("--url", "-u", required=True, help="GraphQL endpoint.")
@click.option("--variables", help="Operation variables as a JSON object.")
@click.option("--projection", help="Result shape as a JSON object, e.g. '{\"id\": true}'.")
@click.option("--header", "-H", "header", multiple=True, help="Request header, 'Name: value'.")
def call(name: str, url: str, variables: str | None, projection: str | None, header: tuple[str, ...]):
    """Call one operation and print its result as JSON.

    Examples:

        gql-autoclient call user --url https://api.example.com/graphql --variables '{"id": "1"}'
    """
    result = asyncio.run(call_operation(
        url,
        parse_headers(header),
        name,
        parse_json_option(variables, "--variables"),
        parse_json_option(projection, "--projection"),
    ))
    click.echo(json.dumps(result, indent=2, default=str))


if __name__ == "__main__":
    main()
