"""Schema acquisition.

Remote schemas are introspected through a link chain; local ones are built
from SDL files with graphql-core.
"""

import logging
import os
from collections.abc import Mapping
from typing import Any

from graphql import GraphQLSchema, build_client_schema, build_schema, get_introspection_query

from .links import GraphQLRequest, LinkChain, raise_for_errors

logger = logging.getLogger(__name__)

INTROSPECTION_QUERY = get_introspection_query(descriptions=True)
SCHEMA_FILE_SUFFIXES = (".graphql", ".graphqls")


async def fetch_schema(
    link: LinkChain,
    context: Mapping[str, Any] | None = None,
) -> GraphQLSchema:
    """Introspect the schema served at the end of ``link``.

    Raises:
        GraphQLError: If the introspection query itself returns errors
    """
    request = GraphQLRequest.from_query(INTROSPECTION_QUERY, context=context)
    result = await link.execute(request)
    raise_for_errors(result)
    schema = build_client_schema(result["data"])
    logger.debug("Introspected schema with %d types", len(schema.type_map))
    return schema


class SchemaLoader:
    """Loads a schema from SDL files."""

    def __init__(self, schema_path: str):
        """Initialize a loader with a path to a schema file or directory."""
        self.schema_path = schema_path

    def load(self) -> GraphQLSchema:
        """Read all schema files and build one schema from them."""
        schema_files = self._collect_schema_files()
        if not schema_files:
            raise FileNotFoundError(f"No schema files found at {self.schema_path}")

        sources = []
        for file_path in schema_files:
            with open(file_path) as f:
                sources.append(f.read())

        try:
            return build_schema("\n".join(sources))
        except Exception:
            logger.error("Error building schema from %s", ", ".join(schema_files))
            raise

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SCHEMA_FILE_SUFFIXES):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_FILE_SUFFIXES):
                        files.append(os.path.join(root, filename))
        return sorted(files)
