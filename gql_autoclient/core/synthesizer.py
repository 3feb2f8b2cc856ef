"""Operation synthesis.

Turns every root field of a schema into an :class:`Operation`, a small
immutable template holding the pre-rendered pieces of its document.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from graphql import GraphQLField, GraphQLObjectType, GraphQLSchema, get_named_type

from .projection import default_projection
from .query_builder import (
    OperationKind,
    Projection,
    assemble_document,
    build_argument_bindings,
    build_selection_set,
    build_variable_declarations,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operation:
    """A root query or mutation field, ready to be turned into documents."""
    name: str
    kind: OperationKind
    field: GraphQLField
    declarations: str
    bindings: str
    default_projection: Projection

    @classmethod
    def from_field(cls, kind: OperationKind, name: str, field: GraphQLField) -> "Operation":
        return cls(
            name=name,
            kind=kind,
            field=field,
            declarations=build_variable_declarations(field),
            bindings=build_argument_bindings(field),
            default_projection=default_projection(get_named_type(field.type)),
        )

    @property
    def description(self) -> str | None:
        return self.field.description

    def resolve_projection(self, projection: Mapping[str, Any] | None) -> Mapping[str, Any]:
        """Return the caller's projection, or the default when it is empty."""
        if not projection:
            return self.default_projection
        return projection

    def build(self, projection: Mapping[str, Any] | None = None) -> str:
        """Build the document text selecting ``projection``."""
        return assemble_document(
            self.kind,
            self.name,
            self.declarations,
            self.bindings,
            build_selection_set(self.resolve_projection(projection)),
        )


def synthesize_operations(schema: GraphQLSchema) -> dict[str, Operation]:
    """Build one operation per field of the query and mutation types.

    Mutations are registered after queries, so a mutation field replaces a
    query field of the same name.
    """
    operations: dict[str, Operation] = {}
    roots: list[tuple[OperationKind, GraphQLObjectType | None]] = [
        ("query", schema.query_type),
        ("mutation", schema.mutation_type),
    ]
    for kind, root in roots:
        if root is None:
            continue
        for name, field in root.fields.items():
            if name in operations:
                logger.debug(
                    "%s field %r replaces %s operation of the same name",
                    kind, name, operations[name].kind,
                )
            operations[name] = Operation.from_field(kind, name, field)

    logger.info("Synthesized %d operations", len(operations))
    return operations
