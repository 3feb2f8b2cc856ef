"""Query builder for GraphQL operations.

Constructs GraphQL query/mutation strings from a root field definition
and a result projection.
"""

from collections.abc import Mapping
from typing import Any, Literal

from graphql import GraphQLField, GraphQLList, GraphQLNonNull, GraphQLType

OperationKind = Literal["query", "mutation"]

# Field name -> True (leaf) or a nested projection (sub-selection)
Projection = dict[str, Any]


def render_type(type_: GraphQLType) -> str:
    """Render a (possibly wrapped) type as a type expression: ``[Int!]!``."""
    if isinstance(type_, GraphQLNonNull):
        return f"{render_type(type_.of_type)}!"
    if isinstance(type_, GraphQLList):
        return f"[{render_type(type_.of_type)}]"
    return type_.name


def build_variable_declarations(field: GraphQLField) -> str:
    """Build the variable declaration part: ``$accountId: ID!, $input: SomeInput!``"""
    return ", ".join(
        f"${name}: {render_type(arg.type)}" for name, arg in field.args.items()
    )


def build_argument_bindings(field: GraphQLField) -> str:
    """Build argument bindings for a field: ``accountId: $accountId, input: $input``"""
    return ", ".join(f"{name}: ${name}" for name in field.args)


def build_selection_set(projection: Mapping[str, Any] | None) -> str:
    """Render a projection as a selection set.

    Nested mappings become sub-selections, truthy values become bare
    fields and falsy values are dropped. Returns ``""`` when nothing is
    selected.
    """
    if not projection:
        return ""

    entries = []
    for name, show in projection.items():
        if isinstance(show, Mapping):
            sub = build_selection_set(show)
            entries.append(f"{name} {sub}" if sub else name)
        elif show:
            entries.append(name)

    if not entries:
        return ""
    return f"{{{', '.join(entries)}}}"


def assemble_document(
    kind: OperationKind,
    name: str,
    declarations: str,
    bindings: str,
    selection: str,
) -> str:
    """Assemble the pre-rendered pieces into one operation document.

    A field without arguments gets no "()" at all, since GraphQL has no empty
    argument list: ``query { ping }``.
    """
    head = f"{kind} ({declarations})" if declarations else kind
    call = f"{name} ({bindings})" if bindings else name
    body = f"{call} {selection}" if selection else call
    return f"{head} {{ {body} }}"


def build_document(
    kind: OperationKind,
    name: str,
    field: GraphQLField,
    projection: Mapping[str, Any] | None,
) -> str:
    """Build a complete parameterized document for one root field.

    Args:
        kind: 'query' or 'mutation'
        name: Root field name
        field: Root field definition
        projection: Result shape to select

    Returns:
        Complete GraphQL document text
    """
    return assemble_document(
        kind,
        name,
        build_variable_declarations(field),
        build_argument_bindings(field),
        build_selection_set(projection),
    )
