"""Default result projections.

When a caller does not say which fields it wants back, the client selects
the smallest shape that is still a valid selection: the first leaf field of
the return type, or failing that a descent into its first field.
"""

from graphql import (
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    get_named_type,
    is_leaf_type,
)

from .query_builder import Projection


def default_projection(
    named_type: GraphQLNamedType,
    _path: frozenset[str] = frozenset(),
) -> Projection:
    """Derive the default projection for a named return type.

    Scalars, enums and unions get an empty projection. For object and
    interface types, the first field (in declaration order) whose named type
    is a leaf is selected on its own. If no field is a leaf, the first field
    is selected and the rule is applied again to its type.

    A type with no fields, or one already being expanded further up, yields
    an empty projection.
    """
    if not isinstance(named_type, (GraphQLObjectType, GraphQLInterfaceType)):
        return {}
    if named_type.name in _path:
        return {}

    fields = named_type.fields
    for name, field in fields.items():
        if is_leaf_type(get_named_type(field.type)):
            return {name: True}

    if not fields:
        return {}
    name, field = next(iter(fields.items()))
    return {name: default_projection(get_named_type(field.type), _path | {named_type.name})}
