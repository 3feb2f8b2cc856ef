"""Tests for type rendering and document construction."""

import pytest
from graphql import (
    GraphQLID,
    GraphQLInt,
    GraphQLList,
    GraphQLNonNull,
    GraphQLString,
    build_schema,
)

from gql_autoclient.core.query_builder import (
    assemble_document,
    build_argument_bindings,
    build_document,
    build_selection_set,
    build_variable_declarations,
    render_type,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def schema():
    return build_schema("""
        type Query {
          user(id: ID!): User
          users(ids: [ID!]!, limit: Int): [User!]!
          ping: String
        }

        type Mutation {
          renameUser(id: ID!, name: String!): User
        }

        type User {
          id: ID!
          name: String
        }
    """)


# =============================================================================
# Tests: Type Expressions
# =============================================================================


class TestRenderType:
    """Tests for render_type."""

    def test_named(self):
        assert render_type(GraphQLID) == "ID"

    def test_non_null(self):
        assert render_type(GraphQLNonNull(GraphQLString)) == "String!"

    def test_list(self):
        assert render_type(GraphQLList(GraphQLID)) == "[ID]"

    def test_non_null_list(self):
        assert render_type(GraphQLNonNull(GraphQLList(GraphQLID))) == "[ID]!"

    def test_non_null_list_of_non_null(self):
        type_ = GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLInt)))
        assert render_type(type_) == "[Int!]!"

    def test_deeply_nested(self):
        type_ = GraphQLList(GraphQLNonNull(GraphQLList(GraphQLList(GraphQLNonNull(GraphQLString)))))
        assert render_type(type_) == "[[[String!]]!]"


# =============================================================================
# Tests: Selection Sets
# =============================================================================


class TestBuildSelectionSet:
    """Tests for build_selection_set."""

    def test_false_entries_are_dropped(self):
        projection = {"a": True, "b": {"c": True, "d": False}}
        assert build_selection_set(projection) == "{a, b {c}}"

    def test_preserves_mapping_order(self):
        assert build_selection_set({"z": True, "a": True, "m": True}) == "{z, a, m}"

    def test_empty_projection(self):
        assert build_selection_set({}) == ""
        assert build_selection_set(None) == ""

    def test_nothing_selected(self):
        assert build_selection_set({"a": False, "b": None}) == ""

    def test_truthy_values_count_as_leaves(self):
        assert build_selection_set({"a": 1, "b": "yes"}) == "{a, b}"

    def test_deep_nesting(self):
        projection = {"user": {"friends": {"name": True}, "id": True}}
        assert build_selection_set(projection) == "{user {friends {name}, id}}"

    def test_empty_sub_projection_renders_bare_field(self):
        assert build_selection_set({"a": {}}) == "{a}"


# =============================================================================
# Tests: Arguments
# =============================================================================


class TestArguments:
    """Tests for argument declarations and bindings."""

    def test_declarations_in_argument_order(self, schema):
        field = schema.query_type.fields["users"]
        assert build_variable_declarations(field) == "$ids: [ID!]!, $limit: Int"

    def test_bindings_in_argument_order(self, schema):
        field = schema.query_type.fields["users"]
        assert build_argument_bindings(field) == "ids: $ids, limit: $limit"

    def test_no_arguments(self, schema):
        field = schema.query_type.fields["ping"]
        assert build_variable_declarations(field) == ""
        assert build_argument_bindings(field) == ""


# =============================================================================
# Tests: Documents
# =============================================================================


class TestBuildDocument:
    """Tests for complete documents."""

    def test_query_with_projection(self, schema):
        field = schema.query_type.fields["user"]
        document = build_document("query", "user", field, {"id": True})
        assert document == "query ($id: ID!) { user (id: $id) {id} }"

    def test_mutation(self, schema):
        field = schema.mutation_type.fields["renameUser"]
        document = build_document("mutation", "renameUser", field, {"id": True, "name": True})
        assert document == (
            "mutation ($id: ID!, $name: String!) "
            "{ renameUser (id: $id, name: $name) {id, name} }"
        )

    def test_leaf_field_without_arguments(self, schema):
        field = schema.query_type.fields["ping"]
        assert build_document("query", "ping", field, {}) == "query { ping }"

    def test_arguments_without_selection(self):
        assert assemble_document("query", "count", "$q: String", "q: $q", "") == (
            "query ($q: String) { count (q: $q) }"
        )
