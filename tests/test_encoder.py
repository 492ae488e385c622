"""Tests for the GraphQL encoder."""

import enum
import itertools
from decimal import Decimal

import pytest

from gql_encode.core import (
    ARGUMENTS,
    OPERATION_NAME,
    OPERATION_PARAMS,
    VARIABLE,
    Alias,
    EncodeError,
    Node,
    ParameterSpec,
    SubQuery,
    Token,
    Variable,
    encode,
    encode_argument_value,
    encode_object,
    encode_parameter_spec,
)


class Direction(enum.Enum):
    ASC = "asc"
    DESC = "desc"


# =============================================================================
# Tests: Object identifiers
# =============================================================================


class TestEncodeAtoms:
    """Atoms encode to their own text."""

    @pytest.mark.parametrize(
        "atom, expected",
        [
            ("viewer", "viewer"),
            (Token("viewer"), "viewer"),
            (42, "42"),
            (1.5, "1.5"),
            (Decimal("2.50"), "2.50"),
        ],
    )
    def test_atom(self, atom, expected):
        assert encode(atom) == expected

    def test_string_object_is_not_quoted(self):
        assert encode_object("repository") == "repository"

    def test_alias_renders_field_only(self):
        assert encode_object(Alias(field="login", alias="handle")) == "login"

    def test_alias_pair_head(self):
        assert encode([("viewer", "me"), "login"]) == "viewer{login}"

    def test_sole_alias_pair(self):
        assert encode([("login", "handle")]) == "login"

    def test_bool_is_not_an_object(self):
        with pytest.raises(EncodeError):
            encode(True)

    def test_enum_member_renders_its_name(self):
        assert encode(Direction.ASC) == "ASC"
        assert encode(["orderBy", Direction.DESC]) == "orderBy{DESC}"

    @pytest.mark.parametrize("atom", [float("nan"), float("-inf"), Decimal("Infinity")])
    def test_non_finite_number_is_not_an_object(self, atom):
        with pytest.raises(EncodeError):
            encode(atom)


# =============================================================================
# Tests: Query assembly
# =============================================================================


class TestEncode:
    """Tests for encode."""

    def test_object_without_fields(self):
        assert encode(["viewer"]) == "viewer"

    def test_one_child_field(self):
        assert encode(["viewer", "login"]) == "viewer{login}"

    def test_sibling_fields_are_space_separated(self):
        assert encode(["viewer", "login", "name", "bio"]) == "viewer{login name bio}"

    def test_nested_fields(self):
        graph = ["viewer", "login", ["repositories", "totalCount"]]
        assert encode(graph) == "viewer{login repositories{totalCount}}"

    def test_arguments(self):
        assert encode([ARGUMENTS, {"id": 1}, "user", "name"]) == "user(id:1){name}"

    def test_arguments_as_pairs(self):
        assert encode([ARGUMENTS, [("id", 1)], "user", "name"]) == "user(id:1){name}"

    def test_arguments_keep_order(self):
        graph = [ARGUMENTS, [("last", 5), ("after", "abc")], "issues", "title"]
        assert encode(graph) == 'issues(last:5,after:"abc"){title}'

    def test_metadata_interleaved_with_fields(self):
        graph = ["user", "name", ARGUMENTS, {"login": "octocat"}, "bio"]
        assert encode(graph) == 'user(login:"octocat"){name bio}'

    def test_string_tags(self):
        assert encode([":arguments", {"id": 1}, "user", "name"]) == "user(id:1){name}"

    def test_arguments_on_child_field(self):
        graph = [
            "viewer",
            [ARGUMENTS, {"first": 3}, "repositories", ["nodes", "name"]],
        ]
        assert encode(graph) == "viewer{repositories(first:3){nodes{name}}}"

    def test_operation_name_is_quoted(self):
        assert encode([OPERATION_NAME, "Foo", "query", "viewer"]) == 'query "Foo"{viewer}'

    def test_params_without_fields(self):
        graph = [OPERATION_NAME, "Foo", OPERATION_PARAMS, [("id", "Int")], "viewer"]
        assert encode(graph) == 'viewer "Foo"($id:Int)'

    def test_all_segments(self):
        graph = [
            "query",
            OPERATION_NAME, "Q",
            ARGUMENTS, {"a": 1},
            OPERATION_PARAMS, [("id", "ID", True)],
            "x",
        ]
        assert encode(graph) == 'query "Q"(a:1)($id:ID!){x}'

    def test_empty_metadata_is_omitted(self):
        assert encode([ARGUMENTS, {}, OPERATION_PARAMS, [], "viewer"]) == "viewer"

    def test_parsed_node(self):
        node = Node(object="viewer", fields=[Node(object="login")])
        assert encode(node) == "viewer{login}"

    @pytest.mark.parametrize(
        "graph",
        [
            [],
            [ARGUMENTS, {"id": 1}],
            [ARGUMENTS],
            [object()],
            [["user", ["name"]]],
            ["user", None],
        ],
    )
    def test_malformed_graph(self, graph):
        with pytest.raises(EncodeError):
            encode(graph)


def _ordering_cases():
    """Every permutation of every subset of metadata, with and without fields."""
    tags = [OPERATION_NAME, ARGUMENTS, OPERATION_PARAMS]
    for size in range(len(tags) + 1):
        for subset in itertools.combinations(tags, size):
            for perm in itertools.permutations(subset):
                for with_fields in (False, True):
                    yield perm, with_fields


class TestSegmentOrdering:
    """Segments always come out as name, arguments, params, fields."""

    SEGMENTS = {
        OPERATION_NAME: ("Op", ' "Op"'),
        ARGUMENTS: ({"a": 1}, "(a:1)"),
        OPERATION_PARAMS: ([("p", "Int")], "($p:Int)"),
    }
    ORDER = [OPERATION_NAME, ARGUMENTS, OPERATION_PARAMS]

    @pytest.mark.parametrize("perm, with_fields", list(_ordering_cases()))
    def test_order_does_not_depend_on_input(self, perm, with_fields):
        graph = []
        for tag in perm:
            graph += [tag, self.SEGMENTS[tag][0]]
        # object lands in the middle of the metadata pairs
        graph.insert(2 * (len(perm) // 2), "obj")
        if with_fields:
            graph.append("f")

        expected = "obj" + "".join(self.SEGMENTS[tag][1] for tag in self.ORDER if tag in perm)
        if with_fields:
            expected += "{f}"
        assert encode(graph) == expected


# =============================================================================
# Tests: Argument values
# =============================================================================


class TestEncodeArgumentValue:
    """Tests for encode_argument_value."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Token("ASC"), "ASC"),
            (Direction.DESC, "DESC"),
            (True, "true"),
            (False, "false"),
            (None, "null"),
        ],
    )
    def test_bare_tokens(self, value, expected):
        assert encode_argument_value(value) == expected

    def test_variable(self):
        assert encode_argument_value(Variable("id")) == "$id"

    def test_variable_tag(self):
        assert encode_argument_value((VARIABLE, "id")) == "$id"

    def test_variable_string_tag(self):
        assert encode_argument_value(["$", "login"]) == "$login"

    def test_variable_wins_over_input_object(self):
        # Both are two-element sequences; the variable marker decides
        assert encode_argument_value((VARIABLE, "id")) == "$id"
        assert encode_argument_value([("a", 1), ("b", 2)]) == "{a:1,b:2}"

    def test_nested_object(self):
        value = {
            "first": 10,
            "orderBy": {"field": Token("NAME"), "direction": Direction.ASC},
        }
        assert encode_argument_value(value) == "{first:10,orderBy:{field:NAME,direction:ASC}}"

    def test_nested_object_with_variable(self):
        assert encode_argument_value({"starrableId": Variable("id")}) == "{starrableId:$id}"

    def test_empty_nested_object(self):
        assert encode_argument_value({}) == "{}"

    def test_string_is_quoted(self):
        assert encode_argument_value("octocat") == '"octocat"'

    def test_string_is_not_escaped(self):
        assert encode_argument_value('say "hi"') == '"say "hi""'

    @pytest.mark.parametrize("value, expected", [(3, "3"), (2.5, "2.5"), (-1, "-1")])
    def test_numbers(self, value, expected):
        assert encode_argument_value(value) == expected

    def test_sub_query(self):
        assert encode_argument_value(SubQuery(["user", "name"])) == "user{name}"

    def test_sub_query_with_arguments(self):
        value = SubQuery([ARGUMENTS, {"id": 1}, "user"])
        assert encode_argument_value(value) == "user(id:1)"

    def test_node_value(self):
        assert encode_argument_value(Node(object="viewer")) == "viewer"

    def test_unknown_value(self):
        with pytest.raises(EncodeError):
            encode_argument_value(object())

    def test_sequence_of_non_pairs(self):
        with pytest.raises(EncodeError):
            encode_argument_value([1, 2, 3])

    def test_duplicate_keys(self):
        with pytest.raises(EncodeError):
            encode_argument_value([("a", 1), ("a", 2)])

    @pytest.mark.parametrize(
        "value", [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), Decimal("-Infinity")]
    )
    def test_non_finite_numbers(self, value):
        with pytest.raises(EncodeError):
            encode_argument_value(value)

    def test_non_finite_number_in_nested_object(self):
        with pytest.raises(EncodeError):
            encode([ARGUMENTS, {"where": {"score": float("inf")}}, "search"])

    def test_huge_int(self):
        assert encode_argument_value(10**400) == str(10**400)


# =============================================================================
# Tests: Parameter specs
# =============================================================================


class TestEncodeParameterSpec:
    """Tests for encode_parameter_spec."""

    def test_name_and_type(self):
        assert encode_parameter_spec(("id", "ID")) == "$id:ID"

    def test_required(self):
        assert encode_parameter_spec(("id", "ID", True)) == "$id:ID!"

    def test_not_required(self):
        assert encode_parameter_spec(("id", "ID", False)) == "$id:ID"

    def test_default(self):
        assert encode_parameter_spec(("first", "Int", None, 10)) == "$first:Int=10"

    def test_default_ignores_third_slot(self):
        assert encode_parameter_spec(("first", "Int", True, 10)) == "$first:Int=10"

    def test_string_default(self):
        assert encode_parameter_spec(("q", "String", None, "foo")) == '$q:String="foo"'

    def test_shape_not_value_decides(self):
        # Same values, different shapes
        assert encode_parameter_spec(("flag", "Boolean", None)) == "$flag:Boolean"
        assert encode_parameter_spec(("flag", "Boolean", None, None)) == "$flag:Boolean=null"

    def test_default_spanning_the_tail(self):
        spec = ("order", "Order", None, ("field", Token("NAME")), ("dir", Token("ASC")))
        assert encode_parameter_spec(spec) == "$order:Order={field:NAME,dir:ASC}"

    def test_record(self):
        assert encode_parameter_spec(ParameterSpec(name="id", type="ID", required=True)) == "$id:ID!"

    def test_record_with_default(self):
        spec = ParameterSpec(name="first", type="Int", default=20, has_default=True)
        assert encode_parameter_spec(spec) == "$first:Int=20"

    @pytest.mark.parametrize("spec", [("id",), "id", ()])
    def test_malformed(self, spec):
        with pytest.raises(EncodeError):
            encode_parameter_spec(spec)
