"""Unit tests for the schema tree builder."""

import pytest

from param_schema.declaration.base import Block, NestedBlock, Statement
from param_schema.declaration.dsl import block, optional, requires
from param_schema.config import MAX_NESTING_DEPTH_LIMIT
from param_schema.exceptions import MalformedDeclaration, NestingDepthExceeded
from param_schema.schema_tree.builder import SchemaTreeBuilder, parse_declaration
from param_schema.schema_tree.nodes import FieldNode


def nested_declaration(depth: int) -> Statement:
    """Build a chain of composite fields with one leaf at the given depth."""
    statement = requires("leaf", "string")
    for level in range(depth - 1):
        statement = requires(f"level_{level}", "map", do=statement)
    return statement


class TestRequiredFlag:
    """The keyword decides the required option."""

    def test_requires_without_options(self) -> None:
        """Test requires(:query, :string) yields required: true and no children."""
        (node,) = parse_declaration(requires("query", "string"))

        assert node.id == "query"
        assert node.type == "string"
        assert node.options == {"required": True}
        assert node.fields == ()
        assert node.required is True
        assert not node.is_composite

    def test_optional_without_options(self) -> None:
        """Test optional fields are marked required: false."""
        (node,) = parse_declaration(optional("page", "integer"))

        assert node.options == {"required": False}
        assert node.required is False

    def test_optional_with_options(self) -> None:
        """Test optional(:limit, :integer, [default: 10]) keeps user options."""
        (node,) = parse_declaration(optional("limit", "integer", {"default": 10}))

        assert node.options == {"default": 10, "required": False}
        assert node.fields == ()

    def test_requires_with_several_options_keeps_order(self) -> None:
        """Test user option order is preserved with required appended."""
        (node,) = parse_declaration(
            requires("age", "integer", {"min": 0, "max": 150, "default": 18})
        )

        assert list(node.options) == ["min", "max", "default", "required"]
        assert node.options["required"] is True

    def test_keyword_overrides_user_required_option(self) -> None:
        """Test an explicit required option never beats the keyword."""
        (required_node,) = parse_declaration(requires("a", "string", {"required": False}))
        (optional_node,) = parse_declaration(optional("b", "string", {"required": True}))

        assert required_node.options == {"required": True}
        assert optional_node.options == {"required": False}

    def test_empty_options_mapping(self) -> None:
        """Test an empty options mapping is still the options form."""
        (node,) = parse_declaration(Statement(keyword="optional", args=["x", "string", {}]))

        assert node.options == {"required": False}

    def test_input_options_are_not_mutated(self) -> None:
        """Test the caller's options mapping is left untouched."""
        options = {"default": "asc", "required": False}
        statement = Statement(keyword="requires", args=["order", "string", options])

        parse_declaration(statement)

        assert options == {"default": "asc", "required": False}


class TestNestedBlocks:
    """Composite fields built from nested blocks."""

    def test_nested_profile(self) -> None:
        """Test the nested requires(:profile, :map) do ... end example."""
        declaration = requires(
            "profile",
            "map",
            do=block(
                requires("access_key", "string"),
                requires("secret_key", "string"),
            ),
        )

        (node,) = parse_declaration(declaration)

        assert node == FieldNode(
            id="profile",
            type="map",
            options={"required": True},
            fields=[
                FieldNode(id="access_key", type="string", options={"required": True}),
                FieldNode(id="secret_key", type="string", options={"required": True}),
            ],
        )
        assert node.is_composite

    def test_single_statement_body_becomes_one_child(self) -> None:
        """Test a nested body with one bare statement yields a one-element list."""
        (node,) = parse_declaration(
            optional("filter", "map", do=requires("term", "string"))
        )

        assert node.options == {"required": False}
        assert len(node.fields) == 1
        assert node.fields[0].id == "term"

    def test_children_count_matches_statements(self) -> None:
        """Test a composite has one child per statement in its block."""
        children = [optional(f"field_{i}", "string") for i in range(7)]
        (node,) = parse_declaration(requires("bag", "map", do=children))

        assert [child.id for child in node.fields] == [f"field_{i}" for i in range(7)]
        assert all(child.required is False for child in node.fields)

    def test_deep_nesting_mixes_keywords(self) -> None:
        """Test each level keeps its own keyword-derived flag."""
        declaration = optional(
            "outer",
            "map",
            do=[
                requires(
                    "middle",
                    "list",
                    do=[optional("inner", "integer", {"default": 1})],
                )
            ],
        )

        (outer,) = parse_declaration(declaration)
        middle = outer.fields[0]
        inner = middle.fields[0]

        assert outer.required is False
        assert middle.required is True
        assert inner.options == {"default": 1, "required": False}

    def test_same_name_allowed_at_different_levels(self) -> None:
        """Test uniqueness only applies among siblings."""
        (node,) = parse_declaration(requires("id", "map", do=[requires("id", "string")]))

        assert node.fields[0].id == "id"

    def test_empty_nested_block_is_malformed(self) -> None:
        """Test a nested block without statements is rejected."""
        with pytest.raises(MalformedDeclaration, match="Nested block declares no fields"):
            parse_declaration(requires("profile", "map", do=[]))


class TestDeclarationShapes:
    """Top-level declaration forms."""

    def test_sibling_order_preserved(self) -> None:
        """Test parsing [A, B, C] yields A, B, C in order."""
        nodes = parse_declaration(
            [requires("c", "string"), requires("a", "string"), optional("b", "string")]
        )

        assert [node.id for node in nodes] == ["c", "a", "b"]

    def test_block_is_unwrapped(self) -> None:
        """Test a Block wrapper parses like its statement list."""
        statements = [requires("query", "string"), optional("limit", "integer")]

        assert parse_declaration(block(*statements)) == parse_declaration(statements)

    def test_single_statement_returns_list(self) -> None:
        """Test a bare statement at top level still yields a list."""
        nodes = parse_declaration(requires("query", "string"))

        assert isinstance(nodes, list)
        assert len(nodes) == 1

    def test_blocks_inside_sequence_are_flattened(self) -> None:
        """Test a block nested in a sequence keeps declaration order."""
        nodes = parse_declaration(
            [
                requires("a", "string"),
                block(requires("b", "string"), requires("c", "string")),
                requires("d", "string"),
            ]
        )

        assert [node.id for node in nodes] == ["a", "b", "c", "d"]

    def test_tuple_sequence(self) -> None:
        """Test tuples are accepted as sequences."""
        nodes = parse_declaration((requires("a", "string"), requires("b", "string")))

        assert [node.id for node in nodes] == ["a", "b"]

    def test_empty_block(self) -> None:
        """Test an empty top-level block yields an empty forest."""
        assert parse_declaration(Block()) == []

    def test_determinism(self) -> None:
        """Test parsing the same declaration twice gives equal trees."""
        declaration = block(
            requires("query", "string"),
            optional("limit", "integer", {"default": 10}),
            requires("profile", "map", do=[requires("access_key", "string")]),
        )

        first = parse_declaration(declaration)
        second = parse_declaration(declaration)

        assert first == second
        assert first[2] is not second[2]

    def test_parse_statement(self) -> None:
        """Test parsing a single statement returns a single node."""
        node = SchemaTreeBuilder().parse_statement(requires("query", "string"))

        assert isinstance(node, FieldNode)
        assert node.id == "query"


class TestMalformedDeclarations:
    """Malformed input fails fast with MalformedDeclaration."""

    def test_unrecognized_keyword(self) -> None:
        """Test maybe(:x, :string) is rejected and names the statement."""
        statement = Statement(keyword="maybe", args=["x", "string"])

        with pytest.raises(MalformedDeclaration, match="Unrecognized keyword 'maybe'") as exc_info:
            parse_declaration(statement)

        assert exc_info.value.statement is statement
        assert "maybe" in str(exc_info.value)

    def test_unrecognized_keyword_aborts_whole_tree(self) -> None:
        """Test a bad statement deep in the tree aborts the build."""
        declaration = [
            requires("query", "string"),
            requires(
                "profile",
                "map",
                do=[requires("a", "string"), Statement(keyword="maybe", args=["b", "string"])],
            ),
        ]

        with pytest.raises(MalformedDeclaration):
            parse_declaration(declaration)

    @pytest.mark.parametrize(
        "args",
        [
            [],
            ["x"],
            ["x", "string", {"default": 1}, "extra"],
            ["x", "string", "not-options"],
            ["x", "string", ["default", 1]],
        ],
    )
    def test_unmatched_trailing_shape(self, args: list) -> None:
        """Test argument lists that match no field form."""
        with pytest.raises(MalformedDeclaration, match="Arguments match no field form"):
            parse_declaration(Statement(keyword="requires", args=args))

    def test_non_string_field_name(self) -> None:
        """Test the field name must be a string."""
        with pytest.raises(MalformedDeclaration, match="Field name"):
            parse_declaration(Statement(keyword="requires", args=[42, "string"]))

    def test_empty_type_tag(self) -> None:
        """Test the type tag must not be empty."""
        with pytest.raises(MalformedDeclaration, match="Type tag"):
            parse_declaration(Statement(keyword="requires", args=["x", ""]))

    def test_option_holding_nested_declaration(self) -> None:
        """Test options never carry a nested block payload."""
        nested = NestedBlock(body=[requires("a", "string")])

        with pytest.raises(MalformedDeclaration, match="Option 'do' holds a nested declaration"):
            parse_declaration(Statement(keyword="optional", args=["x", "map", {"do": nested}]))

    def test_error_message_stays_short_for_deep_statements(self) -> None:
        """Test the offending statement is described without its whole subtree."""
        declaration = Statement(
            keyword="maybe", args=["x", "map", NestedBlock(body=nested_declaration(500))]
        )

        with pytest.raises(MalformedDeclaration) as exc_info:
            parse_declaration(declaration)

        assert "NestedBlock(<1 item>)" in str(exc_info.value)

    def test_non_string_option_name(self) -> None:
        """Test option names must be strings."""
        with pytest.raises(MalformedDeclaration, match="Option names must be strings"):
            parse_declaration(Statement(keyword="optional", args=["x", "string", {1: "a"}]))

    def test_duplicate_sibling_ids(self) -> None:
        """Test two siblings with the same name are rejected."""
        with pytest.raises(MalformedDeclaration, match="Duplicate field 'query'"):
            parse_declaration([requires("query", "string"), optional("query", "integer")])

    def test_non_statement_in_sequence(self) -> None:
        """Test sequences may only hold statements and blocks."""
        with pytest.raises(MalformedDeclaration, match="Expected a statement or block"):
            parse_declaration([requires("query", "string"), "limit"])

    def test_non_declaration(self) -> None:
        """Test arbitrary values are not declarations."""
        with pytest.raises(MalformedDeclaration):
            parse_declaration({"requires": ["query", "string"]})

    def test_parse_statement_rejects_non_statement(self) -> None:
        """Test parse_statement only accepts statements."""
        with pytest.raises(MalformedDeclaration, match="Expected a statement"):
            SchemaTreeBuilder().parse_statement(block(requires("a", "string")))

    def test_nested_block_marker_outside_trailing_position(self) -> None:
        """Test a nested block where the type tag belongs is rejected."""
        marker = NestedBlock(body=[requires("a", "string")])

        with pytest.raises(MalformedDeclaration, match="Type tag"):
            parse_declaration(Statement(keyword="requires", args=["x", marker]))


class TestNestingDepth:
    """The builder's nesting depth limit."""

    def test_default_limit_allows_64_levels(self) -> None:
        """Test nesting up to the default limit builds."""
        (node,) = parse_declaration(nested_declaration(64))

        depth = 1
        while node.fields:
            node = node.fields[0]
            depth += 1
        assert depth == 64
        assert node.id == "leaf"

    def test_default_limit_rejects_65_levels(self) -> None:
        """Test nesting past the default limit fails."""
        with pytest.raises(NestingDepthExceeded) as exc_info:
            parse_declaration(nested_declaration(65))

        assert exc_info.value.max_depth == 64

    def test_custom_limit(self) -> None:
        """Test a custom max_depth applies to nested blocks."""
        declaration = requires("profile", "map", do=[requires("key", "string")])

        assert len(SchemaTreeBuilder(max_depth=2).parse(declaration)) == 1
        with pytest.raises(NestingDepthExceeded, match="maximum depth of 1"):
            SchemaTreeBuilder(max_depth=1).parse(declaration)

    def test_depth_error_is_malformed_declaration(self) -> None:
        """Test callers catching MalformedDeclaration also catch depth errors."""
        with pytest.raises(MalformedDeclaration):
            parse_declaration(nested_declaration(3), max_depth=2)

    def test_invalid_limit(self) -> None:
        """Test the limit must be positive."""
        with pytest.raises(ValueError, match="max_depth must be between 1 and 200"):
            SchemaTreeBuilder(max_depth=0)

    def test_limit_has_upper_bound(self) -> None:
        """Test the limit cannot exceed what recursion can handle."""
        with pytest.raises(ValueError, match="max_depth must be between 1 and 200"):
            SchemaTreeBuilder(max_depth=MAX_NESTING_DEPTH_LIMIT + 1)

    def test_deepest_allowed_limit(self) -> None:
        """Test the highest limit builds and bounds deep declarations cleanly."""
        builder = SchemaTreeBuilder(max_depth=MAX_NESTING_DEPTH_LIMIT)

        (node,) = builder.parse(nested_declaration(MAX_NESTING_DEPTH_LIMIT))
        assert node.id == "level_198"

        with pytest.raises(NestingDepthExceeded):
            builder.parse(nested_declaration(900))
