"""Tests for the syntax tree model."""

from code_insights.syntax import Node, NodeKind, Position, SourceLocation, build, identifier, is_function, literal


def loc(start, end):
    return SourceLocation(Position(start, 0), Position(end, 0))


class TestNode:
    """Test node construction and traversal."""

    def test_build_and_access(self):
        node = build(NodeKind.IDENTIFIER, loc(1, 1), name="x")
        assert node.kind is NodeKind.IDENTIFIER
        assert node["name"] == "x"
        assert node.get("missing") is None
        assert node.start_line == 1

    def test_build_with_kind_field(self):
        node = build(NodeKind.VARIABLE_DECLARATION, loc(1, 1), kind="const", declarations=[])
        assert node.kind is NodeKind.VARIABLE_DECLARATION
        assert node["kind"] == "const"

        method = build(NodeKind.METHOD_DEFINITION, None, kind="get", static=False)
        assert method.kind is NodeKind.METHOD_DEFINITION
        assert method["kind"] == "get"
        assert method.loc is None

    def test_children_in_field_order(self):
        call = build(
            NodeKind.CALL_EXPRESSION,
            callee=identifier("f"),
            arguments=[literal(1), None, identifier("y")],
        )
        assert [child.kind for child in call.children()] == [
            NodeKind.IDENTIFIER,
            NodeKind.LITERAL,
            NodeKind.IDENTIFIER,
        ]

    def test_walk_is_preorder(self):
        tree = build(
            NodeKind.PROGRAM,
            body=[
                build(NodeKind.EXPRESSION_STATEMENT, expression=identifier("a")),
                build(NodeKind.EXPRESSION_STATEMENT, expression=identifier("b")),
            ],
        )
        names = [n["name"] for n in tree.walk() if n.kind is NodeKind.IDENTIFIER]
        assert names == ["a", "b"]

    def test_clone_is_deep(self):
        tree = build(NodeKind.PROGRAM, body=[identifier("a")])
        copy = tree.clone()
        copy["body"][0]["name"] = "b"
        assert tree["body"][0]["name"] == "a"

    def test_to_dict(self):
        node = build(NodeKind.RETURN_STATEMENT, loc(2, 3), argument=literal("s"))
        data = node.to_dict()
        assert data["type"] == "ReturnStatement"
        assert data["loc"]["start"]["line"] == 2
        assert data["argument"] == {"type": "Literal", "value": "s", "raw": '"s"'}

    def test_is_function(self):
        assert is_function(build(NodeKind.ARROW_FUNCTION_EXPRESSION))
        assert not is_function(identifier("f"))
        assert not is_function(None)

    def test_node_without_location(self):
        assert Node(NodeKind.EMPTY_STATEMENT).start_line is None
