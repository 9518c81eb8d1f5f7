"""Tests for the tree-sitter JavaScript parser wrapper."""

import pytest

from code_insights.syntax.treesitter_parser import (
    TREE_SITTER_AVAILABLE,
    TreeSitterParser,
    find_first_error,
)

pytestmark = pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")


@pytest.fixture(scope="module")
def parser():
    return TreeSitterParser()


class TestTreeSitterParser:
    """Test parsing and error location."""

    def test_parses_modern_syntax(self, parser):
        tree = parser.parse(b"export const f = async (a, ...rest) => <div>{a}</div>;\n")
        assert tree.root_node.type == "program"
        assert find_first_error(tree.root_node) is None

    def test_parser_is_reusable(self, parser):
        first = parser.parse(b"var a = 1;")
        second = parser.parse(b"var b = 2;")
        assert first.root_node.named_children[0].type == "variable_declaration"
        assert second.root_node.named_children[0].type == "variable_declaration"

    def test_first_error(self, parser):
        tree = parser.parse(b"var ok = 1;\nvar = ;\n")
        error = find_first_error(tree.root_node)
        assert error is not None
        assert error.start_point[0] == 1

    def test_missing_token(self, parser):
        tree = parser.parse(b"foo(1, 2\n")
        error = find_first_error(tree.root_node)
        assert error is not None
        assert error.type == "ERROR" or error.is_missing
