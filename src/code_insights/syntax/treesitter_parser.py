"""Tree-sitter parser wrapper for JavaScript.

Provides the concrete syntax tree that ``builder`` turns into ESTree-shaped
nodes. The grammar covers modern JavaScript including JSX, decorators,
class fields and object spread/rest.

Usage:
    if TREE_SITTER_AVAILABLE:
        parser = TreeSitterParser()
        tree = parser.parse(code_bytes)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

TREE_SITTER_AVAILABLE = False
_tree_sitter_module: Any = None
_javascript_module: Any = None

try:
    import tree_sitter as _tree_sitter_module  # type: ignore[no-redef]
    import tree_sitter_javascript as _javascript_module  # type: ignore[no-redef]

    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False


if TYPE_CHECKING:

    class TSNode:
        text: bytes | None
        type: str
        is_named: bool
        is_missing: bool
        has_error: bool
        start_byte: int
        end_byte: int
        start_point: tuple[int, int]
        end_point: tuple[int, int]
        children: list[TSNode]
        named_children: list[TSNode]

        def child_by_field_name(self, name: str) -> TSNode | None: ...

    class Tree:
        root_node: TSNode


LANGUAGE = "javascript"


class TreeSitterParser:
    """Wrapper around tree-sitter's JavaScript grammar.

    Check TREE_SITTER_AVAILABLE before constructing; the constructor raises
    ImportError when the bindings are missing.
    """

    def __init__(self) -> None:
        if not TREE_SITTER_AVAILABLE:
            raise ImportError(
                "JavaScript parsing requires 'tree-sitter' and 'tree-sitter-javascript'. "
                "Install with: pip install tree-sitter tree-sitter-javascript"
            )

        # tree-sitter >= 0.23 returns PyCapsule; wrap in Language()
        self._language = _tree_sitter_module.Language(_javascript_module.language())
        self._parser = _tree_sitter_module.Parser(self._language)

    def parse(self, code: bytes) -> Tree:
        """Parse source bytes; the tree may contain ERROR / MISSING nodes."""
        return self._parser.parse(code)


def find_first_error(root: TSNode) -> Optional[TSNode]:
    """Return the first ERROR or MISSING node in document order, if any."""
    if not root.has_error:
        return None

    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        # Only descend where the error is
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return root
