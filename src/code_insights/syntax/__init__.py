"""JavaScript syntax trees: parsing, ESTree-shaped nodes, normalization."""

from .builder import SyntaxTreeBuilder, parse_javascript
from .nodes import Node, NodeKind, Position, SourceLocation, build, identifier, is_function, literal
from .normalizer import Normalizer, normalize, parse_for_complexity
from .treesitter_parser import TREE_SITTER_AVAILABLE, TreeSitterParser

__all__ = [
    "Node",
    "NodeKind",
    "Position",
    "SourceLocation",
    "build",
    "identifier",
    "literal",
    "is_function",
    "SyntaxTreeBuilder",
    "parse_javascript",
    "Normalizer",
    "normalize",
    "parse_for_complexity",
    "TreeSitterParser",
    "TREE_SITTER_AVAILABLE",
]
