"""ESTree-shaped syntax tree model.

A ``Node`` is a tagged variant: ``kind`` is one member of the closed
``NodeKind`` enumeration and ``fields`` holds the kind's attributes. Field
values are child nodes, lists of child nodes (``None`` allowed for holes),
or plain scalars (names, operators, flags). Locations use 1-based lines and
0-based columns, like ESTree.

Example:
    >>> call = build(NodeKind.CALL_EXPRESSION, callee=identifier("require"), arguments=[])
    >>> call.kind.value
    'CallExpression'
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional


class NodeKind(str, Enum):
    """Every syntax node kind the builder can produce."""

    PROGRAM = "Program"

    # Statements
    EXPRESSION_STATEMENT = "ExpressionStatement"
    BLOCK_STATEMENT = "BlockStatement"
    EMPTY_STATEMENT = "EmptyStatement"
    DEBUGGER_STATEMENT = "DebuggerStatement"
    WITH_STATEMENT = "WithStatement"
    RETURN_STATEMENT = "ReturnStatement"
    LABELED_STATEMENT = "LabeledStatement"
    BREAK_STATEMENT = "BreakStatement"
    CONTINUE_STATEMENT = "ContinueStatement"
    IF_STATEMENT = "IfStatement"
    SWITCH_STATEMENT = "SwitchStatement"
    SWITCH_CASE = "SwitchCase"
    THROW_STATEMENT = "ThrowStatement"
    TRY_STATEMENT = "TryStatement"
    CATCH_CLAUSE = "CatchClause"
    WHILE_STATEMENT = "WhileStatement"
    DO_WHILE_STATEMENT = "DoWhileStatement"
    FOR_STATEMENT = "ForStatement"
    FOR_IN_STATEMENT = "ForInStatement"
    FOR_OF_STATEMENT = "ForOfStatement"

    # Declarations
    FUNCTION_DECLARATION = "FunctionDeclaration"
    VARIABLE_DECLARATION = "VariableDeclaration"
    VARIABLE_DECLARATOR = "VariableDeclarator"
    CLASS_DECLARATION = "ClassDeclaration"

    # Expressions
    IDENTIFIER = "Identifier"
    LITERAL = "Literal"
    TEMPLATE_LITERAL = "TemplateLiteral"
    TAGGED_TEMPLATE_EXPRESSION = "TaggedTemplateExpression"
    THIS_EXPRESSION = "ThisExpression"
    SUPER = "Super"
    ARRAY_EXPRESSION = "ArrayExpression"
    OBJECT_EXPRESSION = "ObjectExpression"
    PROPERTY = "Property"
    FUNCTION_EXPRESSION = "FunctionExpression"
    ARROW_FUNCTION_EXPRESSION = "ArrowFunctionExpression"
    CLASS_EXPRESSION = "ClassExpression"
    CLASS_BODY = "ClassBody"
    METHOD_DEFINITION = "MethodDefinition"
    CLASS_PROPERTY = "ClassProperty"
    STATIC_BLOCK = "StaticBlock"
    UNARY_EXPRESSION = "UnaryExpression"
    UPDATE_EXPRESSION = "UpdateExpression"
    BINARY_EXPRESSION = "BinaryExpression"
    LOGICAL_EXPRESSION = "LogicalExpression"
    ASSIGNMENT_EXPRESSION = "AssignmentExpression"
    MEMBER_EXPRESSION = "MemberExpression"
    CONDITIONAL_EXPRESSION = "ConditionalExpression"
    CALL_EXPRESSION = "CallExpression"
    NEW_EXPRESSION = "NewExpression"
    SEQUENCE_EXPRESSION = "SequenceExpression"
    YIELD_EXPRESSION = "YieldExpression"
    AWAIT_EXPRESSION = "AwaitExpression"
    SPREAD_ELEMENT = "SpreadElement"
    META_PROPERTY = "MetaProperty"
    IMPORT_EXPRESSION = "ImportExpression"

    # Patterns
    OBJECT_PATTERN = "ObjectPattern"
    ARRAY_PATTERN = "ArrayPattern"
    REST_ELEMENT = "RestElement"
    ASSIGNMENT_PATTERN = "AssignmentPattern"

    # Modules
    IMPORT_DECLARATION = "ImportDeclaration"
    IMPORT_SPECIFIER = "ImportSpecifier"
    IMPORT_DEFAULT_SPECIFIER = "ImportDefaultSpecifier"
    IMPORT_NAMESPACE_SPECIFIER = "ImportNamespaceSpecifier"
    EXPORT_NAMED_DECLARATION = "ExportNamedDeclaration"
    EXPORT_DEFAULT_DECLARATION = "ExportDefaultDeclaration"
    EXPORT_ALL_DECLARATION = "ExportAllDeclaration"
    EXPORT_SPECIFIER = "ExportSpecifier"

    # Extensions
    DECORATOR = "Decorator"
    JSX_ELEMENT = "JSXElement"

    # Anything the builder has no mapping for; keeps the grammar type name
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Position:
    line: int
    column: int


@dataclass(frozen=True)
class SourceLocation:
    start: Position
    end: Position


@dataclass
class Node:
    """One syntax tree node.

    Attributes:
        kind: The node's variant tag
        loc: Source span, ``None`` only for nodes synthesized without one
        fields: Kind-specific attributes and children
    """

    kind: NodeKind
    loc: Optional[SourceLocation] = None
    fields: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.fields[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def is_kind(self, *kinds: NodeKind) -> bool:
        return self.kind in kinds

    def child_fields(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(name, value)`` for fields holding nodes or node lists."""
        for name, value in self.fields.items():
            if isinstance(value, Node):
                yield name, value
            elif isinstance(value, list) and any(isinstance(v, Node) for v in value):
                yield name, value

    def children(self) -> Iterator[Node]:
        """Yield direct child nodes in field order."""
        for _, value in self.child_fields():
            if isinstance(value, Node):
                yield value
            else:
                for item in value:
                    if isinstance(item, Node):
                        yield item

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants, depth first, pre-order."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.children())))

    def clone(self) -> Node:
        return copy.deepcopy(self)

    @property
    def start_line(self) -> Optional[int]:
        return self.loc.start.line if self.loc else None

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view (ESTree-like ``type`` key), used for debug dumps."""

        def convert(value: Any) -> Any:
            if isinstance(value, Node):
                return value.to_dict()
            if isinstance(value, list):
                return [convert(v) for v in value]
            return value

        result: dict[str, Any] = {"type": self.kind.value}
        if self.loc is not None:
            result["loc"] = {
                "start": {"line": self.loc.start.line, "column": self.loc.start.column},
                "end": {"line": self.loc.end.line, "column": self.loc.end.column},
            }
        for name, value in self.fields.items():
            result[name] = convert(value)
        return result


def build(node_kind: NodeKind, loc: Optional[SourceLocation] = None, /, **fields: Any) -> Node:
    """Construct a node of ``node_kind`` with the given fields.

    Positional-only so that ESTree's own ``kind`` field (declarations,
    properties, methods) lands in ``fields``.
    """
    return Node(kind=node_kind, loc=loc, fields=dict(fields))


def identifier(name: str, loc: Optional[SourceLocation] = None) -> Node:
    return build(NodeKind.IDENTIFIER, loc, name=name)


def literal(value: Any, raw: Optional[str] = None, loc: Optional[SourceLocation] = None) -> Node:
    if raw is None:
        raw = f'"{value}"' if isinstance(value, str) else str(value)
    return build(NodeKind.LITERAL, loc, value=value, raw=raw)


def is_function(node: Optional[Node]) -> bool:
    return node is not None and node.kind in (
        NodeKind.FUNCTION_DECLARATION,
        NodeKind.FUNCTION_EXPRESSION,
        NodeKind.ARROW_FUNCTION_EXPRESSION,
    )
