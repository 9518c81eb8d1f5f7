"""Per-kind measurement rules for the complexity walker.

Each rule says what one node kind contributes: logical lines, cyclomatic
increments, Halstead operators and operands, which fields hold the children
to visit, whether the node opens a function scope and which dependencies it
declares. The walker ignores every kind without a rule and everything
below it; only the ES5 kinds are covered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from ..syntax.nodes import Node, NodeKind
from .models import DYNAMIC_DEPENDENCY, Dependency

Amount = Union[int, Callable[[Node], int]]
Identifier = Union[str, Callable[[Node], str]]


@dataclass(frozen=True)
class WalkerSettings:
    """Which constructs count towards cyclomatic complexity.

    Attributes:
        logicalor: Count ``||`` (``&&`` always counts)
        switchcase: Count ``case`` clauses
        forin: Count ``for...in`` / ``for...of`` loops
        trycatch: Count ``catch`` clauses
    """

    logicalor: bool = True
    switchcase: bool = True
    forin: bool = False
    trycatch: bool = False


@dataclass(frozen=True)
class HalsteadItem:
    identifier: Identifier
    filter: Optional[Callable[[Node], bool]] = None

    def resolve(self, node: Node) -> Optional[str]:
        if self.filter is not None and not self.filter(node):
            return None
        if callable(self.identifier):
            return self.identifier(node)
        return self.identifier


@dataclass(frozen=True)
class Rule:
    lloc: Amount = 0
    cyclomatic: Amount = 0
    operators: tuple[HalsteadItem, ...] = ()
    operands: tuple[HalsteadItem, ...] = ()
    children: tuple[str, ...] = ()
    assignable_name: Optional[Callable[[Node], str]] = None
    new_scope: bool = False
    dependencies: Optional[Callable[[Node], list[Dependency]]] = None

    def amount(self, which: str, node: Node) -> int:
        value = getattr(self, which)
        return value(node) if callable(value) else value


def safe_name(node: Optional[Node], default: str = "") -> str:
    """Name of an identifier-like node, else ``default`` or ``<anonymous>``."""
    if node is not None and node.get("name"):
        return node["name"]
    return default or "<anonymous>"


def _ops(*identifiers: Identifier) -> tuple[HalsteadItem, ...]:
    return tuple(HalsteadItem(i) for i in identifiers)


def _operator(node: Node) -> str:
    return node["operator"]


def _literal_operand(node: Node) -> str:
    if node.get("regex") is not None:
        return node.get("raw", "")
    value = node.get("value")
    if isinstance(value, str):
        return f'"{value}"'
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _assignment_name(node: Node) -> str:
    left = node.get("left")
    if left is None:
        return ""
    if left.kind is NodeKind.IDENTIFIER:
        return left["name"]
    if left.kind is NodeKind.MEMBER_EXPRESSION:
        return f"{safe_name(left.get('object'))}.{safe_name(left.get('property'))}"
    return ""


def _lloc_if_callee_function(node: Node) -> int:
    callee = node.get("callee")
    return 1 if callee is not None and callee.kind is NodeKind.FUNCTION_EXPRESSION else 0


def _has(field_name: str) -> Callable[[Node], int]:
    return lambda node: 1 if node.get(field_name) is not None else 0


def require_dependencies(node: Node) -> list[Dependency]:
    """``require("x")`` -> one CommonJS dependency on ``x``."""
    callee = node.get("callee")
    if callee is None or callee.kind is not NodeKind.IDENTIFIER or callee.get("name") != "require":
        return []
    arguments = node.get("arguments") or []
    if len(arguments) != 1:
        return []

    source = arguments[0]
    if source.kind is NodeKind.LITERAL and isinstance(source.get("value"), str):
        path = source["value"]
    else:
        path = DYNAMIC_DEPENDENCY
    line = node.start_line or 0
    return [Dependency(line=line, path=path, type="CommonJS")]


def build_rules(settings: WalkerSettings) -> dict[NodeKind, Rule]:
    """The rule table for one walker configuration."""
    K = NodeKind

    def logical_cyclomatic(node: Node) -> int:
        operator = node.get("operator")
        if operator == "&&":
            return 1
        return 1 if settings.logicalor and operator == "||" else 0

    def case_cyclomatic(node: Node) -> int:
        return 1 if settings.switchcase and node.get("test") is not None else 0

    forin_cyclomatic = 1 if settings.forin else 0

    return {
        K.ARRAY_EXPRESSION: Rule(operators=_ops("[]"), children=("elements",)),
        K.ASSIGNMENT_EXPRESSION: Rule(
            operators=_ops(_operator),
            children=("left", "right"),
            assignable_name=_assignment_name,
        ),
        K.BINARY_EXPRESSION: Rule(operators=_ops(_operator), children=("left", "right")),
        K.BLOCK_STATEMENT: Rule(children=("body",)),
        K.BREAK_STATEMENT: Rule(lloc=1, operators=_ops("break")),
        K.CALL_EXPRESSION: Rule(
            lloc=_lloc_if_callee_function,
            operators=_ops("()"),
            children=("arguments", "callee"),
            dependencies=require_dependencies,
        ),
        K.CATCH_CLAUSE: Rule(
            lloc=1,
            cyclomatic=1 if settings.trycatch else 0,
            operators=_ops("catch"),
            children=("param", "body"),
        ),
        K.CONDITIONAL_EXPRESSION: Rule(
            cyclomatic=1,
            operators=_ops(":?"),
            children=("test", "consequent", "alternate"),
        ),
        K.CONTINUE_STATEMENT: Rule(lloc=1, operators=_ops("continue")),
        K.DEBUGGER_STATEMENT: Rule(lloc=1, operators=_ops("debugger")),
        K.DO_WHILE_STATEMENT: Rule(
            lloc=2,
            cyclomatic=_has("test"),
            operators=_ops("dowhile"),
            children=("test", "body"),
        ),
        K.EMPTY_STATEMENT: Rule(),
        K.EXPRESSION_STATEMENT: Rule(lloc=1, children=("expression",)),
        K.FOR_IN_STATEMENT: Rule(
            lloc=1,
            cyclomatic=forin_cyclomatic,
            operators=_ops("forin"),
            children=("left", "right", "body"),
        ),
        K.FOR_OF_STATEMENT: Rule(
            lloc=1,
            cyclomatic=forin_cyclomatic,
            operators=_ops("forof"),
            children=("left", "right", "body"),
        ),
        K.FOR_STATEMENT: Rule(
            lloc=1,
            cyclomatic=_has("test"),
            operators=_ops("for"),
            children=("init", "test", "update", "body"),
        ),
        K.FUNCTION_DECLARATION: Rule(
            lloc=1,
            operators=_ops("function"),
            operands=_ops(lambda node: safe_name(node.get("id"))),
            children=("params", "body"),
            new_scope=True,
        ),
        K.FUNCTION_EXPRESSION: Rule(
            operators=_ops("function"),
            operands=_ops(lambda node: safe_name(node.get("id"))),
            children=("params", "body"),
            new_scope=True,
        ),
        K.IDENTIFIER: Rule(operands=_ops(lambda node: node["name"])),
        K.IF_STATEMENT: Rule(
            lloc=lambda node: 2 if node.get("alternate") is not None else 1,
            cyclomatic=1,
            operators=(
                HalsteadItem("if"),
                HalsteadItem("else", filter=lambda node: node.get("alternate") is not None),
            ),
            children=("test", "consequent", "alternate"),
        ),
        K.LABELED_STATEMENT: Rule(children=("body",)),
        K.LITERAL: Rule(operands=_ops(_literal_operand)),
        K.LOGICAL_EXPRESSION: Rule(
            cyclomatic=logical_cyclomatic,
            operators=_ops(_operator),
            children=("left", "right"),
        ),
        K.MEMBER_EXPRESSION: Rule(
            operators=_ops(lambda node: "[]" if node.get("computed") else "."),
            children=("object", "property"),
        ),
        K.NEW_EXPRESSION: Rule(
            lloc=_lloc_if_callee_function,
            operators=_ops("new"),
            children=("arguments", "callee"),
        ),
        K.OBJECT_EXPRESSION: Rule(operators=_ops("{}"), children=("properties",)),
        K.PROPERTY: Rule(
            lloc=1,
            operators=_ops(":"),
            children=("key", "value"),
            assignable_name=lambda node: safe_name(node.get("key")),
        ),
        K.RETURN_STATEMENT: Rule(lloc=1, operators=_ops("return"), children=("argument",)),
        K.SEQUENCE_EXPRESSION: Rule(children=("expressions",)),
        K.SWITCH_CASE: Rule(
            lloc=1,
            cyclomatic=case_cyclomatic,
            operators=_ops(lambda node: "case" if node.get("test") is not None else "default"),
            children=("test", "consequent"),
        ),
        K.SWITCH_STATEMENT: Rule(
            lloc=1, operators=_ops("switch"), children=("discriminant", "cases")
        ),
        K.THIS_EXPRESSION: Rule(operands=_ops("this")),
        K.THROW_STATEMENT: Rule(lloc=1, operators=_ops("throw"), children=("argument",)),
        K.TRY_STATEMENT: Rule(lloc=1, children=("block", "handler", "finalizer")),
        K.UNARY_EXPRESSION: Rule(
            operators=_ops(lambda node: f"{node['operator']} (prefix)"),
            children=("argument",),
        ),
        K.UPDATE_EXPRESSION: Rule(
            operators=_ops(
                lambda node: f"{node['operator']} ({'prefix' if node.get('prefix') else 'postfix'})"
            ),
            children=("argument",),
        ),
        K.VARIABLE_DECLARATION: Rule(
            operators=_ops(lambda node: node["kind"]), children=("declarations",)
        ),
        K.VARIABLE_DECLARATOR: Rule(
            lloc=1,
            operators=(HalsteadItem("=", filter=lambda node: node.get("init") is not None),),
            children=("id", "init"),
            assignable_name=lambda node: safe_name(node.get("id")),
        ),
        K.WHILE_STATEMENT: Rule(
            lloc=1,
            cyclomatic=_has("test"),
            operators=_ops("while"),
            children=("test", "body"),
        ),
        K.WITH_STATEMENT: Rule(lloc=1, operators=_ops("with"), children=("object", "body")),
    }


def children_of(node: Node, rule: Rule) -> list[tuple[Any, str]]:
    """``(child, assigned_name)`` pairs in the rule's field order."""
    name = rule.assignable_name(node) if rule.assignable_name is not None else ""
    result: list[tuple[Any, str]] = []
    for field_name in rule.children:
        value = node.get(field_name)
        if isinstance(value, list):
            result.extend((item, name) for item in value)
        elif value is not None:
            result.append((value, name))
    return result
