"""Builds ESTree-shaped ``Node`` trees from tree-sitter JavaScript trees.

Each grammar node type maps to one ``_build_<type>`` method. Comments are
dropped, parentheses are unwrapped and grammar types without a mapping
become ``NodeKind.UNKNOWN`` nodes that keep their converted named children,
so nothing below them is lost.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Callable, Optional

from ..exceptions import ParsingError
from ..logging_config import get_logger
from .nodes import Node, NodeKind, Position, SourceLocation, build, identifier
from .treesitter_parser import LANGUAGE, TreeSitterParser, find_first_error

logger = get_logger(__name__)

_EXTRAS = frozenset({"comment", "html_comment", "hash_bang_line"})

_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "statement_identifier",
        "private_property_identifier",
        "type_identifier",
    }
)

_FUNCTION_EXPRESSION_TYPES = frozenset({"function_expression", "function", "generator_function"})

_LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})


def _loc(node: Any) -> SourceLocation:
    start_row, start_col = node.start_point[0], node.start_point[1]
    end_row, end_col = node.end_point[0], node.end_point[1]
    return SourceLocation(
        start=Position(line=start_row + 1, column=start_col),
        end=Position(line=end_row + 1, column=end_col),
    )


def _text(node: Any) -> str:
    raw = node.text
    return raw.decode("utf-8", errors="replace") if raw is not None else ""


def _named(node: Any) -> list[Any]:
    return [c for c in node.named_children if c.type not in _EXTRAS]


def _same(left: Any, right: Any) -> bool:
    return (
        right is not None
        and left.start_byte == right.start_byte
        and left.end_byte == right.end_byte
        and left.type == right.type
    )


_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")

_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}

_LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})


def _unescape(match: re.Match[str]) -> str:
    sequence = match.group(1)
    if sequence.startswith("u{"):
        return chr(int(sequence[2:-1], 16))
    if len(sequence) > 1 and sequence[0] in "ux":
        return chr(int(sequence[1:], 16))
    if sequence in _LINE_CONTINUATIONS:
        return ""
    return _SIMPLE_ESCAPES.get(sequence, sequence)


def _string_value(raw: str) -> str:
    """Cooked value of a quoted string literal."""
    body = raw[1:-1]
    if "\\" not in body:
        return body
    value = _ESCAPE_RE.sub(_unescape, body)
    # join \uXXXX surrogate pairs into one code point
    return value.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def _number_value(raw: str) -> Any:
    """Numeric value of a number literal; the raw text when unparseable."""
    text = raw.replace("_", "")
    if text.endswith("n"):
        text = text[:-1]
    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return raw


def _has_token(node: Any, *tokens: str) -> bool:
    return any(not c.is_named and c.type in tokens for c in node.children)


class SyntaxTreeBuilder:
    """Converts one tree-sitter tree into a ``Program`` node."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[Any], Optional[Node]]] = {}
        for attr in dir(self):
            if attr.startswith("_build_"):
                self._handlers[attr[len("_build_"):]] = getattr(self, attr)
        for ts_type in _IDENTIFIER_TYPES:
            self._handlers[ts_type] = self._identifier
        for ts_type in _FUNCTION_EXPRESSION_TYPES:
            self._handlers[ts_type] = self._function_expression

    # ── Entry points ───────────────────────────────────────────

    def build_program(self, root: Any) -> Node:
        body = [n for n in (self.convert(c) for c in _named(root)) if n is not None]
        return build(NodeKind.PROGRAM, _loc(root), body=body, sourceType="module")

    def convert(self, node: Any) -> Optional[Node]:
        """Convert one grammar node; ``None`` for absent / dropped nodes."""
        if node is None or node.type in _EXTRAS:
            return None
        handler = self._handlers.get(node.type)
        if handler is not None:
            return handler(node)
        return self._unknown(node)

    def _convert_field(self, node: Any, name: str) -> Optional[Node]:
        return self.convert(node.child_by_field_name(name))

    def _convert_all(self, nodes: list[Any]) -> list[Node]:
        return [n for n in (self.convert(c) for c in nodes) if n is not None]

    def _unknown(self, node: Any) -> Node:
        logger.debug(f"No mapping for grammar node '{node.type}' at line {node.start_point[0] + 1}")
        return build(
            NodeKind.UNKNOWN,
            _loc(node),
            grammarType=node.type,
            children=self._convert_all(_named(node)),
        )

    def _statement_expression(self, node: Any) -> Optional[Node]:
        """Unwrap ``for (init; test; update)`` slots given as statements."""
        if node is None or node.type in ("empty_statement", ";"):
            return None
        if node.type == "expression_statement":
            inner = _named(node)
            return self.convert(inner[0]) if inner else None
        return self.convert(node)

    # ── Program structure / statements ─────────────────────────

    def _build_expression_statement(self, node: Any) -> Node:
        inner = _named(node)
        return build(
            NodeKind.EXPRESSION_STATEMENT,
            _loc(node),
            expression=self.convert(inner[0]) if inner else None,
        )

    def _build_statement_block(self, node: Any) -> Node:
        return build(NodeKind.BLOCK_STATEMENT, _loc(node), body=self._convert_all(_named(node)))

    def _build_empty_statement(self, node: Any) -> Node:
        return build(NodeKind.EMPTY_STATEMENT, _loc(node))

    def _build_debugger_statement(self, node: Any) -> Node:
        return build(NodeKind.DEBUGGER_STATEMENT, _loc(node))

    def _build_with_statement(self, node: Any) -> Node:
        return build(
            NodeKind.WITH_STATEMENT,
            _loc(node),
            object=self._convert_field(node, "object"),
            body=self._convert_field(node, "body"),
        )

    def _build_return_statement(self, node: Any) -> Node:
        inner = _named(node)
        return build(
            NodeKind.RETURN_STATEMENT,
            _loc(node),
            argument=self.convert(inner[0]) if inner else None,
        )

    def _build_throw_statement(self, node: Any) -> Node:
        inner = _named(node)
        return build(
            NodeKind.THROW_STATEMENT,
            _loc(node),
            argument=self.convert(inner[0]) if inner else None,
        )

    def _build_labeled_statement(self, node: Any) -> Node:
        return build(
            NodeKind.LABELED_STATEMENT,
            _loc(node),
            label=self._convert_field(node, "label"),
            body=self._convert_field(node, "body"),
        )

    def _build_break_statement(self, node: Any) -> Node:
        return build(NodeKind.BREAK_STATEMENT, _loc(node), label=self._convert_field(node, "label"))

    def _build_continue_statement(self, node: Any) -> Node:
        return build(
            NodeKind.CONTINUE_STATEMENT, _loc(node), label=self._convert_field(node, "label")
        )

    def _build_if_statement(self, node: Any) -> Node:
        alternate = None
        else_clause = node.child_by_field_name("alternative")
        if else_clause is not None:
            inner = _named(else_clause)
            alternate = self.convert(inner[0]) if inner else None
        return build(
            NodeKind.IF_STATEMENT,
            _loc(node),
            test=self._convert_field(node, "condition"),
            consequent=self._convert_field(node, "consequence"),
            alternate=alternate,
        )

    def _build_switch_statement(self, node: Any) -> Node:
        cases: list[Node] = []
        body = node.child_by_field_name("body")
        if body is not None:
            for case in _named(body):
                if case.type not in ("switch_case", "switch_default"):
                    continue
                value = case.child_by_field_name("value")
                consequent = [c for c in _named(case) if not _same(c, value)]
                cases.append(
                    build(
                        NodeKind.SWITCH_CASE,
                        _loc(case),
                        test=self.convert(value) if value is not None else None,
                        consequent=self._convert_all(consequent),
                    )
                )
        return build(
            NodeKind.SWITCH_STATEMENT,
            _loc(node),
            discriminant=self._convert_field(node, "value"),
            cases=cases,
        )

    def _build_try_statement(self, node: Any) -> Node:
        handler = None
        catch = node.child_by_field_name("handler")
        if catch is not None:
            handler = build(
                NodeKind.CATCH_CLAUSE,
                _loc(catch),
                param=self._convert_field(catch, "parameter"),
                body=self._convert_field(catch, "body"),
            )
        finalizer = None
        finally_clause = node.child_by_field_name("finalizer")
        if finally_clause is not None:
            finalizer = self._convert_field(finally_clause, "body")
        return build(
            NodeKind.TRY_STATEMENT,
            _loc(node),
            block=self._convert_field(node, "body"),
            handler=handler,
            finalizer=finalizer,
        )

    def _build_while_statement(self, node: Any) -> Node:
        return build(
            NodeKind.WHILE_STATEMENT,
            _loc(node),
            test=self._convert_field(node, "condition"),
            body=self._convert_field(node, "body"),
        )

    def _build_do_statement(self, node: Any) -> Node:
        return build(
            NodeKind.DO_WHILE_STATEMENT,
            _loc(node),
            body=self._convert_field(node, "body"),
            test=self._convert_field(node, "condition"),
        )

    def _build_for_statement(self, node: Any) -> Node:
        return build(
            NodeKind.FOR_STATEMENT,
            _loc(node),
            init=self._statement_expression(node.child_by_field_name("initializer")),
            test=self._statement_expression(node.child_by_field_name("condition")),
            update=self._convert_field(node, "increment"),
            body=self._convert_field(node, "body"),
        )

    def _build_for_in_statement(self, node: Any) -> Node:
        operator = node.child_by_field_name("operator")
        is_of = _text(operator) == "of" if operator is not None else _has_token(node, "of")

        left = self._convert_field(node, "left")
        kind = node.child_by_field_name("kind")
        if kind is not None and left is not None:
            left = build(
                NodeKind.VARIABLE_DECLARATION,
                _loc(node.child_by_field_name("left")),
                kind=_text(kind),
                declarations=[
                    build(NodeKind.VARIABLE_DECLARATOR, left.loc, id=left, init=None)
                ],
            )

        return build(
            NodeKind.FOR_OF_STATEMENT if is_of else NodeKind.FOR_IN_STATEMENT,
            _loc(node),
            left=left,
            right=self._convert_field(node, "right"),
            body=self._convert_field(node, "body"),
            isAwait=_has_token(node, "await"),
        )

    # ── Declarations ───────────────────────────────────────────

    def _declaration(self, node: Any, kind: str) -> Node:
        declarators = [c for c in _named(node) if c.type == "variable_declarator"]
        return build(
            NodeKind.VARIABLE_DECLARATION,
            _loc(node),
            kind=kind,
            declarations=self._convert_all(declarators),
        )

    def _build_lexical_declaration(self, node: Any) -> Node:
        kind = node.child_by_field_name("kind")
        return self._declaration(node, _text(kind) if kind is not None else "let")

    def _build_variable_declaration(self, node: Any) -> Node:
        return self._declaration(node, "var")

    def _build_variable_declarator(self, node: Any) -> Node:
        return build(
            NodeKind.VARIABLE_DECLARATOR,
            _loc(node),
            id=self._convert_field(node, "name"),
            init=self._convert_field(node, "value"),
        )

    def _function_fields(self, node: Any) -> dict[str, Any]:
        params_node = node.child_by_field_name("parameters")
        return {
            "id": self._convert_field(node, "name"),
            "params": self._convert_all(_named(params_node)) if params_node is not None else [],
            "body": self._convert_field(node, "body"),
            "generator": _has_token(node, "*"),
            "async": _has_token(node, "async"),
        }

    def _build_function_declaration(self, node: Any) -> Node:
        return build(NodeKind.FUNCTION_DECLARATION, _loc(node), **self._function_fields(node))

    def _build_generator_function_declaration(self, node: Any) -> Node:
        return self._build_function_declaration(node)

    def _function_expression(self, node: Any) -> Node:
        return build(NodeKind.FUNCTION_EXPRESSION, _loc(node), **self._function_fields(node))

    def _build_arrow_function(self, node: Any) -> Node:
        single = node.child_by_field_name("parameter")
        if single is not None:
            params = [self.convert(single)]
        else:
            params_node = node.child_by_field_name("parameters")
            params = self._convert_all(_named(params_node)) if params_node is not None else []

        body_node = node.child_by_field_name("body")
        return build(
            NodeKind.ARROW_FUNCTION_EXPRESSION,
            _loc(node),
            id=None,
            params=params,
            body=self.convert(body_node),
            expression=body_node is not None and body_node.type != "statement_block",
            generator=False,
            **{"async": _has_token(node, "async")},
        )

    def _class_fields(self, node: Any) -> dict[str, Any]:
        super_class = None
        for child in _named(node):
            if child.type == "class_heritage":
                inner = _named(child)
                super_class = self.convert(inner[0]) if inner else None
        decorators = [c for c in _named(node) if c.type == "decorator"]
        return {
            "id": self._convert_field(node, "name"),
            "superClass": super_class,
            "body": self._convert_field(node, "body"),
            "decorators": self._convert_all(decorators),
        }

    def _build_class_declaration(self, node: Any) -> Node:
        return build(NodeKind.CLASS_DECLARATION, _loc(node), **self._class_fields(node))

    def _build_class(self, node: Any) -> Node:
        return build(NodeKind.CLASS_EXPRESSION, _loc(node), **self._class_fields(node))

    def _build_class_body(self, node: Any) -> Node:
        members = [c for c in _named(node) if c.type != "decorator"]
        return build(NodeKind.CLASS_BODY, _loc(node), body=self._convert_all(members))

    def _property_key(self, node: Any) -> tuple[Optional[Node], bool]:
        key = node.child_by_field_name("name") or node.child_by_field_name("property")
        if key is None:
            return None, False
        if key.type == "computed_property_name":
            inner = _named(key)
            return (self.convert(inner[0]) if inner else None), True
        return self.convert(key), False

    def _build_method_definition(self, node: Any) -> Node:
        key, computed = self._property_key(node)
        if _has_token(node, "get"):
            kind = "get"
        elif _has_token(node, "set"):
            kind = "set"
        elif key is not None and key.get("name") == "constructor":
            kind = "constructor"
        else:
            kind = "method"

        value = build(NodeKind.FUNCTION_EXPRESSION, _loc(node), **self._function_fields(node))
        value["id"] = None
        decorators = [c for c in _named(node) if c.type == "decorator"]
        return build(
            NodeKind.METHOD_DEFINITION,
            _loc(node),
            key=key,
            value=value,
            kind=kind,
            computed=computed,
            static=_has_token(node, "static"),
            decorators=self._convert_all(decorators),
        )

    def _build_field_definition(self, node: Any) -> Node:
        key, computed = self._property_key(node)
        decorators = [c for c in _named(node) if c.type == "decorator"]
        return build(
            NodeKind.CLASS_PROPERTY,
            _loc(node),
            key=key,
            value=self._convert_field(node, "value"),
            computed=computed,
            static=_has_token(node, "static"),
            decorators=self._convert_all(decorators),
        )

    def _build_class_static_block(self, node: Any) -> Node:
        return build(NodeKind.STATIC_BLOCK, _loc(node), body=self._convert_field(node, "body"))

    def _build_decorator(self, node: Any) -> Node:
        inner = _named(node)
        return build(
            NodeKind.DECORATOR, _loc(node), expression=self.convert(inner[0]) if inner else None
        )

    # ── Modules ────────────────────────────────────────────────

    def _build_import_statement(self, node: Any) -> Node:
        specifiers: list[Node] = []
        for child in _named(node):
            if child.type == "import_clause":
                specifiers.extend(self._import_specifiers(child))
        return build(
            NodeKind.IMPORT_DECLARATION,
            _loc(node),
            specifiers=specifiers,
            source=self._convert_field(node, "source"),
        )

    def _import_specifiers(self, clause: Any) -> list[Node]:
        result: list[Node] = []
        for child in _named(clause):
            if child.type == "identifier":
                result.append(
                    build(NodeKind.IMPORT_DEFAULT_SPECIFIER, _loc(child), local=self.convert(child))
                )
            elif child.type == "namespace_import":
                inner = _named(child)
                result.append(
                    build(
                        NodeKind.IMPORT_NAMESPACE_SPECIFIER,
                        _loc(child),
                        local=self.convert(inner[0]) if inner else None,
                    )
                )
            elif child.type == "named_imports":
                for spec in _named(child):
                    if spec.type != "import_specifier":
                        continue
                    imported = self._convert_field(spec, "name")
                    alias = self._convert_field(spec, "alias")
                    result.append(
                        build(
                            NodeKind.IMPORT_SPECIFIER,
                            _loc(spec),
                            imported=imported,
                            local=alias if alias is not None else imported,
                        )
                    )
        return result

    def _build_export_statement(self, node: Any) -> Node:
        loc = _loc(node)
        source = self._convert_field(node, "source")
        declaration = node.child_by_field_name("declaration")
        value = node.child_by_field_name("value")

        if _has_token(node, "default"):
            target = self.convert(declaration if declaration is not None else value)
            # export default class {} / function () {} are anonymous declarations
            if target is not None and target.kind is NodeKind.CLASS_EXPRESSION:
                target.kind = NodeKind.CLASS_DECLARATION
            elif target is not None and target.kind is NodeKind.FUNCTION_EXPRESSION:
                target.kind = NodeKind.FUNCTION_DECLARATION
            return build(NodeKind.EXPORT_DEFAULT_DECLARATION, loc, declaration=target)

        if declaration is not None:
            return build(
                NodeKind.EXPORT_NAMED_DECLARATION,
                loc,
                declaration=self.convert(declaration),
                specifiers=[],
                source=None,
            )

        specifiers: list[Node] = []
        for child in _named(node):
            if child.type == "export_clause":
                for spec in _named(child):
                    if spec.type != "export_specifier":
                        continue
                    local = self._convert_field(spec, "name")
                    alias = self._convert_field(spec, "alias")
                    specifiers.append(
                        build(
                            NodeKind.EXPORT_SPECIFIER,
                            _loc(spec),
                            local=local,
                            exported=alias if alias is not None else local,
                        )
                    )
            elif child.type == "namespace_export":
                inner = _named(child)
                return build(
                    NodeKind.EXPORT_ALL_DECLARATION,
                    loc,
                    exported=self.convert(inner[0]) if inner else None,
                    source=source,
                )

        if not specifiers and _has_token(node, "*"):
            return build(NodeKind.EXPORT_ALL_DECLARATION, loc, exported=None, source=source)

        return build(
            NodeKind.EXPORT_NAMED_DECLARATION,
            loc,
            declaration=None,
            specifiers=specifiers,
            source=source,
        )

    # ── Expressions ────────────────────────────────────────────

    def _identifier(self, node: Any) -> Node:
        return identifier(_text(node), _loc(node))

    def _build_undefined(self, node: Any) -> Node:
        return identifier("undefined", _loc(node))

    def _build_this(self, node: Any) -> Node:
        return build(NodeKind.THIS_EXPRESSION, _loc(node))

    def _build_super(self, node: Any) -> Node:
        return build(NodeKind.SUPER, _loc(node))

    def _build_number(self, node: Any) -> Node:
        raw = _text(node)
        return build(NodeKind.LITERAL, _loc(node), value=_number_value(raw), raw=raw)

    def _build_string(self, node: Any) -> Node:
        raw = _text(node)
        return build(NodeKind.LITERAL, _loc(node), value=_string_value(raw), raw=raw)

    def _build_regex(self, node: Any) -> Node:
        raw = _text(node)
        pattern = node.child_by_field_name("pattern")
        flags = node.child_by_field_name("flags")
        return build(
            NodeKind.LITERAL,
            _loc(node),
            value=raw,
            raw=raw,
            regex={
                "pattern": _text(pattern) if pattern is not None else "",
                "flags": _text(flags) if flags is not None else "",
            },
        )

    def _build_true(self, node: Any) -> Node:
        return build(NodeKind.LITERAL, _loc(node), value=True, raw="true")

    def _build_false(self, node: Any) -> Node:
        return build(NodeKind.LITERAL, _loc(node), value=False, raw="false")

    def _build_null(self, node: Any) -> Node:
        return build(NodeKind.LITERAL, _loc(node), value=None, raw="null")

    def _build_template_string(self, node: Any) -> Node:
        expressions: list[Node] = []
        for child in _named(node):
            if child.type == "template_substitution":
                expressions.extend(self._convert_all(_named(child)))
        return build(
            NodeKind.TEMPLATE_LITERAL, _loc(node), raw=_text(node), expressions=expressions
        )

    def _build_parenthesized_expression(self, node: Any) -> Optional[Node]:
        inner = _named(node)
        return self.convert(inner[0]) if inner else None

    def _build_array(self, node: Any) -> Node:
        return build(NodeKind.ARRAY_EXPRESSION, _loc(node), elements=self._convert_all(_named(node)))

    def _build_object(self, node: Any) -> Node:
        properties: list[Node] = []
        for child in _named(node):
            if child.type == "pair":
                properties.append(self._pair(child))
            elif child.type == "shorthand_property_identifier":
                name = self.convert(child)
                properties.append(
                    build(
                        NodeKind.PROPERTY,
                        _loc(child),
                        key=name,
                        value=identifier(name["name"], name.loc),
                        kind="init",
                        computed=False,
                        method=False,
                        shorthand=True,
                    )
                )
            elif child.type == "method_definition":
                method = self._build_method_definition(child)
                properties.append(
                    build(
                        NodeKind.PROPERTY,
                        method.loc,
                        key=method["key"],
                        value=method["value"],
                        kind=method["kind"] if method["kind"] in ("get", "set") else "init",
                        computed=method["computed"],
                        method=True,
                        shorthand=False,
                    )
                )
            else:
                converted = self.convert(child)
                if converted is not None:
                    properties.append(converted)
        return build(NodeKind.OBJECT_EXPRESSION, _loc(node), properties=properties)

    def _pair(self, node: Any) -> Node:
        key_node = node.child_by_field_name("key")
        computed = key_node is not None and key_node.type == "computed_property_name"
        if computed:
            inner = _named(key_node)
            key = self.convert(inner[0]) if inner else None
        else:
            key = self.convert(key_node)
        return build(
            NodeKind.PROPERTY,
            _loc(node),
            key=key,
            value=self._convert_field(node, "value"),
            kind="init",
            computed=computed,
            method=False,
            shorthand=False,
        )

    def _build_object_pattern(self, node: Any) -> Node:
        properties: list[Node] = []
        for child in _named(node):
            if child.type == "pair_pattern":
                properties.append(self._pair(child))
            elif child.type == "shorthand_property_identifier_pattern":
                name = self.convert(child)
                properties.append(
                    build(
                        NodeKind.PROPERTY,
                        _loc(child),
                        key=name,
                        value=identifier(name["name"], name.loc),
                        kind="init",
                        computed=False,
                        method=False,
                        shorthand=True,
                    )
                )
            elif child.type == "object_assignment_pattern":
                properties.append(
                    build(
                        NodeKind.ASSIGNMENT_PATTERN,
                        _loc(child),
                        left=self._convert_field(child, "left"),
                        right=self._convert_field(child, "right"),
                    )
                )
            else:
                converted = self.convert(child)
                if converted is not None:
                    properties.append(converted)
        return build(NodeKind.OBJECT_PATTERN, _loc(node), properties=properties)

    def _build_array_pattern(self, node: Any) -> Node:
        return build(NodeKind.ARRAY_PATTERN, _loc(node), elements=self._convert_all(_named(node)))

    def _build_assignment_pattern(self, node: Any) -> Node:
        return build(
            NodeKind.ASSIGNMENT_PATTERN,
            _loc(node),
            left=self._convert_field(node, "left"),
            right=self._convert_field(node, "right"),
        )

    def _build_rest_pattern(self, node: Any) -> Node:
        inner = _named(node)
        return build(
            NodeKind.REST_ELEMENT, _loc(node), argument=self.convert(inner[0]) if inner else None
        )

    def _build_spread_element(self, node: Any) -> Node:
        inner = _named(node)
        return build(
            NodeKind.SPREAD_ELEMENT, _loc(node), argument=self.convert(inner[0]) if inner else None
        )

    def _call_arguments(self, node: Any) -> list[Node]:
        args = node.child_by_field_name("arguments")
        if args is None:
            return []
        return self._convert_all(_named(args))

    def _build_call_expression(self, node: Any) -> Node:
        callee_node = node.child_by_field_name("function")
        args_node = node.child_by_field_name("arguments")

        if callee_node is not None and callee_node.type == "import":
            arguments = self._call_arguments(node)
            return build(
                NodeKind.IMPORT_EXPRESSION,
                _loc(node),
                source=arguments[0] if arguments else None,
            )

        if args_node is not None and args_node.type == "template_string":
            return build(
                NodeKind.TAGGED_TEMPLATE_EXPRESSION,
                _loc(node),
                tag=self.convert(callee_node),
                quasi=self.convert(args_node),
            )

        return build(
            NodeKind.CALL_EXPRESSION,
            _loc(node),
            callee=self.convert(callee_node),
            arguments=self._call_arguments(node),
            optional=node.child_by_field_name("optional_chain") is not None,
        )

    def _build_new_expression(self, node: Any) -> Node:
        return build(
            NodeKind.NEW_EXPRESSION,
            _loc(node),
            callee=self._convert_field(node, "constructor"),
            arguments=self._call_arguments(node),
        )

    def _build_member_expression(self, node: Any) -> Node:
        return build(
            NodeKind.MEMBER_EXPRESSION,
            _loc(node),
            object=self._convert_field(node, "object"),
            property=self._convert_field(node, "property"),
            computed=False,
            optional=node.child_by_field_name("optional_chain") is not None,
        )

    def _build_subscript_expression(self, node: Any) -> Node:
        return build(
            NodeKind.MEMBER_EXPRESSION,
            _loc(node),
            object=self._convert_field(node, "object"),
            property=self._convert_field(node, "index"),
            computed=True,
            optional=node.child_by_field_name("optional_chain") is not None,
        )

    def _build_assignment_expression(self, node: Any) -> Node:
        return build(
            NodeKind.ASSIGNMENT_EXPRESSION,
            _loc(node),
            operator="=",
            left=self._convert_field(node, "left"),
            right=self._convert_field(node, "right"),
        )

    def _build_augmented_assignment_expression(self, node: Any) -> Node:
        operator = node.child_by_field_name("operator")
        return build(
            NodeKind.ASSIGNMENT_EXPRESSION,
            _loc(node),
            operator=_text(operator) if operator is not None else "=",
            left=self._convert_field(node, "left"),
            right=self._convert_field(node, "right"),
        )

    def _build_binary_expression(self, node: Any) -> Node:
        operator = _text(node.child_by_field_name("operator"))
        kind = (
            NodeKind.LOGICAL_EXPRESSION
            if operator in _LOGICAL_OPERATORS
            else NodeKind.BINARY_EXPRESSION
        )
        return build(
            kind,
            _loc(node),
            operator=operator,
            left=self._convert_field(node, "left"),
            right=self._convert_field(node, "right"),
        )

    def _build_unary_expression(self, node: Any) -> Node:
        return build(
            NodeKind.UNARY_EXPRESSION,
            _loc(node),
            operator=_text(node.child_by_field_name("operator")),
            argument=self._convert_field(node, "argument"),
            prefix=True,
        )

    def _build_update_expression(self, node: Any) -> Node:
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        prefix = (
            operator is not None
            and argument is not None
            and operator.start_byte < argument.start_byte
        )
        return build(
            NodeKind.UPDATE_EXPRESSION,
            _loc(node),
            operator=_text(operator) if operator is not None else "",
            argument=self.convert(argument),
            prefix=prefix,
        )

    def _build_ternary_expression(self, node: Any) -> Node:
        return build(
            NodeKind.CONDITIONAL_EXPRESSION,
            _loc(node),
            test=self._convert_field(node, "condition"),
            consequent=self._convert_field(node, "consequence"),
            alternate=self._convert_field(node, "alternative"),
        )

    def _build_sequence_expression(self, node: Any) -> Node:
        expressions: list[Node] = []
        pending = [node]
        while pending:
            current = pending.pop(0)
            for child in _named(current):
                if child.type == "sequence_expression":
                    pending.insert(0, child)
                else:
                    converted = self.convert(child)
                    if converted is not None:
                        expressions.append(converted)
        return build(NodeKind.SEQUENCE_EXPRESSION, _loc(node), expressions=expressions)

    def _build_await_expression(self, node: Any) -> Node:
        inner = _named(node)
        return build(
            NodeKind.AWAIT_EXPRESSION, _loc(node), argument=self.convert(inner[0]) if inner else None
        )

    def _build_yield_expression(self, node: Any) -> Node:
        inner = _named(node)
        return build(
            NodeKind.YIELD_EXPRESSION,
            _loc(node),
            argument=self.convert(inner[0]) if inner else None,
            delegate=_has_token(node, "*"),
        )

    def _build_meta_property(self, node: Any) -> Node:
        meta, _, prop = _text(node).partition(".")
        loc = _loc(node)
        return build(
            NodeKind.META_PROPERTY, loc, meta=identifier(meta, loc), property=identifier(prop, loc)
        )

    # ── JSX ────────────────────────────────────────────────────

    def _build_jsx_element(self, node: Any) -> Node:
        children: list[Node] = []
        self._collect_jsx(node, children)
        return build(NodeKind.JSX_ELEMENT, _loc(node), children=children)

    def _build_jsx_self_closing_element(self, node: Any) -> Node:
        return self._build_jsx_element(node)

    def _build_jsx_fragment(self, node: Any) -> Node:
        return self._build_jsx_element(node)

    def _collect_jsx(self, node: Any, out: list[Node]) -> None:
        """Keep embedded expressions and nested elements; drop JSX text."""
        for child in _named(node):
            if child.type in ("jsx_element", "jsx_self_closing_element", "jsx_fragment"):
                out.append(self._build_jsx_element(child))
            elif child.type == "jsx_expression":
                out.extend(self._convert_all(_named(child)))
            elif child.type.startswith("jsx_"):
                self._collect_jsx(child, out)


def parse_javascript(
    content: str, path: str = "<source>", parser: Optional[TreeSitterParser] = None
) -> Node:
    """Parse JavaScript source text into a ``Program`` node.

    Args:
        content: Source text
        path: File path, used in error reports
        parser: Reusable parser; a new one is created when omitted

    Raises:
        ParsingError: If the source is not valid JavaScript
    """
    parser = parser or TreeSitterParser()
    tree = parser.parse(content.encode("utf-8"))
    root = tree.root_node

    error = find_first_error(root)
    if error is not None:
        line, column = error.start_point[0] + 1, error.start_point[1]
        reason = f"missing '{error.type}'" if error.is_missing else "unexpected token"
        raise ParsingError(Path(path), LANGUAGE, reason, line=line, column=column)

    try:
        return SyntaxTreeBuilder().build_program(root)
    except RecursionError:
        raise ParsingError(Path(path), LANGUAGE, "syntax nested too deeply to analyze")
