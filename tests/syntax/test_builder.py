"""Tests for building ESTree-shaped trees from tree-sitter."""

from pathlib import Path

import pytest

from code_insights.exceptions import ParsingError
from code_insights.syntax import TREE_SITTER_AVAILABLE, NodeKind, parse_javascript


def body_kinds(source):
    return [node.kind for node in parse_javascript(source)["body"]]


@pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
class TestStatements:
    """Test statement mapping."""

    def test_program(self):
        tree = parse_javascript("var a = 1;\n")
        assert tree.kind is NodeKind.PROGRAM
        declaration = tree["body"][0]
        assert declaration.kind is NodeKind.VARIABLE_DECLARATION
        assert declaration["kind"] == "var"
        declarator = declaration["declarations"][0]
        assert declarator["id"]["name"] == "a"
        assert declarator["init"]["value"] == 1

    def test_lines_are_one_based(self):
        tree = parse_javascript("\n\nfoo();\n")
        assert tree["body"][0].start_line == 3

    def test_if_else(self):
        statement = parse_javascript("if (a) { b(); } else c();")["body"][0]
        assert statement.kind is NodeKind.IF_STATEMENT
        assert statement["consequent"].kind is NodeKind.BLOCK_STATEMENT
        assert statement["alternate"].kind is NodeKind.EXPRESSION_STATEMENT

    def test_switch(self):
        statement = parse_javascript("switch (x) { case 1: a(); break; default: b(); }")["body"][0]
        assert statement.kind is NodeKind.SWITCH_STATEMENT
        cases = statement["cases"]
        assert cases[0]["test"]["value"] == 1
        assert cases[1]["test"] is None

    def test_try_catch(self):
        statement = parse_javascript("try { a(); } catch (e) { b(); } finally { c(); }")["body"][0]
        assert statement.kind is NodeKind.TRY_STATEMENT
        assert statement["handler"].kind is NodeKind.CATCH_CLAUSE
        assert statement["finalizer"].kind is NodeKind.BLOCK_STATEMENT

    def test_loops(self):
        assert body_kinds("for (var i = 0; i < 3; i++) {} for (k in o) {} for (v of l) {} while (x) {} do {} while (y);") == [
            NodeKind.FOR_STATEMENT,
            NodeKind.FOR_IN_STATEMENT,
            NodeKind.FOR_OF_STATEMENT,
            NodeKind.WHILE_STATEMENT,
            NodeKind.DO_WHILE_STATEMENT,
        ]


@pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
class TestExpressions:
    """Test expression mapping."""

    def expression(self, source):
        return parse_javascript(source)["body"][0]["expression"]

    def test_logical_vs_binary(self):
        assert self.expression("a && b;").kind is NodeKind.LOGICAL_EXPRESSION
        assert self.expression("a + b;").kind is NodeKind.BINARY_EXPRESSION

    def test_member_expression(self):
        member = self.expression("a.b;")
        assert member.kind is NodeKind.MEMBER_EXPRESSION
        assert member["computed"] is False
        assert self.expression("a[b];")["computed"] is True

    def test_string_literal(self):
        value = self.expression("'hi';")
        assert value.kind is NodeKind.LITERAL
        assert value["value"] == "hi"

    def test_update_prefix(self):
        assert self.expression("++i;")["prefix"] is True
        assert self.expression("i++;")["prefix"] is False

    def test_arrow_function(self):
        arrow = self.expression("(a, b) => a + b;")
        assert arrow.kind is NodeKind.ARROW_FUNCTION_EXPRESSION
        assert [p["name"] for p in arrow["params"]] == ["a", "b"]
        assert arrow["body"].kind is NodeKind.BINARY_EXPRESSION

    def test_parentheses_are_transparent(self):
        assert self.expression("(a);").kind is NodeKind.IDENTIFIER


@pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
class TestModules:
    """Test import/export mapping."""

    def test_import(self):
        declaration = parse_javascript("import a, { b as c } from 'mod';")["body"][0]
        assert declaration.kind is NodeKind.IMPORT_DECLARATION
        assert declaration["source"]["value"] == "mod"
        assert [s.kind for s in declaration["specifiers"]] == [
            NodeKind.IMPORT_DEFAULT_SPECIFIER,
            NodeKind.IMPORT_SPECIFIER,
        ]

    def test_export_named_declaration(self):
        export = parse_javascript("export function f() {}")["body"][0]
        assert export.kind is NodeKind.EXPORT_NAMED_DECLARATION
        assert export["declaration"].kind is NodeKind.FUNCTION_DECLARATION

    def test_export_default_anonymous_class(self):
        export = parse_javascript("export default class { m() {} }")["body"][0]
        assert export.kind is NodeKind.EXPORT_DEFAULT_DECLARATION
        assert export["declaration"].kind is NodeKind.CLASS_DECLARATION

    def test_export_all(self):
        export = parse_javascript("export * from './x';")["body"][0]
        assert export.kind is NodeKind.EXPORT_ALL_DECLARATION
        assert export["source"]["value"] == "./x"


@pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
class TestParseErrors:
    """Invalid source raises ParsingError with a location."""

    def test_unbalanced_paren(self):
        with pytest.raises(ParsingError) as excinfo:
            parse_javascript("foo(;\n", "src/bad.js")
        error = excinfo.value
        assert error.filepath == Path("src/bad.js")
        assert error.language == "javascript"
        assert error.line == 1

    def test_error_on_later_line(self):
        with pytest.raises(ParsingError) as excinfo:
            parse_javascript("var a = 1;\nvar = ;\n")
        assert excinfo.value.line == 2


@pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
class TestKindFields:
    """Nodes whose ESTree shape has its own ``kind`` field."""

    def test_declaration_kinds(self):
        body = parse_javascript("var a = 1;\nlet b;\nconst c = 2;\n")["body"]
        assert [node["kind"] for node in body] == ["var", "let", "const"]
        assert all(node.kind is NodeKind.VARIABLE_DECLARATION for node in body)

    def test_for_of_declaration(self):
        loop = parse_javascript("for (const v of list) {}")["body"][0]
        assert loop["left"].kind is NodeKind.VARIABLE_DECLARATION
        assert loop["left"]["kind"] == "const"

    def test_object_properties(self):
        source = "x = {a: 1, b, c() {}, get d() { return 1; }};"
        properties = parse_javascript(source)["body"][0]["expression"]["right"]["properties"]
        assert [p.kind for p in properties] == [NodeKind.PROPERTY] * 4
        assert [p["kind"] for p in properties] == ["init", "init", "init", "get"]
        assert [p["method"] for p in properties] == [False, False, True, True]
        assert properties[1]["shorthand"] is True

    def test_object_pattern(self):
        declaration = parse_javascript("const {a, b: c} = o;")["body"][0]
        pattern = declaration["declarations"][0]["id"]
        assert pattern.kind is NodeKind.OBJECT_PATTERN
        assert [p["kind"] for p in pattern["properties"]] == ["init", "init"]

    def test_method_definitions(self):
        source = "class A { constructor() {} m() {} get v() { return 1; } static s() {} }"
        members = parse_javascript(source)["body"][0]["body"]["body"]
        assert [m.kind for m in members] == [NodeKind.METHOD_DEFINITION] * 4
        assert [m["kind"] for m in members] == ["constructor", "method", "get", "method"]
        assert [m["static"] for m in members] == [False, False, False, True]
        assert all(m["value"].kind is NodeKind.FUNCTION_EXPRESSION for m in members)


@pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
class TestStringLiterals:
    """String literal values are the cooked text."""

    def value(self, source):
        return parse_javascript(source)["body"][0]["expression"]["arguments"][0]["value"]

    def test_escaped_quote(self):
        assert self.value('require("a\\"b");') == 'a"b'

    def test_escapes(self):
        assert self.value("f('\\x41\\u0042\\u{43}\\n\\\\');") == "ABC\n\\"

    def test_raw_is_kept(self):
        literal = parse_javascript("f('a\\'b');")["body"][0]["expression"]["arguments"][0]
        assert literal["raw"] == "'a\\'b'"
        assert literal["value"] == "a'b"
