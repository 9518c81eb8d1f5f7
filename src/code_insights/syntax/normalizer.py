"""Rewrites modern syntax into forms the complexity walker can measure.

The walker only enters ES5 node kinds, so four constructs are rewritten:

    export <declaration>         ->  <declaration>
    import x from "mod"          ->  require("mod")
    (a) => expr                  ->  function (a) { return expr; }
    class A { m() {} f = () => 0 }  ->  [function m() {}, function f() { return 0; }]

``export * from "mod"`` is left in place; the walker does not enter it.

Handlers are registered per ``NodeKind``. After a handler replaces a node
the lookup runs again on the replacement (``export default class`` is
rewritten twice), then the walk descends into the final node's children.
The input tree is never mutated; ``normalize`` works on a deep copy.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from ..exceptions import ParsingError
from ..logging_config import get_logger
from .builder import parse_javascript
from .nodes import Node, NodeKind, build, identifier
from .treesitter_parser import LANGUAGE, TreeSitterParser

logger = get_logger(__name__)

# A handler returns the replacement, the node itself when nothing changes,
# or None to drop the node from its parent.
Handler = Callable[[Node], Optional[Node]]

_HANDLERS: dict[NodeKind, Handler] = {}


def rewrites(kind: NodeKind) -> Callable[[Handler], Handler]:
    """Register a rewrite handler for one node kind."""

    def decorator(func: Handler) -> Handler:
        _HANDLERS[kind] = func
        return func

    return decorator


def require_call(source: Optional[Node], like: Node) -> Node:
    """``require(<source>)`` carrying the location of ``like``."""
    return build(
        NodeKind.CALL_EXPRESSION,
        like.loc,
        callee=identifier("require", like.loc),
        arguments=[source] if source is not None else [],
        optional=False,
    )


def as_function_expression(func: Node, name: Optional[Node], like: Node) -> Node:
    """A ``FunctionExpression`` with ``func``'s params and body.

    Arrow functions with an expression body get a ``{ return <expr>; }``
    block whose nodes carry the expression's location.
    """
    body = func.get("body")
    if func.kind is NodeKind.ARROW_FUNCTION_EXPRESSION and body is not None and (
        body.kind is not NodeKind.BLOCK_STATEMENT
    ):
        body = build(
            NodeKind.BLOCK_STATEMENT,
            body.loc,
            body=[build(NodeKind.RETURN_STATEMENT, body.loc, argument=body)],
        )
    return build(
        NodeKind.FUNCTION_EXPRESSION,
        like.loc,
        id=name,
        params=list(func.get("params") or []),
        body=body,
        generator=bool(func.get("generator")),
        **{"async": bool(func.get("async"))},
    )


@rewrites(NodeKind.EXPORT_DEFAULT_DECLARATION)
def _export_default(node: Node) -> Optional[Node]:
    return node.get("declaration")


@rewrites(NodeKind.EXPORT_NAMED_DECLARATION)
def _export_named(node: Node) -> Optional[Node]:
    # export { a } and export { a } from "x" carry no declaration and are dropped
    return node.get("declaration")


@rewrites(NodeKind.IMPORT_DECLARATION)
def _import(node: Node) -> Optional[Node]:
    return require_call(node.get("source"), node)


@rewrites(NodeKind.ARROW_FUNCTION_EXPRESSION)
def _arrow(node: Node) -> Optional[Node]:
    return as_function_expression(node, None, node)


@rewrites(NodeKind.CLASS_DECLARATION)
def _class(node: Node) -> Optional[Node]:
    class_body = node.get("body")
    members = class_body.get("body", []) if class_body is not None else []

    methods = [
        as_function_expression(m["value"], m.get("key"), m)
        for m in members
        if m.kind is NodeKind.METHOD_DEFINITION and m.get("value") is not None
    ]
    arrow_properties = [
        as_function_expression(p["value"], p.get("key"), p)
        for p in members
        if p.kind is NodeKind.CLASS_PROPERTY
        and p.get("value") is not None
        and p["value"].kind is NodeKind.ARROW_FUNCTION_EXPRESSION
    ]
    return build(NodeKind.ARRAY_EXPRESSION, node.loc, elements=methods + arrow_properties)


class Normalizer:
    """Generic kind-dispatched rewrite walk."""

    def __init__(self, handlers: Optional[dict[NodeKind, Handler]] = None):
        self.handlers = dict(_HANDLERS if handlers is None else handlers)
        self.rewritten = 0

    def normalize(self, tree: Node) -> Node:
        result = self._visit(tree.clone())
        if result is None:
            # Only reachable when a custom handler drops the root
            return build(NodeKind.PROGRAM, tree.loc, body=[], sourceType="module")
        return result

    def _visit(self, node: Node) -> Optional[Node]:
        current: Optional[Node] = node
        while current is not None:
            handler = self.handlers.get(current.kind)
            if handler is None:
                break
            replacement = handler(current)
            if replacement is current:
                break
            self.rewritten += 1
            current = replacement

        if current is not None:
            self._descend(current)
        return current

    def _descend(self, node: Node) -> None:
        for name, value in list(node.child_fields()):
            if isinstance(value, Node):
                node[name] = self._visit(value)
            else:
                kept = []
                for item in value:
                    if not isinstance(item, Node):
                        kept.append(item)
                        continue
                    replaced = self._visit(item)
                    if replaced is not None:
                        kept.append(replaced)
                node[name] = kept


def normalize(tree: Node) -> Node:
    """Return a rewritten copy of ``tree``; the input is left untouched."""
    normalizer = Normalizer()
    result = normalizer.normalize(tree)
    logger.debug(f"Normalization applied {normalizer.rewritten} rewrites")
    return result


def parse_for_complexity(
    content: str, path: str = "<source>", parser: Optional[TreeSitterParser] = None
) -> Node:
    """Parse JavaScript and normalize it for the complexity walker.

    Raises:
        ParsingError: If the source is not valid JavaScript
    """
    tree = parse_javascript(content, path, parser)
    try:
        result = normalize(tree)
    except RecursionError:
        raise ParsingError(Path(path), LANGUAGE, "syntax nested too deeply to analyze")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Normalized syntax tree for {path}: {result.to_dict()['body']}")
    return result
