"""Per-module complexity analysis.

The walker starts at the program body and only enters nodes whose kind has
a rule; for each entered node it records the rule's contributions into the
current function scope and into the module aggregate. Nested functions
count in their own scope (and the aggregate), never in the enclosing one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from ..exceptions import AggregationError
from ..logging_config import get_logger
from ..syntax.nodes import Node, NodeKind
from .metrics import calculate_halstead, cyclomatic_density, maintainability_index
from .models import FunctionReport, ModuleReport
from .rules import Rule, WalkerSettings, build_rules, children_of, safe_name

logger = get_logger(__name__)


def _function_report(name: str, node: Node, params: int) -> FunctionReport:
    if node.loc is not None:
        line = node.loc.start.line
        physical = node.loc.end.line - node.loc.start.line + 1
    else:
        line, physical = 0, 0
    return FunctionReport(name=name, line=line, sloc_physical=physical, params=params)


class ModuleAnalyser:
    """Walks one normalized syntax tree and builds its ModuleReport."""

    def __init__(self, settings: Optional[WalkerSettings] = None, new_mi: bool = False):
        self.settings = settings or WalkerSettings()
        self.new_mi = new_mi
        self.rules = build_rules(self.settings)

    def analyse(self, tree: Node, path: str = "") -> ModuleReport:
        if tree.kind is not NodeKind.PROGRAM or not isinstance(tree.get("body"), list):
            raise AggregationError(
                "invalid syntax tree: expected a Program with a body", Path(path) if path else None
            )

        self._report = ModuleReport(path=path, aggregate=_function_report("", tree, 0))
        self._scopes: list[FunctionReport] = []

        for node in tree["body"]:
            self._visit(node, "")

        self._calculate()
        return self._report

    # ── Walk ───────────────────────────────────────────────────

    @property
    def _current(self) -> Optional[FunctionReport]:
        return self._scopes[-1] if self._scopes else None

    def _visit(self, node: Any, assigned_name: str) -> None:
        if not isinstance(node, Node):
            return
        rule = self.rules.get(node.kind)
        if rule is None:
            return

        self._process(node, rule)

        if rule.new_scope:
            name = safe_name(node.get("id"), assigned_name)
            scope = _function_report(name, node, len(node.get("params") or []))
            self._report.functions.append(scope)
            self._scopes.append(scope)

        for child, child_name in children_of(node, rule):
            self._visit(child, child_name)

        if rule.new_scope:
            self._scopes.pop()

    def _process(self, node: Node, rule: Rule) -> None:
        targets = [self._report.aggregate]
        if self._current is not None:
            targets.append(self._current)

        lloc = rule.amount("lloc", node)
        cyclomatic = rule.amount("cyclomatic", node)
        operators = [i for i in (item.resolve(node) for item in rule.operators) if i is not None]
        operands = [i for i in (item.resolve(node) for item in rule.operands) if i is not None]

        for target in targets:
            target.sloc_logical += lloc
            target.cyclomatic += cyclomatic
            for identifier in operators:
                target.halstead.operators.add(identifier)
            for identifier in operands:
                target.halstead.operands.add(identifier)

        if rule.dependencies is not None:
            self._report.dependencies.extend(rule.dependencies(node))

    # ── Metrics ────────────────────────────────────────────────

    def _calculate(self) -> None:
        report = self._report
        functions = report.functions

        for function in functions:
            function.cyclomatic_density = cyclomatic_density(function)
            calculate_halstead(function.halstead)
        report.aggregate.cyclomatic_density = cyclomatic_density(report.aggregate)
        calculate_halstead(report.aggregate.halstead)

        # Modules without functions are measured as a whole
        measured = functions or [report.aggregate]
        count = len(measured)

        report.loc = sum(f.sloc_logical for f in measured) / count
        report.cyclomatic = sum(f.cyclomatic for f in measured) / count
        report.effort = sum(f.halstead.effort for f in measured) / count
        report.params = sum(f.params for f in measured) / count

        report.maintainability = maintainability_index(
            report.effort, report.cyclomatic, report.loc, new_mi=self.new_mi
        )
        logger.debug(
            f"{report.path or '<module>'}: mi={report.maintainability:.1f} "
            f"functions={len(functions)} dependencies={len(report.dependencies)}"
        )


def analyse_module(
    tree: Node,
    path: str = "",
    settings: Optional[WalkerSettings] = None,
    new_mi: bool = False,
) -> ModuleReport:
    """Analyse one normalized syntax tree.

    Raises:
        AggregationError: If the tree is not a Program node
    """
    return ModuleAnalyser(settings, new_mi=new_mi).analyse(tree, path)
