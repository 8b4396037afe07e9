"""Conformance checking of a module graph against a rule set."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from errors import InvalidRuleSetError
from report.models import Violation, ViolationReport

if TYPE_CHECKING:
    from graph.model import ModuleGraph
    from rules.layers import RuleSet

logger = logging.getLogger(__name__)


def check(graph: ModuleGraph, rule_set: RuleSet) -> ViolationReport:
    """Evaluate every enabled rule against the graph and return a report.

    Edge rules are tested against each edge once. Graph rules (the cycle
    rule) run once over the complete edge set. The graph is not modified.

    Raises:
        InvalidRuleSetError: If the rule set has no enabled rules.
    """
    enabled = rule_set.enabled_rules()
    if not enabled:
        msg = "Rule set has no enabled rules; nothing to check"
        raise InvalidRuleSetError(msg)

    edge_rules = [rule for rule in enabled if not rule.is_graph_rule]
    graph_rules = [rule for rule in enabled if rule.is_graph_rule]
    edges = graph.edges()

    logger.debug(
        "Checking %d modules, %d edges against %d edge rules and %d graph rules",
        graph.module_count,
        len(edges),
        len(edge_rules),
        len(graph_rules),
    )

    violations: list[Violation] = []

    for edge in edges:
        from_module, to_module = edge
        from_layer = graph.layer_of(from_module)
        to_layer = graph.layer_of(to_module)
        for rule in edge_rules:
            if rule.violates(edge, from_layer, to_layer):
                violations.append(
                    Violation(
                        rule=rule.name,
                        from_module=from_module,
                        to_module=to_module,
                        explanation=rule.explain(edge, from_layer, to_layer),
                    )
                )

    for rule in graph_rules:
        if rule.graph_evaluator is None:
            continue
        for (from_module, to_module), explanation in rule.graph_evaluator(graph):
            violations.append(
                Violation(
                    rule=rule.name,
                    from_module=from_module,
                    to_module=to_module,
                    explanation=explanation,
                )
            )

    report = ViolationReport.from_violations(violations)
    logger.debug("Check finished with %d violations", len(report))
    return report


__all__ = ["check"]
