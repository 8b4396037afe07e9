"""Layer rules and the ordered, toggleable rule set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from errors import InvalidRuleSetError
from graph.algos import find_cycle_edges, shortest_path
from graph.model import Layer

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from graph.model import Edge, ModuleGraph

    EdgePredicate = Callable[[Edge, Layer, Layer], bool]
    GraphEvaluator = Callable[[ModuleGraph], list[tuple[Edge, str]]]

OUTER_LAYERS = frozenset({Layer.INFRASTRUCTURE, Layer.BOOTSTRAP})


@dataclass(frozen=True)
class Rule:
    """A named layering rule.

    Edge rules are pure predicates of ``(edge, from_layer, to_layer)`` and
    return True when the edge violates the rule. Graph rules need the whole
    edge set and return the violating edges with an explanation each.
    """

    name: str
    description: str
    edge_predicate: EdgePredicate | None = None
    graph_evaluator: GraphEvaluator | None = None

    def __post_init__(self) -> None:
        if (self.edge_predicate is None) == (self.graph_evaluator is None):
            msg = f"Rule '{self.name}' needs exactly one of edge_predicate or graph_evaluator"
            raise ValueError(msg)

    @property
    def is_graph_rule(self) -> bool:
        return self.graph_evaluator is not None

    def violates(self, edge: Edge, from_layer: Layer, to_layer: Layer) -> bool:
        if self.edge_predicate is None:
            msg = f"Rule '{self.name}' is a graph rule and cannot check a single edge"
            raise TypeError(msg)
        return self.edge_predicate(edge, from_layer, to_layer)

    def explain(self, edge: Edge, from_layer: Layer, to_layer: Layer) -> str:
        from_module, to_module = edge
        return (
            f"{from_module} ({from_layer.value}) depends on "
            f"{to_module} ({to_layer.value}): {self.description}"
        )


def _cycle_violations(graph: ModuleGraph) -> list[tuple[Edge, str]]:
    adjacency = graph.adjacency()
    violations: list[tuple[Edge, str]] = []
    for from_module, to_module in find_cycle_edges(adjacency):
        # Both ends share a strongly connected component, so the path exists.
        path = shortest_path(adjacency, to_module, from_module) or [to_module]
        cycle = " -> ".join([from_module, *path])
        violations.append(
            ((from_module, to_module), f"dependency cycle: {cycle}")
        )
    return violations


DOMAIN_MUST_NOT_DEPEND_ON_APPLICATION = Rule(
    name="DomainMustNotDependOnApplication",
    description="the Domain layer must not depend on the Application layer",
    edge_predicate=lambda _edge, src, dst: (
        src is Layer.DOMAIN and dst is Layer.APPLICATION
    ),
)

DOMAIN_MUST_NOT_DEPEND_ON_INFRASTRUCTURE = Rule(
    name="DomainMustNotDependOnInfrastructure",
    description="the Domain layer must not depend on Infrastructure or Bootstrap",
    edge_predicate=lambda _edge, src, dst: (
        src is Layer.DOMAIN and dst in OUTER_LAYERS
    ),
)

APPLICATION_MUST_NOT_DEPEND_ON_INFRASTRUCTURE = Rule(
    name="ApplicationMustNotDependOnInfrastructure",
    description=(
        "the Application layer must not depend on Infrastructure or Bootstrap"
    ),
    edge_predicate=lambda _edge, src, dst: (
        src is Layer.APPLICATION and dst in OUTER_LAYERS
    ),
)

NO_LAYER_MAY_DEPEND_ON_BOOTSTRAP = Rule(
    name="NoLayerMayDependOnBootstrap",
    description="only Bootstrap modules may depend on Bootstrap modules",
    edge_predicate=lambda _edge, src, dst: (
        dst is Layer.BOOTSTRAP and src is not Layer.BOOTSTRAP
    ),
)

NO_CYCLIC_MODULE_DEPENDENCY = Rule(
    name="NoCyclicModuleDependency",
    description="module dependencies must not form a cycle",
    graph_evaluator=_cycle_violations,
)

BUILTIN_RULES: tuple[Rule, ...] = (
    DOMAIN_MUST_NOT_DEPEND_ON_APPLICATION,
    DOMAIN_MUST_NOT_DEPEND_ON_INFRASTRUCTURE,
    APPLICATION_MUST_NOT_DEPEND_ON_INFRASTRUCTURE,
    NO_LAYER_MAY_DEPEND_ON_BOOTSTRAP,
    NO_CYCLIC_MODULE_DEPENDENCY,
)

BUILTIN_RULE_NAMES: tuple[str, ...] = tuple(rule.name for rule in BUILTIN_RULES)


class RuleSet:
    """Ordered collection of rules, each independently enabled or disabled.

    Registration order only affects the order of ``rules()``; reports are
    sorted by the checker, so it never changes the outcome of a check.
    """

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: dict[str, Rule] = {}
        self._disabled: set[str] = set()
        for rule in rules:
            self.register(rule)

    @classmethod
    def default(cls) -> RuleSet:
        """Return a rule set with every built-in rule enabled."""
        return cls(BUILTIN_RULES)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> RuleSet:
        """Return the built-in rules, enabling only those in ``names``."""
        wanted = set(names)
        unknown = sorted(wanted - set(BUILTIN_RULE_NAMES))
        if unknown:
            msg = (
                f"Unknown rule '{unknown[0]}'. "
                f"Valid rules: {', '.join(BUILTIN_RULE_NAMES)}"
            )
            raise InvalidRuleSetError(msg, rule_name=unknown[0])

        rule_set = cls.default()
        for name in BUILTIN_RULE_NAMES:
            if name not in wanted:
                rule_set.disable(name)
        return rule_set

    def register(self, rule: Rule) -> None:
        if rule.name in self._rules:
            msg = f"Rule '{rule.name}' is already registered"
            raise InvalidRuleSetError(msg, rule_name=rule.name)
        self._rules[rule.name] = rule

    def enable(self, name: str) -> None:
        self._require(name)
        self._disabled.discard(name)

    def disable(self, name: str) -> None:
        self._require(name)
        self._disabled.add(name)

    def is_enabled(self, name: str) -> bool:
        self._require(name)
        return name not in self._disabled

    def rules(self) -> list[Rule]:
        return list(self._rules.values())

    def enabled_rules(self) -> list[Rule]:
        return [rule for rule in self._rules.values() if rule.name not in self._disabled]

    def names(self) -> list[str]:
        return list(self._rules)

    def _require(self, name: str) -> None:
        if name not in self._rules:
            msg = f"Unknown rule '{name}'"
            raise InvalidRuleSetError(msg, rule_name=name)

    def __len__(self) -> int:
        return len(self._rules)


__all__ = [
    "APPLICATION_MUST_NOT_DEPEND_ON_INFRASTRUCTURE",
    "BUILTIN_RULES",
    "BUILTIN_RULE_NAMES",
    "DOMAIN_MUST_NOT_DEPEND_ON_APPLICATION",
    "DOMAIN_MUST_NOT_DEPEND_ON_INFRASTRUCTURE",
    "NO_CYCLIC_MODULE_DEPENDENCY",
    "NO_LAYER_MAY_DEPEND_ON_BOOTSTRAP",
    "Rule",
    "RuleSet",
]
