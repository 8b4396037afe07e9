"""Module dependency graph with layer tags."""

from __future__ import annotations

from enum import Enum

from errors import (
    DuplicateModuleError,
    InvalidEdgeError,
    InvalidLayerError,
    InvalidModuleNameError,
    UnknownModuleError,
)


class Layer(str, Enum):
    """Architectural layer assigned to a module."""

    DOMAIN = "Domain"
    APPLICATION = "Application"
    INFRASTRUCTURE = "Infrastructure"
    BOOTSTRAP = "Bootstrap"
    UNCLASSIFIED = "Unclassified"


Edge = tuple[str, str]


def _to_layer(name: str, layer: Layer | str) -> Layer:
    try:
        return Layer(layer)
    except ValueError:
        raise InvalidLayerError(name, layer) from None


class ModuleGraph:
    """Directed graph of modules and their dependency edges.

    Every mutation validates its input before touching state, so a rejected
    call leaves the graph exactly as it was. Edges have set semantics and a
    module owns the edges touching it: removing the module removes them.

    The graph is not thread-safe; do not mutate it while a check is running.
    """

    def __init__(self) -> None:
        self._layers: dict[str, Layer] = {}
        self._successors: dict[str, set[str]] = {}
        self._predecessors: dict[str, set[str]] = {}

    def add_module(self, name: str, layer: Layer | str) -> None:
        """Register a module; re-adding with the same layer is a no-op."""
        if not isinstance(name, str) or not name:
            raise InvalidModuleNameError(name)
        layer = _to_layer(name, layer)

        existing = self._layers.get(name)
        if existing is not None:
            if existing is not layer:
                raise DuplicateModuleError(name, existing.value, layer.value)
            return

        self._layers[name] = layer
        self._successors[name] = set()
        self._predecessors[name] = set()

    def reassign_layer(self, name: str, layer: Layer | str) -> None:
        """Move an existing module to another layer, keeping its edges."""
        if name not in self._layers:
            raise UnknownModuleError(name)
        self._layers[name] = _to_layer(name, layer)

    def remove_module(self, name: str) -> None:
        """Remove a module and every edge where it is an endpoint."""
        if name not in self._layers:
            return

        for target in self._successors.pop(name):
            self._predecessors[target].discard(name)
        for source in self._predecessors.pop(name):
            self._successors[source].discard(name)
        del self._layers[name]

    def add_dependency(self, from_module: str, to_module: str) -> None:
        """Record that ``from_module`` references ``to_module``."""
        for name in (from_module, to_module):
            if name not in self._layers:
                raise UnknownModuleError(name)
        if from_module == to_module:
            raise InvalidEdgeError(from_module, to_module)

        self._successors[from_module].add(to_module)
        self._predecessors[to_module].add(from_module)

    def remove_dependency(self, from_module: str, to_module: str) -> None:
        if to_module in self._successors.get(from_module, ()):
            self._successors[from_module].discard(to_module)
            self._predecessors[to_module].discard(from_module)

    def layer_of(self, name: str) -> Layer:
        try:
            return self._layers[name]
        except KeyError:
            raise UnknownModuleError(name) from None

    def has_dependency(self, from_module: str, to_module: str) -> bool:
        return to_module in self._successors.get(from_module, ())

    def modules(self) -> list[str]:
        """Return module names in sorted order."""
        return sorted(self._layers)

    def edges(self) -> list[Edge]:
        """Return all edges sorted by (from, to)."""
        return sorted(
            (source, target)
            for source, targets in self._successors.items()
            for target in targets
        )

    def adjacency(self) -> dict[str, set[str]]:
        """Return a copy of the successor map, including isolated modules."""
        return {name: set(targets) for name, targets in self._successors.items()}

    @property
    def module_count(self) -> int:
        return len(self._layers)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._successors.values())

    def __contains__(self, name: object) -> bool:
        return name in self._layers

    def __repr__(self) -> str:
        return (
            f"ModuleGraph(modules={self.module_count}, edges={self.edge_count})"
        )


__all__ = ["Edge", "Layer", "ModuleGraph"]
