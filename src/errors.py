"""Error taxonomy for layercheck.

Construction errors are raised by ``ModuleGraph`` mutations and leave the
graph unchanged. Configuration errors are raised before any traversal.
Violations are never exceptions; they are returned in a report.
"""

from __future__ import annotations


class LayerCheckError(Exception):
    """Base class for every error raised by layercheck."""


class GraphError(LayerCheckError):
    """Raised when a graph mutation is rejected."""


class InvalidModuleNameError(GraphError):
    """Raised when a module name is empty or not a string."""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Invalid module name: {name!r}")


class InvalidLayerError(GraphError):
    """Raised when a module is tagged with a value that is not a layer."""

    def __init__(self, name: str, layer: object) -> None:
        self.name = name
        self.layer = layer
        super().__init__(f"Invalid layer {layer!r} for module '{name}'")


class ModuleNameCollisionError(GraphError):
    """Raised when two scanned source files map to the same module name."""

    def __init__(self, name: str, first_path: str, second_path: str) -> None:
        self.name = name
        self.first_path = first_path
        self.second_path = second_path
        super().__init__(
            f"Module '{name}' is defined by both {first_path} and {second_path}"
        )


class DuplicateModuleError(GraphError):
    """Raised when a module is re-added with a different layer."""

    def __init__(self, name: str, existing_layer: str, requested_layer: str) -> None:
        self.name = name
        self.existing_layer = existing_layer
        self.requested_layer = requested_layer
        super().__init__(
            f"Module '{name}' already exists with layer {existing_layer}; "
            f"cannot re-add it with layer {requested_layer}"
        )


class UnknownModuleError(GraphError):
    """Raised when an operation references a module that was never added."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown module '{name}'")


class InvalidEdgeError(GraphError):
    """Raised when a dependency edge is structurally invalid (self-edge)."""

    def __init__(self, from_module: str, to_module: str) -> None:
        self.from_module = from_module
        self.to_module = to_module
        super().__init__(
            f"Invalid dependency '{from_module}' -> '{to_module}': "
            "a module cannot depend on itself"
        )


class InvalidRuleSetError(LayerCheckError):
    """Raised when a rule set is empty or references an unknown rule."""

    def __init__(self, message: str, rule_name: str | None = None) -> None:
        self.rule_name = rule_name
        super().__init__(message)


__all__ = [
    "DuplicateModuleError",
    "GraphError",
    "InvalidEdgeError",
    "InvalidLayerError",
    "InvalidModuleNameError",
    "InvalidRuleSetError",
    "LayerCheckError",
    "ModuleNameCollisionError",
    "UnknownModuleError",
]
