from __future__ import annotations

import pytest

from errors import (
    DuplicateModuleError,
    GraphError,
    InvalidEdgeError,
    InvalidLayerError,
    InvalidModuleNameError,
    ModuleNameCollisionError,
    UnknownModuleError,
)
from graph.model import Layer, ModuleGraph


def test_add_module_records_layer() -> None:
    graph = ModuleGraph()
    graph.add_module("Domain.Order", Layer.DOMAIN)

    assert "Domain.Order" in graph
    assert graph.layer_of("Domain.Order") is Layer.DOMAIN
    assert graph.module_count == 1


def test_add_module_accepts_layer_value_strings() -> None:
    graph = ModuleGraph()
    graph.add_module("App.PlaceOrder", "Application")

    assert graph.layer_of("App.PlaceOrder") is Layer.APPLICATION


def test_add_module_same_layer_twice_is_idempotent() -> None:
    once = ModuleGraph()
    once.add_module("X", Layer.DOMAIN)

    twice = ModuleGraph()
    twice.add_module("X", Layer.DOMAIN)
    twice.add_module("X", Layer.DOMAIN)

    assert twice.modules() == once.modules() == ["X"]
    assert twice.layer_of("X") is once.layer_of("X")


def test_add_module_with_different_layer_raises_and_keeps_original() -> None:
    graph = ModuleGraph()
    graph.add_module("X", Layer.DOMAIN)

    with pytest.raises(DuplicateModuleError) as exc_info:
        graph.add_module("X", Layer.APPLICATION)

    assert exc_info.value.name == "X"
    assert "X" in str(exc_info.value)
    assert graph.layer_of("X") is Layer.DOMAIN


@pytest.mark.parametrize("name", ["", None, 3])
def test_add_module_rejects_invalid_names(name: object) -> None:
    graph = ModuleGraph()

    with pytest.raises(InvalidModuleNameError):
        graph.add_module(name, Layer.DOMAIN)  # type: ignore[arg-type]

    assert graph.module_count == 0


def test_add_module_rejects_unknown_layer_value() -> None:
    graph = ModuleGraph()

    with pytest.raises(InvalidLayerError) as exc_info:
        graph.add_module("X", "domain")

    assert str(exc_info.value) == "Invalid layer 'domain' for module 'X'"

    assert exc_info.value.name == "X"
    assert exc_info.value.layer == "domain"
    assert graph.module_count == 0


def test_reassign_layer_rejects_unknown_layer_value() -> None:
    graph = ModuleGraph()
    graph.add_module("X", Layer.DOMAIN)

    with pytest.raises(InvalidLayerError):
        graph.reassign_layer("X", "Presentation")

    assert graph.layer_of("X") is Layer.DOMAIN


def test_add_dependency_requires_known_modules() -> None:
    graph = ModuleGraph()

    with pytest.raises(UnknownModuleError) as exc_info:
        graph.add_dependency("X", "Y")

    assert exc_info.value.name == "X"
    assert graph.edge_count == 0


def test_add_dependency_reports_missing_target() -> None:
    graph = ModuleGraph()
    graph.add_module("X", Layer.DOMAIN)

    with pytest.raises(UnknownModuleError) as exc_info:
        graph.add_dependency("X", "Y")

    assert exc_info.value.name == "Y"
    assert graph.edge_count == 0


def test_add_dependency_rejects_self_edge() -> None:
    graph = ModuleGraph()
    graph.add_module("X", Layer.DOMAIN)

    with pytest.raises(InvalidEdgeError) as exc_info:
        graph.add_dependency("X", "X")

    assert (exc_info.value.from_module, exc_info.value.to_module) == ("X", "X")
    assert graph.edges() == []


def test_add_dependency_twice_is_idempotent() -> None:
    graph = ModuleGraph()
    graph.add_module("A", Layer.APPLICATION)
    graph.add_module("B", Layer.DOMAIN)

    graph.add_dependency("A", "B")
    graph.add_dependency("A", "B")

    assert graph.edges() == [("A", "B")]
    assert graph.edge_count == 1


def test_construction_errors_share_a_base_class() -> None:
    for error_type in (
        DuplicateModuleError,
        UnknownModuleError,
        InvalidEdgeError,
        InvalidLayerError,
        InvalidModuleNameError,
        ModuleNameCollisionError,
    ):
        assert issubclass(error_type, GraphError)


def test_remove_module_cascades_to_edges() -> None:
    graph = ModuleGraph()
    for name in ("A", "B", "C"):
        graph.add_module(name, Layer.APPLICATION)
    graph.add_dependency("A", "B")
    graph.add_dependency("B", "C")
    graph.add_dependency("C", "A")

    graph.remove_module("B")

    assert graph.modules() == ["A", "C"]
    assert graph.edges() == [("C", "A")]
    assert graph.adjacency() == {"A": set(), "C": {"A"}}


def test_remove_unknown_module_is_noop() -> None:
    graph = ModuleGraph()
    graph.add_module("A", Layer.DOMAIN)

    graph.remove_module("missing")

    assert graph.modules() == ["A"]


def test_remove_dependency_leaves_modules() -> None:
    graph = ModuleGraph()
    graph.add_module("A", Layer.APPLICATION)
    graph.add_module("B", Layer.DOMAIN)
    graph.add_dependency("A", "B")

    graph.remove_dependency("A", "B")
    graph.remove_dependency("A", "B")

    assert graph.edges() == []
    assert graph.modules() == ["A", "B"]
    assert not graph.has_dependency("A", "B")


def test_reassign_layer_is_explicit_and_keeps_edges() -> None:
    graph = ModuleGraph()
    graph.add_module("A", Layer.UNCLASSIFIED)
    graph.add_module("B", Layer.DOMAIN)
    graph.add_dependency("A", "B")

    graph.reassign_layer("A", Layer.APPLICATION)

    assert graph.layer_of("A") is Layer.APPLICATION
    assert graph.edges() == [("A", "B")]

    with pytest.raises(UnknownModuleError):
        graph.reassign_layer("missing", Layer.DOMAIN)


def test_layer_of_unknown_module_raises() -> None:
    with pytest.raises(UnknownModuleError):
        ModuleGraph().layer_of("missing")


def test_adjacency_is_a_copy() -> None:
    graph = ModuleGraph()
    graph.add_module("A", Layer.APPLICATION)
    graph.add_module("B", Layer.DOMAIN)
    graph.add_dependency("A", "B")

    adjacency = graph.adjacency()
    adjacency["A"].clear()

    assert graph.edges() == [("A", "B")]
