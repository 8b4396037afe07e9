"""Module dependency graph and graph algorithms."""

from graph.algos import find_cycle_edges, find_cycles, shortest_path
from graph.model import Edge, Layer, ModuleGraph

__all__ = [
    "Edge",
    "Layer",
    "ModuleGraph",
    "find_cycle_edges",
    "find_cycles",
    "shortest_path",
]
