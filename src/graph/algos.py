"""Graph algorithms over successor maps (``dict[str, set[str]]``)."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class _TarjanState:
    """Mutable state container for Tarjan's SCC algorithm."""

    def __init__(self) -> None:
        self.index = 0
        self.indices: dict[str, int] = {}
        self.low_link: dict[str, int] = {}
        self.on_stack: set[str] = set()
        self.stack: list[str] = []
        self.sccs: list[list[str]] = []


def _extract_scc(state: _TarjanState, root: str) -> list[str]:
    """Extract a strongly connected component from the stack."""
    scc: list[str] = []
    while state.stack:
        w = state.stack.pop()
        state.on_stack.remove(w)
        scc.append(w)
        if w == root:
            break
    if root not in scc:
        msg = (
            f"Tarjan algorithm invariant violated: root node {root!r} "
            "not found in stack during SCC extraction."
        )
        raise RuntimeError(msg)
    return scc


def _visit(node: str, graph: dict[str, set[str]], state: _TarjanState) -> Iterator[str]:
    """Number a node, push it on the SCC stack and return its neighbor iterator."""
    state.indices[node] = state.index
    state.low_link[node] = state.index
    state.index += 1
    state.stack.append(node)
    state.on_stack.add(node)
    return iter(sorted(graph.get(node, set())))


def _strongconnect(root: str, graph: dict[str, set[str]], state: _TarjanState) -> None:
    """Process a node in Tarjan's algorithm.

    The depth-first search keeps an explicit work stack of (node, pending
    neighbors) frames, so graph depth is not limited by the recursion limit.
    """
    work: list[tuple[str, Iterator[str]]] = [(root, _visit(root, graph, state))]

    while work:
        node, neighbors = work[-1]
        for neighbor in neighbors:
            if neighbor not in state.indices:
                work.append((neighbor, _visit(neighbor, graph, state)))
                break
            if neighbor in state.on_stack:
                state.low_link[node] = min(
                    state.low_link[node], state.indices[neighbor]
                )
        else:
            work.pop()
            if work:
                parent = work[-1][0]
                state.low_link[parent] = min(
                    state.low_link[parent], state.low_link[node]
                )
            if state.low_link[node] == state.indices[node]:
                scc = _extract_scc(state, node)
                if len(scc) > 1 or node in graph.get(node, set()):
                    state.sccs.append(scc)


def find_cycles(graph: dict[str, set[str]]) -> list[list[str]]:
    """Find cyclic strongly connected components using Tarjan's algorithm.

    Args:
        graph: Successor map of the directed graph

    Returns:
        Sorted list of cyclic components, each a sorted list of nodes
    """
    state = _TarjanState()

    for node in sorted(graph):
        if node not in state.indices:
            _strongconnect(node, graph, state)

    return sorted(sorted(scc) for scc in state.sccs)


def find_cycle_edges(graph: dict[str, set[str]]) -> list[tuple[str, str]]:
    """Return every edge that lies on at least one directed cycle.

    An edge ``(a, b)`` is on a cycle exactly when ``a`` and ``b`` belong to the
    same cyclic strongly connected component, so one Tarjan pass suffices.
    """
    component_of: dict[str, int] = {}
    for index, scc in enumerate(find_cycles(graph)):
        for node in scc:
            component_of[node] = index

    edges: list[tuple[str, str]] = []
    for source in sorted(graph):
        source_component = component_of.get(source)
        if source_component is None:
            continue
        for target in sorted(graph[source]):
            if component_of.get(target) == source_component:
                edges.append((source, target))
    return edges


def shortest_path(
    graph: dict[str, set[str]], source: str, target: str
) -> list[str] | None:
    """Breadth-first shortest path from ``source`` to ``target``.

    Neighbors are visited in sorted order so the returned path is
    deterministic. Returns None when ``target`` is unreachable.
    """
    if source == target:
        return [source]

    previous: dict[str, str] = {}
    seen = {source}
    queue: deque[str] = deque([source])
    while queue:
        node = queue.popleft()
        for neighbor in sorted(graph.get(node, set())):
            if neighbor in seen:
                continue
            previous[neighbor] = node
            if neighbor == target:
                path = [target]
                while path[-1] != source:
                    path.append(previous[path[-1]])
                return path[::-1]
            seen.add(neighbor)
            queue.append(neighbor)
    return None


__all__ = [
    "_TarjanState",
    "_extract_scc",
    "_strongconnect",
    "find_cycle_edges",
    "find_cycles",
    "shortest_path",
]
