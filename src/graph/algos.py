"""Graph algorithms for the module import graph."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def build_dependency_graph(
    edges: Iterable[tuple[str, str, int]],
) -> dict[str, set[str]]:
    """Build an adjacency map from ``(source, target, line)`` edges.

    Every endpoint appears as a key, so sinks map to an empty set.
    """
    graph: dict[str, set[str]] = defaultdict(set)
    for source, target, _line in edges:
        graph[source].add(target)
        graph.setdefault(target, set())
    return dict(graph)


class _TarjanState:
    """Mutable state container for Tarjan's SCC algorithm."""

    def __init__(self) -> None:
        self.index = 0
        self.indices: dict[str, int] = {}
        self.low_link: dict[str, int] = {}
        self.on_stack: set[str] = set()
        self.stack: list[str] = []
        self.sccs: list[list[str]] = []


def _pop_component(state: _TarjanState, root: str) -> list[str]:
    component: list[str] = []
    while True:
        node = state.stack.pop()
        state.on_stack.discard(node)
        component.append(node)
        if node == root:
            return component


def _strongconnect(node: str, graph: dict[str, set[str]], state: _TarjanState) -> None:
    state.indices[node] = state.low_link[node] = state.index
    state.index += 1
    state.stack.append(node)
    state.on_stack.add(node)

    for neighbor in sorted(graph.get(node, ())):
        if neighbor not in state.indices:
            _strongconnect(neighbor, graph, state)
            state.low_link[node] = min(state.low_link[node], state.low_link[neighbor])
        elif neighbor in state.on_stack:
            state.low_link[node] = min(state.low_link[node], state.indices[neighbor])

    if state.low_link[node] == state.indices[node]:
        component = _pop_component(state, node)
        if len(component) > 1 or node in graph.get(node, ()):
            state.sccs.append(sorted(component))


def find_cycles(graph: dict[str, set[str]]) -> list[list[str]]:
    """Find import cycles using Tarjan's algorithm.

    Returns:
        Strongly connected components with more than one module (or a
        self-loop). Each component is sorted and the list itself is
        sorted, so the result does not depend on dict ordering.
    """
    state = _TarjanState()

    for node in sorted(graph):
        if node not in state.indices:
            _strongconnect(node, graph, state)

    return sorted(state.sccs)


__all__ = ["build_dependency_graph", "find_cycles"]
