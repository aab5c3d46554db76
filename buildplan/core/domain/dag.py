"""
L1 Domain — DAG utilities (pure).

Graphs are plain ``dict[str, list[str]]`` mappings from a node to the
nodes it depends on. Edges to nodes that are not keys of the mapping
are ignored; referential integrity is checked elsewhere.
No I/O.
"""

from __future__ import annotations

import heapq


def find_cycles(graph: dict[str, list[str]]) -> list[list[str]]:
    """Find dependency cycles with a depth-first traversal.

    Roots are visited in ascending name order and edges in declaration
    order. A node reached again while it is still on the recursion
    stack closes a cycle; the cycle is the stack slice from that node.
    Each distinct cycle is reported once, rotated so the smallest name
    comes first.

    Args:
        graph: Node → dependencies.

    Returns:
        List of cycles (empty = acyclic).
    """
    cycles: list[list[str]] = []
    seen_cycles: set[tuple[str, ...]] = set()
    visited: set[str] = set()

    for root in sorted(graph):
        if root in visited:
            continue

        # Iterative DFS: (node, iterator over its deps)
        stack: list[str] = [root]
        on_stack: set[str] = {root}
        iters = [iter(graph[root])]
        visited.add(root)

        while iters:
            dep = next(iters[-1], None)
            if dep is None:
                iters.pop()
                on_stack.discard(stack.pop())
                continue
            if dep not in graph:
                continue
            if dep in on_stack:
                cycle = stack[stack.index(dep):]
                key = _normalize_cycle(cycle)
                if key not in seen_cycles:
                    seen_cycles.add(key)
                    cycles.append(list(key))
                continue
            if dep in visited:
                continue
            visited.add(dep)
            stack.append(dep)
            on_stack.add(dep)
            iters.append(iter(graph[dep]))

    return cycles


def _normalize_cycle(cycle: list[str]) -> tuple[str, ...]:
    """Rotate a cycle so it starts at its smallest node."""
    pivot = cycle.index(min(cycle))
    return tuple(cycle[pivot:] + cycle[:pivot])


def topological_order(graph: dict[str, list[str]]) -> tuple[list[str], list[str]]:
    """Order nodes so every dependency precedes its dependents (Kahn's algorithm).

    Zero in-degree nodes are removed repeatedly; ties are broken by
    ascending name so the order is deterministic.

    Args:
        graph: Node → dependencies.

    Returns:
        ``(order, leftover)`` where ``leftover`` holds the nodes that
        could not be placed because they sit on or behind a cycle.
    """
    in_degree: dict[str, int] = {node: 0 for node in graph}
    # Build adjacency: dep → nodes that depend on it
    dependents: dict[str, list[str]] = {node: [] for node in graph}
    for node, deps in graph.items():
        for dep in set(deps):
            if dep not in graph:
                continue
            in_degree[node] += 1
            dependents[dep].append(node)

    ready = [node for node, deg in in_degree.items() if deg == 0]
    heapq.heapify(ready)
    order: list[str] = []

    while ready:
        node = heapq.heappop(ready)
        order.append(node)
        for successor in dependents[node]:
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                heapq.heappush(ready, successor)

    placed = set(order)
    leftover = sorted(node for node in graph if node not in placed)
    return order, leftover
