"""DFS / BFS visitation order over an undirected adjacency mapping."""

import logging
from collections import deque
from typing import Callable, Iterable, Iterator

from graphwalk.models.graph import Edge, Node
from graphwalk.models.traversal import TraversalKind, TraversalResult
from graphwalk.services.adjacency import AdjacencyMapping, build_adjacency

logger = logging.getLogger(__name__)


def dfs(start: str, adjacency: AdjacencyMapping) -> list[str]:
    """Pre-order depth-first visitation from *start*.

    Walks an explicit stack of neighbor iterators instead of recursing, which
    yields the same order as the recursive definition without depending on
    the interpreter's recursion limit. A start id with no adjacency entry is
    still visited, as a node without neighbors.
    """
    visited: set[str] = {start}
    order: list[str] = [start]
    stack: list[Iterator[str]] = [iter(adjacency.get(start, []))]

    while stack:
        for neighbor in stack[-1]:
            if neighbor not in visited:
                visited.add(neighbor)
                order.append(neighbor)
                stack.append(iter(adjacency.get(neighbor, [])))
                break
        else:
            stack.pop()

    return order


def bfs(start: str, adjacency: AdjacencyMapping) -> list[str]:
    """Level-order visitation from *start*.

    Nodes are marked on enqueue, so a node reachable from several frontier
    members is queued once.
    """
    visited: set[str] = {start}
    queue: deque[str] = deque([start])
    order: list[str] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        for neighbor in adjacency.get(node, []):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    return order


TRAVERSALS: dict[TraversalKind, Callable[[str, AdjacencyMapping], list[str]]] = {
    TraversalKind.DFS: dfs,
    TraversalKind.BFS: bfs,
}


def format_order(kind: TraversalKind, order: list[str]) -> str:
    return f"{kind.value.upper()}: " + " -> ".join(order)


def run_traversal(
    kind: TraversalKind,
    start: object,
    nodes: Iterable[Node],
    edges: Iterable[Edge],
) -> TraversalResult:
    start_id = str(start)
    adjacency = build_adjacency(nodes, edges)
    if start_id not in adjacency:
        logger.info("Start node %s is not in the graph; visiting it alone", start_id)

    order = TRAVERSALS[kind](start_id, adjacency)
    log = format_order(kind, order)
    logger.info("%s", log)
    return TraversalResult(kind=kind, start=start_id, order=order, log=log)
