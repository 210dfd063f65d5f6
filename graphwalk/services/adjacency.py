from typing import Iterable

from graphwalk.models.graph import Edge, Node

AdjacencyMapping = dict[str, list[str]]


def build_adjacency(nodes: Iterable[Node], edges: Iterable[Edge]) -> AdjacencyMapping:
    """Derive the undirected neighbor lists for the given snapshot.

    Every edge counts in both directions whatever its ``undirected`` flag
    says. Neighbor order follows edge insertion order; parallel edges show
    up as repeated neighbors.
    """
    adjacency: AdjacencyMapping = {node.id: [] for node in nodes}
    for edge in edges:
        adjacency.setdefault(edge.source, []).append(edge.target)
        adjacency.setdefault(edge.target, []).append(edge.source)
    return adjacency
