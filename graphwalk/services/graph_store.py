"""In-memory node/edge store backing a single graph session."""

import logging

from graphwalk.errors import InvalidEdgeEndpointError
from graphwalk.models.graph import Edge, GraphPayload, Node

logger = logging.getLogger(__name__)


class GraphStore:
    """Append-only node and edge lists.

    Node ids come from a counter that only moves forward, so an id is never
    handed out twice. Edges are only accepted when both endpoints are
    already present, which keeps every stored edge anchored for its whole
    lifetime (nothing is ever deleted).
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._node_ids: set[str] = set()
        self._edges: list[Edge] = []
        self._next_node_id = 0

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes)

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._node_ids

    def add_node(self) -> Node:
        node_id = str(self._next_node_id)
        node = Node(id=node_id, label=node_id)
        self._nodes.append(node)
        self._node_ids.add(node_id)
        self._next_node_id += 1
        logger.info("Added node %s", node_id)
        return node

    def add_edge(self, u: str, v: str, weight: str = "1") -> Edge:
        if not self.has_node(u) or not self.has_node(v):
            raise InvalidEdgeEndpointError(u, v)

        edge = Edge(id=f"e{len(self._edges)}", source=u, target=v, weight=weight)
        self._edges.append(edge)
        logger.info("Added edge %s: %s -- %s (weight=%s)", edge.id, u, v, weight)
        return edge

    def snapshot(self) -> GraphPayload:
        return GraphPayload(nodes=self.nodes, edges=self.edges)
