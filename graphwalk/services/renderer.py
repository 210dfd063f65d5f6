"""Server-side rendering collaborator.

Mirrors what the canvas shows: the element set, a force-directed layout and
the per-node visual-state tags. Every change is published to subscriber
queues, which the events route streams to the browser.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Protocol

import networkx as nx

from graphwalk.config import settings
from graphwalk.errors import RendererNotInitializedError
from graphwalk.models.graph import Edge, Node
from graphwalk.models.traversal import VisualState

logger = logging.getLogger(__name__)


class VisualStateSink(Protocol):
    def set_visual_state(self, node_id: str, tag: VisualState) -> None: ...

    def clear_all_visual_state(self) -> None: ...


def compute_layout(nodes: Iterable[Node], edges: Iterable[Edge]) -> dict[str, dict[str, float]]:
    graph = nx.Graph()
    graph.add_nodes_from(node.id for node in nodes)
    graph.add_edges_from((edge.source, edge.target) for edge in edges)
    if graph.number_of_nodes() == 0:
        return {}

    pos = nx.spring_layout(
        graph,
        seed=settings.LAYOUT_SEED,
        iterations=settings.LAYOUT_ITERATIONS,
        weight=None,
    )
    return {
        node_id: {"x": round(float(xy[0]), 4), "y": round(float(xy[1]), 4)}
        for node_id, xy in pos.items()
    }


class GraphRenderer:
    def __init__(self, queue_size: int | None = None) -> None:
        self._queue_size = queue_size or settings.SUBSCRIBER_QUEUE_SIZE
        self._container: str | None = None
        self._nodes: list[Node] = []
        self._edges: list[Edge] = []
        self._positions: dict[str, dict[str, float]] = {}
        self._tags: dict[str, VisualState] = {}
        self._subscribers: set[asyncio.Queue] = set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._container is not None

    @property
    def container(self) -> str | None:
        return self._container

    def initialize(self, container: str) -> None:
        self._container = container
        logger.info("Renderer attached to container %r", container)

    def teardown(self) -> None:
        if self._container is None:
            return
        for queue in list(self._subscribers):
            self._close(queue)
        self._subscribers.clear()
        self._nodes, self._edges = [], []
        self._positions.clear()
        self._tags.clear()
        logger.info("Renderer detached from container %r", self._container)
        self._container = None

    def __enter__(self) -> GraphRenderer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.teardown()

    def _require_initialized(self) -> None:
        if self._container is None:
            raise RendererNotInitializedError("Renderer used outside initialize()/teardown()")

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def sync_graph(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        self._require_initialized()
        self._nodes = list(nodes)
        self._edges = list(edges)
        self._tags.clear()
        self._positions = compute_layout(self._nodes, self._edges)
        logger.info(
            "Synced %d nodes / %d edges (layout=%s)",
            len(self._nodes),
            len(self._edges),
            settings.LAYOUT_NAME,
        )
        self._publish(
            "sync",
            {
                "layout": settings.LAYOUT_NAME,
                "nodes": [n.model_dump() for n in self._nodes],
                "edges": [e.model_dump() for e in self._edges],
                "positions": self._positions,
            },
        )

    # ------------------------------------------------------------------
    # Visual state
    # ------------------------------------------------------------------

    def set_visual_state(self, node_id: str, tag: VisualState) -> None:
        self._require_initialized()
        if tag is VisualState.NONE:
            self._tags.pop(node_id, None)
        else:
            self._tags[node_id] = tag
        self._publish("state", {"node_id": node_id, "tag": tag.value})

    def clear_all_visual_state(self) -> None:
        self._require_initialized()
        self._tags.clear()
        self._publish("clear", {})

    def visual_state(self, node_id: str) -> VisualState:
        return self._tags.get(node_id, VisualState.NONE)

    @property
    def tags(self) -> dict[str, VisualState]:
        return dict(self._tags)

    def snapshot(self) -> dict:
        return {
            "container": self._container,
            "layout": settings.LAYOUT_NAME,
            "nodes": [n.model_dump() for n in self._nodes],
            "edges": [e.model_dump() for e in self._edges],
            "positions": dict(self._positions),
            "tags": dict(self._tags),
        }

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self) -> asyncio.Queue:
        self._require_initialized()
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    def _publish(self, event: str, payload: dict) -> None:
        for queue in list(self._subscribers):
            self._offer(queue, (event, payload))

    @staticmethod
    def _offer(queue: asyncio.Queue, item: tuple[str, dict]) -> None:
        try:
            queue.put_nowait(item)
        except asyncio.QueueFull:
            logger.warning("Subscriber queue full, dropping %s event", item[0])

    @staticmethod
    def _close(queue: asyncio.Queue) -> None:
        # None tells the stream consumer to stop; it must not be dropped.
        if queue.full():
            queue.get_nowait()
        queue.put_nowait(None)
