"""The graph "view": one store, one renderer handle, one animator.

All user-facing operations go through here so the ordering rules hold in
one place: in-flight playback is cancelled before the store changes and
before the renderer is resynced, and a rejected edge changes nothing.
"""

from __future__ import annotations

import logging

from graphwalk.errors import InvalidEdgeEndpointError
from graphwalk.models.graph import Edge, GraphPayload, Node
from graphwalk.models.traversal import NO_OUTPUT, TraversalKind, TraversalResult, ViewPayload
from graphwalk.services.animator import PlaybackAnimator
from graphwalk.services.graph_store import GraphStore
from graphwalk.services.renderer import GraphRenderer
from graphwalk.services.traversal import run_traversal

logger = logging.getLogger(__name__)


class GraphSession:
    def __init__(
        self,
        renderer: GraphRenderer,
        store: GraphStore | None = None,
        animator: PlaybackAnimator | None = None,
    ) -> None:
        self.renderer = renderer
        self.store = store or GraphStore()
        self.animator = animator or PlaybackAnimator()
        self.last_log = NO_OUTPUT

    def open(self, container: str) -> None:
        self.renderer.initialize(container)
        self.renderer.sync_graph(self.store.nodes, self.store.edges)

    def close(self) -> None:
        self.animator.cancel()
        self.renderer.teardown()

    async def aclose(self) -> None:
        self.close()
        await self.animator.wait()

    def __enter__(self) -> GraphSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def graph(self) -> GraphPayload:
        return self.store.snapshot()

    def add_node(self) -> Node:
        self.animator.cancel()
        node = self.store.add_node()
        self._resync()
        return node

    def add_edge(self, u: str, v: str, weight: str = "1") -> Edge:
        # A rejected edge leaves everything alone, playback included.
        if not (self.store.has_node(u) and self.store.has_node(v)):
            logger.warning("Rejected edge %s -- %s: endpoint missing", u, v)
            raise InvalidEdgeEndpointError(u, v)
        self.animator.cancel()
        edge = self.store.add_edge(u, v, weight)
        self._resync()
        return edge

    def run_traversal(self, kind: TraversalKind, start: object) -> TraversalResult:
        # play() supersedes the running playback, or raises with nothing changed.
        result = run_traversal(kind, start, self.store.nodes, self.store.edges)
        self.animator.play(result.order, self.renderer)
        self.last_log = result.log
        return result

    def view(self) -> ViewPayload:
        return ViewPayload(
            **self.renderer.snapshot(),
            playback=self.animator.status,
            log=self.last_log,
        )

    def _resync(self) -> None:
        self.renderer.sync_graph(self.store.nodes, self.store.edges)
