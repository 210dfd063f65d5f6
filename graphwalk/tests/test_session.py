import asyncio

import pytest

from graphwalk.errors import InvalidEdgeEndpointError
from graphwalk.models.graph import Node
from graphwalk.models.traversal import NO_OUTPUT, PlaybackStatus, TraversalKind, VisualState
from graphwalk.routers.graph import _stream_events
from graphwalk.services.animator import PlaybackAnimator
from graphwalk.services.renderer import GraphRenderer
from graphwalk.services.session import GraphSession

F = VisualState.FRONTIER
V = VisualState.VISITED


def _session(step_delay: float = 0) -> GraphSession:
    session = GraphSession(GraphRenderer(), animator=PlaybackAnimator(step_delay=step_delay))
    session.open("cy")
    return session


def _build_small_graph(session: GraphSession) -> None:
    for _ in range(4):
        session.add_node()
    for u, v in [("0", "1"), ("0", "2"), ("1", "3")]:
        session.add_edge(u, v)


@pytest.mark.asyncio
async def test_dfs_playback_end_state():
    session = _session()
    _build_small_graph(session)

    result = session.run_traversal(TraversalKind.DFS, "0")
    await session.animator.wait()

    assert result.order == ["0", "1", "3", "2"]
    assert session.renderer.tags == {"0": V, "1": V, "3": V, "2": F}
    assert session.view().log == "DFS: 0 -> 1 -> 3 -> 2"
    assert session.view().playback is PlaybackStatus.FINISHED


@pytest.mark.asyncio
async def test_unknown_start_tags_only_itself():
    session = _session()
    _build_small_graph(session)

    result = session.run_traversal(TraversalKind.BFS, 99)

    assert result.order == ["99"]
    assert session.renderer.tags == {"99": F}


@pytest.mark.asyncio
async def test_second_traversal_leaves_no_tags_from_the_first():
    session = _session(step_delay=60)
    _build_small_graph(session)
    session.run_traversal(TraversalKind.BFS, "0")

    session.run_traversal(TraversalKind.DFS, "3")

    assert session.renderer.tags == {"3": F}
    await asyncio.sleep(0.01)
    assert session.renderer.tags == {"3": F}
    session.close()


@pytest.mark.asyncio
async def test_structural_change_cancels_playback():
    session = _session(step_delay=0.01)
    _build_small_graph(session)
    session.run_traversal(TraversalKind.BFS, "0")

    session.add_node()
    await asyncio.sleep(0.05)

    assert session.animator.status is PlaybackStatus.CANCELLED
    assert session.renderer.tags == {}
    assert len(session.renderer.snapshot()["nodes"]) == 5


@pytest.mark.asyncio
async def test_rejected_edge_keeps_playback_and_graph():
    session = _session(step_delay=60)
    _build_small_graph(session)
    session.run_traversal(TraversalKind.BFS, "0")
    before = session.graph()

    with pytest.raises(InvalidEdgeEndpointError):
        session.add_edge("0", "42")

    assert session.graph() == before
    assert session.animator.is_running
    assert session.renderer.tags == {"0": F}
    session.close()


def test_view_before_any_traversal():
    session = _session()

    view = session.view()

    assert view.log == NO_OUTPUT
    assert view.playback is PlaybackStatus.IDLE
    assert view.container == "cy"
    assert view.nodes == []


def test_close_releases_renderer():
    with _session() as session:
        session.add_node()

    assert not session.renderer.is_initialized


@pytest.mark.asyncio
async def test_event_stream_replays_view_then_follows_changes():
    session = _session(step_delay=60)
    stream = _stream_events(session)

    first = await stream.__anext__()
    assert first.startswith("event: sync\n")

    session.add_node()
    second = await stream.__anext__()
    assert second.startswith("event: sync\n")
    assert '"id": "0"' in second

    session.run_traversal(TraversalKind.DFS, "0")
    assert (await stream.__anext__()).startswith("event: clear\n")
    state = await stream.__anext__()
    assert state == 'event: state\ndata: {"node_id": "0", "tag": "frontier"}\n\n'

    session.close()
    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()


def test_traversal_without_event_loop_leaves_session_untouched():
    session = _session()
    _build_small_graph(session)

    with pytest.raises(RuntimeError):
        session.run_traversal(TraversalKind.BFS, "0")

    assert session.animator.status is PlaybackStatus.IDLE
    assert session.renderer.tags == {}
    assert session.last_log == NO_OUTPUT


def test_view_carries_typed_elements():
    session = _session()
    _build_small_graph(session)

    view = session.view()

    assert all(isinstance(n, Node) for n in view.nodes)
    assert [e.id for e in view.edges] == ["e0", "e1", "e2"]


@pytest.mark.asyncio
async def test_aclose_waits_for_cancelled_playback():
    session = _session(step_delay=60)
    _build_small_graph(session)
    session.run_traversal(TraversalKind.DFS, "0")
    task = session.animator._task

    await session.aclose()

    assert task.done()
    assert not session.renderer.is_initialized
