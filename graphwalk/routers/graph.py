import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from graphwalk.errors import InvalidEdgeEndpointError
from graphwalk.models.graph import Edge, GraphPayload, Node
from graphwalk.models.request import AddEdgeRequest, TraversalRequest
from graphwalk.models.traversal import TraversalResult, ViewPayload
from graphwalk.services.session import GraphSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/graph", tags=["graph"])


def get_session(request: Request) -> GraphSession:
    return request.app.state.session


def _sse(event: str, payload: dict) -> str:
    return f"event: {event}\ndata: {json.dumps(payload, ensure_ascii=False)}\n\n"


@router.get("", response_model=GraphPayload)
async def get_graph(session: GraphSession = Depends(get_session)) -> GraphPayload:
    return session.graph()


@router.post("/nodes", response_model=Node)
async def add_node(session: GraphSession = Depends(get_session)) -> Node:
    return session.add_node()


@router.post("/edges", response_model=Edge)
async def add_edge(
    request: AddEdgeRequest, session: GraphSession = Depends(get_session)
) -> Edge:
    try:
        return session.add_edge(request.u, request.v, request.weight)
    except InvalidEdgeEndpointError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/traversal", response_model=TraversalResult)
async def run_traversal(
    request: TraversalRequest, session: GraphSession = Depends(get_session)
) -> TraversalResult:
    return session.run_traversal(request.kind, request.start)


@router.get("/view", response_model=ViewPayload)
async def get_view(session: GraphSession = Depends(get_session)) -> ViewPayload:
    return session.view()


async def _stream_events(session: GraphSession):
    queue = session.renderer.subscribe()
    try:
        view = session.view()
        yield _sse("sync", view.model_dump(mode="json", include={"layout", "nodes", "edges", "positions"}))
        for node_id, tag in view.tags.items():
            yield _sse("state", {"node_id": node_id, "tag": tag.value})

        while True:
            item = await queue.get()
            if item is None:
                return
            event, payload = item
            yield _sse(event, payload)
    finally:
        session.renderer.unsubscribe(queue)


@router.get("/events")
async def stream_events(session: GraphSession = Depends(get_session)) -> StreamingResponse:
    return StreamingResponse(
        _stream_events(session),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
