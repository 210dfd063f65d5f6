from enum import Enum

from pydantic import BaseModel, Field

from graphwalk.models.graph import Edge, Node

NO_OUTPUT = "No output yet"


class TraversalKind(str, Enum):
    DFS = "dfs"
    BFS = "bfs"


class VisualState(str, Enum):
    NONE = "none"
    FRONTIER = "frontier"
    VISITED = "visited"


class PlaybackStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    CANCELLED = "cancelled"
    FINISHED = "finished"


class TraversalResult(BaseModel):
    kind: TraversalKind
    start: str
    order: list[str]
    log: str


class ViewPayload(BaseModel):
    container: str | None = None
    layout: str
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    positions: dict[str, dict[str, float]] = Field(default_factory=dict)
    tags: dict[str, VisualState] = Field(default_factory=dict)
    playback: PlaybackStatus = PlaybackStatus.IDLE
    log: str = NO_OUTPUT
