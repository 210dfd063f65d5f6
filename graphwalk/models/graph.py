from pydantic import BaseModel, Field


class Node(BaseModel):
    id: str
    label: str


class Edge(BaseModel):
    id: str
    source: str
    target: str
    weight: str = "1"  # free-form, never read by traversal
    undirected: bool = True


class GraphPayload(BaseModel):
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
