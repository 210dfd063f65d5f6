class GraphError(Exception):
    """Base class for graph playground errors."""


class InvalidEdgeEndpointError(GraphError):
    def __init__(self, u: str, v: str):
        super().__init__("Both nodes must exist")
        self.u = u
        self.v = v


class RendererNotInitializedError(GraphError):
    pass
