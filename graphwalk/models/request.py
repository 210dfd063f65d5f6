from pydantic import BaseModel, field_validator

from graphwalk.models.traversal import TraversalKind


class AddEdgeRequest(BaseModel):
    u: str
    v: str
    weight: str = "1"  # free-form, never validated

    @field_validator("u", "v", "weight", mode="before")
    @classmethod
    def _as_text(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class TraversalRequest(BaseModel):
    kind: TraversalKind
    start: str = "0"

    @field_validator("start", mode="before")
    @classmethod
    def _coerce_start(cls, value: object) -> str:
        # No validation: whatever arrives is looked up as a node id.
        return str(value)
