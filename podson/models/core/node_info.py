"""Node models."""

from pydantic import BaseModel, ConfigDict, Field


class NodeInfo(BaseModel):
    """A cluster node as seen by the selector resolver."""

    model_config = ConfigDict(frozen=True)

    name: str
    labels: dict[str, str] = Field(default_factory=dict)
