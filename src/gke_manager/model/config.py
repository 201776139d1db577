"""Per-invocation configuration."""

from pydantic import BaseModel, Field


class ClusterConfig(BaseModel):
    """Immutable identity of the cluster a command operates on."""

    project: str = Field(min_length=1)
    location: str = Field(min_length=1)
    cluster_name: str = Field(min_length=1)
    node_count: int = Field(default=0, ge=0)

    class Config:
        frozen = True

    @property
    def parent(self) -> str:
        """Resource path of the project/location pair."""
        return f"projects/{self.project}/locations/{self.location}"

    @property
    def cluster_path(self) -> str:
        """Resource path of the cluster."""
        return f"{self.parent}/clusters/{self.cluster_name}"

    def operation_path(self, operation_id: str) -> str:
        """Resource path of an operation in this location."""
        return f"{self.parent}/operations/{operation_id}"
