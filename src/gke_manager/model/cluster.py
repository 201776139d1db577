"""Cluster-related models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..exceptions import ClusterNotFoundError
from .config import ClusterConfig


class ClusterStatus(str, Enum):
    """Lifecycle status reported for a cluster."""

    STATUS_UNSPECIFIED = "STATUS_UNSPECIFIED"
    PROVISIONING = "PROVISIONING"
    RUNNING = "RUNNING"
    RECONCILING = "RECONCILING"
    STOPPING = "STOPPING"
    ERROR = "ERROR"
    DEGRADED = "DEGRADED"


UNHEALTHY_STATUSES = {ClusterStatus.ERROR, ClusterStatus.DEGRADED}


class ClusterSnapshot(BaseModel):
    """Remote cluster state as last observed."""

    name: str
    current_master_version: str = ""
    current_node_version: str = ""
    status: ClusterStatus = ClusterStatus.STATUS_UNSPECIFIED
    status_message: str = ""
    locations: List[str] = Field(default_factory=list)
    node_count: int = 0
    endpoint: str = ""

    class Config:
        use_enum_values = True
        validate_default = True

    @property
    def is_healthy(self) -> bool:
        return ClusterStatus(self.status) not in UNHEALTHY_STATUSES


class ClusterHandle(BaseModel):
    """Identity of one cluster plus its cached remote snapshot.

    The snapshot stays empty until the cluster has been fetched or created.
    Accessors that need it raise ``ClusterNotFoundError`` instead of handing
    back empty values.
    """

    config: ClusterConfig
    snapshot: Optional[ClusterSnapshot] = None

    @property
    def exists(self) -> bool:
        return self.snapshot is not None

    def require_snapshot(self) -> ClusterSnapshot:
        """Return the snapshot, raising ClusterNotFoundError if there is none."""
        if self.snapshot is None:
            raise ClusterNotFoundError(
                f"cluster {self.config.cluster_name} has not been fetched "
                f"(project={self.config.project}, location={self.config.location})"
            )
        return self.snapshot

    @property
    def current_master_version(self) -> str:
        return self.require_snapshot().current_master_version

    @property
    def current_node_version(self) -> str:
        return self.require_snapshot().current_node_version

    @property
    def status(self) -> str:
        return self.require_snapshot().status

    @property
    def status_message(self) -> str:
        return self.require_snapshot().status_message

    @property
    def locations(self) -> List[str]:
        return self.require_snapshot().locations


class ServerConfig(BaseModel):
    """Versions the provider currently accepts, most recent first."""

    valid_master_versions: List[str] = Field(default_factory=list)
    valid_node_versions: List[str] = Field(default_factory=list)
    default_cluster_version: str = ""
