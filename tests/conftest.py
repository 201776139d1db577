"""Test configuration and fixtures."""

from typing import Dict, List, Optional

import pytest

from gke_manager.exceptions import ClientError
from gke_manager.model.cluster import ClusterSnapshot, ClusterStatus, ServerConfig
from gke_manager.model.config import ClusterConfig
from gke_manager.model.operation import Operation, OperationStatus
from gke_manager.operation.waiter import OperationWaiter

VALID_MASTER_VERSIONS = [
    "1.10.1-gke.5",
    "1.9.2-gke.1",
    "1.9.2-gke.0",
    "1.9.1-gke.0",
]

VALID_NODE_VERSIONS = [
    "1.10.1-gke.5",
    "1.9.2-gke.1",
    "1.9.2-gke.0",
    "1.9.1-gke.0",
    "1.8.4-gke.1",
]


class FakeGKEClient:
    """In-memory stand-in for GKEClient.

    Operations progress through the statuses queued in ``operation_statuses``;
    the last queued status repeats once the queue is exhausted.
    """

    def __init__(
        self,
        cluster: Optional[ClusterSnapshot] = None,
        server_config: Optional[ServerConfig] = None,
    ):
        self.cluster = cluster
        self.server_config = server_config or ServerConfig(
            valid_master_versions=list(VALID_MASTER_VERSIONS),
            valid_node_versions=list(VALID_NODE_VERSIONS),
        )
        self.operation_statuses: List[OperationStatus] = [OperationStatus.DONE]
        self.operation_error: Optional[str] = None
        self.operation_fetch_error: Optional[ClientError] = None
        self.create_error: Optional[ClientError] = None
        self.created_snapshot: Optional[ClusterSnapshot] = None
        self.calls: List[tuple] = []
        self.operation_polls: Dict[str, int] = {}
        self._next_operation = 0

    def _new_operation(self, operation_type: str) -> Operation:
        self._next_operation += 1
        return Operation(
            id=f"operation-{self._next_operation}",
            type=operation_type,
            status=OperationStatus.PENDING,
        )

    async def get_cluster(self, config: ClusterConfig) -> Optional[ClusterSnapshot]:
        self.calls.append(("get_cluster", config.cluster_name))
        return self.cluster

    async def create_cluster(self, config: ClusterConfig) -> Operation:
        self.calls.append(("create_cluster", config.cluster_name, config.node_count))
        if self.create_error is not None:
            raise self.create_error
        self.cluster = self.created_snapshot or ClusterSnapshot(
            name=config.cluster_name,
            current_master_version="1.9.2-gke.1",
            current_node_version="1.9.2-gke.1",
            status=ClusterStatus.RUNNING,
            node_count=config.node_count,
        )
        return self._new_operation("CREATE_CLUSTER")

    async def update_master_version(self, config: ClusterConfig, version: str) -> Operation:
        self.calls.append(("update_master_version", version))
        self.cluster = self.cluster.model_copy(update={"current_master_version": version})
        return self._new_operation("UPGRADE_MASTER")

    async def update_node_version(self, config: ClusterConfig, version: str) -> Operation:
        self.calls.append(("update_node_version", version))
        self.cluster = self.cluster.model_copy(update={"current_node_version": version})
        return self._new_operation("UPGRADE_NODES")

    async def get_operation(self, config: ClusterConfig, operation_id: str) -> Operation:
        self.calls.append(("get_operation", operation_id))
        if self.operation_fetch_error is not None:
            raise self.operation_fetch_error

        polls = self.operation_polls.get(operation_id, 0)
        self.operation_polls[operation_id] = polls + 1
        status = self.operation_statuses[min(polls, len(self.operation_statuses) - 1)]
        return Operation(
            id=operation_id,
            type="UPGRADE_MASTER",
            status=status,
            error=self.operation_error if status.failed else None,
        )

    async def get_server_config(self, config: ClusterConfig) -> ServerConfig:
        self.calls.append(("get_server_config",))
        return self.server_config

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def cluster_config():
    """Cluster identity used across tests."""
    return ClusterConfig(
        project="hello", location="us-central1-a", cluster_name="hola", node_count=3
    )


@pytest.fixture
def running_snapshot():
    """A healthy cluster running master 1.9.2-gke.1."""
    return ClusterSnapshot(
        name="hola",
        current_master_version="1.9.2-gke.1",
        current_node_version="1.9.1-gke.0",
        status=ClusterStatus.RUNNING,
        locations=["us-central1-a"],
        node_count=3,
        endpoint="35.1.2.3",
    )


@pytest.fixture
def fake_client():
    """Fake API client with no existing cluster."""
    return FakeGKEClient()


@pytest.fixture
def fake_client_with_cluster(running_snapshot):
    """Fake API client that already knows a running cluster."""
    return FakeGKEClient(cluster=running_snapshot)


@pytest.fixture
def make_waiter():
    """Build a waiter that does not sleep between polls."""

    def _make(client, timeout=None, poll_interval=0):
        return OperationWaiter(client, poll_interval=poll_interval, timeout=timeout)

    return _make
