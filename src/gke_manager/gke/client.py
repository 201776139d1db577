"""Async wrapper around the GKE cluster manager API."""

from typing import Optional

from google.api_core import exceptions as core_exceptions
from google.cloud import container_v1

from ..exceptions import ClientError
from ..model.cluster import ClusterSnapshot, ClusterStatus, ServerConfig
from ..model.config import ClusterConfig
from ..model.operation import Operation, OperationStatus
from ..utils.logger import get_logger

logger = get_logger(__name__)


class GKEClient:
    """Thin adapter that converts cluster manager protos into local models."""

    def __init__(self, client: Optional[container_v1.ClusterManagerAsyncClient] = None):
        self._client = client

    @property
    def client(self) -> container_v1.ClusterManagerAsyncClient:
        """Underlying API client, created on first use."""
        if self._client is None:
            self._client = container_v1.ClusterManagerAsyncClient()
            logger.debug("Cluster manager client created")
        return self._client

    async def get_cluster(self, config: ClusterConfig) -> Optional[ClusterSnapshot]:
        """Fetch the cluster, or None if it does not exist."""
        logger.debug(f"Fetching cluster {config.cluster_path}")
        request = container_v1.GetClusterRequest(name=config.cluster_path)
        try:
            cluster = await self.client.get_cluster(request=request)
        except core_exceptions.NotFound:
            logger.debug(f"Cluster {config.cluster_path} not found")
            return None
        except core_exceptions.GoogleAPIError as e:
            raise ClientError("get cluster", str(e)) from e
        return self.to_snapshot(cluster)

    async def create_cluster(self, config: ClusterConfig) -> Operation:
        """Request creation of a cluster with ``config.node_count`` initial nodes."""
        request = container_v1.CreateClusterRequest(
            parent=config.parent,
            cluster=container_v1.Cluster(
                name=config.cluster_name,
                initial_node_count=config.node_count,
            ),
        )
        try:
            operation = await self.client.create_cluster(request=request)
        except core_exceptions.GoogleAPIError as e:
            raise ClientError("create cluster", str(e)) from e
        return self.to_operation(operation)

    async def update_master_version(self, config: ClusterConfig, version: str) -> Operation:
        """Request a control plane upgrade to ``version``."""
        update = container_v1.ClusterUpdate(desired_master_version=version)
        return await self._update_cluster(config, update, "upgrade master version")

    async def update_node_version(self, config: ClusterConfig, version: str) -> Operation:
        """Request a node upgrade to ``version``."""
        update = container_v1.ClusterUpdate(desired_node_version=version)
        return await self._update_cluster(config, update, "upgrade node version")

    async def _update_cluster(
        self, config: ClusterConfig, update: container_v1.ClusterUpdate, action: str
    ) -> Operation:
        request = container_v1.UpdateClusterRequest(name=config.cluster_path, update=update)
        try:
            operation = await self.client.update_cluster(request=request)
        except core_exceptions.GoogleAPIError as e:
            raise ClientError(action, str(e)) from e
        return self.to_operation(operation)

    async def get_operation(self, config: ClusterConfig, operation_id: str) -> Operation:
        """Fetch the current state of an operation."""
        request = container_v1.GetOperationRequest(name=config.operation_path(operation_id))
        try:
            operation = await self.client.get_operation(request=request)
        except core_exceptions.GoogleAPIError as e:
            raise ClientError("get operation", str(e)) from e
        return self.to_operation(operation)

    async def get_server_config(self, config: ClusterConfig) -> ServerConfig:
        """Fetch the master and node versions the provider accepts."""
        request = container_v1.GetServerConfigRequest(name=config.parent)
        try:
            server_config = await self.client.get_server_config(request=request)
        except core_exceptions.GoogleAPIError as e:
            raise ClientError("get container engine versions", str(e)) from e
        return ServerConfig(
            valid_master_versions=list(server_config.valid_master_versions),
            valid_node_versions=list(server_config.valid_node_versions),
            default_cluster_version=server_config.default_cluster_version,
        )

    @staticmethod
    def to_snapshot(cluster: container_v1.Cluster) -> ClusterSnapshot:
        """Convert a cluster proto into a snapshot."""
        try:
            status = ClusterStatus(container_v1.Cluster.Status(cluster.status).name)
        except ValueError:
            status = ClusterStatus.STATUS_UNSPECIFIED

        return ClusterSnapshot(
            name=cluster.name,
            current_master_version=cluster.current_master_version,
            current_node_version=cluster.current_node_version,
            status=status,
            status_message=cluster.status_message,
            locations=list(cluster.locations),
            node_count=cluster.current_node_count,
            endpoint=cluster.endpoint,
        )

    @staticmethod
    def to_operation(operation: container_v1.Operation) -> Operation:
        """Convert an operation proto into a local operation.

        The API reports failed operations as DONE with a populated error, so
        those are mapped to ERROR here.
        """
        try:
            status = OperationStatus(container_v1.Operation.Status(operation.status).name)
        except ValueError:
            status = OperationStatus.STATUS_UNSPECIFIED

        error = None
        if operation.error and operation.error.code:
            error = operation.error.message or f"error code {operation.error.code}"
        elif status == OperationStatus.ABORTING:
            error = operation.status_message or None

        if status == OperationStatus.DONE and error:
            status = OperationStatus.ERROR

        return Operation(
            id=operation.name,
            type=container_v1.Operation.Type(operation.operation_type).name,
            status=status,
            error=error,
            target=operation.target_link,
            detail=operation.detail,
        )
