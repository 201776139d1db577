"""Cluster lifecycle controller."""

from typing import Optional

from ..exceptions import ClusterNotFoundError, ClusterStateError
from ..gke.client import GKEClient
from ..model.cluster import ClusterHandle, ClusterSnapshot
from ..model.config import ClusterConfig
from ..model.operation import Operation
from ..operation.waiter import OperationWaiter
from ..upgrade.resolver import VersionResolver
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ClusterController:
    """Drives one cluster's existence and versions towards a requested target.

    Every mutating call blocks until the resulting operation is terminal and
    then refreshes the cached snapshot. Calls against the same controller must
    not overlap.
    """

    def __init__(
        self,
        client: GKEClient,
        config: ClusterConfig,
        waiter: Optional[OperationWaiter] = None,
    ):
        self.client = client
        self.config = config
        self.waiter = waiter or OperationWaiter(client)
        self.resolver = VersionResolver()
        self.handle = ClusterHandle(config=config)

    @property
    def snapshot(self) -> Optional[ClusterSnapshot]:
        return self.handle.snapshot

    async def refresh(self) -> ClusterSnapshot:
        """Fetch the remote cluster into the handle."""
        snapshot = await self.client.get_cluster(self.config)
        if snapshot is None:
            raise ClusterNotFoundError(
                f"cluster {self.config.cluster_name} does not exist in {self.config.parent}"
            )
        self.handle.snapshot = snapshot
        return snapshot

    async def create(self) -> ClusterSnapshot:
        """Adopt the cluster if it already exists, otherwise create it."""
        existing = await self.client.get_cluster(self.config)
        if existing is not None:
            logger.info(
                f"Adopting existing cluster {self.config.cluster_name} "
                f"(status={existing.status}, master={existing.current_master_version})"
            )
            self.handle.snapshot = existing
            self._check_health(existing)
            return existing

        logger.info(
            f"Creating cluster {self.config.cluster_name} in {self.config.parent} "
            f"with {self.config.node_count} nodes"
        )
        operation = await self.client.create_cluster(self.config)
        await self._wait(operation)

        snapshot = await self.refresh()
        self._check_health(snapshot)
        return snapshot

    async def upgrade_control_plane(self, version: str) -> ClusterSnapshot:
        """Upgrade the master to an already resolved ``version``."""
        logger.info(f"Upgrading control plane of {self.config.cluster_name} to {version}")
        operation = await self.client.update_master_version(self.config, version)
        await self._wait(operation)
        return await self.refresh()

    async def upgrade_nodes(self, version: str) -> ClusterSnapshot:
        """Level the node pools up to the master's current version.

        Nodes are never sent past the master: the target is always the current
        master version, whatever ``version`` was requested.
        """
        target = self.handle.current_master_version
        if version != target:
            logger.info(f"Requested node version {version}; nodes track master version {target}")
        logger.info(f"Upgrading nodes of {self.config.cluster_name} to {target}")
        operation = await self.client.update_node_version(self.config, target)
        await self._wait(operation)
        return await self.refresh()

    async def latest_master_version(self, series: str) -> str:
        """Latest valid master version in ``series``."""
        server_config = await self.client.get_server_config(self.config)
        return self.resolver.resolve_master_version(series, server_config.valid_master_versions)

    async def latest_node_version(self, series: str) -> str:
        """Latest valid node version in ``series`` that does not outpace the master."""
        master_version = self.handle.current_master_version
        server_config = await self.client.get_server_config(self.config)
        return self.resolver.resolve_node_version(
            series, server_config.valid_node_versions, master_version
        )

    async def _wait(self, operation: Operation) -> None:
        logger.info(f"Waiting for operation {operation.id} ({operation.type})")
        await self.waiter.wait(self.config, operation.id)

    def _check_health(self, snapshot: ClusterSnapshot) -> None:
        if not snapshot.is_healthy:
            raise ClusterStateError(snapshot.name, snapshot.status, snapshot.status_message)
