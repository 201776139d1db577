"""Polling of long-running cluster operations."""

import asyncio
from typing import AsyncIterator, Optional

from ..exceptions import OperationError, OperationTimeoutError
from ..gke.client import GKEClient
from ..model.config import ClusterConfig
from ..model.operation import Operation, OperationProgress, OperationStatus
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_POLL_INTERVAL = 3.0


class OperationWaiter:
    """Turns the provider's asynchronous operations into blocking calls.

    Operations are polled at a fixed interval until they report DONE, ERROR or
    ABORTING. There is no retry limit: without ``timeout`` the wait lasts as
    long as the remote side takes. Cancelling the awaiting task aborts the wait
    at the next suspension point.
    """

    def __init__(
        self,
        client: GKEClient,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.poll_interval = poll_interval
        self.timeout = timeout

    async def _operations(
        self, config: ClusterConfig, operation_id: str
    ) -> AsyncIterator[Operation]:
        loop = asyncio.get_running_loop()
        deadline = None if self.timeout is None else loop.time() + self.timeout

        while True:
            fetch = self.client.get_operation(config, operation_id)
            if deadline is None:
                operation = await fetch
            else:
                operation = await self._before_deadline(fetch, deadline, operation_id)

            yield operation

            if operation.is_terminal:
                return

            if deadline is None:
                await asyncio.sleep(self.poll_interval)
            else:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise OperationTimeoutError(operation_id, self.timeout)
                await asyncio.sleep(min(self.poll_interval, remaining))

    async def watch(
        self, config: ClusterConfig, operation_id: str
    ) -> AsyncIterator[OperationProgress]:
        """Yield every observed status, ending after the first terminal one."""
        operations = self._operations(config, operation_id)
        try:
            async for operation in operations:
                yield OperationProgress(
                    operation_id=operation_id,
                    type=operation.type,
                    status=operation.status,
                    error=operation.error,
                )
        finally:
            await operations.aclose()

    async def _before_deadline(self, fetch, deadline: float, operation_id: str) -> Operation:
        remaining = deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            fetch.close()
            raise OperationTimeoutError(operation_id, self.timeout)
        try:
            return await asyncio.wait_for(fetch, timeout=remaining)
        except asyncio.TimeoutError:
            raise OperationTimeoutError(operation_id, self.timeout) from None

    async def wait(self, config: ClusterConfig, operation_id: str) -> Operation:
        """Block until the operation is terminal.

        Returns the final operation on DONE and raises ``OperationError`` on
        ERROR or ABORTING. Failures fetching the operation propagate as
        ``ClientError`` without being retried.
        """
        final = None
        operations = self._operations(config, operation_id)
        try:
            async for operation in operations:
                final = operation
                if operation.status == OperationStatus.DONE:
                    logger.info(
                        f"Operation completed: id={operation_id} status={operation.status.value}"
                    )
                elif operation.failed:
                    logger.error(
                        f"Operation failed: id={operation_id} status={operation.status.value} "
                        f"error={operation.error}"
                    )
                    raise OperationError(operation_id, operation.status.value, operation.error)
                else:
                    logger.info(
                        f"Waiting for operation: id={operation_id} type={operation.type} "
                        f"status={operation.status.value}"
                    )
        finally:
            await operations.aclose()
        return final
