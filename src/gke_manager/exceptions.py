"""Error types raised by the cluster manager."""

from typing import Optional


class GKEManagerError(Exception):
    """Base class for all cluster manager errors."""


class ClientError(GKEManagerError):
    """A call to the remote control-plane API failed."""

    def __init__(self, action: str, detail: str):
        self.action = action
        self.detail = detail
        super().__init__(f"unable to {action}: {detail}")


class ClusterNotFoundError(GKEManagerError):
    """The cluster does not exist, or the handle has not fetched it yet."""


class ClusterStateError(GKEManagerError):
    """The cluster exists but is in a bad state (ERROR or DEGRADED)."""

    def __init__(self, name: str, status: str, status_message: str = ""):
        self.name = name
        self.status = status
        self.status_message = status_message
        message = f"cluster {name} is in {status} state"
        if status_message:
            message += f": {status_message}"
        super().__init__(message)


class OperationError(GKEManagerError):
    """A long-running operation finished in ERROR or ABORTING."""

    def __init__(self, operation_id: str, status: str, detail: Optional[str] = None):
        self.operation_id = operation_id
        self.status = status
        self.detail = detail
        message = f"operation {operation_id} finished with status {status}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class OperationTimeoutError(GKEManagerError):
    """The caller's deadline elapsed before the operation reached a terminal status."""

    def __init__(self, operation_id: str, timeout: float):
        self.operation_id = operation_id
        self.timeout = timeout
        super().__init__(f"gave up waiting for operation {operation_id} after {timeout:g}s")


class VersionNotFoundError(GKEManagerError):
    """No valid version satisfies the request."""


class MalformedVersionError(GKEManagerError, ValueError):
    """A version string could not be decomposed into the expected segments."""
