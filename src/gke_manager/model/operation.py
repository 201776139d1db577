"""Long-running operation models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class OperationStatus(str, Enum):
    """Status of a remote long-running operation."""

    STATUS_UNSPECIFIED = "STATUS_UNSPECIFIED"
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    DONE = "DONE"
    ABORTING = "ABORTING"
    ERROR = "ERROR"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def failed(self) -> bool:
        return self in FAILED_STATUSES


FAILED_STATUSES = {OperationStatus.ABORTING, OperationStatus.ERROR}
TERMINAL_STATUSES = FAILED_STATUSES | {OperationStatus.DONE}


class Operation(BaseModel):
    """Reference to a remote long-running task."""

    id: str
    type: str = ""
    status: OperationStatus = OperationStatus.STATUS_UNSPECIFIED
    error: Optional[str] = None
    target: str = ""
    detail: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def failed(self) -> bool:
        return self.status.failed


class OperationProgress(BaseModel):
    """A single status observation streamed while waiting on an operation."""

    operation_id: str
    type: str = ""
    status: OperationStatus
    error: Optional[str] = None
