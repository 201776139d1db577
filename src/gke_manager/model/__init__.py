"""Data models for gke-manager."""

from .cluster import ClusterHandle, ClusterSnapshot, ClusterStatus, ServerConfig
from .config import ClusterConfig
from .operation import Operation, OperationProgress, OperationStatus
from .report import OutputFormat

__all__ = [
    "ClusterHandle",
    "ClusterSnapshot",
    "ClusterStatus",
    "ServerConfig",
    "ClusterConfig",
    "Operation",
    "OperationProgress",
    "OperationStatus",
    "OutputFormat",
]
