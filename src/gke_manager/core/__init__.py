"""Core business logic."""

from .controller import ClusterController
from .reporter import ClusterReporter

__all__ = ["ClusterController", "ClusterReporter"]
