"""GKE API interaction module."""

from .client import GKEClient

__all__ = ["GKEClient"]
