"""Lifecycle management for GKE clusters: create, upgrade and version resolution."""

__version__ = "0.1.0"
