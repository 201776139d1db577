"""Version resolution for cluster upgrades."""

from .resolver import LATEST, VersionResolver

__all__ = ["LATEST", "VersionResolver"]
