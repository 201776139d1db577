"""Resolution of requested GKE versions against the versions the API accepts."""

from typing import List, Sequence, Tuple

from ..exceptions import MalformedVersionError, VersionNotFoundError
from ..utils.logger import get_logger

logger = get_logger(__name__)

LATEST = "latest"
MAX_VERSION_SEGMENTS = 4


class VersionResolver:
    """Maps release series such as ``1.9`` or ``latest`` onto concrete versions.

    Version lists are used in the order the provider returns them (most recent
    first). The first qualifying entry wins; nothing is re-sorted.
    """

    def parse_version(self, version: str) -> List[str]:
        """Split a version into its dotted segments.

        Any ``-suffix`` on the patch segment is dropped, so ``1.9.2-gke.1``
        parses to ``["1", "9", "2", "1"]``.
        """
        segments = version.split(".")
        if len(segments) > 2:
            segments[2] = segments[2].split("-")[0]
        if len(segments) > MAX_VERSION_SEGMENTS:
            raise MalformedVersionError(f"unexpected version: {version}")
        return segments

    def version_triple(self, version: str) -> List[str]:
        """Major, minor and patch segments of a version (fewer if absent)."""
        return self.parse_version(version)[:3]

    def _numeric(self, segments: Sequence[str], version: str) -> Tuple[int, ...]:
        try:
            return tuple(int(segment) for segment in segments)
        except ValueError:
            raise MalformedVersionError(f"non-numeric version component in {version}") from None

    def exceeds_master(self, requested: str, master_version: str) -> bool:
        """Whether ``requested`` is newer than the master on the fields both name.

        Components are compared as numbers, so ``1.10`` is newer than ``1.9``.
        The build number after the patch suffix counts when both carry one.
        """
        requested_fields = self._numeric(self.parse_version(requested), requested)
        master_fields = self._numeric(self.parse_version(master_version), master_version)
        shared = min(len(requested_fields), len(master_fields))
        return requested_fields[:shared] > master_fields[:shared]

    def resolve_master_version(self, requested: str, valid_versions: Sequence[str]) -> str:
        """Latest master version in the requested release series."""
        if requested == LATEST:
            if not valid_versions:
                raise VersionNotFoundError("no valid master versions available")
            return valid_versions[0]

        for version in valid_versions:
            if version.startswith(requested):
                logger.debug(f"Resolved master series {requested} to {version}")
                return version

        raise VersionNotFoundError(f"unable to find a master version in series {requested}")

    def resolve_node_version(
        self, requested: str, valid_versions: Sequence[str], master_version: str
    ) -> str:
        """Latest node version in the requested series that does not outpace the master."""
        if requested == LATEST:
            return master_version

        logger.info(
            f"Determining if requested version is valid: requested={requested} "
            f"master={master_version}"
        )
        requested_fields = self.parse_version(requested)

        if self.exceeds_master(requested, master_version):
            logger.info(
                f"Requested version {requested} is greater than the current master "
                f"version {master_version}"
            )
            raise VersionNotFoundError(
                f"requested version {requested} exceeds master version {master_version}"
            )

        for version in valid_versions:
            candidate_fields = self.parse_version(version)
            if candidate_fields[: len(requested_fields)] == requested_fields:
                logger.info(f"Found valid node version {version}")
                return version
            logger.debug(f"Node version {version} is not in series {requested}")

        raise VersionNotFoundError(
            f"unable to find a node version in series {requested} "
            f"(master version {master_version})"
        )
