"""
Orchestrator version catalog.

Answers which orchestrator versions this build can deploy. Each table maps a
version string to a flag: True for versions offered to new clusters, False
for versions that are still known (existing clusters may run them) but are
no longer offered.
"""

import logging
from typing import Dict, List, Mapping, Optional

from .constants import DCOS, KUBERNETES, LOGGER_NAME, OPENSHIFT
from .utils import parse_version, version_release

logger = logging.getLogger(LOGGER_NAME)

KUBERNETES_VERSIONS: Dict[str, bool] = {
    "1.6.6": False,
    "1.6.9": True,
    "1.6.11": False,
    "1.6.12": False,
    "1.6.13": False,
    "1.7.0": False,
    "1.7.1": False,
    "1.7.2": False,
    "1.7.4": False,
    "1.7.5": False,
    "1.7.7": False,
    "1.7.9": False,
    "1.7.10": False,
    "1.7.12": False,
    "1.7.13": False,
    "1.7.14": False,
    "1.7.15": True,
    "1.7.16": True,
    "1.8.0": False,
    "1.8.1": False,
    "1.8.2": False,
    "1.8.4": False,
    "1.8.6": False,
    "1.8.7": False,
    "1.8.8": False,
    "1.8.9": False,
    "1.8.10": False,
    "1.8.11": False,
    "1.8.12": False,
    "1.8.13": True,
    "1.8.14": True,
    "1.8.15": True,
    "1.9.0": True,
    "1.9.1": True,
    "1.9.2": False,
    "1.9.3": True,
    "1.9.4": False,
    "1.9.5": True,
    "1.9.6": True,
    "1.9.7": True,
    "1.9.8": True,
    "1.9.9": True,
    "1.9.10": True,
    "1.10.0-beta.2": False,
    "1.10.0-beta.4": False,
    "1.10.0-rc.1": False,
    "1.10.0": True,
    "1.10.1": True,
    "1.10.2": True,
    "1.10.3": True,
    "1.10.4": True,
    "1.10.5": True,
    "1.10.6": True,
    "1.11.0-alpha.1": False,
    "1.11.0-alpha.2": False,
    "1.11.0-beta.1": False,
    "1.11.0-beta.2": False,
    "1.11.0-rc.1": False,
    "1.11.0-rc.2": False,
    "1.11.0-rc.3": False,
    "1.11.0": True,
    "1.11.1": True,
    "1.11.2": True,
}

# Windows nodes joined the cluster starting with the 1.7 line
KUBERNETES_WINDOWS_MIN_VERSION = "1.7.0"

DCOS_VERSIONS: Dict[str, bool] = {
    "1.8.8": True,
    "1.9.0": True,
    "1.9.8": True,
    "1.10.0": True,
    "1.11.0": True,
    "1.11.2": True,
}

OPENSHIFT_VERSIONS: Dict[str, bool] = {
    "3.9.0": True,
}

DEFAULT_VERSIONS: Dict[str, str] = {
    KUBERNETES: "1.10.6",
    DCOS: "1.11.0",
    OPENSHIFT: "3.9.0",
}

DEFAULT_WINDOWS_VERSIONS: Dict[str, str] = {
    KUBERNETES: "1.10.6",
}


def _sorted_versions(versions: List[str]) -> List[str]:
    """Sort version strings in ascending semantic version order."""
    return sorted(versions, key=lambda v: parse_version(v))


def get_versions_gt(versions: List[str], min_version: str, inclusive: bool, pre_releases: bool) -> List[str]:
    """
    Filter versions greater than a minimum version.

    Args:
        versions: Candidate version strings
        min_version: Lower bound
        inclusive: Whether a version equal to min_version is kept
        pre_releases: Whether pre-release versions are kept

    Returns:
        Matching versions in ascending order
    """
    floor = parse_version(min_version)
    if floor is None:
        return []

    matching = []
    for candidate in versions:
        parsed = parse_version(candidate)
        if parsed is None:
            continue
        if parsed.is_prerelease and not pre_releases:
            continue
        if parsed > floor or (inclusive and parsed == floor):
            matching.append(candidate)

    return _sorted_versions(matching)


class VersionCatalog:
    """Supported orchestrator versions for this build."""

    def __init__(
        self,
        versions: Optional[Mapping[str, Mapping[str, bool]]] = None,
        defaults: Optional[Mapping[str, str]] = None,
        windows_defaults: Optional[Mapping[str, str]] = None,
        windows_min_version: str = KUBERNETES_WINDOWS_MIN_VERSION,
    ) -> None:
        if versions is None:
            versions = {
                KUBERNETES: KUBERNETES_VERSIONS,
                DCOS: DCOS_VERSIONS,
                OPENSHIFT: OPENSHIFT_VERSIONS,
            }
        self.versions = {orch: dict(table) for orch, table in versions.items()}
        self.defaults = dict(DEFAULT_VERSIONS if defaults is None else defaults)
        self.windows_defaults = dict(DEFAULT_WINDOWS_VERSIONS if windows_defaults is None else windows_defaults)
        self.windows_min_version = windows_min_version

    def is_versioned(self, orchestrator_type: str) -> bool:
        """Whether the catalog tracks versions for this orchestrator."""
        return orchestrator_type in self.versions

    def get_supported_versions(
        self,
        orchestrator_type: str,
        is_update: bool = False,
        has_windows: bool = False,
    ) -> Dict[str, bool]:
        """
        Get the versions accepted for an orchestrator.

        Args:
            orchestrator_type: Orchestrator name
            is_update: Include deprecated versions an existing cluster may run
            has_windows: Restrict to versions with Windows node support

        Returns:
            Mapping of accepted version string to its "offered to new clusters" flag
        """
        table = self.versions.get(orchestrator_type, {})
        if has_windows:
            table = {v: flag for v, flag in table.items() if v in self._windows_versions(orchestrator_type, table)}
        if is_update:
            return dict(table)
        return {v: flag for v, flag in table.items() if flag}

    def get_all_supported_versions(self, orchestrator_type: str = KUBERNETES) -> List[str]:
        """List every version offered to new clusters, ascending."""
        return _sorted_versions(list(self.get_supported_versions(orchestrator_type)))

    def get_windows_supported_versions(self, orchestrator_type: str = KUBERNETES) -> List[str]:
        """List every version offered to new clusters with Windows pools, ascending."""
        return _sorted_versions(list(self.get_supported_versions(orchestrator_type, has_windows=True)))

    def get_default_version(self, orchestrator_type: str, has_windows: bool = False) -> str:
        """Get the version deployed when neither version nor release is given."""
        if has_windows and orchestrator_type in self.windows_defaults:
            return self.windows_defaults[orchestrator_type]
        return self.defaults.get(orchestrator_type, "")

    def rationalize_release_and_version(
        self,
        orchestrator_type: str,
        release: str,
        version: str,
        is_update: bool = False,
        has_windows: bool = False,
    ) -> str:
        """
        Resolve an orchestrator release and/or version to one supported version.

        Args:
            orchestrator_type: Orchestrator name
            release: "major.minor" shorthand, may be empty
            version: Full version, may be empty or carry a leading "v"
            is_update: Accept deprecated versions as well
            has_windows: Restrict to Windows-capable versions

        Returns:
            The supported version string, or "" if nothing matches
        """
        supported = self.get_supported_versions(orchestrator_type, is_update, has_windows)

        if not release and not version:
            default = self.get_default_version(orchestrator_type, has_windows)
            return default if self._lookup(supported, default) else ""

        if release and not version:
            return self._latest_for_release(supported, release)

        matched = self._lookup(supported, version)
        if matched is None:
            return ""
        if release and version_release(matched) != release:
            logger.debug("Version %s does not belong to release %s", version, release)
            return ""
        return matched

    def get_valid_patch_version(
        self,
        orchestrator_type: str,
        version: str,
        is_update: bool = False,
        has_windows: bool = False,
    ) -> str:
        """
        Find a supported patch version for the release of a given version.

        An existing cluster on an unknown patch release can still be handled
        as long as its major.minor release has a supported patch.
        """
        if not version:
            return self.rationalize_release_and_version(orchestrator_type, "", "", is_update, has_windows)

        resolved = self.rationalize_release_and_version(orchestrator_type, "", version, is_update, has_windows)
        if resolved:
            return resolved

        release = version_release(version)
        if release is None:
            return ""
        return self.rationalize_release_and_version(orchestrator_type, release, "", is_update, has_windows)

    def _windows_versions(self, orchestrator_type: str, table: Mapping[str, bool]) -> List[str]:
        if orchestrator_type != KUBERNETES:
            return []
        return get_versions_gt(list(table), self.windows_min_version, inclusive=True, pre_releases=True)

    @staticmethod
    def _lookup(supported: Mapping[str, bool], version: str) -> Optional[str]:
        """Find the catalog spelling of version, ignoring a leading "v"."""
        wanted = parse_version(version)
        if wanted is None:
            return None
        for candidate in supported:
            if parse_version(candidate) == wanted:
                return candidate
        return None

    @staticmethod
    def _latest_for_release(supported: Mapping[str, bool], release: str) -> str:
        """Newest non-pre-release version belonging to a major.minor release."""
        matching = [
            v for v in supported if version_release(v) == release and not parse_version(v).is_prerelease
        ]
        if not matching:
            return ""
        return _sorted_versions(matching)[-1]


DEFAULT_CATALOG = VersionCatalog()
