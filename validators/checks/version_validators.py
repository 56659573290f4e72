"""Orchestrator version gating."""

import logging

from apimodel.constants import (
    DCOS,
    KUBERNETES,
    LOGGER_NAME,
    OPENSHIFT,
    OPENSHIFT_VERSION_UNSTABLE,
)
from apimodel.exceptions import VersionError
from apimodel.utils import parse_version
from apimodel.versions import DEFAULT_CATALOG, VersionCatalog

from .base_validator import BaseValidator, ValidationContext

logger = logging.getLogger(LOGGER_NAME)

# Orchestrators whose existing clusters are checked against known patch releases on update
PATCH_GATED_ON_UPDATE = (KUBERNETES, DCOS)


def _unsupported(orchestrator_type: str, release: str, version: str) -> VersionError:
    return VersionError(
        f"the following OrchestratorProfile configuration is not supported: "
        f"OrchestratorType: {orchestrator_type}, OrchestratorRelease: {release}, "
        f"OrchestratorVersion: {version}. Please check supported Release or Version for this build"
    )


def accept_version(
    orchestrator_type: str,
    version: str,
    release: str,
    is_update: bool = False,
    has_windows: bool = False,
    catalog: VersionCatalog = DEFAULT_CATALOG,
) -> str:
    """
    Decide whether a requested orchestrator version/release is acceptable.

    New clusters must resolve to a version the catalog offers (the Windows
    subset when Windows pools exist). Existing clusters being upgraded may
    run any known version, including deprecated patches, or a patch the
    catalog never listed as long as its major.minor release is known.

    Args:
        orchestrator_type: Orchestrator name
        version: Requested full version ("" for none)
        release: Requested "major.minor" release ("" for none)
        is_update: Validate an existing cluster rather than a new one
        has_windows: Whether any agent pool runs Windows
        catalog: Version catalog to consult

    Returns:
        The resolved version ("" for orchestrators the catalog does not track)

    Raises:
        VersionError: If the version is not acceptable
    """
    if orchestrator_type == OPENSHIFT and version == OPENSHIFT_VERSION_UNSTABLE:
        return version

    if not catalog.is_versioned(orchestrator_type):
        logger.debug("%s versions are not tracked by the catalog", orchestrator_type)
        return version

    if not is_update:
        resolved = catalog.rationalize_release_and_version(
            orchestrator_type, release, version, is_update=False, has_windows=has_windows
        )
        if not resolved:
            raise _unsupported(orchestrator_type, release, version)
        return resolved

    resolved = catalog.rationalize_release_and_version(
        orchestrator_type, release, version, is_update=True, has_windows=has_windows
    )
    if resolved:
        return resolved

    if orchestrator_type not in PATCH_GATED_ON_UPDATE:
        logger.debug("Accepting %s version %s for an existing cluster", orchestrator_type, version)
        return version

    patch = catalog.get_valid_patch_version(orchestrator_type, version, is_update=True, has_windows=has_windows)
    if not patch:
        raise _unsupported(orchestrator_type, release, version)

    if parse_version(version) is None:
        return patch
    logger.debug("Existing cluster version %s maps to supported patch %s", version, patch)
    return version.lstrip("vV")


class VersionGate(BaseValidator):
    """Validates the requested orchestrator version and records the resolved one."""

    name = "Orchestrator version"

    def run(self, ctx: ValidationContext) -> None:
        profile = ctx.profile
        has_windows = ctx.has_windows if profile.orchestrator_type == KUBERNETES else False
        ctx.version = accept_version(
            profile.orchestrator_type,
            profile.orchestrator_version,
            profile.orchestrator_release,
            is_update=ctx.is_update,
            has_windows=has_windows,
            catalog=ctx.catalog,
        )
