"""Orchestrator selection and orchestrator-specific block checks."""

import logging

from apimodel.constants import (
    DCOS,
    ERR_OPENSHIFT_MANAGED_DISKS,
    KUBERNETES,
    LOGGER_NAME,
    MANAGED_DISKS,
    OPENSHIFT,
    ORCHESTRATOR_TYPES,
)
from apimodel.exceptions import ExclusivityError, StructuralError
from apimodel.validation import InputValidator

from .base_validator import BaseValidator, ValidationContext

logger = logging.getLogger(LOGGER_NAME)


class OrchestratorStructureValidator(BaseValidator):
    """Ensures the orchestrator is known and only its own config block is populated.

    Kubernetes and DC/OS blocks left at their empty defaults count as
    unpopulated; an OpenShift block counts as populated once present.
    """

    name = "Orchestrator profile"

    def run(self, ctx: ValidationContext) -> None:
        profile = ctx.profile
        if profile is None:
            raise StructuralError("OrchestratorProfile must be specified")

        orchestrator_type = profile.orchestrator_type
        if not orchestrator_type:
            raise StructuralError("OrchestratorProfile.OrchestratorType must be specified")
        if orchestrator_type not in ORCHESTRATOR_TYPES:
            raise StructuralError(f"OrchestratorProfile has unknown orchestrator: {orchestrator_type}")

        if (
            orchestrator_type != KUBERNETES
            and profile.kubernetes_config is not None
            and not profile.kubernetes_config.is_empty()
        ):
            raise StructuralError("KubernetesConfig can be specified only when OrchestratorType is Kubernetes")

        if orchestrator_type != OPENSHIFT and profile.openshift_config is not None:
            raise StructuralError("OpenShiftConfig can be specified only when OrchestratorType is OpenShift")

        if orchestrator_type != DCOS and profile.dcos_config is not None and not profile.dcos_config.is_empty():
            raise StructuralError("DcosConfig can be specified only when OrchestratorType is DCOS")


class DcosConfigValidator(BaseValidator):
    """Validates the DC/OS bootstrap node settings of a new cluster."""

    name = "DC/OS configuration"

    def applies(self, ctx: ValidationContext) -> bool:
        return not ctx.is_update and ctx.orchestrator_type == DCOS and ctx.profile.dcos_config is not None

    def run(self, ctx: ValidationContext) -> None:
        bootstrap = ctx.profile.dcos_config.bootstrap_profile
        if bootstrap is not None and bootstrap.static_ip:
            InputValidator.validate_ip(bootstrap.static_ip, "DcosConfig.BootstrapProfile.StaticIP")


class OpenShiftConfigValidator(BaseValidator):
    """Requires cluster admin credentials for a new OpenShift cluster."""

    name = "OpenShift configuration"

    def applies(self, ctx: ValidationContext) -> bool:
        return not ctx.is_update and ctx.orchestrator_type == OPENSHIFT

    def run(self, ctx: ValidationContext) -> None:
        config = ctx.profile.openshift_config
        if config is None or not config.cluster_username or not config.cluster_password:
            raise ExclusivityError("ClusterUsername and ClusterPassword must both be specified")


class OpenShiftStorageValidator(BaseValidator):
    """OpenShift clusters run on managed disks only, masters and agents alike."""

    name = "OpenShift storage profile"

    def applies(self, ctx: ValidationContext) -> bool:
        return ctx.orchestrator_type == OPENSHIFT

    def run(self, ctx: ValidationContext) -> None:
        master = ctx.cluster.master_profile
        if master is not None and master.storage_profile != MANAGED_DISKS:
            raise StructuralError(ERR_OPENSHIFT_MANAGED_DISKS)

        for pool in ctx.cluster.agent_pool_profiles:
            if pool.storage_profile != MANAGED_DISKS:
                logger.debug("Agent pool %s uses storage profile '%s'", pool.name, pool.storage_profile)
                raise StructuralError(ERR_OPENSHIFT_MANAGED_DISKS)
