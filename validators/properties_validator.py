"""
Top-level API model validation.
"""

import logging
from typing import List, Optional, Type

from apimodel.constants import LOGGER_NAME
from apimodel.exceptions import ValidationError
from apimodel.models import ClusterDescription, OrchestratorProfile
from apimodel.versions import DEFAULT_CATALOG, VersionCatalog

from .checks import (
    AADProfileValidator,
    AgentPoolValidator,
    BaseValidator,
    ContainerRuntimeValidator,
    DcosConfigValidator,
    KubernetesConfigValidator,
    KubernetesFeatureValidator,
    LinuxProfileValidator,
    MasterProfileValidator,
    NetworkPluginPlusPolicyValidator,
    NetworkPluginValidator,
    NetworkPolicyValidator,
    OpenShiftConfigValidator,
    OpenShiftStorageValidator,
    OrchestratorStructureValidator,
    ServicePrincipalValidator,
    ValidationContext,
    ValidationReporter,
    VersionGate,
    WindowsProfileValidator,
)

logger = logging.getLogger(LOGGER_NAME)

# Rules owned by the orchestrator profile alone
ORCHESTRATOR_RULES: List[Type[BaseValidator]] = [
    OrchestratorStructureValidator,
    VersionGate,
    KubernetesConfigValidator,
    KubernetesFeatureValidator,
    DcosConfigValidator,
    OpenShiftConfigValidator,
]

# Full rule order; the first failing rule ends validation
PROPERTIES_RULES: List[Type[BaseValidator]] = ORCHESTRATOR_RULES + [
    OpenShiftStorageValidator,
    NetworkPolicyValidator,
    NetworkPluginValidator,
    NetworkPluginPlusPolicyValidator,
    ContainerRuntimeValidator,
    MasterProfileValidator,
    AgentPoolValidator,
    LinuxProfileValidator,
    WindowsProfileValidator,
    ServicePrincipalValidator,
    AADProfileValidator,
]


class PropertiesValidator:
    """Coordinates the API model rules for one cluster description."""

    def __init__(self, catalog: Optional[VersionCatalog] = None) -> None:
        self.catalog = catalog or DEFAULT_CATALOG
        self.reporter = ValidationReporter()

    def validate(
        self,
        cluster: ClusterDescription,
        is_update: bool = False,
        rules: Optional[List[Type[BaseValidator]]] = None,
    ) -> str:
        """
        Validate a cluster description.

        Args:
            cluster: Cluster description to validate
            is_update: Validate an existing cluster being upgraded or scaled
            rules: Rule classes to run, in order (defaults to every rule)

        Returns:
            The resolved orchestrator version ("" when the orchestrator has none)

        Raises:
            ValidationError: For the first violated rule
        """
        # Fresh reporter per call so repeated validations never mix results
        self.reporter = ValidationReporter()
        ctx = ValidationContext(cluster=cluster, is_update=is_update, catalog=self.catalog)

        mode = "update" if is_update else "create"
        logger.debug("Validating %s cluster description (%s)", ctx.orchestrator_type or "<unset>", mode)

        for rule_cls in rules if rules is not None else PROPERTIES_RULES:
            rule = rule_cls(self.reporter)
            if not rule.applies(ctx):
                logger.debug("Skipping rule: %s", rule.name)
                continue
            try:
                rule.run(ctx)
            except ValidationError as e:
                rule.add_result(rule.name, False, str(e))
                raise
            rule.add_result(rule.name, True, "ok")

        return ctx.version


def validate_properties(
    cluster: ClusterDescription,
    is_update: bool = False,
    catalog: Optional[VersionCatalog] = None,
) -> str:
    """Validate a whole cluster description; see PropertiesValidator.validate."""
    return PropertiesValidator(catalog).validate(cluster, is_update)


def validate_orchestrator_profile(
    profile: OrchestratorProfile,
    is_update: bool = False,
    catalog: Optional[VersionCatalog] = None,
) -> str:
    """Validate an orchestrator profile on its own, without pools or identity."""
    cluster = ClusterDescription(orchestrator_profile=profile)
    return PropertiesValidator(catalog).validate(cluster, is_update, rules=ORCHESTRATOR_RULES)
