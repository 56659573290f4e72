"""Modular rule validators for API model validation."""

from .base_validator import BaseValidator, ValidationContext
from .identity_validators import AADProfileValidator, ServicePrincipalValidator
from .kubernetes_validators import KubernetesConfigValidator, KubernetesFeatureValidator
from .network_validators import (
    ContainerRuntimeValidator,
    NetworkPluginPlusPolicyValidator,
    NetworkPluginValidator,
    NetworkPolicyValidator,
)
from .orchestrator_validators import (
    DcosConfigValidator,
    OpenShiftConfigValidator,
    OpenShiftStorageValidator,
    OrchestratorStructureValidator,
)
from .profile_validators import (
    AgentPoolValidator,
    LinuxProfileValidator,
    MasterProfileValidator,
    WindowsProfileValidator,
)
from .reporter import ValidationReporter
from .version_validators import VersionGate, accept_version

__all__ = [
    "BaseValidator",
    "ValidationContext",
    "ValidationReporter",
    "OrchestratorStructureValidator",
    "VersionGate",
    "accept_version",
    "KubernetesConfigValidator",
    "KubernetesFeatureValidator",
    "DcosConfigValidator",
    "OpenShiftConfigValidator",
    "OpenShiftStorageValidator",
    "NetworkPolicyValidator",
    "NetworkPluginValidator",
    "NetworkPluginPlusPolicyValidator",
    "ContainerRuntimeValidator",
    "MasterProfileValidator",
    "AgentPoolValidator",
    "LinuxProfileValidator",
    "WindowsProfileValidator",
    "ServicePrincipalValidator",
    "AADProfileValidator",
]
