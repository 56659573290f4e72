"""
In-memory API model for a cluster description.

Pydantic models mirror the camelCase API model document. Fields are
populated by their camelCase alias when loading a document and by their
snake_case name in code. Unknown keys are ignored and nothing is
defaulted beyond the unset value, since the validator only accepts or
rejects. A document whose fields have the wrong shape or type is a
``ConfigurationError``; semantic rules live in ``validators``.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .constants import LOGGER_NAME, WINDOWS
from .exceptions import ConfigurationError

logger = logging.getLogger(LOGGER_NAME)


def _describe(error: PydanticValidationError) -> str:
    """Summarize a pydantic error using the document's own key names."""
    first = error.errors()[0]
    location = ""
    for part in first["loc"]:
        if isinstance(part, int):
            location += f"[{part}]"
        else:
            location += f".{part}" if location else str(part)
    if location:
        message = f"Invalid API model field {location}: {first['msg']}"
    else:
        message = f"Invalid API model: {first['msg']}"
    if error.error_count() > 1:
        message += f" (and {error.error_count() - 1} more)"
    return message


def _string_map(value: Any) -> Any:
    """Coerce a flag or label map to str -> str; "" stands in for null."""
    if not isinstance(value, Mapping):
        return value
    return {str(k): "" if v is None else str(v) for k, v in value.items()}


class ApiModel(BaseModel):
    """Base for every API model section."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # null means unset
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]):
        """
        Load a section of an API model document.

        Returns:
            The section model, or None when the section is absent

        Raises:
            ConfigurationError: If the section has the wrong shape or types
        """
        if data is None:
            return None
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigurationError(_describe(e)) from None


class ImageReference(ApiModel):
    name: str = ""
    resource_group: str = ""


class KeyvaultSecretRef(ApiModel):
    vault_id: str = Field("", alias="vaultID")
    secret_name: str = ""
    secret_version: str = ""


class ServicePrincipalProfile(ApiModel):
    client_id: str = ""
    secret: str = ""
    keyvault_secret_ref: Optional[KeyvaultSecretRef] = None


class AADProfile(ApiModel):
    client_app_id: str = Field("", alias="clientAppID")
    server_app_id: str = Field("", alias="serverAppID")
    tenant_id: str = Field("", alias="tenantID")
    admin_group_id: str = Field("", alias="adminGroupID")


class KubernetesConfig(ApiModel):
    """Kubernetes-specific orchestrator settings.

    ``kubelet_config`` and ``controller_manager_config`` are passed through
    to the processes' command lines; only a few known flags are validated.
    """

    cluster_subnet: str = ""
    docker_bridge_subnet: str = ""
    service_cidr: str = ""
    dns_service_ip: str = Field("", alias="dnsServiceIP")
    max_pods: int = 0
    network_plugin: str = ""
    network_policy: str = ""
    container_runtime: str = ""
    etcd_version: str = ""
    enable_rbac: Optional[bool] = None
    enable_aggregated_apis: bool = Field(False, alias="enableAggregatedAPIs")
    enable_data_encryption_at_rest: Optional[bool] = None
    etcd_encryption_key: str = ""
    enable_encryption_with_external_kms: Optional[bool] = None
    enable_pod_security_policy: Optional[bool] = None
    use_managed_identity: bool = False
    use_cloud_controller_manager: Optional[bool] = None
    custom_ccm_image: str = ""
    cloud_provider_backoff: bool = False
    cloud_provider_backoff_retries: int = 0
    cloud_provider_backoff_jitter: float = 0.0
    cloud_provider_backoff_duration: int = 0
    cloud_provider_backoff_exponent: float = 0.0
    cloud_provider_rate_limit: bool = False
    cloud_provider_rate_limit_qps: float = Field(0.0, alias="cloudProviderRateLimitQPS")
    cloud_provider_rate_limit_bucket: int = 0
    kubelet_config: Dict[str, str] = Field(default_factory=dict)
    controller_manager_config: Dict[str, str] = Field(default_factory=dict)

    @field_validator("kubelet_config", "controller_manager_config", mode="before")
    @classmethod
    def flags_as_strings(cls, value: Any) -> Any:
        return _string_map(value)

    def is_empty(self) -> bool:
        """Whether every setting is left at its unset value."""
        return self.model_dump() == KubernetesConfig().model_dump()


class BootstrapProfile(ApiModel):
    vm_size: str = ""
    os_disk_size_gb: int = Field(0, alias="osDiskSizeGB")
    static_ip: str = Field("", alias="staticIP")
    subnet: str = ""


class DcosConfig(ApiModel):
    dcos_bootstrap_url: str = Field("", alias="dcosBootstrapURL")
    dcos_windows_bootstrap_url: str = Field("", alias="dcosWindowsBootstrapURL")
    dcos_cluster_package_list_id: str = Field("", alias="dcosClusterPackageListID")
    dcos_provider_package_id: str = Field("", alias="dcosProviderPackageID")
    bootstrap_profile: Optional[BootstrapProfile] = None

    def is_empty(self) -> bool:
        return self.model_dump() == DcosConfig().model_dump()


class OpenShiftConfig(ApiModel):
    cluster_username: str = ""
    cluster_password: str = ""


class OrchestratorProfile(ApiModel):
    orchestrator_type: str = ""
    orchestrator_version: str = ""
    orchestrator_release: str = ""
    kubernetes_config: Optional[KubernetesConfig] = None
    dcos_config: Optional[DcosConfig] = None
    openshift_config: Optional[OpenShiftConfig] = Field(None, alias="openShiftConfig")


class MasterProfile(ApiModel):
    count: int = 0
    dns_prefix: str = ""
    vm_size: str = ""
    storage_profile: str = ""
    os_disk_size_gb: int = Field(0, alias="osDiskSizeGB")
    vnet_subnet_id: str = Field("", alias="vnetSubnetID")
    first_consecutive_static_ip: str = Field("", alias="firstConsecutiveStaticIP")
    image_ref: Optional[ImageReference] = Field(None, alias="imageReference")


class AgentPoolProfile(ApiModel):
    name: str = ""
    count: int = 0
    vm_size: str = ""
    os_type: str = ""
    storage_profile: str = ""
    availability_profile: str = ""
    os_disk_size_gb: int = Field(0, alias="osDiskSizeGB")
    vnet_subnet_id: str = Field("", alias="vnetSubnetID")
    custom_node_labels: Dict[str, str] = Field(default_factory=dict)
    image_ref: Optional[ImageReference] = Field(None, alias="imageReference")

    @field_validator("custom_node_labels", mode="before")
    @classmethod
    def labels_as_strings(cls, value: Any) -> Any:
        return _string_map(value)

    def is_windows(self) -> bool:
        return self.os_type == WINDOWS


class LinuxProfile(ApiModel):
    """Linux admin account; ``ssh.publicKeys[].keyData`` is flattened to a key list."""

    admin_username: str = ""
    ssh_public_keys: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def flatten_ssh(cls, data: Any) -> Any:
        if not isinstance(data, Mapping) or "ssh" not in data:
            return data
        data = dict(data)
        ssh = data.pop("ssh") or {}
        if not isinstance(ssh, Mapping):
            raise ValueError("linuxProfile.ssh must be an object")
        keys = []
        for key in ssh.get("publicKeys") or []:
            if not isinstance(key, Mapping):
                raise ValueError("linuxProfile.ssh.publicKeys entries must be objects")
            keys.append(key.get("keyData") or "")
        data["ssh_public_keys"] = keys
        return data


class WindowsProfile(ApiModel):
    admin_username: str = ""
    admin_password: str = ""


class ClusterDescription(ApiModel):
    """A complete cluster description (the API model ``properties``)."""

    orchestrator_profile: Optional[OrchestratorProfile] = None
    master_profile: Optional[MasterProfile] = None
    agent_pool_profiles: List[AgentPoolProfile] = Field(default_factory=list)
    linux_profile: Optional[LinuxProfile] = None
    windows_profile: Optional[WindowsProfile] = None
    service_principal_profile: Optional[ServicePrincipalProfile] = None
    aad_profile: Optional[AADProfile] = None

    def has_windows(self) -> bool:
        """Whether any agent pool runs Windows."""
        return any(pool.is_windows() for pool in self.agent_pool_profiles)

    @property
    def orchestrator_type(self) -> str:
        return self.orchestrator_profile.orchestrator_type if self.orchestrator_profile else ""

    @property
    def kubernetes_config(self) -> Optional[KubernetesConfig]:
        return self.orchestrator_profile.kubernetes_config if self.orchestrator_profile else None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClusterDescription":
        """
        Build a cluster description from an API model document.

        Args:
            data: Either the ``properties`` object or a document wrapping it
                  as ``{"apiVersion": ..., "properties": {...}}``

        Raises:
            ConfigurationError: If a section has the wrong shape or a field the wrong type
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"API model must be an object, got {type(data).__name__}")
        if "properties" in data:
            logger.debug("API model apiVersion: %s", data.get("apiVersion", "<unset>"))
            data = data["properties"]
        return super().from_dict(data if data is not None else {})
