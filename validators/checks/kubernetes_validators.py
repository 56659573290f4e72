"""Kubernetes configuration validation checks."""

import base64
import binascii
import logging

from apimodel.constants import (
    AZURE_CNI_MIN_HOST_BITS,
    CTRL_MGR_NODE_MONITOR_GRACE_PERIOD,
    CTRL_MGR_POD_EVICTION_TIMEOUT,
    CTRL_MGR_ROUTE_RECONCILIATION_PERIOD,
    ETCD_VERSION_VALUES,
    KUBELET_NODE_STATUS_UPDATE_FREQUENCY,
    KUBELET_NON_MASQUERADE_CIDR,
    KUBERNETES,
    KUBERNETES_MIN_MAX_PODS,
    LOGGER_NAME,
    MIN_KUBELET_RETRIES,
    MIN_VERSION_AGGREGATED_APIS,
    MIN_VERSION_CLOUD_CONTROLLER_MANAGER,
    MIN_VERSION_CLOUD_PROVIDER_BACKOFF,
    MIN_VERSION_CLOUD_PROVIDER_RATE_LIMIT,
    MIN_VERSION_DATA_ENCRYPTION_AT_REST,
    MIN_VERSION_EXTERNAL_KMS,
    MIN_VERSION_POD_SECURITY_POLICY,
    NETWORK_PLUGIN_AZURE,
)
from apimodel.exceptions import (
    CompatibilityError,
    ConsistencyError,
    ExclusivityError,
    FormatValidationError,
    VersionError,
)
from apimodel.models import KubernetesConfig
from apimodel.utils import format_duration, is_version_ge
from apimodel.validation import InputValidator

from .base_validator import BaseValidator, ValidationContext

logger = logging.getLogger(LOGGER_NAME)

_FIELD = "OrchestratorProfile.KubernetesConfig"


class KubernetesConfigValidator(BaseValidator):
    """Validates one Kubernetes configuration block against a resolved version.

    Checks run in a fixed order and stop at the first failure:
    subnets, MaxPods, kubelet and controller-manager flags, the grace period
    timing invariant, DNS service IP placement, cloud-provider backoff/rate
    limit, etcd version and the cloud-controller-manager version gate.
    """

    name = "Kubernetes configuration"

    def applies(self, ctx: ValidationContext) -> bool:
        return ctx.orchestrator_type == KUBERNETES and ctx.profile.kubernetes_config is not None

    def run(self, ctx: ValidationContext) -> None:
        self.validate(ctx.kubernetes_config, ctx.version)

    def validate(self, config: KubernetesConfig, k8s_version: str) -> None:
        """Validate config for Kubernetes version k8s_version.

        Raises:
            ValidationError: For the first offending field
        """
        self._check_subnets(config)
        self._check_max_pods(config)
        self._check_kubelet_config(config)
        self._check_controller_manager_config(config)
        self._check_dns_service_ip(config)
        self._check_cloud_provider(config, k8s_version)
        self._check_etcd_version(config)
        self._check_cloud_controller_manager(config, k8s_version)

    def _check_subnets(self, config: KubernetesConfig) -> None:
        if config.cluster_subnet:
            subnet = InputValidator.parse_cidr(config.cluster_subnet, f"{_FIELD}.ClusterSubnet")
            if config.network_plugin == NETWORK_PLUGIN_AZURE:
                host_bits = subnet.max_prefixlen - subnet.prefixlen
                if host_bits < AZURE_CNI_MIN_HOST_BITS:
                    raise ConsistencyError(
                        f"{_FIELD}.ClusterSubnet '{config.cluster_subnet}' must reserve at least "
                        f"{AZURE_CNI_MIN_HOST_BITS} bits for nodes"
                    )

        if config.docker_bridge_subnet:
            InputValidator.validate_cidr(config.docker_bridge_subnet, f"{_FIELD}.DockerBridgeSubnet")

    def _check_max_pods(self, config: KubernetesConfig) -> None:
        if config.max_pods and config.max_pods < KUBERNETES_MIN_MAX_PODS:
            raise ConsistencyError(
                f"{_FIELD}.MaxPods '{config.max_pods}' must be at least {KUBERNETES_MIN_MAX_PODS}"
            )

    def _check_kubelet_config(self, config: KubernetesConfig) -> None:
        kubelet = config.kubelet_config
        if KUBELET_NON_MASQUERADE_CIDR in kubelet:
            value = kubelet[KUBELET_NON_MASQUERADE_CIDR]
            try:
                InputValidator.validate_cidr(value, KUBELET_NON_MASQUERADE_CIDR)
            except FormatValidationError:
                raise FormatValidationError(
                    f"{KUBELET_NON_MASQUERADE_CIDR} kubelet config '{value}' is an invalid CIDR string"
                ) from None

        if KUBELET_NODE_STATUS_UPDATE_FREQUENCY in kubelet:
            InputValidator.validate_duration(
                kubelet[KUBELET_NODE_STATUS_UPDATE_FREQUENCY], KUBELET_NODE_STATUS_UPDATE_FREQUENCY
            )

    def _check_controller_manager_config(self, config: KubernetesConfig) -> None:
        ctrl_mgr = config.controller_manager_config

        if CTRL_MGR_NODE_MONITOR_GRACE_PERIOD in ctrl_mgr:
            grace_period = InputValidator.validate_duration(
                ctrl_mgr[CTRL_MGR_NODE_MONITOR_GRACE_PERIOD], CTRL_MGR_NODE_MONITOR_GRACE_PERIOD
            )
            if KUBELET_NODE_STATUS_UPDATE_FREQUENCY in config.kubelet_config:
                update_frequency = InputValidator.validate_duration(
                    config.kubelet_config[KUBELET_NODE_STATUS_UPDATE_FREQUENCY],
                    KUBELET_NODE_STATUS_UPDATE_FREQUENCY,
                )
                if grace_period < MIN_KUBELET_RETRIES * update_frequency:
                    raise ConsistencyError(
                        f"{CTRL_MGR_NODE_MONITOR_GRACE_PERIOD} ({format_duration(grace_period)}) must be larger than "
                        f"{KUBELET_NODE_STATUS_UPDATE_FREQUENCY} ({format_duration(update_frequency)}) "
                        f"by at least a factor of {MIN_KUBELET_RETRIES}"
                    )

        for flag in (CTRL_MGR_POD_EVICTION_TIMEOUT, CTRL_MGR_ROUTE_RECONCILIATION_PERIOD):
            if flag in ctrl_mgr:
                InputValidator.validate_duration(ctrl_mgr[flag], flag)

    def _check_cloud_provider(self, config: KubernetesConfig, k8s_version: str) -> None:
        # Backoff and rate limit knobs take any value once enabled
        if config.cloud_provider_backoff and not is_version_ge(k8s_version, MIN_VERSION_CLOUD_PROVIDER_BACKOFF):
            raise VersionError(f"cloudprovider backoff functionality not available in kubernetes version {k8s_version}")

        if config.cloud_provider_rate_limit and not is_version_ge(k8s_version, MIN_VERSION_CLOUD_PROVIDER_RATE_LIMIT):
            raise VersionError(
                f"cloudprovider rate limiting functionality not available in kubernetes version {k8s_version}"
            )

    def _check_dns_service_ip(self, config: KubernetesConfig) -> None:
        if not config.dns_service_ip and not config.service_cidr:
            return

        if not config.service_cidr:
            raise ExclusivityError(f"{_FIELD}.ServiceCidr must be specified when DNSServiceIP is")
        if not config.dns_service_ip:
            raise ExclusivityError(f"{_FIELD}.DNSServiceIP must be specified when ServiceCidr is")

        InputValidator.validate_ip_in_cidr(
            config.dns_service_ip,
            config.service_cidr,
            f"{_FIELD}.DNSServiceIP",
            f"{_FIELD}.ServiceCidr",
        )

    def _check_etcd_version(self, config: KubernetesConfig) -> None:
        if config.etcd_version not in ETCD_VERSION_VALUES:
            raise CompatibilityError(
                f"Invalid etcd version '{config.etcd_version}', please use one of the following versions: "
                + ", ".join(v for v in ETCD_VERSION_VALUES if v)
            )

    def _check_cloud_controller_manager(self, config: KubernetesConfig, k8s_version: str) -> None:
        if not (config.use_cloud_controller_manager or config.custom_ccm_image):
            return
        if not is_version_ge(k8s_version, MIN_VERSION_CLOUD_CONTROLLER_MANAGER):
            raise VersionError(
                f"{_FIELD}.UseCloudControllerManager and {_FIELD}.CustomCcmImage not available "
                f"in kubernetes version {k8s_version}"
            )


class KubernetesFeatureValidator(BaseValidator):
    """Validates version-gated Kubernetes features for new clusters."""

    name = "Kubernetes features"

    def applies(self, ctx: ValidationContext) -> bool:
        return (
            not ctx.is_update
            and ctx.orchestrator_type == KUBERNETES
            and ctx.profile.kubernetes_config is not None
        )

    def run(self, ctx: ValidationContext) -> None:
        config = ctx.kubernetes_config
        version = ctx.version

        if config.enable_aggregated_apis:
            self._require_version("enableAggregatedAPIs", MIN_VERSION_AGGREGATED_APIS, version)
            if config.enable_rbac is False:
                raise CompatibilityError("enableAggregatedAPIs requires the enableRbac feature as a prerequisite")

        if config.enable_data_encryption_at_rest:
            self._require_version("enableDataEncryptionAtRest", MIN_VERSION_DATA_ENCRYPTION_AT_REST, version)
            if config.etcd_encryption_key:
                try:
                    base64.b64decode(config.etcd_encryption_key, validate=True)
                except (binascii.Error, ValueError):
                    raise FormatValidationError(
                        "etcdEncryptionKey must be base64 encoded. Please provide a valid base64 encoded value "
                        "or leave the etcdEncryptionKey empty to auto-generate the value"
                    ) from None

        if config.enable_encryption_with_external_kms:
            self._require_version("enableEncryptionWithExternalKms", MIN_VERSION_EXTERNAL_KMS, version)

        if config.enable_pod_security_policy:
            if not config.enable_rbac:
                raise CompatibilityError("enablePodSecurityPolicy requires the enableRbac feature as a prerequisite")
            self._require_version("enablePodSecurityPolicy", MIN_VERSION_POD_SECURITY_POLICY, version)

    @staticmethod
    def _require_version(feature: str, min_version: str, version: str) -> None:
        if not is_version_ge(version, min_version):
            raise VersionError(
                f"{feature} is only available in Kubernetes version {min_version} or greater; "
                f"unable to validate for Kubernetes version {version}"
            )
