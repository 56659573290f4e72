"""Unit tests for Kubernetes configuration and feature checks."""

import pytest

from apimodel.exceptions import (
    CompatibilityError,
    ConsistencyError,
    ExclusivityError,
    FormatValidationError,
    VersionError,
)
from apimodel.models import KubernetesConfig
from validators.checks import (
    KubernetesConfigValidator,
    KubernetesFeatureValidator,
    ValidationContext,
    ValidationReporter,
)

from tests.builders import make_kubernetes_cluster

K8S_VERSION = "1.10.6"


@pytest.fixture
def config_validator():
    return KubernetesConfigValidator(ValidationReporter())


@pytest.fixture
def feature_validator():
    return KubernetesFeatureValidator(ValidationReporter())


def feature_context(version=K8S_VERSION, is_update=False, **settings):
    cluster = make_kubernetes_cluster(**settings)
    return ValidationContext(cluster=cluster, is_update=is_update, version=version)


@pytest.mark.unit
class TestSubnets:
    """Test cluster and docker bridge subnets."""

    def test_valid_subnets(self, config_validator):
        config = KubernetesConfig(cluster_subnet="10.244.0.0/16", docker_bridge_subnet="172.17.0.1/16")
        config_validator.validate(config, K8S_VERSION)

    def test_invalid_cluster_subnet(self, config_validator):
        with pytest.raises(FormatValidationError, match="ClusterSubnet"):
            config_validator.validate(KubernetesConfig(cluster_subnet="10.16.x.0/invalid"), K8S_VERSION)

    def test_invalid_docker_bridge_subnet(self, config_validator):
        with pytest.raises(FormatValidationError, match="DockerBridgeSubnet"):
            config_validator.validate(KubernetesConfig(docker_bridge_subnet="10.120.1.0/invalid"), K8S_VERSION)

    def test_azure_cni_needs_room_for_pods(self, config_validator):
        config = KubernetesConfig(cluster_subnet="10.240.0.0/24", network_plugin="azure")
        with pytest.raises(ConsistencyError, match="at least 9 bits"):
            config_validator.validate(config, K8S_VERSION)

    def test_azure_cni_large_subnet(self, config_validator):
        config = KubernetesConfig(cluster_subnet="10.240.0.0/16", network_plugin="azure")
        config_validator.validate(config, K8S_VERSION)

    def test_small_subnet_without_azure_cni(self, config_validator):
        config_validator.validate(KubernetesConfig(cluster_subnet="10.240.0.0/24"), K8S_VERSION)


@pytest.mark.unit
class TestMaxPods:
    """Test the MaxPods floor."""

    @pytest.mark.parametrize("max_pods", [0, 5, 30, 110])
    def test_valid(self, config_validator, max_pods):
        config_validator.validate(KubernetesConfig(max_pods=max_pods), K8S_VERSION)

    @pytest.mark.parametrize("max_pods", [1, 4])
    def test_below_floor(self, config_validator, max_pods):
        with pytest.raises(ConsistencyError, match="MaxPods"):
            config_validator.validate(KubernetesConfig(max_pods=max_pods), K8S_VERSION)


@pytest.mark.unit
class TestProcessFlags:
    """Test kubelet and controller-manager flags."""

    def test_invalid_non_masquerade_cidr(self, config_validator):
        config = KubernetesConfig(kubelet_config={"--non-masquerade-cidr": "10.120.1.0/invalid"})
        with pytest.raises(FormatValidationError, match="invalid CIDR string"):
            config_validator.validate(config, K8S_VERSION)

    def test_valid_non_masquerade_cidr(self, config_validator):
        config = KubernetesConfig(kubelet_config={"--non-masquerade-cidr": "10.120.1.0/24"})
        config_validator.validate(config, K8S_VERSION)

    @pytest.mark.parametrize(
        "flag,target",
        [
            ("--node-status-update-frequency", "kubelet_config"),
            ("--node-monitor-grace-period", "controller_manager_config"),
            ("--pod-eviction-timeout", "controller_manager_config"),
            ("--route-reconciliation-period", "controller_manager_config"),
        ],
    )
    def test_invalid_durations(self, config_validator, flag, target):
        config = KubernetesConfig(**{target: {flag: "invalid"}})
        with pytest.raises(FormatValidationError, match=flag):
            config_validator.validate(config, K8S_VERSION)

    def test_valid_durations(self, config_validator):
        config = KubernetesConfig(
            kubelet_config={"--node-status-update-frequency": "10s"},
            controller_manager_config={
                "--node-monitor-grace-period": "40s",
                "--pod-eviction-timeout": "5m0s",
                "--route-reconciliation-period": "10s",
            },
        )
        config_validator.validate(config, K8S_VERSION)

    def test_unknown_flags_are_ignored(self, config_validator):
        config = KubernetesConfig(
            kubelet_config={"--image-gc-high-threshold": "not checked"},
            controller_manager_config={"--terminated-pod-gc-threshold": "anything"},
        )
        config_validator.validate(config, K8S_VERSION)

    def test_grace_period_too_short(self, config_validator):
        config = KubernetesConfig(
            kubelet_config={"--node-status-update-frequency": "10s"},
            controller_manager_config={"--node-monitor-grace-period": "30s"},
        )
        with pytest.raises(ConsistencyError, match="--node-monitor-grace-period"):
            config_validator.validate(config, K8S_VERSION)

    def test_grace_period_long_enough(self, config_validator):
        config = KubernetesConfig(
            kubelet_config={"--node-status-update-frequency": "10s"},
            controller_manager_config={"--node-monitor-grace-period": "40s"},
        )
        config_validator.validate(config, K8S_VERSION)

    def test_grace_period_alone(self, config_validator):
        config = KubernetesConfig(controller_manager_config={"--node-monitor-grace-period": "1s"})
        config_validator.validate(config, K8S_VERSION)


@pytest.mark.unit
class TestDNSServiceIP:
    """Test DNSServiceIP and ServiceCidr placement."""

    def test_valid(self, config_validator):
        config = KubernetesConfig(dns_service_ip="172.99.255.10", service_cidr="172.99.0.1/16")
        config_validator.validate(config, K8S_VERSION)

    @pytest.mark.parametrize("dns_service_ip", ["172.99.0.1", "172.99.255.255", "172.99.0.0", "10.0.0.10"])
    def test_unusable_address(self, config_validator, dns_service_ip):
        config = KubernetesConfig(dns_service_ip=dns_service_ip, service_cidr="172.99.0.1/16")
        with pytest.raises(ConsistencyError):
            config_validator.validate(config, K8S_VERSION)

    def test_ip_without_cidr(self, config_validator):
        with pytest.raises(ExclusivityError, match="ServiceCidr must be specified"):
            config_validator.validate(KubernetesConfig(dns_service_ip="172.99.255.10"), K8S_VERSION)

    def test_cidr_without_ip(self, config_validator):
        with pytest.raises(ExclusivityError, match="DNSServiceIP must be specified"):
            config_validator.validate(KubernetesConfig(service_cidr="172.99.0.1/16"), K8S_VERSION)

    def test_checked_before_cloud_provider(self, config_validator):
        config = KubernetesConfig(dns_service_ip="172.99.255.10", cloud_provider_backoff=True)
        with pytest.raises(ExclusivityError, match="ServiceCidr must be specified"):
            config_validator.validate(config, "1.6.5")


@pytest.mark.unit
class TestVersionGatedSettings:
    """Test settings that need a minimum Kubernetes version."""

    def test_cloud_provider_backoff(self, config_validator):
        config = KubernetesConfig(cloud_provider_backoff=True, cloud_provider_backoff_retries=-1)
        config_validator.validate(config, "1.6.9")
        with pytest.raises(VersionError, match="backoff"):
            config_validator.validate(config, "1.6.5")

    def test_cloud_provider_rate_limit(self, config_validator):
        config = KubernetesConfig(cloud_provider_rate_limit=True, cloud_provider_rate_limit_qps=0.5)
        config_validator.validate(config, "1.6.9")
        with pytest.raises(VersionError, match="rate limiting"):
            config_validator.validate(config, "1.6.5")

    @pytest.mark.parametrize(
        "settings",
        [{"use_cloud_controller_manager": True}, {"custom_ccm_image": "example.azurecr.io/ccm:v1"}],
    )
    def test_cloud_controller_manager(self, config_validator, settings):
        config = KubernetesConfig(**settings)
        config_validator.validate(config, "1.8.13")
        with pytest.raises(VersionError, match="UseCloudControllerManager"):
            config_validator.validate(config, "1.7.16")

    def test_cloud_controller_manager_disabled(self, config_validator):
        config_validator.validate(KubernetesConfig(use_cloud_controller_manager=False), "1.7.16")

    def test_etcd_version(self, config_validator):
        config_validator.validate(KubernetesConfig(etcd_version="3.2.23"), K8S_VERSION)
        with pytest.raises(CompatibilityError, match="Invalid etcd version"):
            config_validator.validate(KubernetesConfig(etcd_version="3.9.9"), K8S_VERSION)


@pytest.mark.unit
class TestKubernetesFeatures:
    """Test create-only feature gates."""

    def test_applies_only_on_create(self, feature_validator):
        assert feature_validator.applies(feature_context())
        assert not feature_validator.applies(feature_context(is_update=True))

    def test_aggregated_apis(self, feature_validator):
        feature_validator.run(feature_context(enable_aggregated_apis=True, enable_rbac=True))
        with pytest.raises(VersionError, match="enableAggregatedAPIs"):
            feature_validator.run(feature_context(version="1.6.9", enable_aggregated_apis=True))
        with pytest.raises(CompatibilityError, match="enableRbac"):
            feature_validator.run(feature_context(enable_aggregated_apis=True, enable_rbac=False))

    def test_data_encryption_at_rest(self, feature_validator):
        feature_validator.run(
            feature_context(enable_data_encryption_at_rest=True, etcd_encryption_key="c2VjcmV0LWtleQ==")
        )
        with pytest.raises(VersionError, match="enableDataEncryptionAtRest"):
            feature_validator.run(feature_context(version="1.6.9", enable_data_encryption_at_rest=True))
        with pytest.raises(FormatValidationError, match="base64"):
            feature_validator.run(
                feature_context(enable_data_encryption_at_rest=True, etcd_encryption_key="not base64!")
            )

    def test_external_kms(self, feature_validator):
        feature_validator.run(feature_context(enable_encryption_with_external_kms=True))
        with pytest.raises(VersionError, match="enableEncryptionWithExternalKms"):
            feature_validator.run(feature_context(version="1.9.10", enable_encryption_with_external_kms=True))

    def test_pod_security_policy(self, feature_validator):
        feature_validator.run(feature_context(enable_pod_security_policy=True, enable_rbac=True))
        with pytest.raises(CompatibilityError, match="enableRbac"):
            feature_validator.run(feature_context(enable_pod_security_policy=True))
        with pytest.raises(VersionError, match="enablePodSecurityPolicy"):
            feature_validator.run(
                feature_context(version="1.7.16", enable_pod_security_policy=True, enable_rbac=True)
            )
