"""Centralized constants for API model validation."""

LOGGER_NAME = "apimodel_validator"

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPT = 130

# Orchestrator types
KUBERNETES = "Kubernetes"
DCOS = "DCOS"
OPENSHIFT = "OpenShift"
SWARM = "Swarm"
SWARM_MODE = "DockerCE"
ORCHESTRATOR_TYPES = [KUBERNETES, DCOS, OPENSHIFT, SWARM, SWARM_MODE]

# OpenShift builds that bypass the version catalog
OPENSHIFT_VERSION_UNSTABLE = "unstable"

# OS types
LINUX = "Linux"
WINDOWS = "Windows"

# Storage profiles
STORAGE_ACCOUNT = "StorageAccount"
MANAGED_DISKS = "ManagedDisks"
STORAGE_PROFILE_VALUES = ["", STORAGE_ACCOUNT, MANAGED_DISKS]

# Availability profiles
AVAILABILITY_SET = "AvailabilitySet"
VIRTUAL_MACHINE_SCALE_SETS = "VirtualMachineScaleSets"
AVAILABILITY_PROFILE_VALUES = ["", AVAILABILITY_SET, VIRTUAL_MACHINE_SCALE_SETS]

# Pool sizing
MASTER_COUNT_VALUES = [1, 3, 5]
MIN_AGENT_COUNT = 1
MAX_AGENT_COUNT = 100

# Kubernetes tunables
KUBERNETES_MIN_MAX_PODS = 5
# --node-monitor-grace-period must cover this many --node-status-update-frequency intervals
MIN_KUBELET_RETRIES = 4
# azure CNI hands out pod IPs from the cluster subnet
AZURE_CNI_MIN_HOST_BITS = 9

# Kubelet / controller-manager flags inspected by the validator
KUBELET_NON_MASQUERADE_CIDR = "--non-masquerade-cidr"
KUBELET_NODE_STATUS_UPDATE_FREQUENCY = "--node-status-update-frequency"
CTRL_MGR_NODE_MONITOR_GRACE_PERIOD = "--node-monitor-grace-period"
CTRL_MGR_POD_EVICTION_TIMEOUT = "--pod-eviction-timeout"
CTRL_MGR_ROUTE_RECONCILIATION_PERIOD = "--route-reconciliation-period"

# Minimum Kubernetes versions for version-gated features
MIN_VERSION_CLOUD_PROVIDER_BACKOFF = "1.6.6"
MIN_VERSION_CLOUD_PROVIDER_RATE_LIMIT = "1.6.6"
MIN_VERSION_AGGREGATED_APIS = "1.7.0"
MIN_VERSION_DATA_ENCRYPTION_AT_REST = "1.7.0"
MIN_VERSION_POD_SECURITY_POLICY = "1.8.0"
MIN_VERSION_CLOUD_CONTROLLER_MANAGER = "1.8.0"
MIN_VERSION_EXTERNAL_KMS = "1.10.0"

# Network plugins and policies
NETWORK_PLUGIN_KUBENET = "kubenet"
NETWORK_PLUGIN_AZURE = "azure"
NETWORK_PLUGIN_CILIUM = "cilium"
NETWORK_PLUGIN_FLANNEL = "flannel"
NETWORK_PLUGIN_VALUES = [
    "",
    NETWORK_PLUGIN_KUBENET,
    NETWORK_PLUGIN_AZURE,
    NETWORK_PLUGIN_CILIUM,
    NETWORK_PLUGIN_FLANNEL,
]

NETWORK_POLICY_CALICO = "calico"
NETWORK_POLICY_CILIUM = "cilium"
NETWORK_POLICY_AZURE = "azure"
NETWORK_POLICY_NONE = "none"
NETWORK_POLICY_VALUES = [
    "",
    NETWORK_POLICY_CALICO,
    NETWORK_POLICY_CILIUM,
    NETWORK_POLICY_AZURE,
    NETWORK_POLICY_NONE,
]
LINUX_ONLY_NETWORK_POLICIES = [NETWORK_POLICY_CALICO, NETWORK_POLICY_CILIUM]

# (networkPlugin, networkPolicy) pairs that can be deployed together.
# Plugin and policy implementations are not independently composable.
NETWORK_PLUGIN_PLUS_POLICY_ALLOWED = [
    ("", ""),
    (NETWORK_PLUGIN_AZURE, ""),
    (NETWORK_PLUGIN_KUBENET, ""),
    (NETWORK_PLUGIN_FLANNEL, ""),
    (NETWORK_PLUGIN_CILIUM, ""),
    (NETWORK_PLUGIN_CILIUM, NETWORK_POLICY_CILIUM),
    (NETWORK_PLUGIN_KUBENET, NETWORK_POLICY_CALICO),
    ("", NETWORK_POLICY_CALICO),
    ("", NETWORK_POLICY_CILIUM),
    # networkPolicy used to double as the plugin selector
    ("", NETWORK_POLICY_AZURE),
    ("", NETWORK_POLICY_NONE),
]

# Container runtimes
CONTAINER_RUNTIME_DOCKER = "docker"
CONTAINER_RUNTIME_CLEAR_CONTAINERS = "clear-containers"
CONTAINER_RUNTIME_KATA_CONTAINERS = "kata-containers"
CONTAINER_RUNTIME_CONTAINERD = "containerd"
CONTAINER_RUNTIME_VALUES = [
    "",
    CONTAINER_RUNTIME_DOCKER,
    CONTAINER_RUNTIME_CLEAR_CONTAINERS,
    CONTAINER_RUNTIME_KATA_CONTAINERS,
    CONTAINER_RUNTIME_CONTAINERD,
]
LINUX_ONLY_CONTAINER_RUNTIMES = [
    CONTAINER_RUNTIME_CLEAR_CONTAINERS,
    CONTAINER_RUNTIME_KATA_CONTAINERS,
]

# etcd versions the templates know how to install
ETCD_VERSION_VALUES = [
    "",
    "2.2.5",
    "2.3.0",
    "2.3.1",
    "2.3.2",
    "2.3.3",
    "2.3.4",
    "2.3.5",
    "2.3.6",
    "2.3.7",
    "2.3.8",
    "3.0.0",
    "3.0.17",
    "3.1.0",
    "3.1.10",
    "3.2.0",
    "3.2.11",
    "3.2.16",
    "3.2.23",
    "3.3.0",
    "3.3.1",
]

# Contract error messages (tooling parses or displays these verbatim)
ERR_KEYVAULT_ID_FORMAT = "service principal client keyvault secret reference is of incorrect format"
ERR_SECRET_AND_KEYVAULT_REF = "service principal client secret and keyvault secret reference cannot both be set"
ERR_OPENSHIFT_MANAGED_DISKS = "OpenShift orchestrator supports only ManagedDisks"
ERR_IMAGE_NAME_MISSING = "imageName needs to be specified when imageResourceGroup is provided"
ERR_IMAGE_RESOURCE_GROUP_MISSING = "imageResourceGroup needs to be specified when imageName is provided"
