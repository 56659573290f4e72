"""Builders for cluster descriptions used across the test suite."""

from apimodel.models import (
    AgentPoolProfile,
    ClusterDescription,
    KubernetesConfig,
    LinuxProfile,
    MasterProfile,
    OpenShiftConfig,
    OrchestratorProfile,
    ServicePrincipalProfile,
    WindowsProfile,
)

VALID_VAULT_ID = (
    "/subscriptions/SUB-ID/resourceGroups/RG-NAME/providers/Microsoft.KeyVault/vaults/KV-NAME"
)


def make_kubernetes_cluster(has_windows=False, **k8s_settings):
    """Build a minimal valid Kubernetes cluster description."""
    pools = [AgentPoolProfile(name="agentpool", count=2, vm_size="Standard_D2_v2")]
    windows_profile = None
    if has_windows:
        pools.append(AgentPoolProfile(name="winpool", count=2, vm_size="Standard_D2_v2", os_type="Windows"))
        windows_profile = WindowsProfile(admin_username="azureuser", admin_password="replacepassword1234$")

    return ClusterDescription(
        orchestrator_profile=OrchestratorProfile(
            orchestrator_type="Kubernetes",
            kubernetes_config=KubernetesConfig(**k8s_settings),
        ),
        master_profile=MasterProfile(count=1, dns_prefix="myprefix", vm_size="Standard_D2_v2"),
        agent_pool_profiles=pools,
        linux_profile=LinuxProfile(admin_username="azureuser", ssh_public_keys=["ssh-rsa AAAAB3Nza test"]),
        windows_profile=windows_profile,
        service_principal_profile=ServicePrincipalProfile(client_id="clientID", secret="clientSecret"),
    )


def make_openshift_cluster():
    """Build a minimal valid OpenShift cluster description."""
    return ClusterDescription(
        orchestrator_profile=OrchestratorProfile(
            orchestrator_type="OpenShift",
            orchestrator_version="3.9.0",
            openshift_config=OpenShiftConfig(cluster_username="admin", cluster_password="admin123"),
        ),
        master_profile=MasterProfile(
            count=1, dns_prefix="openshift", vm_size="Standard_D4s_v3", storage_profile="ManagedDisks"
        ),
        agent_pool_profiles=[
            AgentPoolProfile(
                name="compute",
                count=2,
                vm_size="Standard_D4s_v3",
                storage_profile="ManagedDisks",
                availability_profile="AvailabilitySet",
            ),
            AgentPoolProfile(
                name="infra",
                count=2,
                vm_size="Standard_D4s_v3",
                storage_profile="ManagedDisks",
                availability_profile="AvailabilitySet",
            ),
        ],
        linux_profile=LinuxProfile(admin_username="azureuser", ssh_public_keys=["ssh-rsa AAAAB3Nza test"]),
    )


