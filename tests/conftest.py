"""Shared fixtures for API model validation tests."""

import pytest

from apimodel.models import KeyvaultSecretRef
from tests.builders import VALID_VAULT_ID, make_kubernetes_cluster, make_openshift_cluster


@pytest.fixture
def k8s_cluster():
    """A valid Linux-only Kubernetes cluster description."""
    return make_kubernetes_cluster()


@pytest.fixture
def k8s_windows_cluster():
    """A valid Kubernetes cluster description with a Windows agent pool."""
    return make_kubernetes_cluster(has_windows=True)


@pytest.fixture
def openshift_cluster():
    """A valid OpenShift cluster description."""
    return make_openshift_cluster()


@pytest.fixture
def keyvault_ref():
    """A well-formed Key Vault secret reference."""
    return KeyvaultSecretRef(vault_id=VALID_VAULT_ID, secret_name="secret-name", secret_version="version")


@pytest.fixture
def apimodel_document():
    """A valid API model document as it appears on disk."""
    return {
        "apiVersion": "vlabs",
        "properties": {
            "orchestratorProfile": {
                "orchestratorType": "Kubernetes",
                "orchestratorRelease": "1.10",
                "kubernetesConfig": {
                    "networkPolicy": "calico",
                    "serviceCidr": "10.0.0.0/16",
                    "dnsServiceIP": "10.0.0.10",
                    "kubeletConfig": {"--node-status-update-frequency": "10s"},
                    "controllerManagerConfig": {"--node-monitor-grace-period": "40s"},
                },
            },
            "masterProfile": {"count": 3, "dnsPrefix": "mycluster", "vmSize": "Standard_D2_v2"},
            "agentPoolProfiles": [
                {
                    "name": "agentpool1",
                    "count": 3,
                    "vmSize": "Standard_D2_v2",
                    "availabilityProfile": "AvailabilitySet",
                    "customNodeLabels": {"team": "infra", "example.com/tier": "backend"},
                }
            ],
            "linuxProfile": {
                "adminUsername": "azureuser",
                "ssh": {"publicKeys": [{"keyData": "ssh-rsa AAAAB3Nza test"}]},
            },
            "servicePrincipalProfile": {
                "clientId": "clientID",
                "keyvaultSecretRef": {"vaultID": VALID_VAULT_ID, "secretName": "spsecret"},
            },
        },
    }
