"""Unit tests for service principal and AAD profile checks."""

import pytest

from apimodel.constants import ERR_KEYVAULT_ID_FORMAT, ERR_SECRET_AND_KEYVAULT_REF
from apimodel.exceptions import CompatibilityError, ExclusivityError, FormatValidationError
from apimodel.models import AADProfile, KeyvaultSecretRef, ServicePrincipalProfile
from validators.checks import (
    AADProfileValidator,
    ServicePrincipalValidator,
    ValidationContext,
    ValidationReporter,
)

from tests.builders import make_kubernetes_cluster

CLIENT_APP_ID = "92444486-5bc3-4291-818b-d53ae480991b"
SERVER_APP_ID = "403f018b-4d89-495b-b548-0cf9868cdb0a"
TENANT_ID = "feb784f6-7174-46da-aeae-da66e80c7a11"


@pytest.fixture
def sp_validator():
    return ServicePrincipalValidator(ValidationReporter())


@pytest.fixture
def aad_validator():
    return AADProfileValidator(ValidationReporter())


@pytest.mark.unit
class TestServicePrincipal:
    """Test service principal credential exclusivity."""

    def test_secret_only(self, sp_validator):
        sp_validator.validate(ServicePrincipalProfile(client_id="clientID", secret="clientSecret"))

    def test_keyvault_ref_with_version(self, sp_validator, keyvault_ref):
        sp_validator.validate(ServicePrincipalProfile(client_id="clientID", keyvault_secret_ref=keyvault_ref))

    def test_keyvault_ref_without_version(self, sp_validator, keyvault_ref):
        keyvault_ref.secret_version = ""
        sp_validator.validate(ServicePrincipalProfile(client_id="clientID", keyvault_secret_ref=keyvault_ref))

    def test_secret_and_keyvault_ref(self, sp_validator, keyvault_ref):
        profile = ServicePrincipalProfile(client_id="clientID", secret="clientSecret", keyvault_secret_ref=keyvault_ref)
        with pytest.raises(ExclusivityError) as exc_info:
            sp_validator.validate(profile)
        assert str(exc_info.value) == ERR_SECRET_AND_KEYVAULT_REF

    def test_neither_secret_nor_ref(self, sp_validator):
        with pytest.raises(ExclusivityError, match="either the service principal client secret"):
            sp_validator.validate(ServicePrincipalProfile(client_id="clientID"))

    def test_missing_client_id(self, sp_validator):
        with pytest.raises(ExclusivityError, match="client ID"):
            sp_validator.validate(ServicePrincipalProfile(secret="clientSecret"))

    def test_malformed_vault_id(self, sp_validator):
        profile = ServicePrincipalProfile(
            client_id="clientID",
            keyvault_secret_ref=KeyvaultSecretRef(vault_id="randomID", secret_name="secret-name"),
        )
        with pytest.raises(FormatValidationError) as exc_info:
            sp_validator.validate(profile)
        assert str(exc_info.value) == ERR_KEYVAULT_ID_FORMAT

    def test_missing_secret_name(self, sp_validator, keyvault_ref):
        keyvault_ref.secret_name = ""
        with pytest.raises(ExclusivityError, match="Keyvault Secret"):
            sp_validator.validate(ServicePrincipalProfile(client_id="clientID", keyvault_secret_ref=keyvault_ref))

    def test_missing_vault_id(self, sp_validator, keyvault_ref):
        keyvault_ref.vault_id = ""
        with pytest.raises(ExclusivityError, match="Keyvault ID"):
            sp_validator.validate(ServicePrincipalProfile(client_id="clientID", keyvault_secret_ref=keyvault_ref))

    def test_profile_required_for_kubernetes(self, sp_validator):
        cluster = make_kubernetes_cluster()
        cluster.service_principal_profile = None
        with pytest.raises(ExclusivityError, match="ServicePrincipalProfile must be specified"):
            sp_validator.run(ValidationContext(cluster=cluster))

    def test_managed_identity_needs_no_service_principal(self, sp_validator):
        cluster = make_kubernetes_cluster(use_managed_identity=True)
        cluster.service_principal_profile = None
        assert not sp_validator.applies(ValidationContext(cluster=cluster))


@pytest.mark.unit
class TestAADProfile:
    """Test AAD application and tenant IDs."""

    @pytest.mark.parametrize(
        "profile",
        [
            AADProfile(client_app_id=CLIENT_APP_ID, server_app_id=SERVER_APP_ID),
            AADProfile(client_app_id=CLIENT_APP_ID, server_app_id=SERVER_APP_ID, tenant_id=TENANT_ID),
            AADProfile(
                client_app_id=CLIENT_APP_ID,
                server_app_id=SERVER_APP_ID,
                tenant_id=TENANT_ID,
                admin_group_id="6a247d73-ae33-4559-8e5d-4001fdc17b15",
            ),
        ],
    )
    def test_valid_profiles(self, aad_validator, profile):
        aad_validator.validate(profile)

    @pytest.mark.parametrize(
        "profile,field",
        [
            (AADProfile(client_app_id="1", server_app_id="d"), "clientAppID"),
            (AADProfile(client_app_id="6a247d73-ae33-4559-8e5d-4001fdc17b15"), "serverAppID"),
            (AADProfile(client_app_id=CLIENT_APP_ID, server_app_id=SERVER_APP_ID, tenant_id="1"), "tenantID"),
            (AADProfile(), "clientAppID"),
            (
                AADProfile(client_app_id=CLIENT_APP_ID, server_app_id=SERVER_APP_ID, admin_group_id="x"),
                "adminGroupID",
            ),
        ],
    )
    def test_invalid_profiles(self, aad_validator, profile, field):
        with pytest.raises(FormatValidationError, match=field):
            aad_validator.validate(profile)

    def test_requires_kubernetes(self, aad_validator):
        cluster = make_kubernetes_cluster()
        cluster.orchestrator_profile.orchestrator_type = "DCOS"
        cluster.orchestrator_profile.kubernetes_config = None
        cluster.aad_profile = AADProfile(client_app_id=CLIENT_APP_ID, server_app_id=SERVER_APP_ID)
        with pytest.raises(CompatibilityError, match="only supported by orchestrator 'Kubernetes'"):
            aad_validator.run(ValidationContext(cluster=cluster))

    def test_requires_rbac(self, aad_validator):
        cluster = make_kubernetes_cluster(enable_rbac=False)
        cluster.aad_profile = AADProfile(client_app_id=CLIENT_APP_ID, server_app_id=SERVER_APP_ID)
        with pytest.raises(CompatibilityError, match="enableRbac"):
            aad_validator.run(ValidationContext(cluster=cluster))

    def test_skipped_without_profile(self, aad_validator):
        assert not aad_validator.applies(ValidationContext(cluster=make_kubernetes_cluster()))
