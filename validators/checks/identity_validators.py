"""Service principal and AAD identity checks."""

from apimodel.constants import ERR_SECRET_AND_KEYVAULT_REF, KUBERNETES
from apimodel.exceptions import CompatibilityError, ExclusivityError, FormatValidationError
from apimodel.models import AADProfile, ServicePrincipalProfile
from apimodel.validation import InputValidator

from .base_validator import BaseValidator, ValidationContext


class ServicePrincipalValidator(BaseValidator):
    """Validates the service principal credentials of a Kubernetes cluster.

    Exactly one of an inline secret or a Key Vault secret reference must be
    set. Clusters using a managed identity need no service principal.
    """

    name = "Service principal"

    def applies(self, ctx: ValidationContext) -> bool:
        return ctx.orchestrator_type == KUBERNETES and not ctx.kubernetes_config.use_managed_identity

    def run(self, ctx: ValidationContext) -> None:
        profile = ctx.cluster.service_principal_profile
        if profile is None:
            raise ExclusivityError(f"ServicePrincipalProfile must be specified with Orchestrator {KUBERNETES}")
        self.validate(profile)

    def validate(self, profile: ServicePrincipalProfile) -> None:
        if not profile.client_id:
            raise ExclusivityError(
                f"the service principal client ID must be specified with Orchestrator {KUBERNETES}"
            )

        ref = profile.keyvault_secret_ref
        if profile.secret and ref is not None:
            raise ExclusivityError(ERR_SECRET_AND_KEYVAULT_REF)
        if not profile.secret and ref is None:
            raise ExclusivityError(
                f"either the service principal client secret or keyvault secret reference "
                f"must be specified with Orchestrator {KUBERNETES}"
            )

        if ref is not None:
            if not ref.vault_id:
                raise ExclusivityError(
                    f"the Keyvault ID must be specified for the Service Principal with Orchestrator {KUBERNETES}"
                )
            if not ref.secret_name:
                raise ExclusivityError(
                    f"the Keyvault Secret must be specified for the Service Principal with Orchestrator {KUBERNETES}"
                )
            InputValidator.validate_keyvault_id(ref.vault_id)


class AADProfileValidator(BaseValidator):
    """Validates the optional AAD integration profile."""

    name = "AAD profile"

    def applies(self, ctx: ValidationContext) -> bool:
        return ctx.cluster.aad_profile is not None

    def run(self, ctx: ValidationContext) -> None:
        if ctx.orchestrator_type != KUBERNETES:
            raise CompatibilityError(f"'aadProfile' is only supported by orchestrator '{KUBERNETES}'")
        if ctx.kubernetes_config.enable_rbac is False:
            raise CompatibilityError("'aadProfile' requires the enableRbac feature to be enabled")
        self.validate(ctx.cluster.aad_profile)

    def validate(self, profile: AADProfile) -> None:
        """Validate the application, tenant and admin group IDs."""
        if not profile.client_app_id:
            raise FormatValidationError("clientAppID must be specified in aadProfile")
        InputValidator.validate_guid(profile.client_app_id, "clientAppID")

        if not profile.server_app_id:
            raise FormatValidationError("serverAppID must be specified in aadProfile")
        InputValidator.validate_guid(profile.server_app_id, "serverAppID")

        if profile.tenant_id:
            InputValidator.validate_guid(profile.tenant_id, "tenantID")

        if profile.admin_group_id:
            InputValidator.validate_guid(profile.admin_group_id, "adminGroupID")
