"""Master, agent pool and OS profile checks."""

from typing import Set

from apimodel.constants import (
    AVAILABILITY_PROFILE_VALUES,
    DCOS,
    KUBERNETES,
    MASTER_COUNT_VALUES,
    MAX_AGENT_COUNT,
    MIN_AGENT_COUNT,
    STORAGE_PROFILE_VALUES,
)
from apimodel.exceptions import (
    CompatibilityError,
    ConsistencyError,
    ExclusivityError,
    StructuralError,
)
from apimodel.models import AgentPoolProfile
from apimodel.validation import InputValidator

from .base_validator import BaseValidator, ValidationContext


class MasterProfileValidator(BaseValidator):
    """Validates master pool size, DNS prefix, storage and custom image."""

    name = "Master profile"

    def applies(self, ctx: ValidationContext) -> bool:
        return ctx.cluster.master_profile is not None

    def run(self, ctx: ValidationContext) -> None:
        master = ctx.cluster.master_profile

        if master.count not in MASTER_COUNT_VALUES:
            raise ConsistencyError(
                f"MasterProfile count needs to be 1, 3, or 5; got {master.count}"
            )

        InputValidator.validate_dns_prefix(master.dns_prefix)
        InputValidator.validate_choice(
            master.storage_profile, STORAGE_PROFILE_VALUES, "MasterProfile.StorageProfile"
        )

        if master.image_ref is not None:
            InputValidator.validate_image_name_and_group(master.image_ref.name, master.image_ref.resource_group)


class AgentPoolValidator(BaseValidator):
    """Validates every agent pool and the uniqueness of pool names."""

    name = "Agent pool profiles"

    def run(self, ctx: ValidationContext) -> None:
        seen: Set[str] = set()
        for pool in ctx.cluster.agent_pool_profiles:
            if pool.name in seen:
                raise StructuralError(
                    f"profile name '{pool.name}' already exists, profile names must be unique across pools"
                )
            seen.add(pool.name)
            self._validate_pool(pool, ctx.orchestrator_type)

    def _validate_pool(self, pool: AgentPoolProfile, orchestrator_type: str) -> None:
        InputValidator.validate_agent_pool_name(pool.name)

        if not isinstance(pool.count, int) or not MIN_AGENT_COUNT <= pool.count <= MAX_AGENT_COUNT:
            raise ConsistencyError(
                f"AgentPoolProfile '{pool.name}' count needs to be in the range "
                f"[{MIN_AGENT_COUNT},{MAX_AGENT_COUNT}]"
            )

        InputValidator.validate_choice(
            pool.storage_profile, STORAGE_PROFILE_VALUES, f"AgentPoolProfile '{pool.name}' StorageProfile"
        )
        InputValidator.validate_choice(
            pool.availability_profile,
            AVAILABILITY_PROFILE_VALUES,
            f"AgentPoolProfile '{pool.name}' AvailabilityProfile",
        )

        if pool.image_ref is not None:
            InputValidator.validate_image_name_and_group(pool.image_ref.name, pool.image_ref.resource_group)

        if pool.custom_node_labels:
            if orchestrator_type not in (DCOS, KUBERNETES):
                raise CompatibilityError("Agent CustomNodeLabels are only supported for DCOS and Kubernetes")
            for key, value in pool.custom_node_labels.items():
                InputValidator.validate_kubernetes_label_key(key)
                InputValidator.validate_kubernetes_label_value(value)


class LinuxProfileValidator(BaseValidator):
    """Validates the Linux admin account when a Linux profile is given."""

    name = "Linux profile"

    def applies(self, ctx: ValidationContext) -> bool:
        return ctx.cluster.linux_profile is not None

    def run(self, ctx: ValidationContext) -> None:
        profile = ctx.cluster.linux_profile
        if not profile.admin_username:
            raise ExclusivityError("LinuxProfile.AdminUsername must be specified")
        if len(profile.ssh_public_keys) != 1:
            raise ConsistencyError(
                f"LinuxProfile.SSH.PublicKeys requires exactly one key; got {len(profile.ssh_public_keys)}"
            )
        if not profile.ssh_public_keys[0]:
            raise ExclusivityError("LinuxProfile.SSH.PublicKeys[0].KeyData must be specified")


class WindowsProfileValidator(BaseValidator):
    """Windows agent pools need Windows admin credentials."""

    name = "Windows profile"

    def applies(self, ctx: ValidationContext) -> bool:
        return ctx.has_windows

    def run(self, ctx: ValidationContext) -> None:
        profile = ctx.cluster.windows_profile
        pool = next(p for p in ctx.cluster.agent_pool_profiles if p.is_windows())
        if profile is None:
            raise StructuralError(f"WindowsProfile must be specified since agent pool '{pool.name}' runs Windows")
        if not profile.admin_username or not profile.admin_password:
            raise ExclusivityError("WindowsProfile.AdminUsername and WindowsProfile.AdminPassword must both be specified")
