"""Network plugin, network policy and container runtime compatibility checks."""

from apimodel.constants import (
    CONTAINER_RUNTIME_VALUES,
    KUBERNETES,
    LINUX_ONLY_CONTAINER_RUNTIMES,
    LINUX_ONLY_NETWORK_POLICIES,
    NETWORK_PLUGIN_PLUS_POLICY_ALLOWED,
    NETWORK_PLUGIN_VALUES,
    NETWORK_POLICY_VALUES,
)
from apimodel.exceptions import CompatibilityError
from apimodel.validation import InputValidator

from .base_validator import BaseValidator, ValidationContext


class _KubernetesOnly(BaseValidator):
    def applies(self, ctx: ValidationContext) -> bool:
        return ctx.orchestrator_type == KUBERNETES


class NetworkPolicyValidator(_KubernetesOnly):
    """Checks the network policy value and its Windows support."""

    name = "Network policy"

    def run(self, ctx: ValidationContext) -> None:
        policy = ctx.kubernetes_config.network_policy
        InputValidator.validate_choice(policy, NETWORK_POLICY_VALUES, "networkPolicy", CompatibilityError)

        if policy in LINUX_ONLY_NETWORK_POLICIES and ctx.has_windows:
            raise CompatibilityError(f"networkPolicy '{policy}' is not supporting windows agents")


class NetworkPluginValidator(_KubernetesOnly):
    """Checks the network plugin value."""

    name = "Network plugin"

    def run(self, ctx: ValidationContext) -> None:
        InputValidator.validate_choice(
            ctx.kubernetes_config.network_plugin, NETWORK_PLUGIN_VALUES, "networkPlugin", CompatibilityError
        )


class NetworkPluginPlusPolicyValidator(_KubernetesOnly):
    """Checks the (plugin, policy) pair against the allow-list."""

    name = "Network plugin and policy"

    def run(self, ctx: ValidationContext) -> None:
        config = ctx.kubernetes_config
        pair = (config.network_plugin, config.network_policy)
        if pair not in NETWORK_PLUGIN_PLUS_POLICY_ALLOWED:
            raise CompatibilityError(
                f"networkPolicy '{config.network_policy}' is not supported with "
                f"networkPlugin '{config.network_plugin}'"
            )


class ContainerRuntimeValidator(_KubernetesOnly):
    """Checks the container runtime value and its Windows support."""

    name = "Container runtime"

    def run(self, ctx: ValidationContext) -> None:
        runtime = ctx.kubernetes_config.container_runtime
        InputValidator.validate_choice(runtime, CONTAINER_RUNTIME_VALUES, "containerRuntime", CompatibilityError)

        if runtime in LINUX_ONLY_CONTAINER_RUNTIMES and ctx.has_windows:
            raise CompatibilityError(f"containerRuntime '{runtime}' is not supporting windows agents")
