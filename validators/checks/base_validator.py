"""Base validator classes for API model rules."""

from dataclasses import dataclass

from apimodel.models import ClusterDescription, KubernetesConfig, OrchestratorProfile
from apimodel.versions import DEFAULT_CATALOG, VersionCatalog

from .reporter import ValidationReporter


@dataclass
class ValidationContext:
    """Inputs shared by the rules of one validation call.

    ``version`` is filled in by the version gate with the resolved
    orchestrator version; rules that run before it see an empty string.
    """

    cluster: ClusterDescription
    is_update: bool = False
    catalog: VersionCatalog = DEFAULT_CATALOG
    version: str = ""

    @property
    def profile(self) -> OrchestratorProfile:
        return self.cluster.orchestrator_profile

    @property
    def orchestrator_type(self) -> str:
        return self.cluster.orchestrator_type

    @property
    def kubernetes_config(self) -> KubernetesConfig:
        """The Kubernetes block, or an empty one when it is absent."""
        return self.cluster.kubernetes_config or KubernetesConfig()

    @property
    def has_windows(self) -> bool:
        return self.cluster.has_windows()


class BaseValidator:
    """Base class for all API model rule validators.

    A validator's run() raises a ValidationError subclass for the first
    violated rule and returns normally when every rule it owns holds.
    """

    #: Rule name used in reports
    name = "API model"

    def __init__(self, reporter: ValidationReporter) -> None:
        """Initialize validator with a validation reporter.

        Args:
            reporter: ValidationReporter instance for collecting results
        """
        self.reporter = reporter

    def applies(self, ctx: ValidationContext) -> bool:
        """Whether this validator has anything to check for ctx."""
        return True

    def run(self, ctx: ValidationContext) -> None:
        raise NotImplementedError

    def add_result(self, name: str, passed: bool, message: str) -> None:
        """Add a rule result to the reporter.

        Args:
            name: Name of the rule
            passed: Whether the rule passed
            message: Descriptive message about the result
        """
        self.reporter.add_result(name, passed, message)
