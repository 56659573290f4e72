"""
Library package for cluster API model validation.
"""

# Import version from lightweight module (avoids importing heavy deps at build time)
from ._version import __version__, __version_date__

from .exceptions import (
    ApiModelError,
    CompatibilityError,
    ConfigurationError,
    ConsistencyError,
    ExclusivityError,
    FatalError,
    FormatValidationError,
    StructuralError,
    ValidationError,
    VersionError,
)
from .models import ClusterDescription, KubernetesConfig, OrchestratorProfile
from .utils import (
    format_duration,
    is_version_ge,
    parse_duration,
    parse_version,
    setup_logging,
)
from .validation import InputValidator
from .versions import DEFAULT_CATALOG, VersionCatalog, get_versions_gt

__all__ = [
    "__version__",
    "__version_date__",
    "ApiModelError",
    "FatalError",
    "ConfigurationError",
    "ValidationError",
    "FormatValidationError",
    "ConsistencyError",
    "ExclusivityError",
    "CompatibilityError",
    "VersionError",
    "StructuralError",
    "ClusterDescription",
    "OrchestratorProfile",
    "KubernetesConfig",
    "InputValidator",
    "VersionCatalog",
    "DEFAULT_CATALOG",
    "get_versions_gt",
    "setup_logging",
    "parse_duration",
    "parse_version",
    "is_version_ge",
    "format_duration",
]
