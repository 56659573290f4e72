"""
Custom exceptions for API model validation.
"""


class ApiModelError(Exception):
    """Base class for all API model errors."""


class FatalError(ApiModelError):
    """
    Error that cannot be resolved by retrying.
    Every API model error is fatal: the caller must correct its input.
    """


class ConfigurationError(FatalError):
    """Unreadable or malformed API model document."""


class ValidationError(FatalError):
    """API model failed semantic validation."""


class FormatValidationError(ValidationError):
    """Malformed CIDR, IP, duration, GUID, label or resource ID string."""


class ConsistencyError(ValidationError):
    """
    Numeric range or cross-field consistency violation.
    Examples: MaxPods below the floor, DNSServiceIP outside ServiceCidr.
    """


class ExclusivityError(ValidationError):
    """Both or neither of a required pair of fields were set."""


class CompatibilityError(ValidationError):
    """Individually valid values that are not allowed in combination."""


class VersionError(ValidationError):
    """Requested orchestrator version or release is not supported."""


class StructuralError(ValidationError):
    """Wrong orchestrator block populated or non-uniform pool layout."""
