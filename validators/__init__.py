"""
API model validation rules.
"""

from apimodel.exceptions import ValidationError

from .properties_validator import (
    ORCHESTRATOR_RULES,
    PROPERTIES_RULES,
    PropertiesValidator,
    validate_orchestrator_profile,
    validate_properties,
)

__all__ = [
    "ValidationError",
    "PropertiesValidator",
    "validate_properties",
    "validate_orchestrator_profile",
    "ORCHESTRATOR_RULES",
    "PROPERTIES_RULES",
]
