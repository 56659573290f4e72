"""
Primitive input validation for API model fields.

These checks have no cross-field dependency; the rule modules in
``validators.checks`` combine them.

Features:
- CIDR and IP-in-CIDR validation (network, first host and broadcast excluded)
- Go-style duration validation
- Kubernetes label key and value validation
- GUID and Azure Key Vault resource ID validation
- DNS prefix and agent pool name validation
- Image reference name/resource group pairing
"""

import ipaddress
import logging
import re
from typing import Optional, Pattern, Sequence, Union

from .constants import (
    ERR_IMAGE_NAME_MISSING,
    ERR_IMAGE_RESOURCE_GROUP_MISSING,
    ERR_KEYVAULT_ID_FORMAT,
    LOGGER_NAME,
)
from .exceptions import ConsistencyError, ExclusivityError, FormatValidationError, ValidationError
from .utils import parse_duration

logger = logging.getLogger(LOGGER_NAME)

IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

# Kubernetes label validation patterns
# https://kubernetes.io/docs/concepts/overview/working-with-objects/labels/#syntax-and-character-set
# Label key prefix: DNS-1123 subdomain, lowercase alphanumeric characters, '-' or '.',
# starts and ends with an alphanumeric character
K8S_LABEL_PREFIX_PATTERN: Pattern[str] = re.compile(r"[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*")
K8S_LABEL_PREFIX_MAX_LENGTH = 253
# Label key name and label value share one body rule: 1-63 characters,
# alphanumeric at both ends, alphanumerics, '-', '_' or '.' in between
K8S_LABEL_NAME_PATTERN: Pattern[str] = re.compile(r"[A-Za-z0-9]([-A-Za-z0-9_.]{0,61}[A-Za-z0-9])?")
K8S_LABEL_MAX_LENGTH = 63

GUID_PATTERN: Pattern[str] = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)

KEYVAULT_ID_PATTERN: Pattern[str] = re.compile(
    r"/subscriptions/\S+/resourceGroups/\S+/providers/Microsoft\.KeyVault/vaults/[^/\s]+"
)

# 3-45 characters, starts with a letter, ends with a letter or a number
DNS_PREFIX_PATTERN: Pattern[str] = re.compile(r"[A-Za-z][A-Za-z0-9-]{1,43}[A-Za-z0-9]")

AGENT_POOL_NAME_PATTERN: Pattern[str] = re.compile(r"[a-z][a-z0-9]{0,11}")


class InputValidator:
    """Primitive validation for API model fields."""

    @staticmethod
    def parse_cidr(cidr: str, field_name: str) -> IPNetwork:
        """
        Parse a CIDR string.

        Host bits may be set ("172.99.0.1/16" denotes 172.99.0.0/16).

        Args:
            cidr: The CIDR string to parse
            field_name: Name of the field for error messages

        Returns:
            The parsed network

        Raises:
            FormatValidationError: If cidr is not a valid CIDR
        """
        if not cidr or "/" not in cidr:
            raise FormatValidationError(f"{field_name} '{cidr}' is an invalid subnet")
        try:
            return ipaddress.ip_network(cidr, strict=False)
        except ValueError:
            raise FormatValidationError(f"{field_name} '{cidr}' is an invalid subnet") from None

    @staticmethod
    def validate_cidr(cidr: str, field_name: str) -> None:
        """Validate CIDR syntax."""
        InputValidator.parse_cidr(cidr, field_name)

    @staticmethod
    def validate_ip_in_cidr(ip: str, cidr: str, ip_field: str, cidr_field: str) -> None:
        """
        Validate that an IP is a usable host address inside a CIDR.

        The network address, the first host address (taken by the API server
        service) and the broadcast address are rejected even though they are
        inside the range.

        Args:
            ip: The IP address to validate
            cidr: The CIDR that must contain the IP
            ip_field: Name of the IP field for error messages
            cidr_field: Name of the CIDR field for error messages

        Raises:
            FormatValidationError: If ip or cidr cannot be parsed
            ConsistencyError: If ip is outside cidr or is a reserved address
        """
        try:
            address = ipaddress.ip_address(ip)
        except ValueError:
            raise FormatValidationError(f"{ip_field} '{ip}' is an invalid IP address") from None

        try:
            network = ipaddress.ip_network(cidr, strict=False)
        except ValueError:
            raise FormatValidationError(f"{cidr_field} '{cidr}' is an invalid CIDR subnet") from None

        if address.version != network.version or address not in network:
            raise ConsistencyError(f"{ip_field} '{ip}' is not within the {cidr_field} '{cidr}'")

        if address == network.broadcast_address:
            raise ConsistencyError(f"{ip_field} '{ip}' cannot be the broadcast address of {cidr_field} '{cidr}'")

        if address == network.network_address:
            raise ConsistencyError(f"{ip_field} '{ip}' cannot be the network address of {cidr_field} '{cidr}'")

        if address == network.network_address + 1:
            raise ConsistencyError(f"{ip_field} '{ip}' cannot be the first IP of {cidr_field} '{cidr}'")

    @staticmethod
    def validate_ip(ip: str, field_name: str) -> None:
        """Validate IP address syntax."""
        try:
            ipaddress.ip_address(ip)
        except ValueError:
            raise FormatValidationError(f"{field_name} '{ip}' is an invalid IP address") from None

    @staticmethod
    def validate_duration(value: str, field_name: str) -> float:
        """
        Validate a Go-style duration string such as "10s" or "5m0s".

        Returns:
            The duration in seconds

        Raises:
            FormatValidationError: If value is not a valid duration
        """
        seconds = parse_duration(value)
        if seconds is None:
            raise FormatValidationError(f"{field_name} '{value}' is not a valid duration")
        return seconds

    @staticmethod
    def validate_kubernetes_label_key(key: str) -> None:
        """
        Validate Kubernetes label key.

        A key is an optional DNS subdomain prefix of at most 253 characters
        and a name, separated by a slash (/).

        Args:
            key: The label key to validate

        Raises:
            FormatValidationError: If label key is invalid
        """
        if not key:
            raise FormatValidationError("Label key cannot be empty")

        parts = key.split("/")
        if len(parts) > 2:
            raise FormatValidationError(
                f"Invalid label key '{key}'. A label key may contain at most one slash (/) separating prefix and name"
            )

        if len(parts) == 2:
            prefix, name = parts
            if len(prefix) > K8S_LABEL_PREFIX_MAX_LENGTH:
                raise FormatValidationError(
                    f"Label key prefix '{prefix}' exceeds maximum length of {K8S_LABEL_PREFIX_MAX_LENGTH} characters"
                )
            if not K8S_LABEL_PREFIX_PATTERN.fullmatch(prefix):
                raise FormatValidationError(
                    f"Invalid label key prefix '{prefix}'. "
                    f"Must consist of lowercase alphanumeric characters, '-', or '.', "
                    f"must start and end with an alphanumeric character (DNS-1123 subdomain)"
                )
        else:
            name = parts[0]

        if len(name) > K8S_LABEL_MAX_LENGTH:
            raise FormatValidationError(
                f"Label key name '{name}' exceeds maximum length of {K8S_LABEL_MAX_LENGTH} characters"
            )

        if not K8S_LABEL_NAME_PATTERN.fullmatch(name):
            raise FormatValidationError(
                f"Invalid label key '{key}'. "
                f"The name must consist of alphanumeric characters, '-', '_' or '.', "
                f"and must start and end with an alphanumeric character"
            )

    @staticmethod
    def validate_kubernetes_label_value(value: str) -> None:
        """
        Validate Kubernetes label value.

        Args:
            value: The label value to validate

        Raises:
            FormatValidationError: If label value is invalid
        """
        # None is not allowed, but empty string is valid per K8s spec
        if value is None:
            raise FormatValidationError("Label value cannot be None")

        if len(value) > K8S_LABEL_MAX_LENGTH:
            raise FormatValidationError(
                f"Label value '{value}' exceeds maximum length of {K8S_LABEL_MAX_LENGTH} characters"
            )

        # Empty string is valid, only check pattern for non-empty values
        if value and not K8S_LABEL_NAME_PATTERN.fullmatch(value):
            raise FormatValidationError(
                f"Invalid label value '{value}'. "
                f"Must be 63 characters or less and must be empty or begin and end with an alphanumeric character"
            )

    @staticmethod
    def validate_guid(value: str, field_name: str) -> None:
        """Validate canonical 8-4-4-4-12 GUID syntax."""
        if not value or not GUID_PATTERN.fullmatch(value):
            raise FormatValidationError(f"{field_name} '{value}' is invalid")

    @staticmethod
    def validate_keyvault_id(vault_id: str) -> None:
        """
        Validate Azure Key Vault resource ID.

        Raises:
            FormatValidationError: With the fixed incorrect-format message
        """
        if not vault_id or not KEYVAULT_ID_PATTERN.fullmatch(vault_id):
            raise FormatValidationError(ERR_KEYVAULT_ID_FORMAT)

    @staticmethod
    def validate_dns_prefix(dns_prefix: str) -> None:
        """Validate the master DNS prefix."""
        if not DNS_PREFIX_PATTERN.fullmatch(dns_prefix or ""):
            raise FormatValidationError(
                f"DNSPrefix '{dns_prefix}' is invalid. The DNSPrefix must contain between 3 and 45 characters "
                f"and can contain only letters, numbers, and hyphens. It must start with a letter "
                f"and must end with a letter or a number. (length was {len(dns_prefix or '')})"
            )

    @staticmethod
    def validate_agent_pool_name(name: str) -> None:
        """Validate agent pool name."""
        if not AGENT_POOL_NAME_PATTERN.fullmatch(name or ""):
            raise FormatValidationError(
                f"pool name '{name}' is invalid. A pool name must start with a lowercase letter, "
                f"have max length of 12, and only have characters a-z0-9"
            )

    @staticmethod
    def validate_image_name_and_group(image_name: str, image_resource_group: str) -> None:
        """
        Validate that a custom image name and resource group are set together.

        Raises:
            ExclusivityError: Naming the missing field
        """
        if image_name and not image_resource_group:
            raise ExclusivityError(ERR_IMAGE_RESOURCE_GROUP_MISSING)
        if image_resource_group and not image_name:
            raise ExclusivityError(ERR_IMAGE_NAME_MISSING)

    @staticmethod
    def validate_choice(
        value: str,
        valid_choices: Sequence[str],
        field_name: str,
        error_class: Optional[type] = None,
    ) -> None:
        """Validate that a value is one of the allowed choices.

        Args:
            value: The value to validate
            valid_choices: List of valid choices
            field_name: Name of the field for error messages
            error_class: ValidationError subclass to raise (default: ValidationError)

        Raises:
            ValidationError: If value is not in valid_choices
        """
        if value not in valid_choices:
            allowed = ", ".join(f"'{c}'" for c in valid_choices)
            raise (error_class or ValidationError)(f"unknown {field_name} '{value}' specified, must be one of: {allowed}")
