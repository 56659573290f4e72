"""
Common utilities for API model validation.
"""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Optional, Pattern

from packaging.version import InvalidVersion, Version

from .constants import LOGGER_NAME

# Go-style duration strings: "300ms", "1.5h", "2h45m", "5m0s"
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_COMPONENT = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
DURATION_PATTERN: Pattern[str] = re.compile(r"([-+]?)((?:" + _DURATION_COMPONENT + r")+)")
_DURATION_COMPONENT_PATTERN: Pattern[str] = re.compile(_DURATION_COMPONENT)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def setup_logging(verbose: bool = False, log_format: str = "text") -> logging.Logger:
    """
    Configure logging for command line use.

    Args:
        verbose: Enable debug logging
        log_format: 'text' or 'json'
    """
    level = logging.DEBUG if verbose else logging.INFO
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()

    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger.addHandler(handler)

    return logging.getLogger(LOGGER_NAME)


def parse_duration(value: str) -> Optional[float]:
    """
    Parse a Go-style duration string.

    Args:
        value: Duration like "10s", "5m0s" or "1h30m"; a bare "0" is allowed

    Returns:
        Duration in seconds, or None if the string is not a valid duration
    """
    if not isinstance(value, str):
        return None

    if value in ("0", "+0", "-0"):
        return 0.0

    match = DURATION_PATTERN.fullmatch(value)
    if not match:
        return None

    sign, body = match.group(1), match.group(2)
    total = 0.0
    for number, unit in _DURATION_COMPONENT_PATTERN.findall(body):
        total += float(number) * _DURATION_UNITS[unit]

    return -total if sign == "-" else total


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = seconds / 60
        return f"{minutes:.1f}m"
    else:
        hours = seconds / 3600
        return f"{hours:.1f}h"


def parse_version(version_string: str) -> Optional[Version]:
    """
    Parse an orchestrator version string.

    A leading "v" is accepted, so "v1.9.0" and "1.9.0" compare equal.

    Args:
        version_string: Version like "1.9.0", "v1.9.0" or "1.10.0-beta.2"

    Returns:
        Parsed Version, or None if the string is not a version
    """
    try:
        return Version(version_string.strip())
    except (InvalidVersion, AttributeError, TypeError):
        return None


def version_release(version_string: str) -> Optional[str]:
    """Return the "major.minor" release of a version string."""
    parsed = parse_version(version_string)
    if parsed is None:
        return None
    return f"{parsed.major}.{parsed.minor}"


def is_version_ge(version: str, compare_to: str) -> bool:
    """
    Check if version is greater than or equal to comparison version.

    Args:
        version: Current version string
        compare_to: Version to compare against

    Returns:
        True if version >= compare_to
    """
    current = parse_version(version)
    target = parse_version(compare_to)

    if current is None or target is None:
        return False

    return current >= target
