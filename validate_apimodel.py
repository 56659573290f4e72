#!/usr/bin/env python3
"""
API model validator.

Loads a cluster API model (JSON or YAML) and checks it against the
semantic rules for a new cluster, or for an existing cluster being
upgraded or scaled when --update is given.
"""

import argparse
import logging
import sys
from typing import Any, Dict

import yaml

from apimodel import (
    ClusterDescription,
    ConfigurationError,
    ValidationError,
    __version__,
    __version_date__,
    setup_logging,
)
from apimodel.constants import EXIT_FAILURE, EXIT_INTERRUPT, EXIT_SUCCESS
from validators import PropertiesValidator


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Validate a cluster API model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a new cluster definition
  %(prog)s kubernetes.json

  # Validate an existing cluster being upgraded
  %(prog)s --update _output/mycluster/apimodel.json

  # Structured logs for CI pipelines
  %(prog)s --log-format json kubernetes.yaml
        """,
    )

    parser.add_argument(
        "apimodel",
        help="Path to the API model file (JSON or YAML)",
    )
    parser.add_argument(
        "--update",
        action="store_true",
        help="Validate as an update of an existing cluster (relaxed version rules, skips create-only checks)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log output format (text or json)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__} ({__version_date__})",
    )

    return parser.parse_args()


def load_apimodel(path: str) -> Dict[str, Any]:
    """
    Read an API model document.

    JSON is a subset of YAML, so both formats go through the YAML loader.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read API model {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse API model {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"API model {path} must contain a mapping")
    return data


def main():
    """Main entry point."""
    args = parse_args()

    logger = setup_logging(args.verbose, args.log_format)
    logger.info("API Model Validator v%s (%s)", __version__, __version_date__)

    validator = PropertiesValidator()
    try:
        cluster = ClusterDescription.from_dict(load_apimodel(args.apimodel))
        version = validator.validate(cluster, is_update=args.update)
    except KeyboardInterrupt:
        logger.warning("\n\nValidation interrupted by user")
        sys.exit(EXIT_INTERRUPT)
    except ConfigurationError as e:
        logger.error("\n✗ %s", e)
        sys.exit(EXIT_FAILURE)
    except ValidationError as e:
        validator.reporter.print_summary()
        logger.debug("Validation failed with %s", type(e).__name__)
        sys.exit(EXIT_FAILURE)

    validator.reporter.print_summary()
    if version:
        logger.info("Resolved %s version: %s", cluster.orchestrator_type, version)
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
