"""Rule result reporting for API model validation."""

import logging
from typing import Any, Dict, List, Optional

from apimodel.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class ValidationReporter:
    """Collects rule results and handles summary logging."""

    def __init__(self) -> None:
        self.results: List[Dict[str, Any]] = []

    def add_result(self, check: str, passed: bool, message: str) -> None:
        """Add a rule result.

        Args:
            check: Name of the rule
            passed: Whether the rule passed
            message: Descriptive message about the result
        """
        self.results.append(
            {
                "check": check,
                "passed": passed,
                "message": message,
            }
        )

        if passed:
            logger.info(f"✓ {check}: {message}")
        else:
            logger.error(f"✗ {check}: {message}")

    def failures(self) -> List[Dict[str, Any]]:
        """Get list of failed rules."""
        return [r for r in self.results if not r["passed"]]

    def first_failure(self) -> Optional[Dict[str, Any]]:
        failed = self.failures()
        return failed[0] if failed else None

    def print_summary(self) -> None:
        """Print validation summary to the log."""
        passed = sum(1 for r in self.results if r["passed"])
        total = len(self.results)

        logger.info("\n" + "=" * 60)
        logger.info(f"Validation Summary: {passed}/{total} rules passed")

        failure = self.first_failure()
        if failure:
            logger.error(f"API model is invalid: {failure['check']}: {failure['message']}")
        else:
            logger.info("API model is valid!")

        logger.info("=" * 60 + "\n")
