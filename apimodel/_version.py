"""Version information for the API model validator."""

__version__ = "0.4.0"
__version_date__ = "2026-10-12"
