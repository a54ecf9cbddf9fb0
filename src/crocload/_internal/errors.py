"""Custom exception hierarchy for crocload."""

from __future__ import annotations


class CrocLoadError(Exception):
    """Base exception for all crocload errors.

    Scenario step failures are never raised; they are recorded as metrics.
    Everything derived from this class is a problem with how the load test
    itself was set up.
    """


class ConfigError(CrocLoadError):
    """Raised when configuration is invalid or missing.

    Examples:
        - Required environment variable has an invalid value.
        - Username or password is missing when a run is requested.
        - A load profile stage is out of acceptable range.
    """
