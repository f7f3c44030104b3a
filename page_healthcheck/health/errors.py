"""
Health errors - Exceptions that abort a health check run.

Content failures are not raised; they are collected in
ValidationResult.errors and only turned into an exit code by the reporter.
"""

from typing import Optional


class HealthCheckError(Exception):
    """Base class for fatal health check errors."""


class NetworkError(HealthCheckError):
    """Connection to the target could not be established or was broken."""


class FetchTimeoutError(HealthCheckError, TimeoutError):
    """No complete response was received within the configured timeout."""

    def __init__(self, timeout_ms: int):
        super().__init__(f"Request timeout after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class PatternError(HealthCheckError, ValueError):
    """A required element pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: Optional[str] = None):
        message = f"Invalid element pattern {pattern!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.pattern = pattern


class FixtureNotFoundError(HealthCheckError, FileNotFoundError):
    """The offline fixture file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Fixture file not found: {path}")
        self.path = path


class ConfigError(HealthCheckError, ValueError):
    """The configuration file content is invalid."""
