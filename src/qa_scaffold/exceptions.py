"""
Custom exceptions for qa-scaffold.

This module defines all custom exceptions raised by the configuration
loader, the HTTP request helper and the page object layer.
"""

from typing import Any, Iterable, Optional


class QAScaffoldError(Exception):
    """Base exception for all qa-scaffold errors."""

    def __init__(self, message: str,
                 details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(QAScaffoldError):
    """Base exception for configuration-related errors."""


class MissingConfigError(ConfigurationError):
    """Raised when one or more required configuration values are missing."""

    def __init__(
        self,
        config_keys: str | Iterable[str],
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize missing config error.

        Args:
            config_keys: The missing configuration key, or several of them.
            details: Optional dictionary with additional error details.
        """
        if isinstance(config_keys, str):
            config_keys = [config_keys]
        self.config_keys = list(config_keys)
        names = ", ".join(f"'{key}'" for key in self.config_keys)
        super().__init__(f"Missing required configuration: {names}", details)

    @property
    def config_key(self) -> str:
        """The first missing key."""
        return self.config_keys[0]


class InvalidConfigError(ConfigurationError):
    """Raised when a configuration value is invalid."""

    def __init__(
        self,
        config_key: str,
        value: Any,
        reason: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize invalid config error.

        Args:
            config_key: The configuration key with invalid value.
            value: The invalid value.
            reason: Optional reason why the value is invalid.
            details: Optional dictionary with additional error details.
        """
        message = f"Invalid configuration value for '{config_key}': {value!r}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, details)
        self.config_key = config_key
        self.value = value
        self.reason = reason


# API Exceptions
class ApiError(QAScaffoldError):
    """Base exception for HTTP request helper errors."""


class UnsupportedMethodError(ApiError):
    """Raised when the request helper is given an unknown HTTP method."""

    def __init__(self, method: Any) -> None:
        super().__init__(f"Unsupported method: {method}")
        self.method = method


class ApiRequestError(ApiError):
    """Raised when a response has an error status and bad requests are not allowed."""

    def __init__(
        self,
        method: str,
        url: str,
        status: int,
        body: Any = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize API request error.

        Args:
            method: HTTP method of the failed request.
            url: Full URL of the failed request.
            status: HTTP status code returned by the server.
            body: Decoded response payload, if any.
            details: Optional dictionary with additional error details.
        """
        super().__init__(
            f"{method} {url} failed with status {status}", details)
        self.method = method
        self.url = url
        self.status = status
        self.body = body


class UnexpectedStatusError(ApiError):
    """Raised when a response status differs from the expected one."""

    def __init__(self, url: str, expected: int, actual: int) -> None:
        super().__init__(
            f"Expected status {expected} from {url}, got {actual}")
        self.url = url
        self.expected = expected
        self.actual = actual


# Page Object Exceptions
class PageError(QAScaffoldError):
    """Base exception for page object errors."""


class LocatorGroupError(PageError, AttributeError):
    """Raised on unknown locator names or attempts to modify a locator group."""
