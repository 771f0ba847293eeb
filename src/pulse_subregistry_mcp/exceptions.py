"""Structured exception classes for the PulseMCP Sub-Registry MCP server."""

import json
from typing import Any, Dict, Optional


class PulseSubregistryMCPError(Exception):
    """Base exception for all PulseMCP Sub-Registry MCP errors.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict())


class APIError(PulseSubregistryMCPError):
    """Raised when a Sub-Registry API request fails.

    :param message: Description of the API error
    :param status_code: Optional HTTP status code from the API response
    :param response_body: Optional response body from the failed request
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        """Initialize API error with message and optional response details."""
        details: Dict[str, Any] = {}
        if status_code:
            details["status_code"] = status_code
        if response_body:
            details["response_body"] = response_body
        super().__init__(message=message, code="API_ERROR", details=details)
        self.status_code = status_code
        self.response_body = response_body


class AuthenticationError(APIError):
    """Raised when the API key is rejected (HTTP 401)."""

    def __init__(self, message: str, response_body: Optional[str] = None):
        super().__init__(message, status_code=401, response_body=response_body)
        self.code = "AUTHENTICATION_ERROR"


class AccessDeniedError(APIError):
    """Raised when the API key lacks access to a resource (HTTP 403)."""

    def __init__(self, message: str, response_body: Optional[str] = None):
        super().__init__(message, status_code=403, response_body=response_body)
        self.code = "ACCESS_DENIED"


class NotFoundError(APIError):
    """Raised when a requested server or version does not exist.

    :param message: Description of the missing resource
    :param resource: Optional identifier of the missing resource
    """

    def __init__(self, message: str, resource: Optional[str] = None):
        super().__init__(message, status_code=404)
        self.code = "NOT_FOUND"
        if resource:
            self.details["resource"] = resource


class RateLimitError(APIError):
    """Raised when API rate limits are exceeded.

    :param message: Description of the rate limit error
    :param retry_after: Optional seconds to wait before retrying
    """

    def __init__(self, message: str, retry_after: Optional[int] = None):
        """Initialize rate limit error with message and optional delay."""
        super().__init__(message=message, status_code=429, response_body=None)
        self.code = "RATE_LIMIT_ERROR"
        if retry_after:
            self.details["retry_after"] = retry_after


class TimeoutError(APIError):
    """Raised when an API request times out.

    :param message: Description of the timeout error
    :param operation: Optional name of the operation that timed out
    """

    def __init__(self, message: str, operation: Optional[str] = None):
        """Initialize timeout error with message and optional operation."""
        super().__init__(message=message, status_code=None, response_body=None)
        self.code = "TIMEOUT_ERROR"
        if operation:
            self.details["operation"] = operation


class ConfigurationError(PulseSubregistryMCPError):
    """Raised for configuration-related errors.

    This exception is raised when configuration validation fails
    or when required configuration settings are missing or invalid.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)


class RecordTooDeepError(PulseSubregistryMCPError):
    """Raised when a record nests deeper than the configured ceiling.

    Only raised when ``TruncationConfig.max_depth`` is set.

    :param path: Path of the first node beyond the ceiling
    :param max_depth: The configured ceiling
    """

    def __init__(self, path: str, max_depth: int):
        super().__init__(
            message=f"Record exceeds maximum depth {max_depth} at '{path}'",
            code="RECORD_TOO_DEEP",
            details={"path": path, "max_depth": max_depth},
        )
        self.path = path
        self.max_depth = max_depth
