"""Log sanitization and secure logging setup.

The Sub-Registry API key travels in the ``X-API-Key`` header. This
module makes sure neither the key nor other credentials end up in log
output, whichever logger emits them (our own modules, httpx, uvicorn).
"""

import logging
import re
import sys
from typing import Any, Dict, Optional

# Patterns for sensitive data detection
SENSITIVE_PATTERNS = {
    "api_key_header": re.compile(
        r"(x-api-key['\"]?\s*[:=]\s*['\"]?)[^\s'\",}]+", re.IGNORECASE
    ),
    "bearer_token": re.compile(r"Bearer\s+[A-Za-z0-9._~+/-]+=*", re.IGNORECASE),
    "api_key": re.compile(r"\b[A-Za-z0-9_-]{32,}\b"),
}

# Headers that should never be logged
SENSITIVE_HEADERS = {
    "authorization",
    "x-api-key",
    "x-tenant-id",
    "cookie",
    "set-cookie",
}


def sanitize_string(value: str) -> str:
    """Redact credentials embedded in a string.

    :param value: String to sanitize
    :type value: str
    :return: String with sensitive values replaced by ``<REDACTED>``
    :rtype: str
    """
    if not value:
        return value
    value = SENSITIVE_PATTERNS["api_key_header"].sub(r"\1<REDACTED>", value)
    value = SENSITIVE_PATTERNS["bearer_token"].sub("Bearer <REDACTED>", value)
    return SENSITIVE_PATTERNS["api_key"].sub("<REDACTED>", value)


def sanitize_headers(headers: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Sanitize HTTP headers for logging.

    :param headers: Dictionary of HTTP headers
    :type headers: Optional[Dict[str, Any]]
    :return: Copy of the headers with sensitive values redacted
    :rtype: Optional[Dict[str, Any]]
    """
    if not headers:
        return headers
    sanitized: Dict[str, Any] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            if isinstance(value, str) and value:
                sanitized[key] = f"<REDACTED:length={len(value)}>"
            else:
                sanitized[key] = "<REDACTED>"
        elif isinstance(value, str):
            sanitized[key] = sanitize_string(value)
        else:
            sanitized[key] = value
    return sanitized


class SanitizingFormatter(logging.Formatter):
    """Formatter that automatically sanitizes sensitive data."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with automatic sanitization.

        :param record: Log record to format
        :type record: logging.LogRecord
        :return: Sanitized log message
        :rtype: str
        """
        try:
            record.msg = sanitize_string(record.getMessage())
            record.args = None
        except (TypeError, ValueError) as e:
            # Mismatched format args; keep the raw message
            print(f"Warning: Failed to sanitize log record: {e}", file=sys.stderr)
        return super().format(record)


# Global flag to track if logging has been set up
_LOGGING_CONFIGURED = False


def setup_secure_logging(level: str = "INFO") -> None:
    """Set up logging with automatic sanitization.

    Logs go to stderr so they never interleave with the stdio MCP
    transport on stdout. Repeated calls are ignored.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :type level: str
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        logging.getLogger(__name__).debug(
            "Logging already configured, skipping duplicate setup"
        )
        return

    formatter = SanitizingFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[handler],
        force=True,  # Override any existing configuration
    )

    # Suppress duplicate logging from uvicorn if running in HTTP mode
    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        uv_logger = logging.getLogger(logger_name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True

    _LOGGING_CONFIGURED = True
