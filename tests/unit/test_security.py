"""Unit tests for log sanitization."""

import logging

from pulse_subregistry_mcp.utils.security import (
    SanitizingFormatter,
    sanitize_headers,
    sanitize_string,
)


def test_sanitize_string_redacts_api_key_header():
    text = "headers={'X-API-Key': 'abc123secret', 'Accept': 'json'}"
    sanitized = sanitize_string(text)
    assert "abc123secret" not in sanitized
    assert "Accept" in sanitized


def test_sanitize_string_redacts_long_tokens():
    token = "A" * 40
    assert token not in sanitize_string(f"token {token} used")


def test_sanitize_string_leaves_plain_text():
    assert sanitize_string("Listing 30 servers") == "Listing 30 servers"


def test_sanitize_headers():
    headers = {"X-API-Key": "secret", "X-Tenant-ID": "t1", "Accept": "application/json"}
    sanitized = sanitize_headers(headers)
    assert sanitized["X-API-Key"] == "<REDACTED:length=6>"
    assert sanitized["X-Tenant-ID"] == "<REDACTED:length=2>"
    assert sanitized["Accept"] == "application/json"
    assert headers["X-API-Key"] == "secret"


def test_formatter_sanitizes_args():
    formatter = SanitizingFormatter("%(message)s")
    record = logging.LogRecord(
        "test", logging.INFO, __file__, 1, "Using %s", ("x-api-key: supersecret",), None
    )
    output = formatter.format(record)
    assert "supersecret" not in output
    assert output.startswith("Using x-api-key: <REDACTED>")
