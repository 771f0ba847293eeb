import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def pytest_configure(config):
    # Register the asyncio marker so pytest doesn't warn when it's used.
    config.addinivalue_line(
        "markers", "asyncio: mark test to run in an asyncio event loop"
    )
    # Add custom markers for test organization
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set the environment variables the Settings class reads.

    Truncation limits are cleared so every test starts from the defaults.
    """
    monkeypatch.setenv("PULSEMCP_SUBREGISTRY_API_KEY", "test-api-key")
    monkeypatch.delenv("PULSEMCP_SUBREGISTRY_TENANT_ID", raising=False)
    monkeypatch.delenv("PULSEMCP_SUBREGISTRY_BASE_URL", raising=False)
    for name in (
        "TRUNCATION_STRING_LIMIT",
        "TRUNCATION_DEPTH_THRESHOLD",
        "TRUNCATION_DEEP_LIMIT",
        "TRUNCATION_MAX_DEPTH",
    ):
        monkeypatch.delenv(name, raising=False)

    # Server configuration
    monkeypatch.setenv("MCP_SERVER_NAME", "pulse-subregistry-test")

    # Logging
    monkeypatch.setenv("LOG_LEVEL", "INFO")

    yield


def _server_entry(name: str, readme: str) -> dict:
    return {
        "server": {
            "name": name,
            "description": f"{name} server",
            "version": "1.0.0",
            "packages": [
                {
                    "registryType": "npm",
                    "identifier": f"@example/{name}",
                    "readme": readme,
                }
            ],
            "remotes": [{"type": "sse", "url": f"https://{name}.example.com/sse"}],
        },
        "_meta": {"com.pulsemcp/server": {"visitorsEstimate": 1200}},
    }


@pytest.fixture
def long_readme():
    """A readme comfortably beyond every default limit."""
    return "# Readme\n" + "x" * 2000


@pytest.fixture
def sample_list_payload(long_readme):
    """List response shaped like the Sub-Registry ``/servers`` endpoint."""
    return {
        "servers": [
            _server_entry("github", long_readme),
            _server_entry("slack", "Short readme"),
        ],
        "metadata": {"count": 2, "nextCursor": "cursor-2"},
    }


@pytest.fixture
def sample_server_payload(long_readme):
    """Detail response shaped like ``/servers/{name}/versions/{version}``."""
    return _server_entry("github", long_readme)


# Rely on pytest-asyncio for async test handling; no custom hook needed.
