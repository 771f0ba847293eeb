"""Tools module for the PulseMCP Sub-Registry MCP server.

:var __all__: List of public exports from this module
:type __all__: List[str]
"""

from .servers import get_server, list_servers

__all__ = [
    "get_server",
    "list_servers",
]
