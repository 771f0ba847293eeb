"""PulseMCP Sub-Registry MCP Server package.

This package provides a Model Context Protocol (MCP) server for browsing
the PulseMCP Sub-Registry. Large registry payloads are shaped before they
reach the client: long strings and large deeply nested values are
replaced by placeholders that name the ``expand_fields`` path needed to
see them in full.

:var __version__: Current package version
:type __version__: str
"""

__version__ = "0.1.0"
