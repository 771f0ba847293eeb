"""Server builder module for creating configured MCP servers.

This module handles server initialization: creating the FastMCP
instance, the Sub-Registry client, and registering the tools with the
configured truncation limits.
"""

import logging
from typing import Optional

from fastmcp import FastMCP

from .. import __version__
from ..config.settings import Settings, settings as default_settings
from ..exceptions import ConfigurationError
from ..utils.http import SubregistryClient
from .builtin_tools import register_server_tools

logger = logging.getLogger(__name__)


class ServerBuilder:
    """Builder class for creating configured MCP servers.

    :param app_settings: Settings to use, defaults to the global instance
    :type app_settings: Optional[Settings]
    :param client: Pre-built client, skips creation from settings
    :type client: Optional[SubregistryClient]
    """

    def __init__(
        self,
        app_settings: Optional[Settings] = None,
        client: Optional[SubregistryClient] = None,
    ):
        self.settings = app_settings or default_settings
        self.server: Optional[FastMCP] = None
        self._client = client

    def get_client(self) -> SubregistryClient:
        """Return the shared client, creating it on first use.

        :raises ConfigurationError: If no API key is configured
        """
        if self._client is None:
            if not self.settings.api_key:
                raise ConfigurationError(
                    "PULSEMCP_SUBREGISTRY_API_KEY environment variable must be set",
                    setting="PULSEMCP_SUBREGISTRY_API_KEY",
                )
            self._client = SubregistryClient(
                api_key=self.settings.api_key,
                tenant_id=self.settings.tenant_id,
                base_url=self.settings.api_base_url,
                timeout=self.settings.api_timeout,
            )
            logger.info("Sub-Registry client created for %s", self.settings.api_base_url)
        return self._client

    async def build(self) -> FastMCP:
        """Build and configure the MCP server.

        :return: Configured FastMCP server instance
        :rtype: FastMCP
        """
        self.server = FastMCP(self.settings.mcp_server_name, version=__version__)
        register_server_tools(
            self.server,
            self.get_client,
            config=self.settings.truncation_config(),
        )
        return self.server

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Sub-Registry client closed")
