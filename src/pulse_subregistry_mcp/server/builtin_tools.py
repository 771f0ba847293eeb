"""Register the Sub-Registry tools on a FastMCP server.

Examples
--------
.. code-block:: python

   from fastmcp import FastMCP
   from pulse_subregistry_mcp.server.builtin_tools import register_server_tools

   server = FastMCP("pulse-subregistry")
   register_server_tools(server, lambda: client)
"""

import logging
from typing import Annotated, Callable, List, Optional

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field, ValidationError

from ..exceptions import PulseSubregistryMCPError
from ..models import PARAM_DESCRIPTIONS, GetServerRequest, ListServersRequest
from ..shaping import TruncationConfig
from ..tools import servers
from ..utils.http import SubregistryClient

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], SubregistryClient]

LIST_SERVERS_DESCRIPTION = (
    "Browse MCP servers from the PulseMCP Sub-Registry. Returns a paginated "
    "list of servers with their names, descriptions, and metadata. Use search "
    "to filter by name or description. Use cursor for pagination through "
    "large result sets. Long values are truncated; pass the path shown in a "
    "truncation message via expand_fields to see the full content."
)

GET_SERVER_DESCRIPTION = (
    "Get the full details of one MCP server version from the PulseMCP "
    "Sub-Registry, including packages and remotes. Long values are truncated; "
    "pass the path shown in a truncation message via expand_fields to see "
    "the full content."
)

ExpandFields = Annotated[
    Optional[List[str]], Field(description=PARAM_DESCRIPTIONS["expand_fields"])
]
ExcludeFields = Annotated[
    Optional[List[str]], Field(description=PARAM_DESCRIPTIONS["exclude_fields"])
]


def register_server_tools(
    server: FastMCP,
    client_factory: ClientFactory,
    config: Optional[TruncationConfig] = None,
) -> None:
    """Register ``list_servers`` and ``get_server``.

    API and validation failures are surfaced as :class:`ToolError` so the
    MCP result is flagged as an error with a readable message.

    :param server: FastMCP server instance.
    :param client_factory: Returns the Sub-Registry client to use.
    :param config: Truncation limits applied to tool output.
    """

    @server.tool(name="list_servers", description=LIST_SERVERS_DESCRIPTION)
    async def list_servers_tool(
        ctx: Context,
        limit: Annotated[
            int, Field(ge=1, le=100, description=PARAM_DESCRIPTIONS["limit"])
        ] = 30,
        cursor: Annotated[
            Optional[str], Field(description=PARAM_DESCRIPTIONS["cursor"])
        ] = None,
        search: Annotated[
            Optional[str], Field(description=PARAM_DESCRIPTIONS["search"])
        ] = None,
        updated_since: Annotated[
            Optional[str], Field(description=PARAM_DESCRIPTIONS["updated_since"])
        ] = None,
        expand_fields: ExpandFields = None,
        exclude_fields: ExcludeFields = None,
    ) -> str:
        """List servers from the Sub-Registry."""
        await ctx.debug(
            f"Listing servers: limit={limit}, cursor={cursor}, search={search}"
        )
        try:
            request = ListServersRequest(
                limit=limit,
                cursor=cursor,
                search=search,
                updated_since=updated_since,
                expand_fields=expand_fields,
                exclude_fields=exclude_fields,
            )
            return await servers.list_servers(client_factory(), request, config)
        except (PulseSubregistryMCPError, ValidationError) as e:
            raise ToolError(f"Error listing servers: {_describe(e)}") from e

    @server.tool(name="get_server", description=GET_SERVER_DESCRIPTION)
    async def get_server_tool(
        ctx: Context,
        server_name: Annotated[
            str, Field(description=PARAM_DESCRIPTIONS["server_name"])
        ],
        version: Annotated[
            str, Field(description=PARAM_DESCRIPTIONS["version"])
        ] = "latest",
        expand_fields: ExpandFields = None,
        exclude_fields: ExcludeFields = None,
    ) -> str:
        """Get one server version from the Sub-Registry."""
        await ctx.debug(f"Fetching server {server_name} (version: {version})")
        try:
            request = GetServerRequest(
                server_name=server_name,
                version=version,
                expand_fields=expand_fields,
                exclude_fields=exclude_fields,
            )
            return await servers.get_server(client_factory(), request, config)
        except (PulseSubregistryMCPError, ValidationError) as e:
            raise ToolError(f"Error fetching server: {_describe(e)}") from e

    logger.info("Registered Sub-Registry tools: list_servers, get_server")


def _describe(error: Exception) -> str:
    if isinstance(error, PulseSubregistryMCPError):
        return error.message
    return str(error)
