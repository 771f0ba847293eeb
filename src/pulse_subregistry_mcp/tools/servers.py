"""Server browsing tools for the PulseMCP Sub-Registry.

Both tools fetch a payload from the Sub-Registry and return it as JSON
text shaped for the client's context window:

- fields named in ``exclude_fields`` are removed
- long strings and large deep values are replaced by placeholders
- paths named in ``expand_fields`` are returned in full

Examples:
    >>> text = await list_servers(client, ListServersRequest(search="github"))
    >>> text = await get_server(
    ...     client,
    ...     GetServerRequest(
    ...         server_name="io.github.owner/server",
    ...         expand_fields=["server.packages[].readme"],
    ...     ),
    ... )
"""

import logging
from typing import Optional

from ..models import GetServerRequest, ListServersRequest
from ..shaping import TruncationConfig, shape_response
from ..utils.http import SubregistryClient

logger = logging.getLogger(__name__)


async def list_servers(
    client: SubregistryClient,
    request: ListServersRequest,
    config: Optional[TruncationConfig] = None,
) -> str:
    """Browse one page of servers.

    :param client: Sub-Registry API client
    :type client: SubregistryClient
    :param request: Validated tool arguments
    :type request: ListServersRequest
    :param config: Truncation limits, defaults when None
    :type config: Optional[TruncationConfig]
    :return: Shaped JSON text
    :rtype: str
    :raises PulseSubregistryMCPError: If the API call fails
    """
    try:
        payload = await client.list_servers(
            limit=request.limit,
            cursor=request.cursor,
            search=request.search,
            updated_since=request.updated_since,
        )
    except Exception as e:
        logger.error(f"Failed to list servers: {e}")
        raise

    return shape_response(
        payload,
        expand_fields=request.expand_fields,
        exclude_fields=request.exclude_fields,
        config=config,
    )


async def get_server(
    client: SubregistryClient,
    request: GetServerRequest,
    config: Optional[TruncationConfig] = None,
) -> str:
    """Fetch the details of one server version.

    :param client: Sub-Registry API client
    :type client: SubregistryClient
    :param request: Validated tool arguments
    :type request: GetServerRequest
    :param config: Truncation limits, defaults when None
    :type config: Optional[TruncationConfig]
    :return: Shaped JSON text
    :rtype: str
    :raises NotFoundError: If the server or version does not exist
    """
    try:
        payload = await client.get_server(request.server_name, request.version)
    except Exception as e:
        logger.error(f"Failed to get server {request.server_name}: {e}")
        raise

    return shape_response(
        payload,
        expand_fields=request.expand_fields,
        exclude_fields=request.exclude_fields,
        config=config,
    )
