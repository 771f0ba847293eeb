"""Request models for the Sub-Registry tools.

These models validate tool arguments before any API call is made and
carry the shared parameter descriptions used in the tool schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

PARAM_DESCRIPTIONS = {
    "limit": (
        "Maximum number of servers to return (1-100). Default: 30. "
        "Use pagination with cursor for more results."
    ),
    "cursor": (
        "Pagination cursor from a previous response. Use this to get the next "
        "page of results when nextCursor is returned."
    ),
    "search": (
        "Search term to filter servers. Searches server names and descriptions. "
        'Example: "github", "slack".'
    ),
    "updated_since": (
        "ISO 8601 timestamp to filter servers updated after this date. "
        'Example: "2024-01-01T00:00:00Z".'
    ),
    "server_name": (
        'Fully qualified server name. Example: "io.github.owner/server".'
    ),
    "version": 'Server version to fetch. Default: "latest".',
    "expand_fields": (
        "Array of dot-notation paths to return in full instead of truncated. "
        "Truncated values name the path to use, with [] for array elements. "
        'Examples: ["servers[].server.description", '
        '"servers[].server.packages[].readme"].'
    ),
    "exclude_fields": (
        "Array of dot-notation paths to exclude from the response. Reduces "
        "context size by removing unnecessary fields. Examples: "
        '["servers[].server.packages", "servers[].server.remotes", '
        '"servers[]._meta"].'
    ),
}


class ShapingOptions(BaseModel):
    """Per-request response shaping options.

    :param expand_fields: Paths returned without truncation
    :type expand_fields: Optional[List[str]]
    :param exclude_fields: Paths removed from the response
    :type exclude_fields: Optional[List[str]]
    """

    expand_fields: Optional[List[str]] = Field(
        None, description=PARAM_DESCRIPTIONS["expand_fields"]
    )
    exclude_fields: Optional[List[str]] = Field(
        None, description=PARAM_DESCRIPTIONS["exclude_fields"]
    )


class ListServersRequest(ShapingOptions):
    """Arguments of the ``list_servers`` tool."""

    limit: int = Field(30, ge=1, le=100, description=PARAM_DESCRIPTIONS["limit"])
    cursor: Optional[str] = Field(None, description=PARAM_DESCRIPTIONS["cursor"])
    search: Optional[str] = Field(None, description=PARAM_DESCRIPTIONS["search"])
    updated_since: Optional[str] = Field(
        None, description=PARAM_DESCRIPTIONS["updated_since"]
    )


class GetServerRequest(ShapingOptions):
    """Arguments of the ``get_server`` tool."""

    server_name: str = Field(..., description=PARAM_DESCRIPTIONS["server_name"])
    version: str = Field("latest", description=PARAM_DESCRIPTIONS["version"])

    @field_validator("server_name", "version")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v
