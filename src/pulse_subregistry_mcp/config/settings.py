"""Configuration settings for the PulseMCP Sub-Registry MCP server.

This module defines the configuration settings for the server, including
Sub-Registry API access, response truncation limits, and server
configuration. Settings are loaded from environment variables and .env
files.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..shaping.policy import (
    DEFAULT_DEEP_LIMIT,
    DEFAULT_DEPTH_THRESHOLD,
    DEFAULT_STRING_LIMIT,
    TruncationConfig,
)

DEFAULT_API_BASE_URL = "https://api.pulsemcp.com"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    :param api_key: PulseMCP Sub-Registry API key
    :type api_key: Optional[str]
    :param tenant_id: Optional tenant identifier sent as ``X-Tenant-ID``
    :type tenant_id: Optional[str]
    :param api_base_url: Base URL of the Sub-Registry API
    :type api_base_url: str
    :param api_timeout: Request timeout in seconds
    :type api_timeout: float
    :param truncation_string_limit: Maximum string length in tool output
    :type truncation_string_limit: int
    :param truncation_depth_threshold: Depth at which large values collapse
    :type truncation_depth_threshold: int
    :param truncation_deep_limit: Maximum serialized size of a deep value
    :type truncation_deep_limit: int
    :param truncation_max_depth: Optional absolute nesting ceiling
    :type truncation_max_depth: Optional[int]
    :param mcp_server_name: Name of the MCP server
    :type mcp_server_name: str
    :param log_level: Logging level for the application
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
        populate_by_name=True,
    )

    # Sub-Registry API
    api_key: Optional[str] = Field(
        None,
        alias="PULSEMCP_SUBREGISTRY_API_KEY",
        description="PulseMCP Sub-Registry API key",
    )
    tenant_id: Optional[str] = Field(
        None,
        alias="PULSEMCP_SUBREGISTRY_TENANT_ID",
        description="Tenant ID for multi-tenant API keys",
    )
    api_base_url: str = Field(
        DEFAULT_API_BASE_URL,
        alias="PULSEMCP_SUBREGISTRY_BASE_URL",
        description="Sub-Registry API base URL",
    )
    api_timeout: float = Field(
        30.0,
        gt=0,
        alias="PULSEMCP_SUBREGISTRY_TIMEOUT",
        description="Request timeout in seconds",
    )

    # Response truncation
    truncation_string_limit: int = Field(
        DEFAULT_STRING_LIMIT, gt=0, description="Maximum string length"
    )
    truncation_depth_threshold: int = Field(
        DEFAULT_DEPTH_THRESHOLD, gt=0, description="Deep-collapse depth"
    )
    truncation_deep_limit: int = Field(
        DEFAULT_DEEP_LIMIT, gt=0, description="Maximum deep value size"
    )
    truncation_max_depth: Optional[int] = Field(
        None, gt=0, description="Absolute nesting ceiling"
    )

    # MCP Server Configuration
    mcp_server_name: str = Field(
        "pulse-subregistry", description="MCP Server Name"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended directly.

        :param v: The configured base URL
        :type v: str
        :return: Base URL without trailing slashes
        :rtype: str
        """
        return v.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    def truncation_config(self) -> TruncationConfig:
        """Build the truncation limits used by tool call sites.

        :return: Immutable truncation configuration
        :rtype: TruncationConfig
        """
        return TruncationConfig(
            string_limit=self.truncation_string_limit,
            depth_threshold=self.truncation_depth_threshold,
            deep_limit=self.truncation_deep_limit,
            max_depth=self.truncation_max_depth,
        )


settings = Settings()
"""Global settings instance for the Sub-Registry MCP server."""
