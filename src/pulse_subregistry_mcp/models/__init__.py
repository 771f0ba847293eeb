"""Pydantic models for the Sub-Registry MCP tools."""

from .requests import (
    PARAM_DESCRIPTIONS,
    GetServerRequest,
    ListServersRequest,
    ShapingOptions,
)

__all__ = [
    "PARAM_DESCRIPTIONS",
    "GetServerRequest",
    "ListServersRequest",
    "ShapingOptions",
]
