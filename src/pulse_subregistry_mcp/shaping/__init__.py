"""Response shaping for tool output.

Shared by every tool that returns structured payloads: truncation of
long strings and large deep values, per-request expansion, and field
exclusion.

Recommended import pattern for call sites:
    from pulse_subregistry_mcp.shaping import shape_response, TruncationConfig
"""

from .exclusion import exclude_fields
from .matcher import ExpansionMatcher, is_expanded
from .paths import IndexSegment, JsonPath, KeySegment, normalize_path, path_depth
from .policy import (
    DEFAULT_CONFIG,
    PlaceholderKind,
    TruncationConfig,
    canonical_json,
    parse_placeholder,
    placeholder_message,
)
from .response import shape_record, shape_response
from .truncation import RecordTruncator, truncate_record

__all__ = [
    "DEFAULT_CONFIG",
    "ExpansionMatcher",
    "IndexSegment",
    "JsonPath",
    "KeySegment",
    "PlaceholderKind",
    "RecordTruncator",
    "TruncationConfig",
    "canonical_json",
    "exclude_fields",
    "is_expanded",
    "normalize_path",
    "parse_placeholder",
    "path_depth",
    "placeholder_message",
    "shape_record",
    "shape_response",
    "truncate_record",
]
