"""Truncation policy: limits, rules and placeholder messages.

Two rules are applied to every node that is not expanded:

1. A string longer than ``string_limit`` characters is replaced by a
   ``string`` placeholder.
2. An object or array at ``depth >= depth_threshold`` whose compact JSON
   form is longer than ``deep_limit`` characters is replaced, as a
   whole, by a ``deep`` placeholder.

Placeholders are plain strings, so a truncated record always serializes
to valid JSON. Each placeholder names the wildcarded path the caller can
pass back through ``expand_fields`` to see the full content.
"""

import json
import re
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .paths import normalize_path

DEFAULT_STRING_LIMIT = 200
DEFAULT_DEPTH_THRESHOLD = 5  # depth 4 keys stay visible
DEFAULT_DEEP_LIMIT = 500


class PlaceholderKind(str, Enum):
    """Why a value was replaced."""

    STRING = "string"
    DEEP = "deep"


_PLACEHOLDER_PREFIX = {
    PlaceholderKind.STRING: "[TRUNCATED",
    PlaceholderKind.DEEP: "[DEEP OBJECT TRUNCATED",
}

_PLACEHOLDER_PATTERN = re.compile(
    r'^\[(?P<prefix>TRUNCATED|DEEP OBJECT TRUNCATED) - use expand_fields: '
    r'\["(?P<path>.*)"\] to see full content\]$',
    re.DOTALL,
)


class TruncationConfig(BaseModel):
    """Immutable limits for one truncation run.

    :param string_limit: Maximum string length kept verbatim
    :type string_limit: int
    :param depth_threshold: Depth from which objects/arrays may collapse
    :type depth_threshold: int
    :param deep_limit: Maximum compact JSON length of a deep object/array
    :type deep_limit: int
    :param max_depth: Optional absolute nesting ceiling; exceeding it
                      raises :class:`RecordTooDeepError`
    :type max_depth: Optional[int]
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    string_limit: int = Field(
        DEFAULT_STRING_LIMIT, gt=0, description="Maximum string length"
    )
    depth_threshold: int = Field(
        DEFAULT_DEPTH_THRESHOLD,
        gt=0,
        description="Depth at which large objects/arrays are collapsed",
    )
    deep_limit: int = Field(
        DEFAULT_DEEP_LIMIT,
        gt=0,
        description="Maximum serialized length of a deep object/array",
    )
    max_depth: Optional[int] = Field(
        None, gt=0, description="Absolute recursion ceiling (disabled if None)"
    )


DEFAULT_CONFIG = TruncationConfig()


def canonical_json(value: Any) -> str:
    """Serialize a value to its compact textual form."""
    return json.dumps(
        value, separators=(",", ":"), ensure_ascii=False, default=str
    )


def placeholder_message(path: str, kind: PlaceholderKind) -> str:
    """Build the replacement string for a truncated value.

    :param path: Concrete or normalized path of the truncated value
    :type path: str
    :param kind: Which rule fired
    :type kind: PlaceholderKind
    :return: Complete placeholder, never a fragment of structural syntax
    :rtype: str
    """
    prefix = _PLACEHOLDER_PREFIX[PlaceholderKind(kind)]
    return (
        f'{prefix} - use expand_fields: ["{normalize_path(path)}"] '
        "to see full content]"
    )


def parse_placeholder(value: Any) -> Optional[Tuple[PlaceholderKind, str]]:
    """Read the kind and expand path back out of a placeholder.

    :param value: Any record value
    :return: ``(kind, normalized_path)`` or None if ``value`` is not a
             placeholder
    """
    if not isinstance(value, str):
        return None
    match = _PLACEHOLDER_PATTERN.match(value)
    if not match:
        return None
    kind = (
        PlaceholderKind.STRING
        if match.group("prefix") == "TRUNCATED"
        else PlaceholderKind.DEEP
    )
    return kind, match.group("path")


def exceeds_string_limit(value: Any, config: TruncationConfig) -> bool:
    return isinstance(value, str) and len(value) > config.string_limit


def exceeds_deep_limit(value: Any, depth: int, config: TruncationConfig) -> bool:
    """Check the deep-collapse rule for an object/array node."""
    if not isinstance(value, (dict, list)) or depth < config.depth_threshold:
        return False
    return len(canonical_json(value)) > config.deep_limit
