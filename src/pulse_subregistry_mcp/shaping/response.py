"""Shape API payloads into tool output text.

Every tool that returns a Sub-Registry payload goes through
:func:`shape_response`: exclusions first, so excluded content never
counts towards deep-collapse sizes, then truncation, then JSON
rendering.
"""

import json
from typing import Any, Iterable, Optional

from .exclusion import exclude_fields as apply_exclusions
from .policy import TruncationConfig
from .truncation import truncate_record


def shape_record(
    record: Any,
    expand_fields: Optional[Iterable[str]] = None,
    exclude_fields: Optional[Iterable[str]] = None,
    config: Optional[TruncationConfig] = None,
) -> Any:
    """Apply exclusions and truncation, returning the shaped record."""
    pruned = apply_exclusions(record, exclude_fields)
    return truncate_record(pruned, expand_fields, config)


def shape_response(
    record: Any,
    expand_fields: Optional[Iterable[str]] = None,
    exclude_fields: Optional[Iterable[str]] = None,
    config: Optional[TruncationConfig] = None,
    indent: Optional[int] = 2,
) -> str:
    """Shape a payload and render it as JSON text.

    :param record: Deserialized API payload
    :param expand_fields: Paths exempt from truncation
    :type expand_fields: Optional[Iterable[str]]
    :param exclude_fields: Paths removed before truncation
    :type exclude_fields: Optional[Iterable[str]]
    :param config: Truncation limits
    :type config: Optional[TruncationConfig]
    :param indent: JSON indentation, None for compact output
    :type indent: Optional[int]
    :return: JSON text ready to return to the client
    :rtype: str
    """
    shaped = shape_record(record, expand_fields, exclude_fields, config)
    return json.dumps(shaped, indent=indent, ensure_ascii=False)
