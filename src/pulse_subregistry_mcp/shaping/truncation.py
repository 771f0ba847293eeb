"""Recursive truncation of structured API responses.

This module walks a deserialized record depth-first and returns a new
record of the same shape in which long strings and large deeply nested
objects/arrays are replaced by placeholder messages. Callers can exempt
specific locations with ``expand_fields``; a placeholder always names
the path to pass on the follow-up call.

The transform is pure: the input is never mutated, nothing is cached
between calls, and the same ``(record, expand_fields, config)`` always
yields the same output. The input must be acyclic (any payload decoded
from JSON is).

Examples
--------
.. code-block:: python

    from pulse_subregistry_mcp.shaping import truncate_record

    shaped = truncate_record(payload, ["servers[].server.description"])
"""

import logging
from typing import Any, Iterable, List, Optional

from ..exceptions import RecordTooDeepError
from .matcher import ExpansionMatcher
from .paths import JsonPath
from .policy import (
    DEFAULT_CONFIG,
    PlaceholderKind,
    TruncationConfig,
    exceeds_deep_limit,
    exceeds_string_limit,
    placeholder_message,
)

logger = logging.getLogger(__name__)


class RecordTruncator:
    """Apply the truncation policy to one record.

    A truncator is built per invocation. It keeps the normalized paths
    it replaced in :attr:`truncated_paths` so callers can log or report
    what was hidden.

    :param expand_fields: Paths exempt from truncation
    :type expand_fields: Optional[Iterable[str]]
    :param config: Limits to apply, defaults to :data:`DEFAULT_CONFIG`
    :type config: Optional[TruncationConfig]
    """

    def __init__(
        self,
        expand_fields: Optional[Iterable[str]] = None,
        config: Optional[TruncationConfig] = None,
    ):
        self.matcher = ExpansionMatcher(expand_fields)
        self.config = config or DEFAULT_CONFIG
        self.truncated_paths: List[str] = []

    def truncate(self, record: Any) -> Any:
        """Return a truncated copy of ``record``.

        :param record: Deserialized JSON-like value
        :return: New value with placeholders substituted
        :raises RecordTooDeepError: If ``config.max_depth`` is set and
                                    exceeded
        """
        return self._visit(record, JsonPath())

    def _visit(self, node: Any, path: JsonPath) -> Any:
        rendered = str(path)
        depth = path.depth

        if isinstance(node, (dict, list)):
            max_depth = self.config.max_depth
            if max_depth is not None and depth > max_depth:
                raise RecordTooDeepError(rendered, max_depth)

        if not self.matcher.is_expanded(rendered):
            if exceeds_deep_limit(node, depth, self.config):
                return self._replace(path, PlaceholderKind.DEEP)
            if exceeds_string_limit(node, self.config):
                return self._replace(path, PlaceholderKind.STRING)

        # Expanded nodes are copied but still descended into, so every
        # container in the output is a fresh object.
        if isinstance(node, list):
            return [
                self._visit(item, path.child_index(index))
                for index, item in enumerate(node)
            ]
        if isinstance(node, dict):
            return {
                key: self._visit(value, path.child_key(str(key)))
                for key, value in node.items()
            }
        return node

    def _replace(self, path: JsonPath, kind: PlaceholderKind) -> str:
        normalized = path.normalized
        if normalized not in self.truncated_paths:
            self.truncated_paths.append(normalized)
        return placeholder_message(normalized, kind)


def truncate_record(
    record: Any,
    expand_fields: Optional[Iterable[str]] = None,
    config: Optional[TruncationConfig] = None,
) -> Any:
    """Truncate long strings and large deep values in a record.

    Strings longer than ``config.string_limit`` become::

        [TRUNCATED - use expand_fields: ["<path>"] to see full content]

    Objects/arrays at depth ``>= config.depth_threshold`` whose compact
    JSON exceeds ``config.deep_limit`` characters become::

        [DEEP OBJECT TRUNCATED - use expand_fields: ["<path>"] to see full content]

    where ``<path>`` uses ``[]`` for every array index. Paths matched by
    ``expand_fields`` (exactly, as a subtree prefix, or after index
    normalization) are returned unmodified. Expand fields that match
    nothing are ignored.

    :param record: Deserialized JSON-like value
    :param expand_fields: Paths exempt from truncation
    :type expand_fields: Optional[Iterable[str]]
    :param config: Limits to apply
    :type config: Optional[TruncationConfig]
    :return: New record of the same shape
    """
    truncator = RecordTruncator(expand_fields, config)
    result = truncator.truncate(record)
    if truncator.truncated_paths:
        logger.debug(
            "Truncated %d path(s): %s",
            len(truncator.truncated_paths),
            ", ".join(truncator.truncated_paths),
        )
    return result
