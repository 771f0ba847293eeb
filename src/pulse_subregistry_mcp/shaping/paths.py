"""Path notation and depth model for nested records.

A location inside a record is addressed by a string path built while
walking from the root: descending into an object appends ``.key`` and
descending into an array appends ``[index]``. The root is the empty
path.

Internally paths are kept as immutable sequences of typed segments
(:class:`KeySegment` and :class:`IndexSegment`) and only rendered to the
dotted/bracketed string where a string is needed: matching against
expand fields and building placeholder messages.

Examples:
    >>> path = JsonPath().child_key("servers").child_index(0).child_key("server")
    >>> str(path)
    'servers[0].server'
    >>> path.depth
    3
    >>> path.normalized
    'servers[].server'
"""

import re
from dataclasses import dataclass
from typing import Tuple, Union

_INDEX_PATTERN = re.compile(r"\[\d+\]")


@dataclass(frozen=True)
class KeySegment:
    """Object member access (``.key``)."""

    key: str

    def append_to(self, rendered: str) -> str:
        # No leading dot while nothing has been rendered yet.
        return f"{rendered}.{self.key}" if rendered else self.key


@dataclass(frozen=True)
class IndexSegment:
    """Array element access (``[index]``)."""

    index: int

    def append_to(self, rendered: str) -> str:
        return f"{rendered}[{self.index}]"


PathSegment = Union[KeySegment, IndexSegment]


def path_depth(path: str) -> int:
    """Compute the depth of a string path.

    Each key segment and each bracketed index segment adds one level;
    the root (empty path) has depth 0. The scan always moves forward,
    so it terminates on malformed input as well.

    :param path: Dotted/bracketed path string
    :type path: str
    :return: Number of segments in the path
    :rtype: int

    .. code-block:: python

        path_depth("servers")                       # 1
        path_depth("servers[0]")                    # 2
        path_depth("servers[0].server.packages[0]") # 5
    """
    if not path:
        return 0

    depth = 0
    i = 0
    length = len(path)
    while i < length:
        char = path[i]
        if char == ".":
            i += 1
            continue
        if char == "[":
            depth += 1
            close = path.find("]", i)
            if close == -1:
                break
            i = close + 1
        else:
            depth += 1
            while i < length and path[i] not in ".[":
                i += 1
    return depth


def normalize_path(path: str) -> str:
    """Replace every concrete ``[index]`` in a path with ``[]``.

    :param path: Path string
    :type path: str
    :return: Wildcarded path, e.g. ``servers[].server.packages[].readme``
    :rtype: str
    """
    return _INDEX_PATTERN.sub("[]", path)


class JsonPath:
    """Immutable address of a node within a record.

    Instances are cheap to extend: each ``child_*`` call returns a new
    path sharing nothing mutable with its parent. The rendered string is
    computed once and cached.
    """

    __slots__ = ("_segments", "_rendered")

    def __init__(self, segments: Tuple[PathSegment, ...] = ()):
        self._segments = tuple(segments)
        rendered = ""
        for segment in self._segments:
            rendered = segment.append_to(rendered)
        self._rendered = rendered

    @classmethod
    def _extend(cls, parent: "JsonPath", segment: PathSegment) -> "JsonPath":
        path = cls.__new__(cls)
        path._segments = parent._segments + (segment,)
        path._rendered = segment.append_to(parent._rendered)
        return path

    @property
    def segments(self) -> Tuple[PathSegment, ...]:
        return self._segments

    @property
    def is_root(self) -> bool:
        return not self._segments

    @property
    def depth(self) -> int:
        """Depth of the rendered path (see :func:`path_depth`)."""
        return path_depth(self._rendered)

    @property
    def normalized(self) -> str:
        return normalize_path(self._rendered)

    def child_key(self, key: str) -> "JsonPath":
        return JsonPath._extend(self, KeySegment(key))

    def child_index(self, index: int) -> "JsonPath":
        return JsonPath._extend(self, IndexSegment(index))

    def __str__(self) -> str:
        return self._rendered

    def __repr__(self) -> str:
        return f"JsonPath({self._rendered!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonPath):
            return self._segments == other._segments
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._segments)
