"""Expansion matching for caller-supplied ``expand_fields``.

An expand field exempts a location (and everything below it) from
truncation. Matching is purely syntactic on the two path strings:

- exact: ``server.description`` matches ``server.description``
- subtree: ``server`` matches ``server.packages[0].readme``
- wildcard: ``servers[].server`` matches ``servers[3].server``
- wildcard subtree: ``servers[].server`` matches ``servers[3].server.name``

Concrete indices in an expand field are compared literally, so
``servers[0].server`` only matches the first element.
"""

from typing import FrozenSet, Iterable, Optional

from .paths import normalize_path


def _matches(path: str, entry: str) -> bool:
    return path == entry or path.startswith((entry + ".", entry + "["))


class ExpansionMatcher:
    """Decide whether paths are exempt from truncation.

    Holds the expand fields of a single invocation as a frozen set;
    order and duplicates in the input are irrelevant.

    :param expand_fields: Paths to exempt, optionally using ``[]``
    :type expand_fields: Optional[Iterable[str]]
    """

    def __init__(self, expand_fields: Optional[Iterable[str]] = None):
        self.entries: FrozenSet[str] = frozenset(expand_fields or ())

    def __bool__(self) -> bool:
        return bool(self.entries)

    def is_expanded(self, path: str) -> bool:
        """Return True if ``path`` lies on or under any expand field.

        :param path: Concrete path of the node being visited
        :type path: str
        :return: Whether truncation is suppressed for the node
        :rtype: bool
        """
        if not path or not self.entries:
            return False

        normalized = normalize_path(path)
        for entry in self.entries:
            if _matches(path, entry) or _matches(normalized, entry):
                return True
        return False


def is_expanded(path: str, expand_fields: Optional[Iterable[str]]) -> bool:
    """Functional form of :meth:`ExpansionMatcher.is_expanded`."""
    return ExpansionMatcher(expand_fields).is_expanded(path)
