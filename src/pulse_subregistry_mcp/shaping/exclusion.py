"""Remove caller-named fields from a response.

Exclusion paths use dot notation with ``[]`` to fan out over arrays:

- ``servers[].server.packages`` drops ``packages`` from every server
- ``servers[]._meta`` drops ``_meta`` from every entry
- ``metadata.nextCursor`` drops a single nested key

Paths that do not resolve are ignored, the same way unmatched expand
fields are.
"""

import copy
from typing import Any, Iterable, Optional


def _delete_path(node: Any, parts: list) -> None:
    if not parts or not isinstance(node, dict):
        return

    head, rest = parts[0], parts[1:]
    if head.endswith("[]"):
        items = node.get(head[:-2])
        # A bare "key[]" names every element but no field inside them.
        if isinstance(items, list) and rest:
            for item in items:
                _delete_path(item, rest)
    elif rest:
        _delete_path(node.get(head), rest)
    else:
        node.pop(head, None)


def exclude_fields(record: Any, paths: Optional[Iterable[str]] = None) -> Any:
    """Return a copy of ``record`` without the fields named by ``paths``.

    :param record: Deserialized JSON-like value
    :param paths: Dot-notation paths to remove
    :type paths: Optional[Iterable[str]]
    :return: New record; the input is left untouched
    """
    paths = [p for p in (paths or ()) if p]
    if not paths:
        return record

    pruned = copy.deepcopy(record)
    for path in paths:
        _delete_path(pruned, path.split("."))
    return pruned
