# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path access for nested mappings.

Pure functions reading and writing values inside a tree of nested
mappings addressed by dotted paths, plus the path relations used to decide
which listeners observe a write.

Path Syntax:
    - Dotted paths: 'parent.child.grandchild'
    - Empty path: '' addresses the whole tree
    - No escaping: a label containing the separator cannot be addressed

Paths are split into immutable tuples of segments. Traversal walks the
tuple by position and never consumes it, so a split path can be reused.

Example:
    >>> tree = {}
    >>> set_path('config.database.host', 'localhost', tree)
    {'config': {'database': {'host': 'localhost'}}}
    >>> get_path('config.database', tree)
    {'host': 'localhost'}
    >>> path_relation('config', 'config.database.host')
    <Relation.DESCENDANT: 'descendant'>
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from enum import Enum
from typing import Any

from .exceptions import PathTraversalError

SEPARATOR = '.'

_MISSING = object()


class Relation(Enum):
    """How a watched path relates to a written path."""

    EXACT = 'exact'
    DESCENDANT = 'descendant'  # watched path lies below the written one
    ANCESTOR = 'ancestor'  # watched path lies above the written one
    UNRELATED = 'unrelated'


def split_path(path: str, separator: str = SEPARATOR) -> tuple[str, ...]:
    """Split a path into its segments.

    Args:
        path: Dotted path. The empty string is the root.
        separator: Segment separator.

    Returns:
        Tuple of segments, empty for the root.
    """
    if not path:
        return ()
    return tuple(path.split(separator))


def get_path(
    path: str,
    tree: Any,
    separator: str = SEPARATOR,
    default: Any = None,
    strict: bool = False,
) -> Any:
    """Get the value at the given path.

    Args:
        path: Dotted path. The empty string returns the tree itself.
        tree: Root mapping.
        separator: Segment separator.
        default: Returned when the path cannot be resolved.
        strict: If True, traversing through a node that exists but is not
            a mapping raises PathTraversalError instead of returning default.

    Returns:
        The stored value (verbatim, a stored None stays None), or default.

    Raises:
        PathTraversalError: Only when strict is set.
    """
    if not isinstance(path, str) or not isinstance(tree, Mapping):
        return default
    if path == '':
        return tree

    segments = split_path(path, separator)
    node = tree
    for index, key in enumerate(segments[:-1]):
        child = node.get(key, _MISSING)
        if child is _MISSING:
            return default
        if not isinstance(child, Mapping):
            if strict:
                remaining = separator.join(segments[index + 1:])
                raise PathTraversalError(
                    f"'{key}' is not a mapping, cannot access '{remaining}'"
                )
            return default
        node = child
    return node.get(segments[-1], default)


def set_path(
    path: str, value: Any, tree: Any, separator: str = SEPARATOR
) -> Any:
    """Set the value at the given path, creating intermediate mappings.

    Any intermediate node that is not a mutable mapping (absent, scalar,
    list or None) is replaced with a fresh dict. Subtrees off the path keep
    their identity.

    Args:
        path: Dotted path.
        value: Value to store. None is stored as-is and keeps the key.
        tree: Root mapping, mutated in place.
        separator: Segment separator.

    Returns:
        The root after the write: ``value`` for the empty path (the caller
        owns the root binding and must rebind it), ``tree`` otherwise.
    """
    if path == '':
        return value
    if not isinstance(path, str) or not isinstance(tree, MutableMapping):
        return tree

    segments = split_path(path, separator)
    node = tree
    for key in segments[:-1]:
        child = node.get(key)
        if not isinstance(child, MutableMapping):
            child = node[key] = {}
        node = child
    node[segments[-1]] = value
    return tree


def delete_path(path: str, tree: Any, separator: str = SEPARATOR) -> bool:
    """Remove the key at the given path.

    Never creates intermediate nodes. The empty path is never deleted.

    Returns:
        True if a key was removed, False otherwise.
    """
    if not path or not isinstance(path, str):
        return False
    if not isinstance(tree, MutableMapping):
        return False

    segments = split_path(path, separator)
    node = tree
    for key in segments[:-1]:
        node = node.get(key)
        if not isinstance(node, MutableMapping):
            return False
    if segments[-1] not in node:
        return False
    del node[segments[-1]]
    return True


def has_path(path: str, tree: Any, separator: str = SEPARATOR) -> bool:
    """True if the path resolves to an existing key."""
    return get_path(path, tree, separator, default=_MISSING) is not _MISSING


def is_ancestor(ancestor: str, descendant: str, separator: str = SEPARATOR) -> bool:
    """True if descendant's segments strictly extend ancestor's.

    Example:
        >>> is_ancestor('name', 'name.first')
        True
        >>> is_ancestor('name', 'name2')
        False
    """
    upper = split_path(ancestor, separator)
    lower = split_path(descendant, separator)
    return len(lower) > len(upper) and lower[:len(upper)] == upper


def path_relation(
    written: str, watched: str, separator: str = SEPARATOR
) -> Relation:
    """Classify a watched path against a written path.

    Comparison is done segment by segment, so 'a' and 'aa' are unrelated.

    Args:
        written: Path that was written.
        watched: Path a listener is bound to.
        separator: Segment separator.

    Returns:
        The Relation of watched to written.
    """
    written_segments = split_path(written, separator)
    watched_segments = split_path(watched, separator)
    if written_segments == watched_segments:
        return Relation.EXACT

    common = min(len(written_segments), len(watched_segments))
    if written_segments[:common] != watched_segments[:common]:
        return Relation.UNRELATED
    if len(watched_segments) > len(written_segments):
        return Relation.DESCENDANT
    return Relation.ANCESTOR
