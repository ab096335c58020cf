# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store - a keyed data container with change notification.

This module provides the Store class: a nested mapping addressed by dotted
paths, plus listeners notified synchronously on every relevant write.

Key Features:
    - **Path navigation**: Dotted paths ('a.b.c'), autocreated on write
    - **Push notifications**: Listeners bound to a path are called on writes
      to that path, to any of its ancestors, or to any of its descendants
    - **Chaining**: set() and delete() return the store
    - **Unsubscribe by closure**: on() returns the function that removes
      the listener

Notification Rule:
    For a write at path W, a listener bound to path L is called when:
    - L == W: with the written value, as passed to set()
    - W is an ancestor of L: with the fresh value read at L
    - L is an ancestor of W: with the fresh value read at L
    Relations are decided segment by segment, so 'name' and 'name2' are
    unrelated.

Example:
    Basic usage::

        store = Store()
        store.set('config.database.host', 'localhost')
        store.get('config.database')  # {'host': 'localhost'}

    With listeners::

        stop = store.on('config', print)
        store.set('config.database.port', 5432)  # prints the config dict
        stop()
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, Callable

from .exceptions import InvalidPathError, PushStoreError
from .listeners import Listener, ListenerCallback, ListenerRegistry
from .path import (
    SEPARATOR,
    Relation,
    delete_path,
    get_path,
    has_path,
    path_relation,
    set_path,
)

logger = logging.getLogger(__name__)


class Store:
    """A nested data container with path access and listeners.

    The data tree is owned by the store: initial data is used by reference
    and mutated in place. Writes and notifications are synchronous, and
    listeners may read and write the store reentrantly.

    Attributes:
        separator: Path separator, fixed to '.'.

    Example:
        >>> store = Store({'a': {'b': 1}})
        >>> seen = []
        >>> stop = store.on('a', seen.append)
        >>> store.set('a.b', 2).get('a.b')
        2
        >>> seen
        [{'b': 2}]
    """

    __slots__ = ('_data', '_listeners', '_raise_on_error')

    separator = SEPARATOR

    def __init__(
        self,
        data: MutableMapping | None = None,
        raise_on_error: bool = False,
    ) -> None:
        """Initialize a Store.

        Args:
            data: Optional initial mapping, used by reference (no copy).
            raise_on_error: If True, non-string paths raise InvalidPathError
                and reads through non-mapping nodes raise
                PathTraversalError. If False (default), both degrade to
                None results and no-op writes.
        """
        self._data: Any = data if data is not None else {}
        self._listeners = ListenerRegistry()
        self._raise_on_error = raise_on_error

    @classmethod
    def create(cls, data: MutableMapping | None = None) -> Store:
        """Return a new, independent Store.

        Args:
            data: Optional initial mapping, used by reference.
        """
        return cls(data)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        data = self._data
        keys = list(data) if isinstance(data, MutableMapping) else data
        return f"Store({keys!r}, listeners={len(self._listeners)})"

    def __getitem__(self, path: str) -> Any:
        return self.get(path)

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __delitem__(self, path: str) -> None:
        self.delete(path)

    def __contains__(self, path: str) -> bool:
        """Check if a path resolves to an existing key."""
        return has_path(path, self._data, self.separator)

    @property
    def listener_count(self) -> int:
        """Number of active listeners."""
        return len(self._listeners)

    def _valid_path(self, path: Any) -> bool:
        if isinstance(path, str):
            return True
        if self._raise_on_error:
            raise InvalidPathError(
                f"path must be str, not {type(path).__name__}"
            )
        return False

    # ==================== Core API ====================

    def get(self, path: str = '', default: Any = None) -> Any:
        """Get the value at the given path.

        Args:
            path: Dotted path. Omitted or falsy means the whole tree.
            default: Returned when the path cannot be resolved.

        Returns:
            The stored value, the whole tree for the empty path, or default.
        """
        path = path or ''
        if not self._valid_path(path):
            return default
        return get_path(
            path, self._data, self.separator, default, strict=self._raise_on_error
        )

    def set(self, path: str, value: Any = None) -> Store:
        """Set the value at the given path and notify listeners.

        Intermediate nodes that are not mappings are replaced with dicts.
        The empty path replaces the whole tree.

        Args:
            path: Dotted path to the item (e.g., 'user.name.first').
            value: The value to store. Omitted means None, which keeps the
                key: exact listeners receive None.

        Returns:
            This Store for chaining.
        """
        if not self._valid_path(path):
            return self
        if path == '':
            logger.debug("replacing root of %r", self)
            self._data = value
        else:
            set_path(path, value, self._data, self.separator)
        self._notify(path, value, 'set')
        return self

    def delete(self, path: str) -> Store:
        """Remove the key at the given path and notify listeners.

        Nothing is notified when the path does not exist. The empty path
        resets the store to an empty tree.

        Returns:
            This Store for chaining.
        """
        if not self._valid_path(path):
            return self
        if path == '':
            self._data = {}
        elif not delete_path(path, self._data, self.separator):
            return self
        self._notify(path, None, 'delete')
        return self

    def on(
        self,
        path: str,
        callback: ListenerCallback,
        immediate: bool = False,
    ) -> Callable[[], None]:
        """Bind a callback to a path.

        Args:
            path: Dotted path to listen on.
            callback: Called with one argument on every matching write.
            immediate: If True, callback is called once right away with the
                current value, even when nothing is stored there yet.

        Returns:
            A function removing the listener. Calling it again does nothing.

        Example:
            >>> stop = store.on('user.name', print, immediate=True)
            None
            >>> store['user'] = {'name': 'Alice'}
            Alice
            >>> stop()
        """
        if not self._valid_path(path):
            if immediate:
                callback(None)
            return _noop

        listener_id = self._listeners.register(path, callback)
        if immediate:
            try:
                current = self.get(path)
            except PushStoreError:
                self._listeners.unregister(listener_id)
                raise
            callback(current)

        def unsubscribe() -> None:
            self._listeners.unregister(listener_id)

        return unsubscribe

    # ==================== Notification ====================

    def _notify(self, path: str, value: Any, operation: str) -> None:
        """Call every listener related to the written path."""
        notified = 0

        def visit(listener: Listener) -> None:
            nonlocal notified
            relation = path_relation(path, listener.path, self.separator)
            if relation is Relation.UNRELATED:
                return
            notified += 1
            if relation is Relation.EXACT:
                listener.callback(value)
            else:
                listener.callback(
                    get_path(listener.path, self._data, self.separator)
                )

        self._listeners.for_each(visit)
        logger.debug("%s %r: notified %d listener(s)", operation, path, notified)


def _noop() -> None:
    pass


def create(data: MutableMapping | None = None) -> Store:
    """Return a new, independent Store.

    Args:
        data: Optional initial mapping, used by reference.
    """
    return Store(data)
