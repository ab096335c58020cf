# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Listener registry.

Subscriptions are kept in a dict keyed by a freshly generated id, so a
listener can be removed without knowing its path or callback.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Iterator

logger = logging.getLogger(__name__)

ListenerCallback = Callable[[Any], Any]


@dataclass(frozen=True)
class Listener:
    """A (path, callback) subscription.

    Attributes:
        id: Unique identifier, used for removal.
        path: Dotted path the listener is bound to.
        callback: Called with the relevant value on matching writes.
    """

    id: str
    path: str
    callback: ListenerCallback


class ListenerRegistry:
    """The set of active listeners of a store.

    Example:
        >>> registry = ListenerRegistry()
        >>> listener_id = registry.register('user.name', print)
        >>> len(registry)
        1
        >>> registry.unregister(listener_id)
        True
        >>> registry.unregister(listener_id)
        False
    """

    __slots__ = ('_listeners',)

    def __init__(self) -> None:
        self._listeners: dict[str, Listener] = {}

    def __repr__(self) -> str:
        return f"ListenerRegistry({len(self._listeners)})"

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener_id: str) -> bool:
        return listener_id in self._listeners

    def __iter__(self) -> Iterator[Listener]:
        """Iterate over a snapshot of the registered listeners."""
        return iter(list(self._listeners.values()))

    def register(self, path: str, callback: ListenerCallback) -> str:
        """Register a callback on a path.

        Args:
            path: Dotted path to listen on.
            callback: Callable receiving the value.

        Returns:
            The new listener id.
        """
        listener_id = uuid.uuid4().hex
        self._listeners[listener_id] = Listener(listener_id, path, callback)
        logger.debug("registered listener %s on %r", listener_id, path)
        return listener_id

    def unregister(self, listener_id: str) -> bool:
        """Remove a listener. Removing an unknown id is a no-op.

        Returns:
            True if a listener was removed.
        """
        if self._listeners.pop(listener_id, None) is None:
            return False
        logger.debug("unregistered listener %s", listener_id)
        return True

    def get(self, listener_id: str, default: Any = None) -> Listener | None:
        """Get a listener by id, with default."""
        return self._listeners.get(listener_id, default)

    def for_each(self, visitor: Callable[[Listener], Any]) -> None:
        """Call visitor on every listener registered when the pass starts.

        Listeners removed during the pass are skipped if not yet visited.
        Listeners added during the pass are left for the next one.
        """
        for listener in list(self._listeners.values()):
            if listener.id in self._listeners:
                visitor(listener)

    def clear(self) -> None:
        """Remove all listeners."""
        self._listeners.clear()
