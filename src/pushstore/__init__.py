# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PushStore - In-memory keyed data store with push notifications.

A lightweight, zero-dependency library providing a nested data store
addressed by dotted paths, with listeners notified on every relevant write.

Example:
    >>> from pushstore import create
    >>> store = create({'user': {'name': 'Alice'}})
    >>> stop = store.on('user', print)
    >>> store['user.name'] = 'Bob'
    {'name': 'Bob'}
    >>> stop()
"""

__version__ = "0.1.0"

from .exceptions import InvalidPathError, PathTraversalError, PushStoreError
from .listeners import Listener, ListenerRegistry
from .path import SEPARATOR, Relation
from .store import Store, create

#: Default store, created empty at import. Prefer passing explicit Store
#: instances around; this one exists as a shared entry point for callers.
store = Store()

__all__ = [
    # Core classes
    "Store",
    "create",
    "store",
    "SEPARATOR",
    # Listeners
    "Listener",
    "ListenerRegistry",
    "Relation",
    # Exceptions
    "PushStoreError",
    "InvalidPathError",
    "PathTraversalError",
]
