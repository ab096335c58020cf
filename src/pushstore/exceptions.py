# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PushStore exceptions.

Only raised by stores created with ``raise_on_error=True``. The default
store degrades invalid input to ``None`` results and no-op writes.
"""

from __future__ import annotations


class PushStoreError(Exception):
    """Base exception for PushStore errors."""

    pass


class InvalidPathError(PushStoreError, TypeError):
    """Raised when a path is not a string."""

    pass


class PathTraversalError(PushStoreError, KeyError):
    """Raised when a read traverses through a node that is not a mapping."""

    pass
