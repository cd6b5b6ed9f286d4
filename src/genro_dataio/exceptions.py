# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DataIO exceptions and error taxonomy.

The public query and mutation API never raises these: failures collapse
to a default value, ``None`` or ``False``. They surface only through the
diagnostic channel (``Lookup.unwrap()``), ``DataTree.__getitem__`` and
registries created with ``raise_on_error=True``.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Distinguished failure kinds behind the collapsed public contract."""

    ALLOCATION_FAILURE = 'allocation_failure'
    PATH_NOT_FOUND = 'path_not_found'
    TYPE_MISMATCH = 'type_mismatch'
    BACKEND_UNAVAILABLE = 'backend_unavailable'
    LIMIT_EXCEEDED = 'limit_exceeded'
    BACKEND_FAILURE = 'backend_failure'

    @property
    def exception_class(self) -> type[DataIOError]:
        """Exception class raised for this kind by the strict entry points."""
        return _KIND_TO_EXCEPTION[self]


class DataIOError(Exception):
    """Base exception for DataIO errors."""

    kind: ErrorKind | None = None


class AllocationError(DataIOError):
    """Raised when a node or buffer could not be created."""

    kind = ErrorKind.ALLOCATION_FAILURE


class PathNotFoundError(DataIOError, KeyError):
    """Raised when a path does not resolve to a node."""

    kind = ErrorKind.PATH_NOT_FOUND

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return Exception.__str__(self)


class TypeMismatchError(DataIOError, TypeError):
    """Raised when a resolved node is not of the requested kind."""

    kind = ErrorKind.TYPE_MISMATCH


class LimitExceededError(DataIOError, ValueError):
    """Raised when a path or string value exceeds its length limit."""

    kind = ErrorKind.LIMIT_EXCEEDED


class BackendUnavailableError(DataIOError):
    """Raised when no registered backend handles a storage path or string."""

    kind = ErrorKind.BACKEND_UNAVAILABLE


class BackendError(DataIOError):
    """Raised when a backend fails to read, parse or list its storage."""

    kind = ErrorKind.BACKEND_FAILURE


_KIND_TO_EXCEPTION: dict[ErrorKind, type[DataIOError]] = {
    ErrorKind.ALLOCATION_FAILURE: AllocationError,
    ErrorKind.PATH_NOT_FOUND: PathNotFoundError,
    ErrorKind.TYPE_MISMATCH: TypeMismatchError,
    ErrorKind.BACKEND_UNAVAILABLE: BackendUnavailableError,
    ErrorKind.LIMIT_EXCEEDED: LimitExceededError,
    ErrorKind.BACKEND_FAILURE: BackendError,
}
