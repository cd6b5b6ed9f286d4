# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Typed accessors over a data tree.

Every accessor is total: when the path does not resolve, or resolves to
a node of another kind, the supplied default comes back. Callers that
need to tell those cases apart use lookup(), which reports the failure
kind without changing what the accessors return.

Example:
    >>> get_number(root, 0, 'server.port')
    8080.0
    >>> get_number(root, -1, 'server.missing')
    -1
    >>> get_string(root, 'none', 'joints.%s.name', 'knee')
    'knee joint'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .exceptions import DataIOError, ErrorKind
from .node import DataNode, NodeKind
from .path import PathLike, find, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lookup:
    """Diagnostic outcome of a path lookup.

    Attributes:
        node: The resolved node when the lookup succeeded.
        error: The failure kind, or None on success.
        message: Human readable failure description.
    """

    node: DataNode | None = None
    error: ErrorKind | None = None
    message: str = ''

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def value(self) -> Any:
        """Scalar payload of the resolved node, or None."""
        return self.node.value if self.node is not None else None

    def unwrap(self) -> DataNode:
        """Return the node or raise the exception matching the failure kind."""
        if self.error is not None:
            raise self.error.exception_class(self.message)
        return self.node


def lookup(
    root: DataNode | None, kind: NodeKind | None, path: PathLike | None = '', *args: Any
) -> Lookup:
    """Resolve a path and check the node kind, reporting why it failed.

    Args:
        root: Tree (or subtree) to search.
        kind: Required node kind, or None to accept any kind.
        path: Path template or DataPath.
        *args: Template substitution arguments.

    Returns:
        Lookup carrying the node or the distinguished error kind.
    """
    try:
        node = find(root, path, *args)
    except DataIOError as exc:
        return Lookup(error=exc.kind, message=str(exc))
    except TypeError as exc:
        return Lookup(error=ErrorKind.PATH_NOT_FOUND, message=str(exc))

    if kind is not None and node.kind is not kind:
        return Lookup(
            node=None,
            error=ErrorKind.TYPE_MISMATCH,
            message=f"Expected {kind.value} at '{path}', found {node.kind.value}",
        )
    return Lookup(node=node)


def _scalar(
    root: DataNode | None, kind: NodeKind, default: Any, path: PathLike | None, args: tuple
) -> Any:
    result = lookup(root, kind, path, *args)
    if not result.ok:
        logger.debug("Using default for '%s': %s", path, result.message)
        return default
    return result.node.value


def get_subtree(root: DataNode | None, path: PathLike | None = '', *args: Any) -> DataNode | None:
    """Return the node at path (a view into the tree), or None."""
    return resolve(root, path, *args)


def get_number(root: DataNode | None, default: float, path: PathLike | None = '', *args: Any) -> float:
    """Return the NUMBER at path as float, or default."""
    return _scalar(root, NodeKind.NUMBER, default, path, args)


def get_string(root: DataNode | None, default: str, path: PathLike | None = '', *args: Any) -> str:
    """Return the STRING at path, or default."""
    return _scalar(root, NodeKind.STRING, default, path, args)


def get_boolean(root: DataNode | None, default: bool, path: PathLike | None = '', *args: Any) -> bool:
    """Return the BOOLEAN at path, or default."""
    return _scalar(root, NodeKind.BOOLEAN, default, path, args)


def get_list_size(root: DataNode | None, path: PathLike | None = '', *args: Any) -> int:
    """Return the element count of the List at path.

    Missing paths and nodes of other kinds both yield 0.
    """
    node = resolve(root, path, *args)
    if node is None or not node.is_list:
        return 0
    return len(node)


def has_key(root: DataNode | None, path: PathLike | None = '', *args: Any) -> bool:
    """True if path resolves to a node of any kind."""
    return resolve(root, path, *args) is not None
