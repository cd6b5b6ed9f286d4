# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DataTree - owner of a data tree root.

DataTree holds the root DataNode exclusively and exposes the query and
mutation API on it. Subtrees obtained from it are views that stay valid
until the tree is unloaded.

Example:
    Basic usage::

        tree = DataTree()
        tree.add_level('server')
        tree.set_number('server.port', 8080)

        tree.get_number(0, 'server.port')      # 8080.0
        tree.get_number(-1, 'server.missing')  # -1
        'server.port' in tree                  # True
        tree['server.port']                    # 8080.0

    Loading and saving::

        with load_storage_data('robot/config.json') as tree:
            gain = tree.get_number(1.0, 'joints.%d.gain', 0)
            text = tree.serialize()
"""

from __future__ import annotations

from typing import Any, Iterator, TYPE_CHECKING

from . import query
from .exceptions import DataIOError
from .node import DataNode, NodeKind
from .path import PathLike

if TYPE_CHECKING:
    from .backends.base import Backend
    from .backends.registry import BackendRegistry


class DataTree:
    """Exclusive owner of a root DataNode.

    Equality is identity. After unload() every query returns its default
    and every mutation fails.

    Attributes:
        registry: BackendRegistry used by serialize(), or None for the
            process-wide default.
    """

    __slots__ = ('_root', 'registry')

    def __init__(
        self,
        root: DataNode | None = None,
        registry: BackendRegistry | None = None,
    ) -> None:
        """Initialize a DataTree.

        Args:
            root: Root node to take ownership of. Defaults to an empty Level.
                It must not be a view into another tree: unload() clears the
                root in place, which would empty the other tree's subtree.
                Pass a copy instead, e.g. DataNode.from_python(view.as_python()).
            registry: Registry used to serialize the tree.
        """
        self._root: DataNode | None = root if root is not None else DataNode.new_level()
        self.registry = registry

    @classmethod
    def from_python(cls, data: Any, registry: BackendRegistry | None = None) -> DataTree:
        """Build a tree from plain dict/list data."""
        return cls(DataNode.from_python(data), registry=registry)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        if self._root is None:
            return "DataTree(<unloaded>)"
        return f"DataTree({self._root!r})"

    def __len__(self) -> int:
        return len(self._root) if self._root is not None else 0

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator[DataNode]:
        return iter(self._root) if self._root is not None else iter(())

    def __contains__(self, path: PathLike) -> bool:
        return self.has_key(path)

    def __getitem__(self, path: PathLike) -> Any:
        """Return the scalar value (or the subtree) at path.

        Raises:
            PathNotFoundError: If the path does not resolve.
            LimitExceededError: If the path is too long.
        """
        node = query.lookup(self._root, None, path).unwrap()
        return node.value if node.is_scalar else node

    def __setitem__(self, path: PathLike, value: Any) -> None:
        """Set a value at path (the parent must exist).

        Raises:
            DataIOError: If the value could not be placed.
        """
        if not self.set_value(path, value):
            raise DataIOError(f"Cannot set value at '{path}'")

    def __enter__(self) -> DataTree:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.unload()

    # ==================== Lifecycle ====================

    @property
    def root(self) -> DataNode | None:
        """The root node, or None once unloaded."""
        return self._root

    @property
    def is_loaded(self) -> bool:
        return self._root is not None

    def unload(self) -> None:
        """Release the whole tree. Safe to call more than once."""
        if self._root is not None:
            self._root.clear()
            self._root = None

    def serialize(self, backend: str | Backend | None = None) -> str | None:
        """Render the tree as text through the registry."""
        if self.registry is None:
            # Import here to avoid circular dependency
            from .backends.registry import default_registry
            return default_registry().serialize(self, backend)
        return self.registry.serialize(self, backend)

    def as_python(self, integral_numbers: bool = True) -> Any:
        """Convert to plain Python data, or None once unloaded."""
        if self._root is None:
            return None
        return self._root.as_python(integral_numbers)

    # ==================== Queries ====================

    def get_subtree(self, path: PathLike | None = '', *args: Any) -> DataNode | None:
        return query.get_subtree(self._root, path, *args)

    def get_number(self, default: float, path: PathLike | None = '', *args: Any) -> float:
        return query.get_number(self._root, default, path, *args)

    def get_string(self, default: str, path: PathLike | None = '', *args: Any) -> str:
        return query.get_string(self._root, default, path, *args)

    def get_boolean(self, default: bool, path: PathLike | None = '', *args: Any) -> bool:
        return query.get_boolean(self._root, default, path, *args)

    def get_list_size(self, path: PathLike | None = '', *args: Any) -> int:
        return query.get_list_size(self._root, path, *args)

    def has_key(self, path: PathLike | None = '', *args: Any) -> bool:
        return query.has_key(self._root, path, *args)

    def lookup(
        self, kind: NodeKind | None, path: PathLike | None = '', *args: Any
    ) -> query.Lookup:
        """Diagnostic lookup, see query.lookup()."""
        return query.lookup(self._root, kind, path, *args)

    # ==================== Mutations ====================

    def add_list(self, key: PathLike | None = None) -> DataNode | None:
        if self._root is None:
            return None
        return self._root.add_list(key)

    def add_level(self, key: PathLike | None = None) -> DataNode | None:
        if self._root is None:
            return None
        return self._root.add_level(key)

    def set_number(self, key: PathLike | None, value: float) -> bool:
        return self._root is not None and self._root.set_number(key, value)

    def set_string(self, key: PathLike | None, value: str) -> bool:
        return self._root is not None and self._root.set_string(key, value)

    def set_boolean(self, key: PathLike | None, value: bool) -> bool:
        return self._root is not None and self._root.set_boolean(key, value)

    def set_value(self, key: PathLike | None, value: Any) -> bool:
        return self._root is not None and self._root.set_value(key, value)
