# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""DataNode - the recursive value type of a data tree."""

from __future__ import annotations

import logging
import math
from enum import Enum
from numbers import Real
from typing import Any, Iterator

from .exceptions import DataIOError, LimitExceededError
from .path import MAX_PATH_LENGTH, Index, Key, PathLike, Segment, find_for_write

logger = logging.getLogger(__name__)

MAX_VALUE_LENGTH = 128
MAX_STRING_LENGTH = MAX_VALUE_LENGTH - 1


class NodeKind(Enum):
    """The variant held by a DataNode."""

    NUMBER = 'number'
    STRING = 'string'
    BOOLEAN = 'boolean'
    LIST = 'list'
    LEVEL = 'level'

    @property
    def is_scalar(self) -> bool:
        return self not in (NodeKind.LIST, NodeKind.LEVEL)


class DataNode:
    """A node in a data tree.

    Each node has a fixed kind:
    - NUMBER, STRING, BOOLEAN: scalar leaves
    - LIST: ordered children addressed by index
    - LEVEL: children addressed by unique string keys, in insertion order

    A node exclusively owns its children. Nodes handed out by queries are
    views into the tree owned by the root, not copies.

    Mutation methods take a ``key`` that is a write path relative to this
    node. Only the last segment may be missing; intermediate nodes are
    never created. ``key=None`` appends to this node, which must be a List.

    Example:
        >>> root = DataNode.new_level()
        >>> server = root.add_level('server')
        >>> root.set_number('server.port', 8080)
        True
        >>> server.child(Key('port'))
        DataNode(number, 8080.0)
    """

    __slots__ = ('_kind', '_value')

    def __init__(self, kind: NodeKind, value: Any = None) -> None:
        """Initialize a DataNode.

        Prefer the factory classmethods, which validate scalar payloads.

        Args:
            kind: The node's variant.
            value: Scalar payload. Ignored for LIST and LEVEL nodes.
        """
        self._kind = kind
        if kind is NodeKind.LIST:
            self._value: Any = []
        elif kind is NodeKind.LEVEL:
            self._value = {}
        else:
            self._value = value

    # ==================== Factories ====================

    @classmethod
    def number(cls, value: float) -> DataNode:
        """Create a NUMBER node. Booleans are not numbers.

        Raises:
            LimitExceededError: If value is too large to store as a float.
        """
        if isinstance(value, bool) or not isinstance(value, Real):
            raise TypeError(f"number value must be real, not {type(value).__name__}")
        try:
            return cls(NodeKind.NUMBER, float(value))
        except OverflowError as exc:
            raise LimitExceededError(f"Number out of float range: {exc}") from exc

    @classmethod
    def string(cls, value: str) -> DataNode:
        """Create a STRING node.

        Raises:
            LimitExceededError: If value is longer than MAX_STRING_LENGTH.
        """
        if not isinstance(value, str):
            raise TypeError(f"string value must be str, not {type(value).__name__}")
        if len(value) > MAX_STRING_LENGTH:
            raise LimitExceededError(
                f"String length {len(value)} exceeds limit of {MAX_STRING_LENGTH}"
            )
        return cls(NodeKind.STRING, value)

    @classmethod
    def boolean(cls, value: bool) -> DataNode:
        if not isinstance(value, bool):
            raise TypeError(f"boolean value must be bool, not {type(value).__name__}")
        return cls(NodeKind.BOOLEAN, value)

    @classmethod
    def new_list(cls) -> DataNode:
        return cls(NodeKind.LIST)

    @classmethod
    def new_level(cls) -> DataNode:
        return cls(NodeKind.LEVEL)

    @classmethod
    def from_python(cls, data: Any) -> DataNode:
        """Build a tree from plain Python data.

        - dict -> LEVEL (keys converted with str(), order kept)
        - list/tuple -> LIST
        - bool -> BOOLEAN, int/float -> NUMBER, str -> STRING
        - None entries inside containers are dropped

        Strings longer than MAX_STRING_LENGTH are truncated to it.

        Raises:
            TypeError: For values with no DataNode kind.
            ValueError: For containers that contain themselves.
            LimitExceededError: For keys longer than MAX_PATH_LENGTH and
                numbers out of float range.
        """
        return cls._convert(data, set())

    @classmethod
    def _convert(cls, data: Any, active: set[int]) -> DataNode:
        if isinstance(data, (dict, list, tuple)):
            if id(data) in active:
                raise ValueError(f"Cannot convert self-referencing {type(data).__name__}")
            active.add(id(data))
            try:
                return cls._convert_container(data, active)
            finally:
                active.discard(id(data))
        if isinstance(data, bool):
            return cls.boolean(data)
        if isinstance(data, Real):
            return cls.number(data)
        if isinstance(data, str):
            if len(data) > MAX_STRING_LENGTH:
                logger.warning(
                    "Truncating string value of length %d to %d", len(data), MAX_STRING_LENGTH
                )
                data = data[:MAX_STRING_LENGTH]
            return cls.string(data)
        raise TypeError(f"Cannot convert {type(data).__name__} to a DataNode")

    @classmethod
    def _convert_container(cls, data: dict | list | tuple, active: set[int]) -> DataNode:
        if isinstance(data, dict):
            level = cls.new_level()
            for key, value in data.items():
                key = str(key)
                if len(key) > MAX_PATH_LENGTH:
                    raise LimitExceededError(
                        f"Key length {len(key)} exceeds limit of {MAX_PATH_LENGTH}"
                    )
                if value is None:
                    logger.debug("Dropping null value at key '%s'", key)
                    continue
                level._value[key] = cls._convert(value, active)
            return level
        lst = cls.new_list()
        for value in data:
            if value is None:
                logger.debug("Dropping null list element")
                continue
            lst._value.append(cls._convert(value, active))
        return lst

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        if self._kind is NodeKind.LEVEL:
            return f"DataNode(level, {list(self._value)})"
        if self._kind is NodeKind.LIST:
            return f"DataNode(list, {len(self._value)})"
        return f"DataNode({self._kind.value}, {self._value!r})"

    def __len__(self) -> int:
        """Number of direct children (0 for scalars)."""
        if self._kind.is_scalar:
            return 0
        return len(self._value)

    def __bool__(self) -> bool:
        # a node is never falsy just because it is empty
        return True

    def __iter__(self) -> Iterator[DataNode]:
        """Iterate over direct child nodes in order."""
        if self._kind is NodeKind.LEVEL:
            return iter(list(self._value.values()))
        if self._kind is NodeKind.LIST:
            return iter(list(self._value))
        return iter(())

    # ==================== Introspection ====================

    @property
    def kind(self) -> NodeKind:
        return self._kind

    @property
    def value(self) -> Any:
        """Scalar payload, or None for LIST and LEVEL nodes."""
        if self._kind.is_scalar:
            return self._value
        return None

    @property
    def is_scalar(self) -> bool:
        return self._kind.is_scalar

    @property
    def is_list(self) -> bool:
        return self._kind is NodeKind.LIST

    @property
    def is_level(self) -> bool:
        return self._kind is NodeKind.LEVEL

    def keys(self) -> list[str | int]:
        """Level keys in insertion order, or List indices."""
        if self._kind is NodeKind.LEVEL:
            return list(self._value)
        return list(range(len(self)))

    def items(self) -> list[tuple[str | int, DataNode]]:
        """(key, node) pairs for a Level, (index, node) pairs for a List."""
        if self._kind is NodeKind.LEVEL:
            return list(self._value.items())
        if self._kind is NodeKind.LIST:
            return list(enumerate(self._value))
        return []

    def child(self, segment: Segment) -> DataNode | None:
        """Return the direct child addressed by segment, or None.

        Keys only match Levels and indices only match Lists. An empty key
        never matches.
        """
        if isinstance(segment, Key):
            if self._kind is NodeKind.LEVEL and segment.name:
                return self._value.get(segment.name)
            return None
        if isinstance(segment, Index):
            if self._kind is NodeKind.LIST and segment.position < len(self._value):
                return self._value[segment.position]
            return None
        return None

    def walk(self, _prefix: str = '') -> Iterator[tuple[str, DataNode]]:
        """Yield (dotted_path, node) for every descendant, depth first.

        Example:
            >>> for path, node in root.walk():
            ...     print(path, node.value)
        """
        for key, node in self.items():
            path = f"{_prefix}.{key}" if _prefix else str(key)
            yield path, node
            if not node.is_scalar:
                yield from node.walk(path)

    # ==================== Conversion ====================

    def as_python(self, integral_numbers: bool = True) -> Any:
        """Convert to plain Python data (recursive).

        Args:
            integral_numbers: If True, finite numbers with no fractional
                part are returned as int.
        """
        if self._kind is NodeKind.LEVEL:
            return {k: v.as_python(integral_numbers) for k, v in self._value.items()}
        if self._kind is NodeKind.LIST:
            return [v.as_python(integral_numbers) for v in self._value]
        if (
            self._kind is NodeKind.NUMBER
            and integral_numbers
            and math.isfinite(self._value)
            and self._value.is_integer()
        ):
            return int(self._value)
        return self._value

    def clear(self) -> None:
        """Release all descendants. Scalars are left untouched."""
        if self._kind.is_scalar:
            return
        for node in self:
            node.clear()
        self._value.clear()

    # ==================== Mutation ====================

    def _place(self, segment: Segment | None, node: DataNode) -> bool:
        if segment is None:
            if self._kind is not NodeKind.LIST:
                return False
            self._value.append(node)
            return True

        if isinstance(segment, Key):
            if self._kind is not NodeKind.LEVEL or not segment.name:
                return False
            if len(segment.name) > MAX_PATH_LENGTH:
                return False
            # replacing an existing key keeps its position
            self._value[segment.name] = node
            return True

        if self._kind is not NodeKind.LIST:
            return False
        if segment.position < len(self._value):
            self._value[segment.position] = node
        elif segment.position == len(self._value):
            self._value.append(node)
        else:
            return False
        return True

    def _insert(self, key: PathLike | None, node: DataNode) -> DataNode | None:
        if key is None:
            target, segment = self, None
        else:
            try:
                target, segment = find_for_write(self, key)
            except (DataIOError, TypeError) as exc:
                logger.debug("Cannot place %s node at '%s': %s", node.kind.value, key, exc)
                return None

        if not target._place(segment, node):
            logger.debug(
                "Cannot place %s node at '%s' inside a %s",
                node.kind.value,
                '<append>' if segment is None else segment,
                target.kind.value,
            )
            return None
        return node

    def add_list(self, key: PathLike | None = None) -> DataNode | None:
        """Insert a new empty List at key, or append it when key is None.

        Returns:
            The new List node, or None if it could not be placed.
        """
        return self._insert(key, DataNode.new_list())

    def add_level(self, key: PathLike | None = None) -> DataNode | None:
        """Insert a new empty Level at key, or append it when key is None.

        Returns:
            The new Level node, or None if it could not be placed.
        """
        return self._insert(key, DataNode.new_level())

    def set_number(self, key: PathLike | None, value: float) -> bool:
        """Set a NUMBER at key (append when key is None)."""
        try:
            node = DataNode.number(value)
        except (TypeError, LimitExceededError) as exc:
            logger.debug("Rejected number value for '%s': %s", key, exc)
            return False
        return self._insert(key, node) is not None

    def set_string(self, key: PathLike | None, value: str) -> bool:
        """Set a STRING at key (append when key is None).

        Values longer than MAX_STRING_LENGTH are rejected and the tree is
        left unchanged.
        """
        try:
            node = DataNode.string(value)
        except (TypeError, LimitExceededError) as exc:
            logger.debug("Rejected string value for '%s': %s", key, exc)
            return False
        return self._insert(key, node) is not None

    def set_boolean(self, key: PathLike | None, value: bool) -> bool:
        """Set a BOOLEAN at key (append when key is None)."""
        try:
            node = DataNode.boolean(value)
        except TypeError as exc:
            logger.debug("Rejected boolean value for '%s': %s", key, exc)
            return False
        return self._insert(key, node) is not None

    def set_value(self, key: PathLike | None, value: Any) -> bool:
        """Set a value of any supported kind at key.

        Scalars map to their kind; dicts and lists are copied in as a new
        subtree (see from_python).
        """
        if isinstance(value, bool):
            return self.set_boolean(key, value)
        if isinstance(value, Real):
            return self.set_number(key, value)
        if isinstance(value, str):
            return self.set_string(key, value)
        try:
            node = DataNode.from_python(value)
        except (TypeError, ValueError) as exc:
            logger.debug("Rejected value for '%s': %s", key, exc)
            return False
        return self._insert(key, node) is not None
