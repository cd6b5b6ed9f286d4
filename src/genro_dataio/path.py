# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path grammar and tree traversal.

A path is a dotted sequence of segments. Each segment is either a key
into a Level or a non-negative index into a List::

    'server.port'        -> Key('server'), Key('port')
    'items.0.name'       -> Key('items'), Index(0), Key('name')
    'offsets.-1'         -> Key('offsets'), Key('-1')

String paths may be templates with printf-style placeholders, which are
substituted before segmentation::

    resolve(root, 'joints.%s.limits.%d', 'knee', 1)

The explicit alternative is DataPath, built from typed segments, which
can also address keys that contain dots or look like numbers::

    resolve(root, DataPath('joints', 'knee', 'limits', 1))
    resolve(root, DataPath(Key('0')))

Traversal never creates nodes. Read resolution returns None when the path
does not exist; the strict variants raise PathNotFoundError.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterator, Union, TYPE_CHECKING

from .exceptions import LimitExceededError, PathNotFoundError

if TYPE_CHECKING:
    from .node import DataNode

MAX_PATH_LENGTH = 256

_INDEX_PATTERN = re.compile(r'[0-9]+')


@dataclass(frozen=True)
class Key:
    """A key segment, addressing a child of a Level by name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Index:
    """An index segment, addressing an element of a List by position."""

    position: int

    def __post_init__(self) -> None:
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise TypeError(f"Index position must be int, not {type(self.position).__name__}")
        if self.position < 0:
            raise ValueError(f"Index position must be non-negative, got {self.position}")

    def __str__(self) -> str:
        return str(self.position)


Segment = Union[Key, Index]
PathLike = Union[str, 'DataPath']


def _to_segment(part: Any) -> Segment:
    if isinstance(part, (Key, Index)):
        return part
    if isinstance(part, str):
        return Key(part)
    if isinstance(part, int) and not isinstance(part, bool):
        return Index(part)
    raise TypeError(f"path part must be str, int, Key or Index, not {type(part).__name__}")


class DataPath:
    """An explicit, ordered sequence of typed path segments.

    Strings become Key segments and non-negative integers become Index
    segments. No template substitution or dot splitting takes place.

    Example:
        >>> path = DataPath('items').index(0).key('name')
        >>> str(path)
        'items.0.name'
    """

    __slots__ = ('_segments',)

    def __init__(self, *parts: str | int | Key | Index) -> None:
        self._segments: tuple[Segment, ...] = tuple(_to_segment(p) for p in parts)

    @classmethod
    def parse(cls, text: str, *args: Any) -> DataPath:
        """Build a DataPath from a (template) path string."""
        return cls(*parse_path(render_path(text, *args)))

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def parent(self) -> DataPath:
        """Path without its last segment."""
        return DataPath(*self._segments[:-1])

    @property
    def last(self) -> Segment | None:
        """Last segment, or None for the empty path."""
        return self._segments[-1] if self._segments else None

    def key(self, name: str) -> DataPath:
        """Return a new path extended with a key segment."""
        return DataPath(*self._segments, Key(name))

    def index(self, position: int) -> DataPath:
        """Return a new path extended with an index segment."""
        return DataPath(*self._segments, Index(position))

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataPath):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __str__(self) -> str:
        return '.'.join(str(s) for s in self._segments)

    def __repr__(self) -> str:
        return f"DataPath({', '.join(repr(s) for s in self._segments)})"


def render_path(template: str, *args: Any) -> str:
    """Substitute printf-style arguments into a path template.

    Without arguments the template is returned untouched, so a literal
    '%' needs no escaping.

    Raises:
        PathNotFoundError: If the template and arguments do not match.
    """
    if not args:
        return template
    try:
        return template % args
    except (TypeError, ValueError, OverflowError) as exc:
        raise PathNotFoundError(f"Cannot render path template '{template}': {exc}") from exc


def parse_path(text: str) -> tuple[Segment, ...]:
    """Split a rendered path string into classified segments.

    Raises:
        LimitExceededError: If the path is longer than MAX_PATH_LENGTH.
    """
    if len(text) > MAX_PATH_LENGTH:
        raise LimitExceededError(
            f"Path length {len(text)} exceeds limit of {MAX_PATH_LENGTH}"
        )
    if not text:
        return ()
    return tuple(
        Index(int(part)) if _INDEX_PATTERN.fullmatch(part) else Key(part)
        for part in text.split('.')
    )


def to_segments(path: PathLike | None, *args: Any) -> tuple[Segment, ...]:
    """Normalize a path template or DataPath into segments.

    Raises:
        PathNotFoundError: If a template cannot be rendered.
        LimitExceededError: If the rendered path is too long.
        TypeError: If substitution arguments are given with a DataPath.
    """
    if path is None:
        path = ''
    if isinstance(path, DataPath):
        if args:
            raise TypeError("DataPath does not accept substitution arguments")
        rendered = str(path)
        if len(rendered) > MAX_PATH_LENGTH:
            raise LimitExceededError(
                f"Path length {len(rendered)} exceeds limit of {MAX_PATH_LENGTH}"
            )
        return path.segments
    return parse_path(render_path(path, *args))


def _walk(root: DataNode, segments: tuple[Segment, ...]) -> DataNode:
    current = root
    for i, segment in enumerate(segments):
        child = current.child(segment)
        if child is None:
            where = '.'.join(str(s) for s in segments[:i]) or '<root>'
            raise PathNotFoundError(
                f"Path segment '{segment}' not found under '{where}' ({current.kind.value})"
            )
        current = child
    return current


def find(root: DataNode | None, path: PathLike | None = '', *args: Any) -> DataNode:
    """Resolve a path to a node, raising when it does not exist.

    Raises:
        PathNotFoundError: If any segment fails to match.
        LimitExceededError: If the rendered path is too long.
    """
    if root is None:
        raise PathNotFoundError("No data to resolve the path against")
    return _walk(root, to_segments(path, *args))


def find_for_write(
    root: DataNode | None, path: PathLike | None, *args: Any
) -> tuple[DataNode, Segment]:
    """Resolve the parent of a write target.

    Returns:
        Tuple of (parent_node, last_segment). Only the parent must exist.

    Raises:
        PathNotFoundError: If the path is empty or the parent is missing.
        LimitExceededError: If the rendered path is too long.
    """
    if root is None:
        raise PathNotFoundError("No data to resolve the path against")
    segments = to_segments(path, *args)
    if not segments:
        raise PathNotFoundError("Empty path has no write target")
    return _walk(root, segments[:-1]), segments[-1]


def resolve(root: DataNode | None, path: PathLike | None = '', *args: Any) -> DataNode | None:
    """Resolve a path to a node, or None when it does not exist.

    Example:
        >>> resolve(root, 'server.port')
        DataNode(number, 8080.0)
        >>> resolve(root, 'server.missing') is None
        True
    """
    try:
        return find(root, path, *args)
    except (PathNotFoundError, LimitExceededError, TypeError):
        return None


def resolve_for_write(
    root: DataNode | None, path: PathLike | None, *args: Any
) -> tuple[DataNode, Segment] | None:
    """Resolve the parent node and final segment of a write target, or None."""
    try:
        return find_for_write(root, path, *args)
    except (PathNotFoundError, LimitExceededError, TypeError):
        return None
