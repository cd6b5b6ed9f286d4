# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""BackendRegistry - dispatch of load, list and serialize to backends.

The registry selects a backend for a storage path by suffix (or by which
backend finds a matching file), and for a string by content sniffing in
registration order. Failures collapse to None or an empty list unless the
registry was built with raise_on_error=True.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Iterable, Iterator

from ..config import StorageConfig, get_default_config
from ..exceptions import (
    BackendError,
    BackendUnavailableError,
    DataIOError,
    LimitExceededError,
)
from ..node import DataNode
from ..path import MAX_PATH_LENGTH
from ..tree import DataTree
from .base import Backend
from .json_backend import JsonBackend
from .yaml_backend import YamlBackend

logger = logging.getLogger(__name__)

__all__ = [
    "BackendRegistry",
    "default_registry",
    "create_empty_data",
    "load_storage_data",
    "load_string_data",
    "list_storage_entries",
    "unload_data",
    "get_data_string",
]


class BackendRegistry:
    """Registry of storage backends.

    Example:
        >>> registry = BackendRegistry([JsonBackend(), YamlBackend()])
        >>> tree = registry.load_string('{"server": {"port": 8080}}')
        >>> tree.get_number(0, 'server.port')
        8080.0
        >>> registry.serialize(tree, 'yaml')
        'server:\\n  port: 8080\\n'
    """

    def __init__(
        self,
        backends: Iterable[Backend] | None = None,
        config: StorageConfig | None = None,
        raise_on_error: bool = False,
    ) -> None:
        """Initialize a BackendRegistry.

        Args:
            backends: Backends to register, in sniffing order.
            config: Storage settings. If None, the process-wide default
                is read at each call.
            raise_on_error: If True, failures raise DataIOError subclasses
                instead of collapsing to None or an empty list.
        """
        self._backends: dict[str, Backend] = {}
        self._config = config
        self.raise_on_error = raise_on_error
        for backend in backends or ():
            self.register(backend)

    def __repr__(self) -> str:
        return f"BackendRegistry({list(self._backends)})"

    def __len__(self) -> int:
        return len(self._backends)

    def __iter__(self) -> Iterator[Backend]:
        return iter(list(self._backends.values()))

    def __contains__(self, name: str) -> bool:
        return name in self._backends

    @property
    def config(self) -> StorageConfig:
        return self._config if self._config is not None else get_default_config()

    # ==================== Registration ====================

    def register(self, backend: Backend, replace: bool = False) -> Backend:
        """Register a backend under its name.

        Raises:
            ValueError: If the name is empty or already taken and replace is False.
        """
        if not backend.name:
            raise ValueError(f"{type(backend).__name__} has no name")
        if backend.name in self._backends and not replace:
            raise ValueError(f"Backend '{backend.name}' is already registered")
        self._backends[backend.name] = backend
        return backend

    def unregister(self, name: str) -> Backend:
        """Remove and return the backend registered under name.

        Raises:
            KeyError: If no backend has that name.
        """
        return self._backends.pop(name)

    def names(self) -> list[str]:
        return list(self._backends)

    def get(self, name: str) -> Backend:
        """Return the backend registered under name.

        Raises:
            BackendUnavailableError: If no backend has that name.
        """
        try:
            return self._backends[name]
        except KeyError:
            raise BackendUnavailableError(f"No backend named '{name}'") from None

    def _backend(self, backend: str | Backend | None) -> Backend:
        if isinstance(backend, Backend):
            return backend
        if backend is not None:
            return self.get(backend)
        if self._backends:
            return next(iter(self._backends.values()))
        raise BackendUnavailableError("No backends registered")

    def select_for_path(self, storage_path: str | os.PathLike[str]) -> Backend:
        """Pick the backend for a storage path.

        Raises:
            BackendUnavailableError: If no backend handles the path.
        """
        for backend in self._backends.values():
            if backend.handles(storage_path):
                return backend
        config = self.config
        for backend in self._backends.values():
            file_path = backend.locate(storage_path, config)
            if file_path is not None and backend.handles(file_path):
                return backend
        raise BackendUnavailableError(f"No backend handles storage '{storage_path}'")

    def select_for_string(self, text: str) -> Backend:
        """Pick the first backend whose sniffing accepts text.

        Raises:
            BackendUnavailableError: If no backend accepts the text.
        """
        for backend in self._backends.values():
            if backend.accepts_string(text):
                return backend
        raise BackendUnavailableError("No backend accepts the given string")

    # ==================== Operations ====================

    def _fail(self, exc: DataIOError, default: Any) -> Any:
        if self.raise_on_error:
            raise exc
        logger.warning("%s", exc)
        return default

    def create_empty(self) -> DataTree:
        """Return a new tree with an empty Level root."""
        return DataTree(registry=self)

    def load_storage(
        self, storage_path: str | os.PathLike[str], backend: str | Backend | None = None
    ) -> DataTree | None:
        """Load the tree stored at storage_path, or None on failure."""
        try:
            if len(os.fspath(storage_path)) > MAX_PATH_LENGTH:
                raise LimitExceededError(
                    f"Storage path length exceeds limit of {MAX_PATH_LENGTH}"
                )
            if backend is None:
                selected = self.select_for_path(storage_path)
            else:
                selected = self._backend(backend)
            root = selected.parse_storage(storage_path, self.config)
        except DataIOError as exc:
            return self._fail(exc, None)
        return DataTree(root, registry=self)

    def load_string(self, text: str, backend: str | Backend | None = None) -> DataTree | None:
        """Parse text into a tree, or None on failure."""
        try:
            if not isinstance(text, str):
                raise BackendError(f"Expected str, not {type(text).__name__}")
            if backend is None:
                selected = self.select_for_string(text)
            else:
                selected = self._backend(backend)
            root = selected.parse_string(text)
        except DataIOError as exc:
            return self._fail(exc, None)
        return DataTree(root, registry=self)

    def list_entries(self, storage_path: str | os.PathLike[str]) -> list[str]:
        """List loadable entry names at storage_path across all backends.

        Returns a fresh, deduplicated list; order is not significant.
        """
        config = self.config
        names: list[str] = []
        seen: set[str] = set()
        for backend in self._backends.values():
            for name in backend.list_entries(storage_path, config):
                if name not in seen:
                    seen.add(name)
                    names.append(name)
        return names

    def serialize(
        self, data: DataTree | DataNode | None, backend: str | Backend | None = None
    ) -> str | None:
        """Render a tree (or subtree) as text, or None on failure.

        Args:
            data: Tree or node to render.
            backend: Backend name or instance; defaults to the first registered.
        """
        root = data.root if isinstance(data, DataTree) else data
        try:
            selected = self._backend(backend)
        except DataIOError as exc:
            return self._fail(exc, None)
        if root is None:
            return None
        return selected.serialize(root, self.config)


_default_registry: BackendRegistry | None = None


def default_registry() -> BackendRegistry:
    """Return the registry used by the module-level functions.

    Built on first use with the JSON and YAML backends, reading the
    process-wide StorageConfig.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = BackendRegistry([JsonBackend(), YamlBackend()])
    return _default_registry


def create_empty_data() -> DataTree:
    return default_registry().create_empty()


def load_storage_data(storage_path: str | os.PathLike[str]) -> DataTree | None:
    return default_registry().load_storage(storage_path)


def load_string_data(text: str) -> DataTree | None:
    return default_registry().load_string(text)


def list_storage_entries(storage_path: str | os.PathLike[str]) -> list[str]:
    return default_registry().list_entries(storage_path)


def unload_data(tree: DataTree | None) -> None:
    if tree is not None:
        tree.unload()


def get_data_string(tree: DataTree | DataNode | None, backend: str | None = None) -> str | None:
    return default_registry().serialize(tree, backend)
