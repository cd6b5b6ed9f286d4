# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Backend - abstract base class for storage formats."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..config import StorageConfig
from ..exceptions import BackendError, DataIOError
from ..node import DataNode

logger = logging.getLogger(__name__)


class Backend(ABC):
    """Abstract base class for storage backends.

    A backend converts between the text of one format and plain Python
    data; this base class builds DataNode trees from that data and handles
    the file side. Subclasses implement loads() and dumps():

        class IniBackend(Backend):
            name = 'ini'
            suffixes = ('.ini',)

            def loads(self, text):
                ...

            def dumps(self, data, config):
                ...

    Storage paths are resolved against the registry's StorageConfig and
    may be given with or without the backend suffix.
    """

    name: str = ''
    suffixes: tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    # ==================== Format ====================

    @abstractmethod
    def loads(self, text: str) -> Any:
        """Parse text into plain Python data.

        Raises:
            BackendError: If the text is not valid for this format.
        """

    @abstractmethod
    def dumps(self, data: Any, config: StorageConfig) -> str:
        """Render plain Python data as text."""

    def accepts_string(self, text: str) -> bool:
        """True if text looks like this format (content sniffing)."""
        return True

    def handles(self, path: str | os.PathLike[str]) -> bool:
        """True if path carries one of this backend's suffixes."""
        return Path(path).suffix.lower() in self.suffixes

    # ==================== Trees ====================

    def parse_string(self, text: str) -> DataNode:
        """Parse text into a new tree.

        An empty document yields an empty Level.

        Raises:
            BackendError: If the text is invalid, nested too deeply or holds
                unsupported or self-referencing values.
            LimitExceededError: If a key is longer than the path limit or a
                number is out of float range.
        """
        try:
            data = self.loads(text)
            if data is None:
                return DataNode.new_level()
            return DataNode.from_python(data)
        except DataIOError:
            raise
        except (TypeError, ValueError, OverflowError, RecursionError) as exc:
            raise BackendError(f"Unsupported {self.name} content: {exc}") from exc

    def serialize(self, node: DataNode, config: StorageConfig) -> str:
        """Render a tree as text."""
        return self.dumps(node.as_python(), config)

    # ==================== Storage ====================

    def locate(self, storage_path: str | os.PathLike[str], config: StorageConfig) -> Path | None:
        """Find the file backing storage_path, trying each suffix if needed."""
        candidate = config.resolve(storage_path)
        if candidate.is_file():
            return candidate
        if not candidate.name:
            return None
        for suffix in self.suffixes:
            with_suffix = candidate.with_name(candidate.name + suffix)
            if with_suffix.is_file():
                return with_suffix
        return None

    def parse_storage(self, storage_path: str | os.PathLike[str], config: StorageConfig) -> DataNode:
        """Read and parse the file behind storage_path.

        Raises:
            BackendError: If the file is missing, unreadable or invalid.
        """
        file_path = self.locate(storage_path, config)
        if file_path is None:
            raise BackendError(f"No {self.name} storage found at '{config.resolve(storage_path)}'")
        try:
            text = file_path.read_text(encoding=config.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise BackendError(f"Cannot read '{file_path}': {exc}") from exc
        logger.debug("Parsing %s storage %s", self.name, file_path)
        return self.parse_string(text)

    def list_entries(self, storage_path: str | os.PathLike[str], config: StorageConfig) -> list[str]:
        """List loadable entry names (suffix stripped) in a storage directory.

        Returns a fresh list; a missing directory yields an empty one.
        """
        directory = config.resolve(storage_path)
        try:
            entries = list(os.scandir(directory))
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.warning("Cannot list %s: %s", directory, exc)
            return []

        names: list[str] = []
        for entry in entries:
            if entry.name.startswith('.'):
                continue
            try:
                is_file = entry.is_file()
            except OSError as exc:
                logger.warning("Cannot access %s: %s", entry.path, exc)
                continue
            if is_file and self.handles(entry.name):
                names.append(Path(entry.name).stem)
        return names
