# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Storage configuration.

StorageConfig is passed to a BackendRegistry at construction. Registries
built without one read the process-wide default, which is created once on
first use (base path = current working directory) and can be overridden at
any time with set_base_storage_path(). It is the only process-wide state
in the package.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

__all__ = [
    "StorageConfig",
    "get_default_config",
    "set_base_storage_path",
]


@dataclass
class StorageConfig:
    """Settings shared by the backends of a registry.

    Attributes:
        base_path: Root that relative storage paths are resolved against.
        encoding: Text encoding of storage files.
        indent: Indentation width used when serializing.
    """

    base_path: Path = field(default_factory=Path.cwd)
    encoding: str = 'utf-8'
    indent: int = 2

    def __post_init__(self) -> None:
        self.base_path = Path(self.base_path)

    def resolve(self, storage_path: str | os.PathLike[str]) -> Path:
        """Return storage_path joined onto base_path unless already absolute."""
        path = Path(storage_path).expanduser()
        if path.is_absolute():
            return path
        return self.base_path / path


_default_config: StorageConfig | None = None


def get_default_config() -> StorageConfig:
    """Return the process-wide StorageConfig, creating it on first use."""
    global _default_config
    if _default_config is None:
        _default_config = StorageConfig()
    return _default_config


def set_base_storage_path(base_path: str | os.PathLike[str]) -> None:
    """Override the root used to resolve relative storage paths."""
    get_default_config().base_path = Path(base_path)
