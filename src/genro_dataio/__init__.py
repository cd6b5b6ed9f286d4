# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-DataIO - Storage-agnostic access to hierarchical data.

Data trees of numbers, strings, booleans, lists and nested levels are
queried and mutated through dotted paths, independent of the format they
were loaded from (JSON, YAML, or any registered backend).
"""

__version__ = "0.1.0"

from .backends import (
    Backend,
    BackendRegistry,
    JsonBackend,
    YamlBackend,
    create_empty_data,
    default_registry,
    get_data_string,
    list_storage_entries,
    load_storage_data,
    load_string_data,
    unload_data,
)
from .config import StorageConfig, get_default_config, set_base_storage_path
from .exceptions import (
    AllocationError,
    BackendError,
    BackendUnavailableError,
    DataIOError,
    ErrorKind,
    LimitExceededError,
    PathNotFoundError,
    TypeMismatchError,
)
from .node import MAX_STRING_LENGTH, MAX_VALUE_LENGTH, DataNode, NodeKind
from .path import MAX_PATH_LENGTH, DataPath, Index, Key, resolve, resolve_for_write
from .query import (
    Lookup,
    get_boolean,
    get_list_size,
    get_number,
    get_string,
    get_subtree,
    has_key,
    lookup,
)
from .tree import DataTree

__all__ = [
    # Core classes
    "DataNode",
    "DataTree",
    "NodeKind",
    # Paths
    "DataPath",
    "Key",
    "Index",
    "resolve",
    "resolve_for_write",
    "MAX_PATH_LENGTH",
    "MAX_VALUE_LENGTH",
    "MAX_STRING_LENGTH",
    # Queries
    "Lookup",
    "lookup",
    "get_subtree",
    "get_number",
    "get_string",
    "get_boolean",
    "get_list_size",
    "has_key",
    # Backends
    "Backend",
    "BackendRegistry",
    "JsonBackend",
    "YamlBackend",
    "default_registry",
    "create_empty_data",
    "load_storage_data",
    "load_string_data",
    "list_storage_entries",
    "unload_data",
    "get_data_string",
    # Configuration
    "StorageConfig",
    "get_default_config",
    "set_base_storage_path",
    # Exceptions
    "DataIOError",
    "ErrorKind",
    "AllocationError",
    "PathNotFoundError",
    "TypeMismatchError",
    "LimitExceededError",
    "BackendUnavailableError",
    "BackendError",
]
