# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Storage backends for data trees.

Available backends:
- json: JSON documents (.json)
- yaml: YAML documents (.yaml, .yml)

Example:
    >>> from genro_dataio.backends import load_storage_data, list_storage_entries
    >>> list_storage_entries('robots')
    ['arm', 'gripper']
    >>> tree = load_storage_data('robots/arm')
"""

from .base import Backend
from .json_backend import JsonBackend
from .registry import (
    BackendRegistry,
    create_empty_data,
    default_registry,
    get_data_string,
    list_storage_entries,
    load_storage_data,
    load_string_data,
    unload_data,
)
from .yaml_backend import YamlBackend

__all__ = [
    'Backend',
    'BackendRegistry',
    'JsonBackend',
    'YamlBackend',
    'default_registry',
    'create_empty_data',
    'load_storage_data',
    'load_string_data',
    'list_storage_entries',
    'unload_data',
    'get_data_string',
]
