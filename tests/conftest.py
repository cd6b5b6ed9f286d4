# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures for the DataIO tests."""

import pytest

from genro_dataio import (
    BackendRegistry,
    DataNode,
    JsonBackend,
    StorageConfig,
    YamlBackend,
    get_default_config,
)


@pytest.fixture(autouse=True)
def _restore_base_storage_path():
    """Undo set_base_storage_path() calls made by a test."""
    config = get_default_config()
    saved = config.base_path
    yield
    config.base_path = saved


@pytest.fixture
def storage_config(tmp_path):
    return StorageConfig(base_path=tmp_path)


@pytest.fixture
def registry(storage_config):
    return BackendRegistry([JsonBackend(), YamlBackend()], config=storage_config)


@pytest.fixture
def robot():
    """A small tree mixing levels, lists and every scalar kind."""
    return DataNode.from_python({
        'name': 'arm',
        'enabled': True,
        'server': {'host': 'localhost', 'port': 8080},
        'joints': [
            {'name': 'shoulder', 'gain': 1.5, 'limits': [-90, 90]},
            {'name': 'elbow', 'gain': 2.0, 'limits': [0, 135]},
        ],
    })
