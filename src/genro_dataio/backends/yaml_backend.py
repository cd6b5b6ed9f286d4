# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""YAML backend, built on PyYAML's safe loader and dumper."""

from __future__ import annotations

from typing import Any

import yaml

from ..config import StorageConfig
from ..exceptions import BackendError
from .base import Backend


class YamlBackend(Backend):
    """Read and write data trees as YAML documents.

    Mappings keep their order on output (no key sorting). Any text that
    PyYAML can parse is accepted, so this backend is tried last when
    sniffing string content.
    """

    name = 'yaml'
    suffixes = ('.yaml', '.yml')

    def loads(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except (yaml.YAMLError, ValueError) as exc:
            raise BackendError(f"Cannot parse YAML: {exc}") from exc

    def dumps(self, data: Any, config: StorageConfig) -> str:
        return yaml.safe_dump(
            data,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=config.indent,
        )
