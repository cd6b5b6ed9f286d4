# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""JSON backend.

Structure:
    objects -> Level nodes (key order kept)
    arrays  -> List nodes
    numbers, strings, true/false -> scalar nodes
    null    -> dropped
"""

from __future__ import annotations

import json
from typing import Any

from ..config import StorageConfig
from ..exceptions import BackendError
from .base import Backend


class JsonBackend(Backend):
    """Read and write data trees as JSON documents."""

    name = 'json'
    suffixes = ('.json',)

    def loads(self, text: str) -> Any:
        try:
            return json.loads(text)
        except ValueError as exc:
            # JSONDecodeError, and integers past the int conversion limit
            raise BackendError(f"Cannot parse JSON: {exc}") from exc

    def dumps(self, data: Any, config: StorageConfig) -> str:
        return json.dumps(data, indent=config.indent or None, ensure_ascii=False)

    def accepts_string(self, text: str) -> bool:
        return text.lstrip()[:1] in ('{', '[')
