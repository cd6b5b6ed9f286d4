#!/usr/bin/env python
# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Robot configuration example.

Builds a configuration tree, saves it as JSON and YAML, lists the saved
entries and reads typed values back through dotted paths.

Usage:
    python examples/robot_config/robot_config.py [storage_dir]
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

from genro_dataio import (
    DataPath,
    create_empty_data,
    list_storage_entries,
    load_storage_data,
    set_base_storage_path,
)


def build_config():
    """Build a small robot configuration tree."""
    tree = create_empty_data()
    tree.set_string('name', 'arm')
    tree.add_level('server')
    tree.set_number('server.port', 8080)
    tree.set_boolean('server.tls', False)

    joints = tree.add_list('joints')
    for name, gain in (('shoulder', 1.5), ('elbow', 2.0)):
        joint = joints.add_level()
        joint.set_string('name', name)
        joint.set_number('gain', gain)
        limits = joint.add_list('limits')
        limits.set_number(None, -90)
        limits.set_number(None, 90)
    return tree


def demo(storage_dir: str | None = None) -> None:
    base = Path(storage_dir) if storage_dir else Path(tempfile.mkdtemp())
    set_base_storage_path(base)

    with build_config() as tree:
        (base / 'arm.json').write_text(tree.serialize('json'), encoding='utf-8')
        (base / 'arm_copy.yaml').write_text(tree.serialize('yaml'), encoding='utf-8')

    print(f"Entries in {base}: {sorted(list_storage_entries(''))}")

    with load_storage_data('arm') as tree:
        print("port:", tree.get_number(0, 'server.port'))
        print("tls:", tree.get_boolean(True, 'server.tls'))
        for i in range(tree.get_list_size('joints')):
            print(
                "joint %d: %s gain=%s limits=%s..%s" % (
                    i,
                    tree.get_string('?', 'joints.%d.name', i),
                    tree.get_number(0, 'joints.%d.gain', i),
                    tree.get_number(0, DataPath('joints', i, 'limits', 0)),
                    tree.get_number(0, DataPath('joints', i, 'limits', 1)),
                )
            )
        print("missing:", tree.get_number(-1, 'server.missing'))


if __name__ == '__main__':
    demo(sys.argv[1] if len(sys.argv) > 1 else None)
