# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for DataNode construction, conversion and mutation."""

import pytest

from genro_dataio import (
    MAX_PATH_LENGTH,
    MAX_STRING_LENGTH,
    DataNode,
    DataPath,
    Index,
    Key,
    LimitExceededError,
    NodeKind,
    get_list_size,
    get_number,
    get_string,
)


class TestDataNodeCreation:
    """Tests for DataNode factories."""

    def test_number(self):
        """Test numbers are stored as float."""
        node = DataNode.number(3)
        assert node.kind is NodeKind.NUMBER
        assert node.value == 3.0
        assert isinstance(node.value, float)

    def test_number_rejects_bool(self):
        """Test booleans are not numbers."""
        with pytest.raises(TypeError):
            DataNode.number(True)

    def test_string_limit(self):
        """Test 127 characters are accepted and 128 rejected."""
        assert DataNode.string('x' * MAX_STRING_LENGTH).value == 'x' * 127
        with pytest.raises(LimitExceededError):
            DataNode.string('x' * (MAX_STRING_LENGTH + 1))

    def test_boolean(self):
        """Test boolean nodes."""
        assert DataNode.boolean(False).value is False
        with pytest.raises(TypeError):
            DataNode.boolean(1)

    def test_containers(self):
        """Test empty list and level nodes."""
        lst = DataNode.new_list()
        level = DataNode.new_level()
        assert lst.is_list and len(lst) == 0
        assert level.is_level and len(level) == 0
        assert lst.value is None

    def test_empty_container_is_truthy(self):
        """Test an empty node is still truthy."""
        assert DataNode.new_level()

    def test_repr(self):
        """Test string representation."""
        assert repr(DataNode.number(1)) == 'DataNode(number, 1.0)'
        assert 'port' in repr(DataNode.from_python({'port': 1}))


class TestDataNodeConversion:
    """Tests for from_python and as_python."""

    def test_round_trip_keeps_order(self):
        """Test key and element order survive conversion."""
        data = {'z': 1, 'a': [3, 1, 2], 'm': {'y': True, 'b': 'text'}}
        node = DataNode.from_python(data)
        assert node.keys() == ['z', 'a', 'm']
        assert node.as_python() == data
        assert list(node.as_python()['m']) == ['y', 'b']

    def test_integral_numbers(self):
        """Test integral floats come back as int unless disabled."""
        node = DataNode.from_python({'a': 2.0, 'b': 2.5})
        assert node.as_python() == {'a': 2, 'b': 2.5}
        assert isinstance(node.as_python()['a'], int)
        assert isinstance(node.as_python(integral_numbers=False)['a'], float)

    def test_bool_before_number(self):
        """Test True stays a boolean."""
        assert DataNode.from_python(True).kind is NodeKind.BOOLEAN

    def test_null_dropped(self):
        """Test None entries are dropped from containers."""
        node = DataNode.from_python({'a': None, 'b': [1, None, 2]})
        assert node.as_python() == {'b': [1, 2]}

    def test_non_str_keys(self):
        """Test keys are converted to strings."""
        assert DataNode.from_python({1: 'one'}).keys() == ['1']

    def test_long_string_truncated(self):
        """Test over-long strings are truncated deterministically."""
        node = DataNode.from_python({'s': 'y' * 200})
        assert get_string(node, '', 's') == 'y' * MAX_STRING_LENGTH

    def test_long_key_rejected(self):
        """Test keys longer than the path limit are rejected."""
        with pytest.raises(LimitExceededError):
            DataNode.from_python({'k' * (MAX_PATH_LENGTH + 1): 1})

    def test_unsupported_type(self):
        """Test unsupported values raise TypeError."""
        with pytest.raises(TypeError, match="Cannot convert"):
            DataNode.from_python({'a': object()})

    def test_number_out_of_float_range(self):
        """Test integers too large for a float raise LimitExceededError."""
        with pytest.raises(LimitExceededError, match="float range"):
            DataNode.number(10 ** 400)
        with pytest.raises(LimitExceededError):
            DataNode.from_python({'a': [10 ** 400]})

    def test_self_referencing_rejected(self):
        """Test containers that contain themselves raise ValueError."""
        items = [1]
        items.append(items)
        with pytest.raises(ValueError, match="self-referencing"):
            DataNode.from_python({'items': items})

    def test_shared_container_allowed(self):
        """Test a container referenced twice is copied twice."""
        shared = {'gain': 2}
        node = DataNode.from_python({'a': shared, 'b': shared})
        assert node.as_python() == {'a': {'gain': 2}, 'b': {'gain': 2}}


class TestDataNodeIntrospection:
    """Tests for keys, items, child and walk."""

    def test_level_items(self, robot):
        """Test level items in insertion order."""
        assert [k for k, _ in robot.items()] == ['name', 'enabled', 'server', 'joints']

    def test_list_items(self, robot):
        """Test list items carry indices."""
        joints = robot.child(Key('joints'))
        assert joints.keys() == [0, 1]
        assert [i for i, _ in joints.items()] == [0, 1]

    def test_iter_yields_nodes(self, robot):
        """Test __iter__ yields child nodes."""
        assert all(isinstance(n, DataNode) for n in robot)
        assert list(DataNode.number(1)) == []

    def test_child(self, robot):
        """Test direct child lookup by segment."""
        assert robot.child(Key('name')).value == 'arm'
        assert robot.child(Index(0)) is None
        assert robot.child(Key('')) is None

    def test_walk(self, robot):
        """Test walk yields dotted paths depth first."""
        paths = [path for path, _ in robot.walk()]
        assert paths[:5] == ['name', 'enabled', 'server', 'server.host', 'server.port']
        assert 'joints.1.limits.0' in paths

    def test_clear_releases_subtree(self, robot):
        """Test clear empties every descendant container."""
        joints = robot.child(Key('joints'))
        robot.clear()
        assert len(robot) == 0
        assert len(joints) == 0


class TestDataNodeMutation:
    """Tests for add_list, add_level and set_* primitives."""

    def test_add_level_and_set(self):
        """Test the server scenario."""
        root = DataNode.new_level()
        assert root.add_level('server') is not None
        assert root.set_number('server.port', 8080)
        assert get_number(root, 0, 'server.port') == 8080

    def test_append_lists(self):
        """Test appending two lists inside a keyed list."""
        root = DataNode.new_level()
        items = root.add_list('items')
        assert items.add_list() is not None
        assert items.add_list() is not None
        assert get_list_size(root, 'items') == 2

    def test_append_law(self, robot):
        """Test an append grows the list by one at the last index."""
        joints = robot.child(Key('joints'))
        before = get_list_size(robot, 'joints')
        new = joints.add_level()
        assert get_list_size(robot, 'joints') == before + 1
        assert joints.child(Index(before)) is new

    def test_append_to_level_fails(self):
        """Test key=None requires a list."""
        root = DataNode.new_level()
        assert root.add_list() is None
        assert root.set_number(None, 1) is False
        assert len(root) == 0

    def test_keyed_insert_into_list_fails(self):
        """Test keys cannot be placed in a list."""
        lst = DataNode.new_list()
        assert lst.add_level('name') is None

    def test_append_scalars(self):
        """Test scalars can be appended to a list."""
        lst = DataNode.new_list()
        assert lst.set_number(None, 1)
        assert lst.set_string(None, 'two')
        assert lst.set_boolean(None, True)
        assert lst.as_python() == [1, 'two', True]

    def test_no_deep_creation(self):
        """Test missing intermediate nodes are never created."""
        root = DataNode.new_level()
        assert root.set_number('a.b.c', 1) is False
        assert root.add_level('a.b') is None
        assert len(root) == 0

    def test_replace_keeps_position(self):
        """Test re-adding a key replaces it in place."""
        root = DataNode.from_python({'a': 1, 'b': 2, 'c': 3})
        assert root.set_string('b', 'two')
        assert root.as_python() == {'a': 1, 'b': 'two', 'c': 3}

    def test_replace_changes_kind(self):
        """Test overwriting replaces the node wholesale."""
        root = DataNode.from_python({'port': 8080})
        new = root.add_level('port')
        assert root.child(Key('port')) is new
        assert new.kind is NodeKind.LEVEL

    def test_index_write(self):
        """Test index targets replace in range and append at the end."""
        root = DataNode.from_python({'items': [1, 2]})
        assert root.set_number('items.0', 10)
        assert root.set_number('items.2', 30)
        assert root.set_number('items.5', 50) is False
        assert root.as_python() == {'items': [10, 2, 30]}

    def test_string_too_long_leaves_tree(self):
        """Test a rejected string does not touch the existing value."""
        root = DataNode.from_python({'name': 'arm'})
        assert root.set_string('name', 'x' * (MAX_STRING_LENGTH + 1)) is False
        assert root.set_string('other', 'x' * MAX_STRING_LENGTH) is True
        assert get_string(root, '', 'name') == 'arm'

    def test_key_length_boundary(self):
        """Test a 256 character key is usable and 257 is rejected."""
        root = DataNode.new_level()
        assert root.set_number('k' * MAX_PATH_LENGTH, 1)
        assert get_number(root, 0, 'k' * MAX_PATH_LENGTH) == 1
        assert root.set_number('k' * (MAX_PATH_LENGTH + 1), 1) is False

    def test_empty_key_rejected(self):
        """Test empty keys cannot be placed."""
        root = DataNode.new_level()
        assert root.set_number('', 1) is False
        assert root.set_number('a.', 1) is False

    def test_wrong_value_types(self):
        """Test set_* never raise on bad values."""
        root = DataNode.new_level()
        assert root.set_number('a', 'one') is False
        assert root.set_number('a', True) is False
        assert root.set_string('a', 1) is False
        assert root.set_boolean('a', 'yes') is False
        assert root.set_number('a', 10 ** 400) is False
        assert root.set_value('a', 10 ** 400) is False
        assert root.set_value('a', {'big': [10 ** 400]}) is False
        assert len(root) == 0

    def test_typed_key_with_dot(self):
        """Test DataPath keys may contain dots."""
        root = DataNode.new_level()
        assert root.set_string(DataPath('a.b'), 'dotted')
        assert root.keys() == ['a.b']

    def test_set_value_dispatch(self):
        """Test set_value picks the kind from the Python type."""
        root = DataNode.new_level()
        assert root.set_value('flag', True)
        assert root.set_value('count', 3)
        assert root.set_value('name', 'arm')
        assert root.set_value('limits', [1, 2])
        assert root.set_value('nothing', None) is False
        assert root.child(Key('flag')).kind is NodeKind.BOOLEAN
        assert root.as_python() == {'flag': True, 'count': 3, 'name': 'arm', 'limits': [1, 2]}

    def test_override_then_read(self):
        """Test set followed by get returns the value for each kind."""
        root = DataNode.new_level()
        root.set_number('v', 1.25)
        assert get_number(root, 0, 'v') == 1.25
        root.set_string('v', 'text')
        assert get_string(root, '', 'v') == 'text'
        assert get_number(root, -1, 'v') == -1
