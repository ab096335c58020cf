# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for Listener and ListenerRegistry."""

import dataclasses

import pytest

from pushstore import Listener, ListenerRegistry


def _noop(value):
    pass


class TestListener:
    """Tests for the Listener record."""

    def test_fields(self):
        """Test listener fields."""
        listener = Listener('id1', 'a.b', _noop)
        assert listener.id == 'id1'
        assert listener.path == 'a.b'
        assert listener.callback is _noop

    def test_frozen(self):
        """Test listeners are immutable."""
        listener = Listener('id1', 'a', _noop)
        with pytest.raises(dataclasses.FrozenInstanceError):
            listener.path = 'b'


class TestListenerRegistry:
    """Tests for ListenerRegistry."""

    def test_register_returns_unique_ids(self):
        """Test each registration gets a fresh id."""
        registry = ListenerRegistry()
        ids = {registry.register('a', _noop) for _ in range(100)}
        assert len(ids) == 100
        assert len(registry) == 100

    def test_register_same_callback_twice(self):
        """Test the same callback can be registered twice on one path."""
        registry = ListenerRegistry()
        first = registry.register('a', _noop)
        second = registry.register('a', _noop)
        assert first != second
        assert len(registry) == 2

    def test_get(self):
        """Test looking up a listener by id."""
        registry = ListenerRegistry()
        listener_id = registry.register('a.b', _noop)
        listener = registry.get(listener_id)
        assert listener.path == 'a.b'
        assert listener.id == listener_id
        assert registry.get('missing') is None

    def test_unregister(self):
        """Test removing a listener."""
        registry = ListenerRegistry()
        listener_id = registry.register('a', _noop)
        assert listener_id in registry
        assert registry.unregister(listener_id) is True
        assert listener_id not in registry
        assert len(registry) == 0

    def test_unregister_is_idempotent(self):
        """Test removing twice is a no-op."""
        registry = ListenerRegistry()
        listener_id = registry.register('a', _noop)
        registry.unregister(listener_id)
        assert registry.unregister(listener_id) is False
        assert registry.unregister('never-registered') is False

    def test_for_each_visits_all(self):
        """Test for_each visits every listener."""
        registry = ListenerRegistry()
        registry.register('a', _noop)
        registry.register('b', _noop)
        visited = []
        registry.for_each(lambda listener: visited.append(listener.path))
        assert sorted(visited) == ['a', 'b']

    def test_for_each_skips_removed_during_pass(self):
        """Test listeners removed mid-pass are not visited afterwards."""
        registry = ListenerRegistry()
        ids = [registry.register(str(i), _noop) for i in range(4)]
        visited = []

        def visitor(listener):
            visited.append(listener.id)
            for other in ids:
                if other != listener.id:
                    registry.unregister(other)

        registry.for_each(visitor)
        assert len(visited) == 1
        assert len(registry) == 1

    def test_for_each_ignores_added_during_pass(self):
        """Test listeners added mid-pass wait for the next pass."""
        registry = ListenerRegistry()
        registry.register('a', _noop)
        visited = []

        def visitor(listener):
            visited.append(listener.path)
            registry.register('added', _noop)

        registry.for_each(visitor)
        assert visited == ['a']
        assert len(registry) == 2

    def test_iter_is_snapshot(self):
        """Test iteration survives removal while iterating."""
        registry = ListenerRegistry()
        registry.register('a', _noop)
        registry.register('b', _noop)
        for listener in registry:
            registry.unregister(listener.id)
        assert len(registry) == 0

    def test_clear(self):
        """Test clear removes all listeners."""
        registry = ListenerRegistry()
        registry.register('a', _noop)
        registry.clear()
        assert len(registry) == 0
